"""
Telegram Adapters - Bot Interface

This package contains Telegram bot adapters:
- Bot application builder
- Command handlers
- Scheduled refresh jobs
"""

from fxrates.adapters.telegram.bot import build_application
from fxrates.adapters.telegram.handlers import build_handlers
from fxrates.adapters.telegram.jobs import RefreshScheduler

__all__ = [
    "build_application",
    "build_handlers",
    "RefreshScheduler",
]
