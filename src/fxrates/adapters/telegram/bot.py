# src/fxrates/adapters/telegram/bot.py
"""
Telegram Bot - Application Builder

Builds the python-telegram-bot Application with handlers and the rates
refresh jobs attached.
"""

from __future__ import annotations

from telegram.ext import Application

from fxrates.adapters.telegram.handlers import build_handlers
from fxrates.adapters.telegram.jobs import RefreshScheduler
from fxrates.application.exchange_service import ExchangeService


def build_application(bot_token: str, service: ExchangeService,
                      scheduler: RefreshScheduler) -> Application:
    """
    Build Telegram bot application.

    Args:
        bot_token: Telegram bot token
        service: ExchangeService backing the commands
        scheduler: RefreshScheduler to register on the job queue

    Returns:
        Configured Application instance
    """
    app = Application.builder().token(bot_token).build()
    for h in build_handlers(service, service.store):
        app.add_handler(h)
    scheduler.register(app.job_queue)
    return app
