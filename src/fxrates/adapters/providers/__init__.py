"""
Provider Adapters - External API Clients

This package contains adapters for the external rates API.
All providers implement the RatesFetcher interface.
"""

from fxrates.adapters.providers.base import RatesFetcher
from fxrates.adapters.providers.fixer import FixerProvider

__all__ = [
    "RatesFetcher",
    "FixerProvider",
]
