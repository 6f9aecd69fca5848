"""
Application Layer - Use Cases and Services

This package contains the rates cache, the conversion engine and the
service that combines them. No direct network or file I/O here; adapters
are injected.
"""

from fxrates.application.conversion import ConversionEngine
from fxrates.application.exchange_service import ExchangeService
from fxrates.application.snapshot_store import RateSnapshotStore, is_fresh

__all__ = [
    "ConversionEngine",
    "ExchangeService",
    "RateSnapshotStore",
    "is_fresh",
]
