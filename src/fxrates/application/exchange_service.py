# src/fxrates/application/exchange_service.py
"""
Exchange Service - Public Rate Operations

High-level service consumed by the outer layers (Telegram commands, scripts).
Each call asks the store for the current snapshot, refreshing it if stale,
and lets the conversion engine compute on it.

Files that USE this module:
- fxrates.adapters.telegram.handlers (/currencies, /convert)
- fxrates.app (composition root)
- tests.test_exchange_service (unit tests)

Files that this module USES:
- fxrates.application.snapshot_store (RateSnapshotStore)
- fxrates.application.conversion (ConversionEngine, validate_amount)
- fxrates.domain.models (ExchangeAmount)
"""
from __future__ import annotations

from typing import Optional

from fxrates.application.conversion import ConversionEngine, validate_amount
from fxrates.application.snapshot_store import RateSnapshotStore
from fxrates.domain.models import ExchangeAmount


class ExchangeService:
    def __init__(self, store: RateSnapshotStore, engine: Optional[ConversionEngine] = None):
        self.store = store
        self.engine = engine or ConversionEngine()

    def list_currencies(self) -> list[str]:
        """
        List the currency codes available in the current snapshot.

        Raises:
            RefreshFailedError: If the snapshot was stale and could not be refreshed
        """
        return self.engine.list_currencies(self.store.get_current())

    def convert(self, from_currency: str, to_currency: str, amount: float) -> ExchangeAmount:
        """
        Convert an amount using the current snapshot.

        The amount is validated before the store is consulted, so a bad
        amount never causes a provider call.

        Raises:
            InvalidAmountError: If amount is missing or not strictly positive
            InvalidCurrencyError: If either code is unknown
            RefreshFailedError: If the snapshot was stale and could not be refreshed
        """
        validate_amount(amount)
        return self.engine.convert(self.store.get_current(), from_currency, to_currency, amount)
