# src/fxrates/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains the domain models for exchange rates:
- RateSnapshot: one complete, immutable set of rates plus its publish date
- ExchangeAmount: the result of a single conversion

Files that USE this module:
- fxrates.application.* (store, engine and service operate on these models)
- fxrates.adapters.persistence.file_store (reads/writes RateSnapshot as JSON)
- fxrates.adapters.formatting.formatter (renders ExchangeAmount)
- tests.* (tests build snapshots directly)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

import math
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping, Optional

# Tolerance for the base currency's own rate, which providers publish as 1
BASE_RATE_TOLERANCE = 1e-9


@dataclass(frozen=True)
class RateSnapshot:
    """
    Rates published by the provider on a given day.

    Attributes:
        as_of_date: UTC calendar date the provider published these rates
        base_currency: Currency all rates are expressed against
        rates: Currency code -> units of that currency per 1 base unit (read-only)
        timestamp: Provider timestamp in epoch seconds, if supplied
    """
    as_of_date: date
    base_currency: str
    rates: Mapping[str, float] = field(default_factory=dict)
    timestamp: Optional[int] = None

    def __post_init__(self) -> None:
        base = self.base_currency.strip().upper()
        normalized: dict[str, float] = {}
        for code, value in self.rates.items():
            rate = float(value)
            if not math.isfinite(rate) or rate <= 0:
                raise ValueError(f"Rate for {code!r} must be a positive number, got {value!r}")
            key = str(code).strip().upper()
            if key in normalized:
                raise ValueError(f"Duplicate currency code {key} (keys differ only by case)")
            normalized[key] = rate

        if base in normalized and abs(normalized[base] - 1.0) > BASE_RATE_TOLERANCE:
            raise ValueError(f"Base currency {base} must have rate 1.0, got {normalized[base]}")

        # frozen dataclass: bypass __setattr__ to store the normalized values
        object.__setattr__(self, "base_currency", base)
        object.__setattr__(self, "rates", MappingProxyType(normalized))

    def to_json(self) -> dict:
        """
        Convert snapshot to the provider payload shape used on disk.

        Returns:
            Dictionary with success flag, timestamp, base, ISO date and rates
        """
        return {
            "success": True,
            "timestamp": self.timestamp,
            "base": self.base_currency,
            "date": self.as_of_date.isoformat(),
            "rates": dict(self.rates),
        }

    @staticmethod
    def from_json(data: Any) -> "RateSnapshot":
        """
        Create RateSnapshot from a provider payload or persisted file.

        Expected shape:
            {"success": true, "timestamp": 1704844799, "base": "USD",
             "date": "2024-01-10", "rates": {"EUR": 0.9, ...}}

        Args:
            data: Decoded JSON object

        Returns:
            RateSnapshot instance

        Raises:
            ValueError: If the payload reports failure, lacks rates, or is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Rates payload must be an object, got {type(data).__name__}")
        if data.get("success") is False:
            raise ValueError(f"Provider reported failure: {data.get('error')}")

        rates = data.get("rates")
        if not isinstance(rates, dict) or not rates:
            raise ValueError("Rates payload has no 'rates' entries")

        try:
            as_of = date.fromisoformat(str(data["date"]))
            base = str(data["base"])
        except KeyError as e:
            raise ValueError(f"Rates payload missing field {e}") from e

        ts = data.get("timestamp")
        return RateSnapshot(
            as_of_date=as_of,
            base_currency=base,
            rates=rates,
            timestamp=int(ts) if ts is not None else None,
        )


@dataclass(frozen=True)
class ExchangeAmount:
    """
    Result of converting an amount between two currencies.

    Attributes:
        exchange_date: as_of_date of the snapshot used for the conversion
        from_currency: Uppercased source currency code
        to_currency: Uppercased target currency code
        amount: Converted value, unrounded
    """
    exchange_date: date
    from_currency: str
    to_currency: str
    amount: float

    def to_json(self) -> dict:
        return {
            "exchange_date": self.exchange_date.isoformat(),
            "from_currency": self.from_currency,
            "to_currency": self.to_currency,
            "amount": self.amount,
        }
