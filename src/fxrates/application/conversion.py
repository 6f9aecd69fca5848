# src/fxrates/application/conversion.py
"""
Conversion Engine - Currency Listing and Base-Pivot Conversion

Pure computation over a RateSnapshot. Rates are stored relative to a single
base currency, so converting between any two currencies goes through it:
amount / rate[from] gives base units, times rate[to] gives the result.

Files that USE this module:
- fxrates.application.exchange_service (ExchangeService delegates to ConversionEngine)
- tests.test_conversion (unit tests)

Files that this module USES:
- fxrates.domain.models (RateSnapshot, ExchangeAmount)
- fxrates.domain.errors (InvalidAmountError, InvalidCurrencyError)
"""
from __future__ import annotations

import math
from numbers import Real
from typing import Any, Optional

from fxrates.domain.errors import InvalidAmountError, InvalidCurrencyError
from fxrates.domain.models import ExchangeAmount, RateSnapshot


def validate_amount(amount: Any) -> float:
    """
    Check that an amount is a finite number strictly greater than zero.

    Returns:
        The amount as float

    Raises:
        InvalidAmountError: If amount is None, not numeric, non-finite, or <= 0
    """
    if amount is None or isinstance(amount, bool) or not isinstance(amount, Real):
        raise InvalidAmountError("Amount must be greater than 0.")
    value = float(amount)
    if not math.isfinite(value) or value <= 0:
        raise InvalidAmountError("Amount must be greater than 0.")
    return value


def _normalize(code: Optional[str], side: str) -> str:
    if not isinstance(code, str) or not code.strip():
        raise InvalidCurrencyError(code, side)
    return code.strip().upper()


class ConversionEngine:
    """Stateless currency operations over a snapshot."""

    def list_currencies(self, snapshot: RateSnapshot) -> list[str]:
        """Return every currency code in the snapshot, sorted (empty list if none)."""
        return sorted(snapshot.rates)

    def convert(
        self,
        snapshot: RateSnapshot,
        from_currency: str,
        to_currency: str,
        amount: float,
    ) -> ExchangeAmount:
        """
        Convert an amount between two currencies of the snapshot.

        Args:
            snapshot: Rates to convert with
            from_currency: Source currency code (any case)
            to_currency: Target currency code (any case)
            amount: Amount in the source currency, must be > 0

        Returns:
            ExchangeAmount dated with the snapshot's as_of_date

        Raises:
            InvalidAmountError: If amount is missing or not strictly positive
            InvalidCurrencyError: If either code is unknown (from side checked first)
        """
        value = validate_amount(amount)

        src = _normalize(from_currency, "from")
        dst = _normalize(to_currency, "to")

        rates = snapshot.rates
        if src not in rates:
            raise InvalidCurrencyError(src, "from")
        if dst not in rates:
            raise InvalidCurrencyError(dst, "to")

        base_amount = value / rates[src]
        converted = base_amount * rates[dst]

        return ExchangeAmount(
            exchange_date=snapshot.as_of_date,
            from_currency=src,
            to_currency=dst,
            amount=converted,
        )
