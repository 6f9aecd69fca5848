# src/fxrates/adapters/formatting/formatter.py
"""
Message Formatter - Chat Reply Formatting

This module turns conversion results, currency lists and store status into
plain-text replies. The engine never rounds; rounding for display happens
only here.

Files that USE this module:
- fxrates.adapters.telegram.handlers (formats every command reply)
- tests.test_formatter (unit tests)

Files that this module USES:
- fxrates.domain.models (ExchangeAmount)
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from fxrates.domain.models import ExchangeAmount


def format_amount(value: float) -> str:
    """
    Format a monetary value with thousands separators.

    Two decimals for ordinary values; small values keep more digits so
    something like 0.000012 BTC doesn't print as 0.00.
    """
    if value == 0:
        return "0.00"
    magnitude = abs(value)
    if magnitude >= 1:
        decimals = 2
    elif magnitude >= 0.01:
        decimals = 4
    else:
        decimals = 6
    return f"{value:,.{decimals}f}"


def format_conversion(amount: float, result: ExchangeAmount) -> str:
    """
    Format a conversion reply.

    Example:
        10.00 EUR = 1,555.56 JPY
        Rates as of 2024-01-10
    """
    return (
        f"{format_amount(amount)} {result.from_currency} = "
        f"{format_amount(result.amount)} {result.to_currency}\n"
        f"Rates as of {result.exchange_date.isoformat()}"
    )


def format_currencies(codes: Iterable[str], per_line: int = 8) -> str:
    """Format currency codes as a compact block, per_line codes per row."""
    codes = list(codes)
    if not codes:
        return "No currencies available."

    rows = [" ".join(codes[i:i + per_line]) for i in range(0, len(codes), per_line)]
    return f"{len(codes)} currencies:\n" + "\n".join(rows)


def format_status(status: Mapping[str, Any]) -> str:
    """Format RateSnapshotStore.status() for the /status command."""
    if not status.get("has_snapshot"):
        return "No rates snapshot loaded yet."

    freshness = "fresh" if status.get("fresh") else "stale"
    return "\n".join([
        f"Rates as of: {status['as_of_date']} ({freshness})",
        f"Base currency: {status['base_currency']}",
        f"Currencies: {status['currency_count']}",
    ])


USAGE = (
    "Currency converter\n"
    "/currencies - list available currency codes\n"
    "/convert <amount> <FROM> <TO> - e.g. /convert 10 EUR JPY\n"
    "/status - show the loaded rates date"
)
