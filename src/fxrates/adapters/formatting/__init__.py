"""
Formatting Adapters - Message Formatting

This package contains formatters for chat replies.
"""

from fxrates.adapters.formatting.formatter import (
    USAGE,
    format_amount,
    format_conversion,
    format_currencies,
    format_status,
)

__all__ = [
    "USAGE",
    "format_amount",
    "format_conversion",
    "format_currencies",
    "format_status",
]
