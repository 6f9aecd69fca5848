"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from fxrates.shared.validators import (
    parse_amount,
    sanitize_user_input,
    validate_api_key,
    validate_bot_token,
    validate_currency_code,
    validate_hhmm,
)

__all__ = [
    "validate_bot_token",
    "validate_api_key",
    "validate_hhmm",
    "validate_currency_code",
    "parse_amount",
    "sanitize_user_input",
]
