# src/fxrates/shared/validators.py
"""
Input Validation Utilities - Configuration and User Input Validation

This module provides validation helpers for configuration values (bot token,
API key, schedule time) and for user input arriving from chat commands
(currency codes and amounts).

Files that USE this module:
- fxrates.config.settings (uses validation functions in Settings field validators)
- fxrates.adapters.telegram.handlers (validates /convert arguments)

Files that this module USES:
- None (pure utility functions)
"""
import re
from typing import Optional

CURRENCY_CODE_PATTERN = re.compile(r"^[A-Za-z]{3,5}$")


def validate_bot_token(token: str) -> bool:
    """
    Validate Telegram bot token format.

    Args:
        token: Bot token to validate

    Returns:
        True if valid, False otherwise
    """
    if not token:
        return False

    # Format: 123456789:ABCDEFghijklmnopQRSTUVwxyz
    pattern = r'^\d{8,10}:[A-Za-z0-9_-]{35}$'
    return bool(re.match(pattern, token))


def validate_api_key(api_key: str, min_length: int = 8) -> bool:
    """
    Validate API key format.

    Args:
        api_key: API key to validate
        min_length: Minimum length requirement

    Returns:
        True if valid, False otherwise
    """
    if not api_key:
        return False

    return len(api_key) >= min_length and not api_key.isspace() and " " not in api_key


def validate_hhmm(value: str) -> bool:
    """Check a 24h ``HH:MM`` wall-clock string."""
    match = re.match(r'^(\d{2}):(\d{2})$', value or "")
    if not match:
        return False
    return int(match.group(1)) < 24 and int(match.group(2)) < 60


def validate_currency_code(code: str) -> bool:
    """
    Validate the shape of a currency code (3-5 letters, any case).

    This only checks the format; whether the code is known is decided
    against the current rates snapshot.
    """
    if not code:
        return False
    return bool(CURRENCY_CODE_PATTERN.match(code.strip()))


def parse_amount(value: str) -> Optional[float]:
    """
    Parse a user-supplied amount.

    Accepts thousands separators ("1,250.50"). Returns None when the text is
    not a number; range checks are left to the conversion engine.

    Args:
        value: Raw text from the user

    Returns:
        Parsed float, or None if unparseable
    """
    if not value:
        return None

    try:
        return float(value.replace(",", "").strip())
    except ValueError:
        return None


def sanitize_user_input(text: str, max_length: int = 200) -> str:
    """
    Sanitize user input text before echoing it back.

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    sanitized = re.sub(r'[<>"\'`*_\[\]]', '', text)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized.strip()
