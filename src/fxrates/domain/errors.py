# src/fxrates/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines the error taxonomy for rate lookup and conversion.
Validation errors (amount, currency) are raised synchronously to the caller;
refresh and storage errors leave any previously stored snapshot untouched.
"""
from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class InvalidAmountError(DomainError):
    """Raised when an amount is missing, not a number, or not strictly positive."""
    pass


class InvalidCurrencyError(DomainError):
    """Raised when a currency code is not present in the current snapshot."""

    def __init__(self, code: Optional[str], side: str):
        self.code = code
        self.side = side
        super().__init__(f"Invalid {side} currency code: {code!r}")


class RefreshFailedError(DomainError):
    """Raised when the rates snapshot could not be fetched or parsed."""
    pass


class StorageUnavailableError(DomainError):
    """Raised when the snapshot file cannot be read or written."""
    pass


class ProviderUnavailableError(DomainError):
    """Raised by a fetch adapter when the remote provider is unreachable or fails."""
    pass
