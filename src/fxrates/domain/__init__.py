"""
Domain Layer - Pure Business Objects

This package contains domain models and business rules.
No dependencies on infrastructure or external systems.
"""

from fxrates.domain.models import ExchangeAmount, RateSnapshot
from fxrates.domain.errors import (
    DomainError,
    InvalidAmountError,
    InvalidCurrencyError,
    ProviderUnavailableError,
    RefreshFailedError,
    StorageUnavailableError,
)

__all__ = [
    "RateSnapshot",
    "ExchangeAmount",
    "DomainError",
    "InvalidAmountError",
    "InvalidCurrencyError",
    "ProviderUnavailableError",
    "RefreshFailedError",
    "StorageUnavailableError",
]
