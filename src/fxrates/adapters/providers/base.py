# src/fxrates/adapters/providers/base.py
"""
Base Fetcher Interface for Rate Providers

This module defines the abstract base class for the outbound fetch
collaborator. Implementations return the provider's raw payload; parsing
into a RateSnapshot is the store's job.

Files that USE this module:
- fxrates.adapters.providers.fixer (FixerProvider implements RatesFetcher)
- fxrates.application.snapshot_store (RateSnapshotStore depends on RatesFetcher)

Files that this module USES:
- None (pure interface definition)
"""
from abc import ABC, abstractmethod


class RatesFetcher(ABC):
    @abstractmethod
    def fetch_raw_rates(self) -> bytes:
        """Return the raw latest-rates payload, or raise ProviderUnavailableError."""
        raise NotImplementedError
