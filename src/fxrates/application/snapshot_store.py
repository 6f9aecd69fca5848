# src/fxrates/application/snapshot_store.py
"""
Rate Snapshot Store - Single-Slot Rates Cache with Freshness Policy

This module owns the one current rates snapshot. Callers always get a
snapshot that is either fresh or has just been refreshed; the refresh
fetches from the provider, persists the result and swaps it in atomically.

Freshness: a snapshot is fresh when its as_of_date is today or yesterday
(UTC). Providers publish with some lag around midnight UTC, so yesterday's
rates are still accepted. Anything older, or dated in the future, is stale.

Files that USE this module:
- fxrates.application.exchange_service (ExchangeService reads the current snapshot)
- fxrates.adapters.telegram.jobs (RefreshScheduler triggers refresh)
- fxrates.adapters.telegram.handlers (/status reads status())
- fxrates.app (composition root)

Files that this module USES:
- fxrates.adapters.providers.base (RatesFetcher interface)
- fxrates.adapters.persistence.file_store (load_snapshot, save_snapshot)
- fxrates.domain.models (RateSnapshot)
- fxrates.domain.errors (RefreshFailedError, StorageUnavailableError)
"""
from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional

from fxrates.adapters.persistence.file_store import load_snapshot, save_snapshot
from fxrates.adapters.providers.base import RatesFetcher
from fxrates.domain.errors import RefreshFailedError
from fxrates.domain.models import RateSnapshot

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Days of provider publish lag tolerated before a snapshot is stale
GRACE_DAYS = 1


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def is_fresh(snapshot: RateSnapshot, today: date) -> bool:
    """
    Check whether a snapshot may be served without refreshing.

    Args:
        snapshot: Snapshot to check
        today: Current UTC calendar date

    Returns:
        True if as_of_date is today or yesterday, False otherwise
    """
    age = today - snapshot.as_of_date
    return timedelta(0) <= age <= timedelta(days=GRACE_DAYS)


def parse_payload(raw: bytes) -> RateSnapshot:
    """
    Parse a raw provider payload into a snapshot.

    Raises:
        RefreshFailedError: If the payload is not JSON, reports failure, or has no rates
    """
    try:
        return RateSnapshot.from_json(json.loads(raw))
    except (ValueError, TypeError, KeyError) as e:
        raise RefreshFailedError(f"Unusable rates payload: {e}") from e


class RateSnapshotStore:
    """Holds the current rates snapshot and keeps it fresh."""

    def __init__(self, fetcher: RatesFetcher, path: Path, clock: Optional[Clock] = None):
        """
        Initialize store and load the persisted snapshot if there is one.

        Args:
            fetcher: Provider used to fetch fresh rates
            path: JSON file the snapshot is persisted to
            clock: Returns the current time; defaults to UTC wall clock

        Raises:
            StorageUnavailableError: If the rates file exists but cannot be read
        """
        self.fetcher = fetcher
        self.path = Path(path)
        self._clock = clock or utc_now
        self._refresh_lock = threading.Lock()
        self._snapshot: Optional[RateSnapshot] = load_snapshot(self.path)

        if self._snapshot is not None:
            logger.info("Loaded rates snapshot for %s from %s", self._snapshot.as_of_date, self.path)
        else:
            logger.info("No usable rates snapshot at %s", self.path)

    def today(self) -> date:
        """Current UTC calendar date according to the injected clock."""
        return self._clock().astimezone(timezone.utc).date()

    @property
    def last_known(self) -> Optional[RateSnapshot]:
        """Currently held snapshot without any freshness check (may be None)."""
        return self._snapshot

    def get_current(self) -> RateSnapshot:
        """
        Return a snapshot that is fresh, refreshing first if needed.

        Returns:
            Fresh RateSnapshot

        Raises:
            RefreshFailedError: If a refresh was needed and failed
            StorageUnavailableError: If the refreshed snapshot could not be persisted
        """
        snapshot = self._snapshot
        if snapshot is not None and is_fresh(snapshot, self.today()):
            return snapshot

        with self._refresh_lock:
            # Another caller may have refreshed while we waited
            snapshot = self._snapshot
            if snapshot is not None and is_fresh(snapshot, self.today()):
                return snapshot

            if snapshot is None:
                logger.info("No rates snapshot held, refreshing")
            else:
                logger.info("Rates snapshot for %s is stale, refreshing", snapshot.as_of_date)
            return self._refresh_locked()

    def refresh(self) -> RateSnapshot:
        """
        Fetch, persist and install a new snapshot unconditionally.

        Returns:
            Newly installed RateSnapshot

        Raises:
            RefreshFailedError: If fetching or parsing failed
            StorageUnavailableError: If the snapshot could not be persisted
        """
        with self._refresh_lock:
            return self._refresh_locked()

    def _refresh_locked(self) -> RateSnapshot:
        try:
            raw = self.fetcher.fetch_raw_rates()
        except Exception as e:
            logger.warning("Rates refresh failed while fetching: %s", e)
            raise RefreshFailedError(f"Fetching rates failed: {e}") from e

        try:
            snapshot = parse_payload(raw)
        except RefreshFailedError as e:
            logger.warning("Rates refresh failed while parsing: %s", e)
            raise

        # Persist before swapping so memory never runs ahead of disk
        save_snapshot(self.path, snapshot)
        self._snapshot = snapshot

        logger.info(
            "Rates refreshed: date=%s base=%s currencies=%d",
            snapshot.as_of_date, snapshot.base_currency, len(snapshot.rates),
        )
        return snapshot

    def status(self) -> dict[str, Any]:
        """
        Describe the held snapshot without triggering a refresh.

        Returns:
            Dictionary with has_snapshot, as_of_date, base_currency,
            currency_count, fresh and path
        """
        snapshot = self._snapshot
        if snapshot is None:
            return {
                "has_snapshot": False,
                "as_of_date": None,
                "base_currency": None,
                "currency_count": 0,
                "fresh": False,
                "path": str(self.path),
            }
        return {
            "has_snapshot": True,
            "as_of_date": snapshot.as_of_date.isoformat(),
            "base_currency": snapshot.base_currency,
            "currency_count": len(snapshot.rates),
            "fresh": is_fresh(snapshot, self.today()),
            "path": str(self.path),
        }
