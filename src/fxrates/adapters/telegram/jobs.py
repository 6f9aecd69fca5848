# src/fxrates/adapters/telegram/jobs.py
"""
Telegram Jobs - Scheduled Rates Refresh

This module registers the rates refresh on the bot's JobQueue: once right
after startup and once a day at a fixed UTC time. The jobs are blind
triggers; they always go through RateSnapshotStore.refresh() and never
write the rates file themselves.

Files that USE this module:
- fxrates.app (RefreshScheduler.register on app.job_queue)
- tests.test_jobs (unit tests)

Files that this module USES:
- fxrates.application.snapshot_store (RateSnapshotStore.refresh)
- fxrates.domain.errors (RefreshFailedError, StorageUnavailableError)
"""
from __future__ import annotations

import asyncio
import logging
from datetime import time, timezone
from typing import Optional

from telegram.ext import ContextTypes, JobQueue

from fxrates.application.snapshot_store import RateSnapshotStore
from fxrates.domain.errors import RefreshFailedError, StorageUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_TIME = time(12, 0, tzinfo=timezone.utc)


class RefreshScheduler:
    """Triggers RateSnapshotStore.refresh at startup and daily."""

    def __init__(self, store: RateSnapshotStore, at: Optional[time] = None):
        self.store = store
        self.at = at or DEFAULT_REFRESH_TIME
        if self.at.tzinfo is None:
            self.at = self.at.replace(tzinfo=timezone.utc)

    def register(self, job_queue: JobQueue) -> None:
        """Schedule the startup refresh and the daily refresh."""
        job_queue.run_once(
            callback=self.refresh_job,
            when=0,  # right after the application starts
            name="rates_refresh_startup",
        )
        job_queue.run_daily(
            callback=self.refresh_job,
            time=self.at,
            name="rates_refresh_daily",
        )
        logger.info("Rates refresh scheduled at startup and daily at %s UTC", self.at.strftime("%H:%M"))

    def refresh_now(self) -> bool:
        """
        Refresh synchronously.

        Returns:
            True if a new snapshot was installed, False if the refresh failed
        """
        try:
            self.store.refresh()
            return True
        except (RefreshFailedError, StorageUnavailableError) as e:
            # next scheduled tick retries
            logger.error("Scheduled rates refresh failed: %s", e)
            return False

    async def refresh_job(self, context: ContextTypes.DEFAULT_TYPE) -> None:
        await asyncio.to_thread(self.refresh_now)
