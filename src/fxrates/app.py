# src/fxrates/app.py
"""
Application Entry Point - Bot Initialization and Startup

This module is the composition root for FXRates. It wires the rates
provider, snapshot store, exchange service, refresh scheduler and Telegram
bot together and starts polling.

Files that USE this module:
- fxrates console script (pyproject entry point)
- python -m fxrates.app

Files that this module USES:
- fxrates.shared.logging_conf (setup_logging)
- fxrates.config (settings)
- fxrates.adapters.providers.fixer (FixerProvider)
- fxrates.application.* (RateSnapshotStore, ExchangeService)
- fxrates.adapters.telegram.* (build_application, RefreshScheduler)
"""

from __future__ import annotations

import atexit
import logging
import os
import sys
from pathlib import Path

from telegram.error import NetworkError, TimedOut

from fxrates.adapters.providers.fixer import FixerProvider
from fxrates.adapters.telegram.bot import build_application
from fxrates.adapters.telegram.jobs import RefreshScheduler
from fxrates.application.exchange_service import ExchangeService
from fxrates.application.snapshot_store import RateSnapshotStore
from fxrates.domain.errors import StorageUnavailableError
from fxrates.shared.logging_conf import setup_logging


def _get_pid_file(rates_file: Path) -> Path:
    """PID file lives next to the rates file so instances sharing it collide."""
    pid_file = os.environ.get("FXRATES_PID_FILE")
    if pid_file:
        return Path(pid_file)
    return rates_file.parent / "fxrates.pid"


def _acquire_instance_lock(pid_file: Path) -> None:
    """
    Create the PID file, refusing to start if another instance is alive.

    Raises:
        RuntimeError: If the PID file points at a running process
    """
    if pid_file.exists():
        try:
            old_pid = int(pid_file.read_text().strip())
            os.kill(old_pid, 0)  # signal 0 only checks existence
        except (ValueError, ProcessLookupError):
            # stale or garbled PID file
            pid_file.unlink()
        except PermissionError:
            raise RuntimeError(f"Another instance is already running (PID: {old_pid})")
        else:
            raise RuntimeError(f"Another instance is already running (PID: {old_pid})")

    pid_file.parent.mkdir(parents=True, exist_ok=True)
    pid_file.write_text(str(os.getpid()))


def _release_instance_lock(pid_file: Path) -> None:
    try:
        pid_file.unlink()
    except FileNotFoundError:
        pass


def main() -> None:
    """
    Initialize and start the bot.

    1. Sets up logging and validates configuration
    2. Loads the persisted rates snapshot
    3. Registers command handlers and the refresh schedule
    4. Starts polling
    """
    from fxrates.config import settings

    setup_logging(
        level=logging.INFO,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    logger = logging.getLogger(__name__)

    if not settings.bot_token:
        raise RuntimeError("BOT_TOKEN missing")

    pid_file = _get_pid_file(settings.rates_file)
    try:
        _acquire_instance_lock(pid_file)
    except RuntimeError as e:
        logger.error(str(e))
        sys.exit(1)
    atexit.register(_release_instance_lock, pid_file)

    try:
        store = RateSnapshotStore(FixerProvider(), settings.rates_file)
    except StorageUnavailableError as e:
        logger.error("Cannot open rates file: %s", e)
        sys.exit(1)

    service = ExchangeService(store)
    scheduler = RefreshScheduler(store, at=settings.REFRESH_TIME)
    app = build_application(settings.bot_token, service, scheduler)

    logger.info("Starting bot polling… rates file=%s", settings.rates_file)
    try:
        app.run_polling(close_loop=False, drop_pending_updates=False)
    except (TimedOut, NetworkError) as e:
        logger.error("Network error talking to Telegram: %s", e, exc_info=True)
        raise
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
        raise


if __name__ == "__main__":
    main()
