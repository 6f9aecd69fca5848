"""
Snapshot Store Tests - Unit Tests for Freshness and Refresh Behaviour

Uses a fake clock and a fake fetcher so freshness boundaries and refresh
failures are deterministic and never touch the network.

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- fxrates.application.snapshot_store (RateSnapshotStore, is_fresh)
- fxrates.domain.errors (RefreshFailedError, StorageUnavailableError)
- pytest (testing framework)
"""
import json
import threading
import time
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from conftest import TODAY, FakeFetcher, payload, write_rates_file
from fxrates.application.snapshot_store import RateSnapshotStore, is_fresh
from fxrates.domain.errors import (
    ProviderUnavailableError,
    RefreshFailedError,
    StorageUnavailableError,
)
from fxrates.domain.models import RateSnapshot


def snap_for(day: date) -> RateSnapshot:
    return RateSnapshot.from_json(payload(day=day.isoformat()))


class TestIsFresh:
    def test_today_is_fresh(self):
        assert is_fresh(snap_for(TODAY), TODAY)

    def test_yesterday_is_fresh(self):
        assert is_fresh(snap_for(TODAY - timedelta(days=1)), TODAY)

    def test_two_days_old_is_stale(self):
        assert not is_fresh(snap_for(TODAY - timedelta(days=2)), TODAY)

    def test_future_date_is_stale(self):
        assert not is_fresh(snap_for(TODAY + timedelta(days=1)), TODAY)


class TestStartup:
    def test_loads_persisted_snapshot(self, rates_file, clock):
        write_rates_file(rates_file, payload())
        store = RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)
        assert store.last_known is not None
        assert store.last_known.as_of_date == TODAY

    def test_missing_file_starts_empty(self, rates_file, clock):
        store = RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)
        assert store.last_known is None
        assert store.status()["has_snapshot"] is False

    def test_corrupt_file_starts_empty(self, rates_file, clock):
        rates_file.parent.mkdir(parents=True)
        rates_file.write_text("{not json", encoding="utf-8")
        store = RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)
        assert store.last_known is None

    def test_non_utf8_file_is_quarantined_then_refreshed(self, rates_file, clock):
        rates_file.parent.mkdir(parents=True)
        rates_file.write_bytes(b'{"date": "2024-01-10", "base": "\xff\xfe"}')
        fetcher = FakeFetcher(payload())

        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        assert store.last_known is None
        assert (rates_file.parent / "rates.json.corrupt").exists()
        assert store.get_current().as_of_date == TODAY
        assert fetcher.calls == 1


class TestGetCurrent:
    def test_fresh_snapshot_served_without_fetch(self, rates_file, clock):
        write_rates_file(rates_file, payload())
        fetcher = FakeFetcher()
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        snap = store.get_current()

        assert snap.as_of_date == TODAY
        assert fetcher.calls == 0

    def test_yesterday_snapshot_served_without_fetch(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-09"))
        fetcher = FakeFetcher()
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        assert store.get_current().as_of_date == date(2024, 1, 9)
        assert fetcher.calls == 0

    def test_no_snapshot_triggers_refresh(self, rates_file, clock):
        fetcher = FakeFetcher(payload())
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        snap = store.get_current()

        assert fetcher.calls == 1
        assert snap.rates["JPY"] == 140.0
        assert json.loads(rates_file.read_text(encoding="utf-8"))["date"] == "2024-01-10"

    def test_stale_snapshot_triggers_refresh(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-08"))
        fetcher = FakeFetcher(payload(rates={"USD": 1.0, "EUR": 0.95}))
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        snap = store.get_current()

        assert fetcher.calls == 1
        assert snap.as_of_date == TODAY
        assert snap.rates["EUR"] == 0.95
        assert store.last_known is snap

    def test_clock_crossing_midnight_makes_snapshot_stale(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-09"))
        fetcher = FakeFetcher(payload(day="2024-01-11"))
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        store.get_current()
        assert fetcher.calls == 0

        clock.now = datetime(2024, 1, 11, 0, 0, 1, tzinfo=timezone.utc)
        assert store.get_current().as_of_date == date(2024, 1, 11)
        assert fetcher.calls == 1

    def test_clock_is_read_in_utc(self, rates_file):
        write_rates_file(rates_file, payload(day="2024-01-08"))
        # 2024-01-10 01:00 in UTC+05:00 is still 2024-01-09 in UTC
        local = datetime(2024, 1, 10, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        fetcher = FakeFetcher()
        store = RateSnapshotStore(fetcher, rates_file, clock=lambda: local)

        assert store.today() == date(2024, 1, 9)
        assert store.get_current().as_of_date == date(2024, 1, 8)
        assert fetcher.calls == 0


class TestRefreshFailures:
    def test_http_500_keeps_previous_snapshot(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-01"))
        before = rates_file.read_bytes()
        fetcher = FakeFetcher(ProviderUnavailableError("Rates provider returned HTTP 500"))
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)
        previous = store.last_known

        with pytest.raises(RefreshFailedError):
            store.get_current()

        assert store.last_known is previous
        assert rates_file.read_bytes() == before

    @pytest.mark.parametrize("raw", [
        b"<html>oops</html>",
        json.dumps(payload(rates={})).encode(),
        json.dumps(payload(success=False)).encode(),
        json.dumps({"success": True, "base": "USD", "date": "2024-01-10"}).encode(),
        json.dumps(payload(rates={"USD": 1.0, "EUR": -2})).encode(),
        json.dumps(payload(rates={"USD": 1.0, "eur": 0.9, "EUR": 0.91})).encode(),
    ])
    def test_unusable_payload_is_refresh_failure(self, rates_file, clock, raw):
        store = RateSnapshotStore(FakeFetcher(raw), rates_file, clock=clock)

        with pytest.raises(RefreshFailedError):
            store.refresh()

        assert store.last_known is None
        assert not rates_file.exists()

    def test_unexpected_fetch_exception_is_refresh_failure(self, rates_file, clock):
        store = RateSnapshotStore(FakeFetcher(OSError("boom")), rates_file, clock=clock)
        with pytest.raises(RefreshFailedError) as exc:
            store.refresh()
        assert isinstance(exc.value.__cause__, OSError)

    def test_failed_refresh_can_be_retried(self, rates_file, clock):
        fetcher = FakeFetcher(ProviderUnavailableError("timeout"), payload())
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        with pytest.raises(RefreshFailedError):
            store.get_current()
        assert store.get_current().as_of_date == TODAY
        assert fetcher.calls == 2

    def test_write_failure_keeps_memory_unchanged(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-01"))
        store = RateSnapshotStore(FakeFetcher(payload()), rates_file, clock=clock)
        previous = store.last_known

        with patch("fxrates.application.snapshot_store.save_snapshot",
                   side_effect=StorageUnavailableError("disk full")):
            with pytest.raises(StorageUnavailableError):
                store.get_current()

        assert store.last_known is previous

    def test_unreadable_file_raises_storage_error(self, rates_file, clock):
        write_rates_file(rates_file, payload())
        with patch("pathlib.Path.read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(StorageUnavailableError):
                RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)


class TestRefresh:
    def test_refresh_is_unconditional(self, rates_file, clock):
        write_rates_file(rates_file, payload())
        fetcher = FakeFetcher(payload(rates={"USD": 1.0, "GBP": 0.8}))
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)

        snap = store.refresh()

        assert fetcher.calls == 1
        assert set(snap.rates) == {"USD", "GBP"}

    def test_persisted_file_is_pretty_json_and_reloads(self, rates_file, clock):
        store = RateSnapshotStore(FakeFetcher(payload()), rates_file, clock=clock)
        store.refresh()

        text = rates_file.read_text(encoding="utf-8")
        assert "\n  " in text
        reloaded = RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)
        assert reloaded.last_known == store.last_known


class SlowFetcher(FakeFetcher):
    def fetch_raw_rates(self) -> bytes:
        time.sleep(0.05)
        return super().fetch_raw_rates()


class TestConcurrency:
    def test_concurrent_stale_readers_fetch_once(self, rates_file, clock):
        fetcher = SlowFetcher(*[payload() for _ in range(5)])
        store = RateSnapshotStore(fetcher, rates_file, clock=clock)
        results = []

        def reader():
            results.append(store.get_current())

        threads = [threading.Thread(target=reader) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert fetcher.calls == 1
        assert len(results) == 5
        assert all(r is results[0] for r in results)


class TestStatus:
    def test_status_reports_snapshot(self, rates_file, clock):
        write_rates_file(rates_file, payload(day="2024-01-05"))
        store = RateSnapshotStore(FakeFetcher(), rates_file, clock=clock)

        status = store.status()

        assert status == {
            "has_snapshot": True,
            "as_of_date": "2024-01-05",
            "base_currency": "USD",
            "currency_count": 3,
            "fresh": False,
            "path": str(rates_file),
        }
