"""
Shared pytest fixtures: sample snapshots, a fake fetcher and a settable clock.
"""
import json
from datetime import date, datetime, timezone

import pytest

from fxrates.adapters.providers.base import RatesFetcher
from fxrates.domain.errors import ProviderUnavailableError
from fxrates.domain.models import RateSnapshot


def payload(day: str = "2024-01-10", rates=None, base: str = "USD", success: bool = True) -> dict:
    return {
        "success": success,
        "timestamp": 1704844799,
        "base": base,
        "date": day,
        "rates": {"USD": 1.0, "EUR": 0.9, "JPY": 140.0} if rates is None else rates,
    }


class FakeFetcher(RatesFetcher):
    """Returns queued payloads (dict, bytes or exception) and counts calls."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = 0

    def fetch_raw_rates(self) -> bytes:
        self.calls += 1
        if not self.responses:
            raise ProviderUnavailableError("no response queued")
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        if isinstance(resp, dict):
            return json.dumps(resp).encode("utf-8")
        return resp


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def snapshot() -> RateSnapshot:
    return RateSnapshot.from_json(payload())


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def rates_file(tmp_path):
    return tmp_path / "data" / "rates.json"


def write_rates_file(path, data: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


TODAY = date(2024, 1, 10)
