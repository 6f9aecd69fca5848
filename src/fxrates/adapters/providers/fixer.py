# src/fxrates/adapters/providers/fixer.py
"""
Fixer-style API Provider for Latest Exchange Rates

This module implements the HTTP client for a Fixer-compatible "latest rates"
endpoint (fixer.io, exchangeratesapi.io and friends). It performs exactly one
bounded GET per call and hands the raw body back to the caller.

Files that USE this module:
- fxrates.app (wires FixerProvider into RateSnapshotStore)
- tests.test_providers (unit tests)

Files that this module USES:
- fxrates.adapters.providers.base (RatesFetcher interface)
- fxrates.domain.errors (ProviderUnavailableError)
- fxrates.config (settings for URL and timeout)
"""
import logging
from typing import Optional

import requests

from fxrates.adapters.providers.base import RatesFetcher
from fxrates.config import settings
from fxrates.domain.errors import ProviderUnavailableError

log = logging.getLogger(__name__)


class FixerProvider(RatesFetcher):
    def __init__(self, url: Optional[str] = None, timeout: Optional[int] = None):
        """
        Initialize provider.

        Args:
            url: Optional custom endpoint (defaults to settings.RATES_URL)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
        """
        self.url = url or settings.RATES_URL
        self.timeout = timeout or settings.http_timeout_seconds

    def fetch_raw_rates(self) -> bytes:
        """
        Fetch the latest rates payload.

        Returns:
            Raw response body (JSON bytes)

        Raises:
            ProviderUnavailableError: On timeout, connection error, non-2xx status or empty body
        """
        try:
            log.info("Fetching latest rates from provider")
            resp = requests.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.warning("Rates provider timeout after %d seconds", self.timeout)
            raise ProviderUnavailableError(f"Rates provider timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            log.warning("Rates provider HTTP error %s", status)
            raise ProviderUnavailableError(f"Rates provider returned HTTP {status}") from e
        except requests.exceptions.RequestException as e:
            log.warning("Rates provider request failed (network/connection error): %s", e)
            raise ProviderUnavailableError(f"Rates provider request failed: {e}") from e

        body = resp.content
        if not body:
            log.error("Rates provider returned an empty body (HTTP %d)", resp.status_code)
            raise ProviderUnavailableError("Rates provider returned an empty body")

        log.debug("Rates provider returned %d bytes", len(body))
        return body
