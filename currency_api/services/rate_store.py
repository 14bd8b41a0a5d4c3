"""
Rate Store: in-memory mapping of date -> filtered rates.

Written by the refresh pipeline on the event loop, read by request handlers
on worker threads. Every access to the underlying dict goes through one
lock, and stored values are immutable tuples, so a reader either sees a
date's complete rate list or does not see the date at all.
"""

import threading
from collections.abc import Iterable

from currency_api.schemas.rate import ExchangeRate

DateRates = tuple[ExchangeRate, ...]


class RateStore:
    """Grow-only, first-write-wins store of daily rates."""

    def __init__(self):
        self._lock = threading.Lock()
        self._rates: dict[str, DateRates] = {}

    def merge(self, date: str, rates: Iterable[ExchangeRate]) -> bool:
        """
        Insert ``rates`` under ``date`` unless the date is already present.

        Returns True when the date was inserted, False when it was a no-op.
        """
        frozen = tuple(rates)
        with self._lock:
            if date in self._rates:
                return False
            self._rates[date] = frozen
            return True

    def lookup(self, date: str) -> DateRates | None:
        """Rates for ``date``, or None when the date is unknown."""
        with self._lock:
            return self._rates.get(date)

    def lookup_one(self, date: str, currency: str) -> ExchangeRate | None:
        """One currency's rate for ``date`` (exact code match), or None."""
        with self._lock:
            rates = self._rates.get(date, ())
        for rate in rates:
            if rate.currency == currency:
                return rate
        return None

    def __contains__(self, date: str) -> bool:
        with self._lock:
            return date in self._rates

    def __len__(self) -> int:
        with self._lock:
            return len(self._rates)


# Process-wide store shared by the scheduler and the API
rate_store = RateStore()


def get_rate_store() -> RateStore:
    """FastAPI dependency that provides the rate store."""
    return rate_store
