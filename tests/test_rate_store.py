"""Tests for the rate store: first-write-wins merge, lookups, concurrency."""

import threading

from currency_api.services.rate_store import RateStore


class TestMerge:

    def test_merge_inserts_new_date(self, store, make_rate):
        assert store.merge("2024-01-15", [make_rate("USD", "1.10")]) is True
        assert "2024-01-15" in store
        assert len(store) == 1

    def test_second_merge_is_noop(self, store, make_rate):
        """First write for a date wins even if the payload differs."""
        store.merge("2024-01-15", [make_rate("USD", "1.10")])
        assert store.merge("2024-01-15", [make_rate("USD", "9.99"), make_rate("JPY", "1")]) is False

        rates = store.lookup("2024-01-15")
        assert len(rates) == 1
        assert rates[0] == make_rate("USD", "1.10")

    def test_merge_empty_rates_still_claims_date(self, store, make_rate):
        store.merge("2024-01-15", [])
        assert store.lookup("2024-01-15") == ()
        assert store.merge("2024-01-15", [make_rate("USD", "1.10")]) is False

    def test_stored_value_not_affected_by_caller_list(self, store, make_rate):
        rates = [make_rate("USD", "1.10")]
        store.merge("2024-01-15", rates)
        rates.append(make_rate("JPY", "160.0"))
        assert len(store.lookup("2024-01-15")) == 1


class TestLookup:

    def test_lookup_unknown_date(self, store):
        assert store.lookup("1999-01-01") is None

    def test_lookup_preserves_order(self, populated_store):
        codes = [r.currency for r in populated_store.lookup("2024-01-15")]
        assert codes == ["USD", "JPY"]

    def test_lookup_one_found(self, populated_store, make_rate):
        assert populated_store.lookup_one("2024-01-15", "JPY") == make_rate("JPY", "160.0")

    def test_lookup_one_unknown_currency(self, populated_store):
        assert populated_store.lookup_one("2024-01-15", "GBP") is None

    def test_lookup_one_is_exact_match(self, populated_store):
        assert populated_store.lookup_one("2024-01-15", "usd") is None

    def test_lookup_one_unknown_date(self, populated_store):
        assert populated_store.lookup_one("1999-01-01", "USD") is None


class TestConcurrency:

    def test_readers_never_see_partial_dates(self, make_rate):
        """Readers racing a writer only ever see absent or complete dates."""
        store = RateStore()
        per_date = 25
        dates = [f"2020-01-{day:02d}" for day in range(1, 29)]
        payload = [make_rate(f"C{i:02d}", str(i + 1)) for i in range(per_date)]
        failures = []
        done = threading.Event()

        def writer():
            for _ in range(20):
                for d in dates:
                    store.merge(d, payload)
            done.set()

        def reader():
            while not done.is_set():
                for d in dates:
                    rates = store.lookup(d)
                    if rates is not None and len(rates) != per_date:
                        failures.append((d, len(rates)))

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        w = threading.Thread(target=writer)
        w.start()
        w.join()
        for t in readers:
            t.join()

        assert failures == []
        assert len(store) == len(dates)
