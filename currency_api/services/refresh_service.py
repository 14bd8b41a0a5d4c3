"""
Refresh pipeline: fetch, decode, filter, merge.

A cycle downloads the full feed, decodes it, reduces every date cube to the
allowed currencies and merges it into the rate store. Feed failures abort
the cycle and are reported in the returned dict; they never propagate.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection
from datetime import datetime, timezone

from currency_api.config import settings
from currency_api.core.exceptions import FeedError
from currency_api.schemas.rate import Envelope
from currency_api.services.currency_filter import filter_exchanges
from currency_api.services.feed_decoder import decode_feed
from currency_api.services.feed_fetcher import FeedFetcher, FeedSource
from currency_api.services.rate_store import RateStore

logger = logging.getLogger(__name__)


class RefreshService:
    """Runs one fetch → decode → filter → merge cycle."""

    def __init__(
        self,
        store: RateStore | None = None,
        source: FeedSource | None = None,
        allow_set: Collection[str] | None = None,
    ):
        """
        Args:
            store: RateStore to merge into (defaults to the module-level store).
            source: feed source (defaults to a FeedFetcher on ``FEED_URL``).
            allow_set: currencies to keep (defaults to ``ALLOWED_CURRENCIES``).
        """
        self._store = store
        self._source = source
        self.allow_set = frozenset(allow_set) if allow_set is not None else settings.allow_set

    @property
    def store(self) -> RateStore:
        if self._store is not None:
            return self._store
        from currency_api.services.rate_store import rate_store
        return rate_store

    @property
    def source(self) -> FeedSource:
        if self._source is None:
            self._source = FeedFetcher()
        return self._source

    def _decode_and_merge(self, raw: bytes) -> tuple[Envelope, int]:
        """Decode the feed and merge every cube; returns the envelope and new-date count."""
        envelope = decode_feed(raw)
        added = 0
        for cube in envelope.cubes:
            if self.store.merge(cube.date, filter_exchanges(cube.exchanges, self.allow_set)):
                added += 1
        return envelope, added

    async def run_cycle(self) -> dict:
        """
        Execute one refresh cycle.

        Returns a report dict; ``ok`` is False when a feed error aborted
        the cycle.
        """
        started_at = datetime.now(timezone.utc)
        cycle_id = f"RC-{started_at:%Y%m%d-%H%M%S}"
        report = {
            "cycle_id": cycle_id,
            "ok": False,
            "cubes": 0,
            "dates_added": 0,
            "error": None,
        }

        logger.info("Refresh cycle %s started", cycle_id)
        try:
            raw = await self.source.fetch()
            # Parsing the full history is CPU-bound; keep it off the event loop
            envelope, added = await asyncio.to_thread(self._decode_and_merge, raw)
        except FeedError as exc:
            logger.error("Refresh cycle %s aborted: %s", cycle_id, exc)
            report["error"] = str(exc)
            return report

        report.update(ok=True, cubes=len(envelope.cubes), dates_added=added)
        logger.info(
            "Refresh cycle %s completed: %d cubes from %r, %d new dates",
            cycle_id, len(envelope.cubes), envelope.sender, added,
        )
        return report
