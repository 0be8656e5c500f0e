import asyncio
import logging
from datetime import datetime

from isstrack.core.constants import ELEMENTS_MAX_AGE
from isstrack.services.fetcher import ElementFetcher
from isstrack.services.freshness import CacheState, FreshnessPolicy
from isstrack.services.models import ElementSet


class ElementCache:
    """
    Holds the current element set and refreshes it from the fetcher once it
    is older than the max age. The staleness check, the fetch and the store
    all happen under one lock, so concurrent callers wait for an in-flight
    refresh and then see its result instead of fetching again.
    """

    def __init__(self, fetcher: ElementFetcher, policy: FreshnessPolicy = None, logger=None):
        self.fetcher = fetcher
        self.policy = policy or FreshnessPolicy(ELEMENTS_MAX_AGE, inclusive=False)
        self.logger = logger or logging.getLogger("isstrack.elements")

        self._elements = ElementSet()
        self._lock = asyncio.Lock()
        self._refreshing = False
        self.fetch_count = 0

    def state(self, now: datetime) -> CacheState:
        if self._refreshing:
            return CacheState.REFRESHING
        return self.policy.state(self._elements.last_updated_at, now)

    def snapshot(self) -> ElementSet:
        """Current element set without triggering a refresh"""
        return self._elements

    async def get_or_refresh(self, now: datetime) -> ElementSet:
        async with self._lock:
            if self.policy.needs_refresh(self._elements.last_updated_at, now):
                self._refreshing = True
                try:
                    fetched = await self.fetcher.fetch(now)
                finally:
                    self._refreshing = False

                self.fetch_count += 1
                # Stamp with the request time even if the fetch took a while
                self._elements = fetched.model_copy(update={"last_updated_at": now})
                self.logger.info(f"Element set refreshed from {fetched.source} source at {now.isoformat()}")
            return self._elements
