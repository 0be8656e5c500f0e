"""
Precomputed ground path of the ISS.

The path covers a fixed window ahead of `computed_at` at a fixed step,
start and end inclusive (93 samples for 92 minutes at 60 seconds).
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from isstrack.core.constants import PATH_MAX_AGE, PATH_STEP, PATH_WINDOW
from isstrack.services.element_cache import ElementCache
from isstrack.services.freshness import CacheState, FreshnessPolicy
from isstrack.services.models import ElementSet, PathPoint, PathSnapshot
from isstrack.services.resolver import PositionResolver


def sample_path(resolver: PositionResolver, elements: ElementSet, start: datetime,
                window: timedelta = PATH_WINDOW, step: timedelta = PATH_STEP) -> PathSnapshot:
    """
    Sample the resolver from start through start + window
    Args:
        resolver: position resolver
        elements: element set to propagate
        start: first sample time, also the snapshot's computed_at
        window: length of the path
        step: spacing between samples
    Returns:
        PathSnapshot
    """
    propagator = resolver.load(elements)
    end = start + window

    samples = []
    when = start
    while when <= end:
        position = propagator.at(when)
        samples.append(PathPoint(lat=position.latitude_deg, lon=position.longitude_deg))
        when += step
    return PathSnapshot(computed_at=start, samples=tuple(samples))


class PathCache:
    def __init__(self, element_cache: ElementCache, resolver: PositionResolver,
                 policy: FreshnessPolicy = None, window: timedelta = PATH_WINDOW,
                 step: timedelta = PATH_STEP, logger=None):
        self.element_cache = element_cache
        self.resolver = resolver
        self.policy = policy or FreshnessPolicy(PATH_MAX_AGE, inclusive=True)
        self.window = window
        self.step = step
        self.logger = logger or logging.getLogger("isstrack.path")

        self._snapshot: Optional[PathSnapshot] = None
        self._lock = asyncio.Lock()
        self._refreshing = False
        self.refresh_count = 0

    def _computed_at(self) -> Optional[datetime]:
        return self._snapshot.computed_at if self._snapshot else None

    def state(self, now: datetime) -> CacheState:
        if self._refreshing:
            return CacheState.REFRESHING
        return self.policy.state(self._computed_at(), now)

    def snapshot(self) -> Optional[PathSnapshot]:
        """Copy of the current snapshot without triggering a refresh"""
        return self._snapshot.model_copy(deep=True) if self._snapshot else None

    async def get_or_refresh(self, now: datetime) -> PathSnapshot:
        """
        Return a copy of the path, recomputing it when stale. The element
        cache is consulted on every call, fresh path or not, so a path
        request also refreshes elements that have aged out.
        """
        # Lock order: the element cache lock is taken and released here,
        # before the path lock. Never call into the element cache while
        # holding self._lock.
        elements = await self.element_cache.get_or_refresh(now)

        async with self._lock:
            if self.policy.needs_refresh(self._computed_at(), now):
                self._refreshing = True
                try:
                    snapshot = await run_in_threadpool(
                        sample_path, self.resolver, elements, now, self.window, self.step)
                finally:
                    self._refreshing = False

                self._snapshot = snapshot
                self.refresh_count += 1
                self.logger.info(f"Path recomputed at {now.isoformat()} with {len(snapshot.samples)} samples")
            return self._snapshot.model_copy(deep=True)
