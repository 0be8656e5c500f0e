"""
Staleness policy for the cached resources.

A cached resource moves EMPTY -> FRESH -> STALE -> REFRESHING -> FRESH. The
policy only answers EMPTY / FRESH / STALE from a timestamp; the owning cache
reports REFRESHING while it holds its lock for a refresh.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class CacheState(str, Enum):
    EMPTY = "empty"
    FRESH = "fresh"
    STALE = "stale"
    REFRESHING = "refreshing"


@dataclass(frozen=True)
class FreshnessPolicy:
    max_age: timedelta
    # When True a value exactly max_age old is already stale
    inclusive: bool = False

    def state(self, stamp: Optional[datetime], now: datetime) -> CacheState:
        if stamp is None:
            return CacheState.EMPTY
        age = now - stamp
        if age > self.max_age or (self.inclusive and age == self.max_age):
            return CacheState.STALE
        return CacheState.FRESH

    def needs_refresh(self, stamp: Optional[datetime], now: datetime) -> bool:
        return self.state(stamp, now) is not CacheState.FRESH

    def fresh_until(self, stamp: Optional[datetime]) -> Optional[datetime]:
        if stamp is None:
            return None
        return stamp + self.max_age
