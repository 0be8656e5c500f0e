import asyncio
from datetime import datetime, timezone

import pytest

from isstrack.core.constants import FALLBACK_LINE1, FALLBACK_LINE2
from isstrack.services.models import ElementSet
from isstrack.services.resolver import PositionResolver

# Close to the epoch of the fallback element set (2022 day 200)
START = datetime(2022, 7, 19, 12, 0, 0, tzinfo=timezone.utc)


class FakeFetcher:
    """Stands in for ElementFetcher, counting calls and yielding once per fetch"""

    def __init__(self, source="live"):
        self.source = source
        self.calls = []

    async def fetch(self, now):
        self.calls.append(now)
        await asyncio.sleep(0)
        return ElementSet(line1=FALLBACK_LINE1, line2=FALLBACK_LINE2,
                          last_updated_at=now, source=self.source)


class Clock:
    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def fallback_elements():
    return ElementSet(line1=FALLBACK_LINE1, line2=FALLBACK_LINE2,
                      last_updated_at=START, source="fallback")


@pytest.fixture(scope="session")
def resolver():
    return PositionResolver()


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def clock():
    return Clock()
