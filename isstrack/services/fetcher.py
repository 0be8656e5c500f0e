"""
Element fetcher for the remote TLE provider.

A single GET is issued per fetch, with no retry. When it fails the configured
fallback strategy decides what to return; the default strategy hands back a
fixed element pair stamped with the failure time, so the element cache's
staleness clock is reset even while the provider is down.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from isstrack.core.constants import FALLBACK_LINE1, FALLBACK_LINE2, TLE_PROVIDER_URL
from isstrack.core.errors import ParseError, TrackerError, TransportError
from isstrack.services.models import ElementSet

# (now, error) -> ElementSet
FallbackStrategy = Callable[[datetime, TrackerError], ElementSet]


class TleResponse(BaseModel):
    """Document returned by the provider. Only line1 and line2 are used."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    context: Optional[str] = Field(default=None, alias="@context")
    id: Optional[str] = Field(default=None, alias="@id")
    type: Optional[str] = Field(default=None, alias="@type")
    satellite_id: Optional[int] = Field(default=None, alias="satelliteId")
    name: Optional[str] = None
    date: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None


class FixedElementsFallback:
    """Availability over freshness: always answer with the same element pair"""

    def __init__(self, line1: str = FALLBACK_LINE1, line2: str = FALLBACK_LINE2):
        self.line1 = line1
        self.line2 = line2

    def __call__(self, now: datetime, error: TrackerError) -> ElementSet:
        return ElementSet(line1=self.line1, line2=self.line2,
                          last_updated_at=now, source="fallback")


class ElementFetcher:
    def __init__(self, client: httpx.AsyncClient, url: str = TLE_PROVIDER_URL,
                 fallback: Optional[FallbackStrategy] = None, logger=None):
        self.client = client
        self.url = url
        self.fallback = fallback
        self.logger = logger or logging.getLogger("isstrack.fetcher")

    @classmethod
    def with_default_fallback(cls, client: httpx.AsyncClient, **kwargs) -> "ElementFetcher":
        return cls(client, fallback=FixedElementsFallback(), **kwargs)

    async def fetch(self, now: datetime) -> ElementSet:
        """
        Fetch the current element pair
        Args:
            now: timestamp recorded as last_updated_at, on success and on fallback
        Returns:
            ElementSet from the provider, or from the fallback strategy
        Raises:
            TransportError, ParseError: only when no fallback strategy is set
        """
        try:
            return await self._fetch_live(now)
        except (TransportError, ParseError) as e:
            if self.fallback is None:
                raise
            self.logger.warning(f"TLE fetch failed ({e.code}: {e.message}), using fallback elements")
            return self.fallback(now, e)

    async def _fetch_live(self, now: datetime) -> ElementSet:
        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"GET {self.url} failed: {e}") from e

        try:
            parsed = TleResponse.model_validate(response.json())
        except ValueError as e:
            raise ParseError(f"Unexpected response shape: {e}") from e

        if parsed.line1 is None or parsed.line2 is None:
            raise ParseError("Response is missing line1 or line2")

        try:
            elements = ElementSet(line1=parsed.line1, line2=parsed.line2,
                                  last_updated_at=now, source="live")
        except ValueError as e:
            raise ParseError(f"Malformed element lines: {e}") from e

        self.logger.info(f"Fetched TLE for {parsed.name or 'unknown'} dated {parsed.date}")
        return elements
