import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

import httpx
from fastapi import Depends, Request

from isstrack.core.constants import PATH_RATE_LIMIT, POSITION_RATE_LIMIT
from isstrack.services.element_cache import ElementCache
from isstrack.services.fetcher import ElementFetcher
from isstrack.services.path_cache import PathCache
from isstrack.services.rate_governor import RateGovernor
from isstrack.services.resolver import PositionResolver

logger = logging.getLogger("isstrack")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TrackerContext:
    """Everything the routes share. Built once at startup and kept on app.state."""
    element_cache: ElementCache
    path_cache: PathCache
    resolver: PositionResolver
    position_governor: RateGovernor
    path_governor: RateGovernor
    clock: Callable[[], datetime] = utc_now
    # Closed on shutdown when the context created it
    client: Optional[httpx.AsyncClient] = None


def create_context(fetcher: ElementFetcher = None, resolver: PositionResolver = None,
                   clock: Callable[[], datetime] = utc_now,
                   position_limit=POSITION_RATE_LIMIT, path_limit=PATH_RATE_LIMIT) -> TrackerContext:
    client = None
    if fetcher is None:
        client = httpx.AsyncClient()
        fetcher = ElementFetcher.with_default_fallback(client)
    resolver = resolver or PositionResolver()

    element_cache = ElementCache(fetcher)
    logger.info("Tracker context created")
    return TrackerContext(
        element_cache=element_cache,
        path_cache=PathCache(element_cache, resolver),
        resolver=resolver,
        position_governor=RateGovernor("position", *position_limit),
        path_governor=RateGovernor("path", *path_limit),
        clock=clock,
        client=client,
    )


def get_context(request: Request) -> TrackerContext:
    """Dependency to inject the tracker context."""
    return request.app.state.context


def limit_position(context: TrackerContext = Depends(get_context)):
    context.position_governor.admit(context.clock())


def limit_path(context: TrackerContext = Depends(get_context)):
    context.path_governor.admit(context.clock())
