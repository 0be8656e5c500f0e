from fastapi import APIRouter, Depends

from isstrack.api.dependencies import TrackerContext, get_context

system_router = APIRouter()


def _iso(value):
    return value.isoformat() if value else None


@system_router.get('/status')
async def system_status(context: TrackerContext = Depends(get_context)):
    """Get the cache status. Never triggers a refresh."""
    now = context.clock()
    elements = context.element_cache.snapshot()
    path = context.path_cache.snapshot()
    return {
        "running": True,
        "elements": {
            "state": context.element_cache.state(now).value,
            "source": elements.source,
            "last_updated_at": _iso(elements.last_updated_at),
            "fresh_until": _iso(context.element_cache.policy.fresh_until(elements.last_updated_at)),
            "fetch_count": context.element_cache.fetch_count,
        },
        "path": {
            "state": context.path_cache.state(now).value,
            "computed_at": _iso(path.computed_at) if path else None,
            "samples": len(path.samples) if path else 0,
            "refresh_count": context.path_cache.refresh_count,
        },
    }
