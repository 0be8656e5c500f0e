from fastapi import APIRouter, Depends

from isstrack.api.dependencies import TrackerContext, get_context, limit_path, limit_position

satellite_router = APIRouter()


@satellite_router.get('/isspos', dependencies=[Depends(limit_position)])
async def get_iss_position(context: TrackerContext = Depends(get_context)):
    """Get the current position of the ISS"""
    now = context.clock()
    elements = await context.element_cache.get_or_refresh(now)
    position = context.resolver.resolve(elements, now)
    return position.to_dict()


@satellite_router.get('/isspath', dependencies=[Depends(limit_path)])
async def get_iss_path(context: TrackerContext = Depends(get_context)):
    """Get the predicted ground path for the next 92 minutes"""
    now = context.clock()
    snapshot = await context.path_cache.get_or_refresh(now)
    return snapshot.to_dict()
