import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from isstrack.api.dependencies import TrackerContext, create_context
from isstrack.api.satellite_routes import satellite_router
from isstrack.api.system_routes import system_router
from isstrack.core.errors import PropagationError, RateLimitExceeded

logger = logging.getLogger("isstrack")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "context", None) is None:
        app.state.context = create_context()

    yield

    client = app.state.context.client
    if client is not None:
        await client.aclose()


async def propagation_error_handler(request: Request, exc: PropagationError):
    logger.error(f"Propagation failed for {request.url.path}: {exc.message}")
    return JSONResponse(status_code=500, content={"error": exc.code, "detail": exc.message})


async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.info(f"Rejected request to {request.url.path}: {exc.message}")
    return PlainTextResponse("rate limit exceeded", status_code=429)


def create_app(context: TrackerContext = None) -> FastAPI:
    """Build the app. Pass a context to use prebuilt caches (tests), otherwise one is created on startup."""
    app = FastAPI(title="ISS Tracker", lifespan=lifespan)
    app.state.context = context

    app.add_exception_handler(PropagationError, propagation_error_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_handler)

    app.include_router(satellite_router)
    app.include_router(system_router, prefix='/system')
    return app
