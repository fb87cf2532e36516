import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from city_explorer.core import db, settings
from city_explorer.core.logging_config import configure_logging
from city_explorer.core.providers import ProviderError
from city_explorer.locations import router as location_router
from city_explorer.locations.geocoding import GoogleGeocoder
from city_explorer.locations.service import LocationResolver
from city_explorer.summaries import router as summaries_router

FAILURE_MESSAGE = "Sorry, something went wrong"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    # One pool per process, shared by every request through app.state.
    pool = await db.create_pool()
    try:
        if settings.ensure_schema_on_startup():
            await db.ensure_schema(pool)
        app.state.pool = pool
        app.state.resolver = LocationResolver(pool, GoogleGeocoder())
        yield
    finally:
        await db.close_pool(pool)
        app.state.pool = None
        app.state.resolver = None


app = FastAPI(title="City Explorer API", lifespan=lifespan)

origins = settings.cors_allow_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials="*" not in origins,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(location_router.router, tags=["location"])
app.include_router(summaries_router.router, tags=["summaries"])


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError) -> PlainTextResponse:
    logger.exception(
        "provider_failed path=%s provider=%s status_code=%s",
        request.url.path,
        exc.provider,
        exc.status_code,
        exc_info=exc,
    )
    return PlainTextResponse(FAILURE_MESSAGE, status_code=500)


@app.exception_handler(db.StoreError)
async def store_error_handler(request: Request, exc: db.StoreError) -> PlainTextResponse:
    logger.exception("store_failed path=%s", request.url.path, exc_info=exc)
    return PlainTextResponse(FAILURE_MESSAGE, status_code=500)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("request_failed path=%s", request.url.path, exc_info=exc)
    return PlainTextResponse(FAILURE_MESSAGE, status_code=500)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "city explorer api"}


def run() -> None:
    uvicorn.run("city_explorer.main:app", host="0.0.0.0", port=settings.port())
