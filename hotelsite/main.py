from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from hotelsite.api.errors import register_api_exception_handlers
from hotelsite.api.router import router as api_router
from hotelsite.db.session import check_database, close_engine, create_schema
from hotelsite.logging_config import configure_logging, parse_redact_fields
from hotelsite.settings import settings
from hotelsite.web.middleware import RequestLoggingMiddleware, parse_skip_paths
from hotelsite.web.routers import home

configure_logging(
    level=settings.log_level,
    log_format=settings.log_format,
    redact_fields=parse_redact_fields(settings.log_redact_fields),
    include_uvicorn_access=settings.log_uvicorn_access,
)


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.db_create_schema_on_start:
        await create_schema()
    yield
    await close_engine()


app = FastAPI(title=settings.app_name, lifespan=lifespan)
register_api_exception_handlers(app)
app.add_middleware(
    RequestLoggingMiddleware,
    log_requests=settings.log_requests,
    skip_paths=parse_skip_paths(settings.log_request_skip_paths),
)
app.include_router(api_router)
app.include_router(home.router)


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    if await check_database():
        return {"status": "ok"}
    raise HTTPException(status_code=500, detail="database unavailable")
