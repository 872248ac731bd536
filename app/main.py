from __future__ import annotations
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
import uvicorn

from app.api import router
from app.web import router as web_router
from datastore.sensor_source import build_default_source
from logging_config import configure_logging
from services.formatting import set_loc_settings
from settings import get_settings


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    try:
        yield
    finally:
        build_default_source.cache_clear()
        set_loc_settings.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="EMS Heating Dashboard",
        description="Status pages and integration export for a Buderus EMS heating system.",
        version="0.1.0",
        lifespan=lifespan,
    )
    static_dir = Path(__file__).resolve().parent / "static"
    app.mount("/static", StaticFiles(directory=static_dir), name="static")
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()


def run_server() -> None:
    """Serve the dashboard with uvicorn using the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )
