from __future__ import annotations
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI

from app.api import router
from logging_config import configure_logging
from services.ingestion import IngestionService
from settings import get_settings
from storage.influx import build_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    store = build_store(settings)
    writer = store.write_handle(settings.influx_org, settings.influx_bucket)
    app.state.store = store
    app.state.ingestion = IngestionService(writer)
    try:
        yield
    finally:
        await store.close()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Weather Ingest",
        description="Writes posted weather readings to InfluxDB, one flushed point per request.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


def run() -> None:
    """Serve the app on the configured host and port."""
    settings = get_settings()
    logger.info("Server is running on port %d", settings.port, extra={"port": settings.port})
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )

app = create_app()


if __name__ == "__main__":
    run()
