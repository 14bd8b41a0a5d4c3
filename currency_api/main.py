"""
Currency API — FastAPI application entry point.

Configures logging, starts the rate refresh scheduler for the lifetime of
the app, and registers the lookup router.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from currency_api.config import settings
from currency_api.api import rates
from currency_api.tasks.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    configure_logging()

    # Startup: first refresh runs in the background, the listener does not wait
    scheduler = RefreshScheduler()
    app.state.scheduler = scheduler
    scheduler.start()

    yield

    # Shutdown
    await scheduler.stop()


app = FastAPI(
    title=settings.APP_NAME,
    description="Daily EUR reference rates from the ECB, served from memory.",
    version="0.1.0",
    lifespan=lifespan,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)

# --- Routers ---
app.include_router(rates.router, tags=["Rates"])


def run() -> None:
    """Serve the app with uvicorn on HOST:PORT."""
    import uvicorn

    configure_logging()
    logger.info("listening on %s:%d", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
