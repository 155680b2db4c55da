"""FastAPI application factory and configuration.

Hosts the NiceGUI chat page and a health endpoint, with lifespan
management and middleware.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import get_app_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config = get_app_config()
    logger.info(f"Starting NCAA chat front-end, Query Service at {config.query_service_url}")
    yield
    logger.info("Shutting down NCAA chat front-end...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="NCAA Basketball Data Chat",
        description=(
            "Chat front-end for natural-language questions over NCAA basketball "
            "data. Answers are shown as text, tables and charts."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "ncaa-chat"}

    return application


app = create_app()
