from contextlib import asynccontextmanager
from fastapi import FastAPI
import httpx
import logging

from src.core.config.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting up {settings.PROJECT_NAME}...")

    # Shared connection pool for upstream LLM calls
    app.state.http_client = httpx.AsyncClient(timeout=settings.DEFAULT_TIMEOUT)

    if not settings.LLM_API_KEY:
        # Not fatal: the credential is checked again on every request
        logger.warning(
            "DEEPSEEK_API_KEY is not set. Search requests will fail until it is configured."
        )

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")

    logger.info("Closing upstream HTTP client...")
    await app.state.http_client.aclose()

    logger.info("Shutdown complete.")
