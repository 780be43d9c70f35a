from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from src.api.router import router as api_router
from src.core.config.settings import settings
from src.core.errors import AppError
from src.core.logging import setup_logging
from src.infra.lifecycle.app import lifespan
from src.api.exceptions import (
    app_error_handler,
    global_exception_handler,
    validation_exception_handler,
)


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        description="Search proxy that asks an LLM for a direct answer plus related questions.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()
