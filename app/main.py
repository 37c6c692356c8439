from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.schemas import HealthOut
from app.core.db import close_db, init_db
from app.core.logging import setup_logging
from app.core.metrics import PrometheusMetricsMiddleware, metrics_router
from app.core.middleware.http_logging import HttpLoggingMiddleware
from app.core.settings import get_settings
from app.flashcards.router import router as flashcards_router

setup_logging()
logger = logging.getLogger("app")


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Settings are read at startup, not import time, so tests can set env first.
        settings = get_settings()
        if not settings.llm_configured:
            logger.error(
                "LLM API key is not set (DEEPSEEK_API_KEY or LLM_API_KEY); "
                "flashcard generation requests will fail."
            )
        init_db(app=app, database_url=str(settings.database_url))
        yield
        await close_db(app=app)

    app = FastAPI(
        title="Flashcard LLM API",
        description=(
            "Generates study flashcards with a large language model and saves them "
            "into an existing flashcard set.\n\n"
            "- Prompts and model output are never logged.\n"
            "- Errors are returned as `{\"error\": ..., \"details\": ...}`."
        ),
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check; does not touch the DB or the LLM.",
            },
            {
                "name": "llm-flashcards",
                "description": "LLM-backed flashcard generation.",
            },
            {
                "name": "metrics",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get("/health", response_model=HealthOut, tags=["health"], summary="Health check")
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(flashcards_router)
    return app


app = create_app()
