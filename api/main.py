"""
api/main.py — punkt wejścia FastAPI.

Lifespan:
  - Składa ExpressionPipeline (lexer, parser, evaluator) według Settings
  - Adaptery są bezstanowe: jedna instancja na całą aplikację
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from adapters.pipeline import ExpressionPipeline
from api.routers import evaluate, tokenize
from api.schemas import ErrorResponse, HealthResponse
from config import Settings
from contracts import ExpressionError, LexicalError

logger = logging.getLogger("expression_whizz.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.pipeline = ExpressionPipeline.from_settings(settings)
    logger.info("ExpressionWhizz API ready (max nesting %d).", settings.max_nesting_depth)
    yield
    logger.info("Shutting down.")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Routers
    app.include_router(evaluate.router)
    app.include_router(tokenize.router)

    # Health
    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health():
        return HealthResponse(status="ok", version=settings.app_version)

    # Globalny handler błędów: odrzucone wyrażenie to 422
    @app.exception_handler(ExpressionError)
    async def expression_error_handler(request: Request, exc: ExpressionError):
        error = ErrorResponse(
            detail=str(exc),
            kind=exc.kind,
            position=exc.position if isinstance(exc, LexicalError) else None,
        )
        return JSONResponse(status_code=422, content=error.model_dump())

    return app


app = create_app()
