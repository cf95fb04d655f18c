"""
dependencies.py — FastAPI Dependency Injection.
Każda zależność zwraca odpowiedni adapter przez Request.app.state.
"""
from __future__ import annotations

from fastapi import Request

from adapters.pipeline import ExpressionPipeline


def get_pipeline(request: Request) -> ExpressionPipeline:
    return request.app.state.pipeline
