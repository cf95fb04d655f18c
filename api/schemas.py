"""
schemas.py — Request/Response modele FastAPI.
Oddzielone od contracts.py żeby API mogło ewoluować niezależnie.
"""
from __future__ import annotations

import math
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field

from adapters.evaluator.tree_evaluator import format_value
from contracts import Token, TokenType

# JSON nie ma inf/nan: liczby nieskończone idą jako "inf" / "-inf" / "nan"
JsonNumber = Union[float, str]


def json_number(v: float) -> JsonNumber:
    return v if math.isfinite(v) else format_value(v)


# ─────────────────────────── /evaluate ───────────────────────────

class EvaluateRequest(BaseModel):
    text: str = Field(..., max_length=10_000)
    steps: bool = False     # dołącza kroki obliczeń do odpowiedzi


class EvaluateResponse(BaseModel):
    value: JsonNumber
    depth: int
    rendered: str
    steps: list[str] = Field(default_factory=list)


# ─────────────────────────── /tokenize ───────────────────────────

class TokenizeRequest(BaseModel):
    text: str = Field(..., max_length=10_000)


class TokenOut(BaseModel):
    type: TokenType
    value: JsonNumber = 0.0

    @classmethod
    def from_token(cls, token: Token) -> "TokenOut":
        return cls(type=token.type, value=json_number(token.value))


class TokenizeResponse(BaseModel):
    tokens: list[TokenOut]
    labels: str             # "VALUE PLUS VALUE"


# ─────────────────────────── błędy ───────────────────────────────

class ErrorResponse(BaseModel):
    detail: str
    kind: Literal["lexical", "syntax", "expression"]
    position: Optional[int] = None


# ─────────────────────────── /health ─────────────────────────────

class HealthResponse(BaseModel):
    status: str
    version: str
