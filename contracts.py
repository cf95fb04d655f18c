"""
contracts.py — Jedyne źródło prawdy dla wszystkich typów danych w ExpressionWhizz.
Wszystkie moduły importują WYŁĄCZNIE stąd. Nie modyfikować bez versioning.
"""
from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"


# ─────────────────────────── Lexer ───────────────────────────────────────

class TokenType(str, Enum):
    VALUE = "VALUE"
    PLUS = "PLUS"
    MINUS = "MINUS"
    MULTIPLY = "MULTIPLY"
    DIVIDE = "DIVIDE"
    POWER = "POWER"
    OPEN_PAREN = "OPEN_PAREN"
    CLOSE_PAREN = "CLOSE_PAREN"
    END = "END"             # sentinel, nigdy nie trafia do sekwencji tokenów

    @property
    def label(self) -> str:
        """Nazwa używana w komunikatach błędów; END wypisuje się jako '(end)'."""
        if self is TokenType.END:
            return "(end)"
        return self.value


class Token(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: TokenType
    value: float = 0.0      # znaczenie tylko dla VALUE


END_TOKEN = Token(type=TokenType.END)


# ─────────────────────────── Expression tree ─────────────────────────────

BinaryOp = Literal["+", "-", "*", "/", "^"]


class ValueNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["value"] = "value"
    value: float


class NegateNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["negate"] = "negate"
    operand: "ExprAST"


class BinOpNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    node_type: Literal["binop"] = "binop"
    op: BinaryOp
    left: "ExprAST"
    right: "ExprAST"


# Unia z dyskryminatorem: serializacja wybiera wariant po node_type
ExprAST = Annotated[
    Union[ValueNode, NegateNode, BinOpNode],
    Field(discriminator="node_type"),
]
NegateNode.model_rebuild()
BinOpNode.model_rebuild()


# ─────────────────────────── Evaluator ───────────────────────────────────

class EvalResult(BaseModel):
    value: float
    depth: int
    rendered: str                                   # "(3 + (5 * 2))"
    steps: list[str] = Field(default_factory=list)  # "5 * 2 = 10", post-order


# ─────────────────────────── Błędy ───────────────────────────────────────

class ExpressionError(ValueError):
    """Odrzucenie konkretnego wejścia. Zawsze terminalne, nigdy nie ma recovery."""

    kind = "expression"


class LexicalError(ExpressionError):
    kind = "lexical"

    def __init__(self, position: int, character: str) -> None:
        super().__init__(f"Position {position}: unexpected character {character}")
        self.position = position      # 1-based
        self.character = character


class ExprSyntaxError(ExpressionError):
    kind = "syntax"

    def __init__(self, message: str, token: Optional[TokenType] = None) -> None:
        super().__init__(message)
        self.token = token
