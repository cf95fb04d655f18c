"""
Adapter: RecursiveDescentParser
Implementuje port ExpressionParser.

Gramatyka (precedencja rośnie w dół):
  additive       = multiplicative (('+'|'-') multiplicative)*    lewostronne, pętla
  multiplicative = exponential (('*'|'/') exponential)*          lewostronne, pętla
  exponential    = primary ('^' exponential)?                    prawostronne, rekurencja
  primary        = VALUE | '(' additive ')' | '-' exponential

Unarny minus obejmuje cały łańcuch '^' po prawej: -1^2 = -(1^2).
Każdy dopasowany token jest konsumowany dokładnie raz; brak cofania.
"""
from __future__ import annotations

import logging
from collections import deque
from contextlib import contextmanager
from typing import Iterator

from adapters.lexer.token_cursor import TokenCursor
from contracts import (
    BinaryOp,
    BinOpNode,
    ExprAST,
    ExprSyntaxError,
    NegateNode,
    Token,
    TokenType,
    ValueNode,
)

logger = logging.getLogger("expression_whizz.parser")

# Domyślny limit zagnieżdżeń; każdy poziom nawiasów to ~4 ramki stosu Pythona
DEFAULT_MAX_NESTING_DEPTH = 150

_ADDITIVE_OPS: dict[TokenType, BinaryOp] = {
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
}

_MULTIPLICATIVE_OPS: dict[TokenType, BinaryOp] = {
    TokenType.MULTIPLY: "*",
    TokenType.DIVIDE: "/",
}


class _Parser:
    def __init__(self, cursor: TokenCursor, max_nesting_depth: int) -> None:
        self._cursor = cursor
        self._max_nesting_depth = max_nesting_depth
        self._nesting = 0

    def parse(self) -> ExprAST:
        if self._cursor.exhausted:
            raise ExprSyntaxError("Unexpected token (end)", TokenType.END)

        node = self._additive()

        kind = self._cursor.peek_kind()
        if kind is not TokenType.END:
            raise ExprSyntaxError(f"Syntax error on token {kind.label}", kind)
        return node

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._nesting >= self._max_nesting_depth:
            raise ExprSyntaxError("Expression nested too deeply")
        self._nesting += 1
        try:
            yield
        finally:
            self._nesting -= 1

    def _additive(self) -> ExprAST:
        left = self._multiplicative()
        while self._cursor.peek_kind() in _ADDITIVE_OPS:
            op = _ADDITIVE_OPS[self._cursor.take().type]
            right = self._multiplicative()
            left = BinOpNode(op=op, left=left, right=right)
        return left

    def _multiplicative(self) -> ExprAST:
        left = self._exponential()
        while self._cursor.peek_kind() in _MULTIPLICATIVE_OPS:
            op = _MULTIPLICATIVE_OPS[self._cursor.take().type]
            right = self._exponential()
            left = BinOpNode(op=op, left=left, right=right)
        return left

    def _exponential(self) -> ExprAST:
        base = self._primary()
        if self._cursor.peek_kind() is not TokenType.POWER:
            return base

        self._cursor.advance()
        # Prawostronne wiązanie: rekurencja na prawym operandzie
        with self._nested():
            exponent = self._exponential()
        return BinOpNode(op="^", left=base, right=exponent)

    def _primary(self) -> ExprAST:
        kind = self._cursor.peek_kind()

        if kind is TokenType.VALUE:
            return ValueNode(value=self._cursor.take().value)

        if kind is TokenType.OPEN_PAREN:
            self._cursor.advance()
            with self._nested():
                node = self._additive()
            closing = self._cursor.peek_kind()
            if closing is not TokenType.CLOSE_PAREN:
                raise ExprSyntaxError(f"Expected ')' but found {closing.label}", closing)
            self._cursor.advance()
            return node

        if kind is TokenType.MINUS:
            self._cursor.advance()
            with self._nested():
                operand = self._exponential()
            return NegateNode(operand=operand)

        raise ExprSyntaxError(f"Unexpected token {kind.label}", kind)


class RecursiveDescentParser:
    """
    Parser wyrażeń arytmetycznych.
    Rzuca ExprSyntaxError przy pierwszym niepasującym tokenie, bez recovery.
    """

    def __init__(self, max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH) -> None:
        self._max_nesting_depth = max_nesting_depth

    # -- ExpressionParser protocol -----------------------------------------

    def parse(self, tokens: deque[Token]) -> ExprAST:
        cursor = TokenCursor(tokens)
        try:
            return _Parser(cursor, self._max_nesting_depth).parse()
        except ExprSyntaxError as exc:
            logger.debug("Parse failed with %d tokens left: %s", len(cursor), exc)
            raise
