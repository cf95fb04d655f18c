"""
Adapter: TokenCursor
Widok consume-once / peek-one nad sekwencją tokenów, używany przez parser.

Wyczerpanie jest idempotentne: po opróżnieniu sekwencji peek_kind()
zwraca END, a advance() jest no-op, bez wyjątków.
"""
from __future__ import annotations

from collections import deque
from typing import Iterable

from contracts import END_TOKEN, Token, TokenType


class TokenCursor:
    def __init__(self, tokens: deque[Token] | Iterable[Token]) -> None:
        # Deque przekazany z lexera jest konsumowany w miejscu
        self._tokens = tokens if isinstance(tokens, deque) else deque(tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def exhausted(self) -> bool:
        return not self._tokens

    def peek_kind(self) -> TokenType:
        if not self._tokens:
            return TokenType.END
        return self._tokens[0].type

    def peek_value(self) -> Token:
        if not self._tokens:
            return END_TOKEN
        return self._tokens[0]

    def advance(self) -> None:
        if self._tokens:
            self._tokens.popleft()

    def take(self) -> Token:
        """Zwraca pierwszy token i usuwa go z sekwencji (END gdy pusto)."""
        if not self._tokens:
            return END_TOKEN
        return self._tokens.popleft()
