"""
Port: ExpressionParser
Odpowiedzialność: budowa drzewa wyrażenia z sekwencji tokenów.
"""
from collections import deque
from typing import Protocol, runtime_checkable

from contracts import ExprAST, Token


@runtime_checkable
class ExpressionParser(Protocol):
    def parse(self, tokens: deque[Token]) -> ExprAST:
        """
        Parses the token sequence into an expression tree.

        Consumes tokens front-to-back; on success the sequence is empty.
        Raises ExprSyntaxError at the first token that does not fit
        the grammar, or when the sequence is empty.
        """
        ...
