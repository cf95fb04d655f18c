"""
Port: Lexer
Odpowiedzialność: zamiana surowego tekstu na sekwencję tokenów.
"""
from collections import deque
from typing import Protocol, runtime_checkable

from contracts import Token


@runtime_checkable
class Lexer(Protocol):
    def tokenize(self, text: str) -> deque[Token]:
        """
        Scans text into an ordered sequence of tokens.

        Whitespace is skipped; the END sentinel is never stored.
        Empty or whitespace-only text yields an empty sequence.
        Raises LexicalError (1-based position + offending character)
        at the first character that cannot start a token. On error
        no partial sequence is returned.
        """
        ...
