"""
Adapter: ScannerLexer
Implementuje port Lexer: skanowanie tekstu znak po znaku.

Rozpoznawane tokeny:
  operatory   + - * / ^       (bez payloadu)
  nawiasy     ( )
  liczby      najdłuższe dopasowanie gramatyki float:
                3   3.   3.25   .25   3e10   2.5E-3   3p4 (= 3 * 2**4)

Whitespace pomijany. Każdy inny znak → LexicalError z pozycją 1-based.
"""
from __future__ import annotations

import logging
import math
import re
from collections import deque
from typing import Iterable

from contracts import LexicalError, Token, TokenType

logger = logging.getLogger("expression_whizz.lexer")

_WHITESPACE = frozenset(" \t\n\r\v\f")

_SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "^": TokenType.POWER,
    "(": TokenType.OPEN_PAREN,
    ")": TokenType.CLOSE_PAREN,
}

# Wykładnik bez cyfr ("3e", "3p+") nie jest konsumowany.
_NUMBER_RE = re.compile(
    r'(?P<mantissa>[0-9]+(?:\.[0-9]*)?|\.[0-9]+)'
    r'(?:(?P<marker>[eEpP])(?P<exponent>[+-]?[0-9]+))?'
)

# Wykładnik binarny dłuższy niż _MAX_EXPONENT_DIGITS cyfr saturuje do ±_EXPONENT_SATURATION
_MAX_EXPONENT_DIGITS = 6
_EXPONENT_SATURATION = 10_000


def _literal_value(match: re.Match[str]) -> float:
    marker = match.group("marker")
    if marker is None or marker in "eE":
        return float(match.group(0))

    # Rozszerzenie 'p': wykładnik binarny, jak w notacji hex-float z C
    mantissa = float(match.group("mantissa"))
    exponent = match.group("exponent")
    digits = exponent.lstrip("+-").lstrip("0") or "0"
    # Poza zakresem double: ldexp i tak da inf albo 0
    shift = _EXPONENT_SATURATION if len(digits) > _MAX_EXPONENT_DIGITS else int(digits)
    if exponent.startswith("-"):
        shift = -shift
    try:
        return math.ldexp(mantissa, shift)
    except OverflowError:
        return math.inf


def describe_tokens(tokens: Iterable[Token]) -> str:
    """Etykiety tokenów rozdzielone spacją, np. 'VALUE PLUS VALUE'."""
    return " ".join(tok.type.label for tok in tokens)


class ScannerLexer:
    """Tokenizer wyrażeń arytmetycznych; bezstanowy, bezpieczny do współdzielenia."""

    # -- Lexer protocol ----------------------------------------------------

    def tokenize(self, text: str) -> deque[Token]:
        tokens: deque[Token] = deque()
        pos = 0
        while pos < len(text):
            ch = text[pos]

            if ch in _WHITESPACE:
                pos += 1
                continue

            kind = _SINGLE_CHAR_TOKENS.get(ch)
            if kind is not None:
                tokens.append(Token(type=kind))
                pos += 1
                continue

            match = _NUMBER_RE.match(text, pos)
            if match is None:
                logger.debug("Rejected %r at column %d", ch, pos + 1)
                raise LexicalError(pos + 1, ch)

            tokens.append(Token(type=TokenType.VALUE, value=_literal_value(match)))
            pos = match.end()

        logger.debug("Tokenized %d chars into %d tokens", len(text), len(tokens))
        return tokens
