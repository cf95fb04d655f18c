"""
Adapter: ExpressionPipeline
Składa Lexer → ExpressionParser → Evaluator w jeden przebieg tekst → wynik.

Błędy (LexicalError / ExprSyntaxError) przechodzą dalej bez zmian;
obsługuje je wywołujący (CLI, API).
"""
from __future__ import annotations

import logging
from collections import deque

from adapters.evaluator.tree_evaluator import TreeEvaluator
from adapters.expression_parser.recursive_descent import RecursiveDescentParser
from adapters.lexer.scanner_lexer import ScannerLexer
from config import Settings
from contracts import EvalResult, ExpressionError, ExprAST, Token
from ports.evaluator import Evaluator
from ports.expression_parser import ExpressionParser
from ports.lexer import Lexer

logger = logging.getLogger("expression_whizz.pipeline")


class ExpressionPipeline:
    def __init__(
        self,
        lexer: Lexer | None = None,
        parser: ExpressionParser | None = None,
        evaluator: Evaluator | None = None,
    ) -> None:
        self._lexer = lexer or ScannerLexer()
        self._parser = parser or RecursiveDescentParser()
        self._evaluator = evaluator or TreeEvaluator()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExpressionPipeline":
        return cls(parser=RecursiveDescentParser(max_nesting_depth=settings.max_nesting_depth))

    @property
    def evaluator(self) -> Evaluator:
        return self._evaluator

    def tokenize(self, text: str) -> deque[Token]:
        return self._lexer.tokenize(text)

    def parse(self, text: str) -> ExprAST:
        return self._parser.parse(self.tokenize(text))

    def run(self, text: str) -> EvalResult:
        try:
            ast = self.parse(text)
        except ExpressionError as exc:
            logger.info("Rejected %r (%s): %s", text, exc.kind, exc)
            raise

        result = self._evaluator.eval_expr(ast)
        logger.debug("Evaluated %s = %r (depth %d)", result.rendered, result.value, result.depth)
        return result
