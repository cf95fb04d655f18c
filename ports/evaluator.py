"""
Port: Evaluator
Odpowiedzialność: deterministyczne liczenie, głębokość i renderowanie drzewa wyrażenia.
"""
from typing import Any, Protocol, runtime_checkable

from contracts import EvalResult, ExprAST


@runtime_checkable
class Evaluator(Protocol):
    def evaluate(self, ast: ExprAST) -> float:
        """
        Evaluates the tree with IEEE-754 float semantics.
        Never raises for division by zero or pow domain errors;
        the result is then an infinity or NaN.
        """
        ...

    def depth(self, ast: ExprAST) -> int:
        """Length of the longest root-to-leaf path (a leaf has depth 1)."""
        ...

    def render(self, ast: ExprAST) -> str:
        """
        Fully parenthesized infix form, e.g. "(6.5 * (4 + 3))".
        Structurally different trees never render identically.
        Every rendering is valid input: overflowed leaves print as 1e999.
        """
        ...

    def dump(self, ast: ExprAST) -> dict[str, Any]:
        """Nested dicts shaped like model_dump(), for trees of any depth."""
        ...

    def eval_expr(self, ast: ExprAST) -> EvalResult:
        """
        Returns EvalResult with:
          - value, depth and rendered form of the tree
          - steps: human-readable computation steps, post-order
        """
        ...
