"""
Adapter: TreeEvaluator
Implementuje port Evaluator: przejście post-order po ExprAST na floatach.

Semantyka IEEE-754: dzielenie przez zero daje ±inf / nan, pow poza dziedziną
daje nan, przepełnienie daje ±inf. Nic tu nie rzuca wyjątków arytmetycznych.

Przejście jest iteracyjne (jawny stos): drzewo z długiej sumy "1 + 1 + ... + 1"
nie podlega limitowi zagnieżdżeń parsera i może być dowolnie głębokie.

eval_expr() — wartość + głębokość + rendering + kroki obliczeń
"""
from __future__ import annotations

import math
from typing import Any, Callable, TypeVar

from contracts import BinOpNode, EvalResult, ExprAST, NegateNode, ValueNode

T = TypeVar("T")


def _is_odd_integer(x: float) -> bool:
    return x.is_integer() and math.fmod(x, 2.0) != 0.0


def _div(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _pow(a: float, b: float) -> float:
    if a == 0.0 and b < 0.0:
        # Biegun: pow(±0, -n) = ±inf dla nieparzystego n, inaczej +inf
        return math.copysign(math.inf, a) if _is_odd_integer(b) else math.inf
    try:
        return math.pow(a, b)
    except ValueError:
        # Ujemna podstawa z niecałkowitym wykładnikiem
        return math.nan
    except OverflowError:
        if a < 0.0 and _is_odd_integer(b):
            return -math.inf
        return math.inf


# Mapowanie symboli operatorów na operacje float
_OP_FUNCS: dict[str, Callable[[float, float], float]] = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _div,
    "^": _pow,
}


def _fold(
    ast: ExprAST,
    on_value: Callable[[ValueNode], T],
    on_negate: Callable[[NegateNode, T], T],
    on_binop: Callable[[BinOpNode, T, T], T],
) -> T:
    """Post-order fold bez rekurencji. Lewe poddrzewo zawsze przed prawym."""
    results: list[T] = []
    stack: list[tuple[ExprAST, bool]] = [(ast, False)]

    while stack:
        node, children_done = stack.pop()

        if isinstance(node, ValueNode):
            results.append(on_value(node))
        elif not children_done:
            stack.append((node, True))
            if isinstance(node, NegateNode):
                stack.append((node.operand, False))
            elif isinstance(node, BinOpNode):
                stack.append((node.right, False))
                stack.append((node.left, False))
            else:
                raise TypeError(f"Nieznany typ węzła AST: {type(node)}")
        elif isinstance(node, NegateNode):
            results.append(on_negate(node, results.pop()))
        else:
            right = results.pop()
            left = results.pop()
            results.append(on_binop(node, left, right))

    return results.pop()


class TreeEvaluator:
    """Ewaluator, licznik głębokości i renderer drzew wyrażeń."""

    # -- Evaluator protocol ------------------------------------------------

    def evaluate(self, ast: ExprAST) -> float:
        return _fold(
            ast,
            lambda leaf: leaf.value,
            lambda _, operand: -operand,
            lambda node, left, right: _OP_FUNCS[node.op](left, right),
        )

    def depth(self, ast: ExprAST) -> int:
        return _fold(
            ast,
            lambda _: 1,
            lambda _, operand: 1 + operand,
            lambda _, left, right: 1 + max(left, right),
        )

    def render(self, ast: ExprAST) -> str:
        return _fold(
            ast,
            lambda leaf: _literal(leaf.value),
            lambda _, operand: f"(-{operand})",
            lambda node, left, right: f"({left} {node.op} {right})",
        )

    def dump(self, ast: ExprAST) -> dict[str, Any]:
        """
        Drzewo jako zagnieżdżone dicty (kształt model_dump()).
        Iteracyjnie: serializer pydantic odmawia drzew głębszych niż ~255 poziomów.
        """
        return _fold(
            ast,
            lambda leaf: leaf.model_dump(),
            lambda node, operand: {"node_type": node.node_type, "operand": operand},
            lambda node, left, right: {
                "node_type": node.node_type,
                "op": node.op,
                "left": left,
                "right": right,
            },
        )

    def eval_expr(self, ast: ExprAST) -> EvalResult:
        """
        Oblicza wartość razem z krokami, np. dla 3 + 5 * 2:
            ["5 * 2 = 10", "3 + 10 = 13"]
        """
        steps: list[str] = []

        def _negate(_: NegateNode, operand: float) -> float:
            result = -operand
            steps.append(f"-({format_value(operand)}) = {format_value(result)}")
            return result

        def _binop(node: BinOpNode, left: float, right: float) -> float:
            result = _OP_FUNCS[node.op](left, right)
            steps.append(
                f"{format_value(left)} {node.op} {format_value(right)} = {format_value(result)}"
            )
            return result

        value = _fold(ast, lambda leaf: leaf.value, _negate, _binop)
        return EvalResult(
            value=value,
            depth=self.depth(ast),
            rendered=self.render(ast),
            steps=steps,
        )


def format_value(v: float) -> str:
    """Kanoniczny zapis dziesiętny: 4.0 → '4', 0.125 → '0.125', 1e+20 zostaje."""
    if math.isfinite(v) and v.is_integer() and abs(v) < 1e16:
        return str(int(v))
    return repr(v)


def _literal(v: float) -> str:
    """Zapis liścia czytelny dla lexera; inf z przepełnionego literału to 1e999."""
    if math.isnan(v):
        return "(0 / 0)"
    if math.isinf(v):
        return "1e999" if v > 0 else "(-1e999)"
    return format_value(v)
