from __future__ import annotations

import math

import pytest

from adapters.evaluator.tree_evaluator import TreeEvaluator, format_value
from contracts import BinOpNode, NegateNode, ValueNode


def _num(v: float) -> ValueNode:
    return ValueNode(value=v)


def _bin(op: str, left, right) -> BinOpNode:
    return BinOpNode(op=op, left=left, right=right)


def test_tree_evaluator_negation():
    evaluator = TreeEvaluator()
    ast = NegateNode(operand=_num(0.125))

    assert evaluator.evaluate(ast) == -0.125
    assert evaluator.render(ast) == "(-0.125)"
    assert evaluator.depth(ast) == 2


def test_tree_evaluator_double_negation():
    evaluator = TreeEvaluator()
    ast = NegateNode(operand=NegateNode(operand=_num(0.125)))

    assert evaluator.evaluate(ast) == 0.125
    assert evaluator.render(ast) == "(-(-0.125))"
    assert evaluator.depth(ast) == 3


def test_tree_evaluator_binary_tree():
    evaluator = TreeEvaluator()
    ast = _bin("*", _num(6.5), _bin("+", _num(4), _num(3)))

    assert evaluator.evaluate(ast) == 45.5
    assert evaluator.render(ast) == "(6.5 * (4 + 3))"
    assert evaluator.depth(ast) == 3


def test_tree_evaluator_depth_takes_deeper_branch():
    ast = _bin("-", _num(1), NegateNode(operand=NegateNode(operand=_num(2))))

    assert TreeEvaluator().depth(ast) == 4


@pytest.mark.parametrize(
    "ast, expected",
    [
        (_bin("/", _num(1), _num(0)), math.inf),
        (_bin("/", NegateNode(operand=_num(1)), _num(0)), -math.inf),
        (_bin("^", _num(0), NegateNode(operand=_num(1))), math.inf),
        (_bin("^", _num(10), _num(400)), math.inf),
        (_bin("^", NegateNode(operand=_num(10)), _num(401)), -math.inf),
    ],
)
def test_tree_evaluator_follows_ieee_infinities(ast, expected):
    assert TreeEvaluator().evaluate(ast) == expected


@pytest.mark.parametrize(
    "ast",
    [
        _bin("/", _num(0), _num(0)),
        _bin("^", NegateNode(operand=_num(8)), _bin("/", _num(1), _num(3))),
    ],
)
def test_tree_evaluator_domain_errors_give_nan(ast):
    assert math.isnan(TreeEvaluator().evaluate(ast))


def test_tree_evaluator_fractional_and_negative_exponents():
    evaluator = TreeEvaluator()

    assert evaluator.evaluate(_bin("^", _num(2), _num(0.5))) == pytest.approx(math.sqrt(2))
    assert evaluator.evaluate(_bin("^", _num(2), NegateNode(operand=_num(2)))) == 0.25


def test_tree_evaluator_eval_expr_collects_steps_post_order():
    ast = _bin("+", _num(3), _bin("*", _num(5), _num(2)))

    result = TreeEvaluator().eval_expr(ast)

    assert result.value == 13
    assert result.depth == 3
    assert result.rendered == "(3 + (5 * 2))"
    assert result.steps == ["5 * 2 = 10", "3 + 10 = 13"]


def test_tree_evaluator_eval_expr_negation_steps():
    ast = NegateNode(operand=NegateNode(operand=_num(0.125)))

    result = TreeEvaluator().eval_expr(ast)

    assert result.steps == ["-(0.125) = -0.125", "-(-0.125) = 0.125"]


def test_tree_evaluator_leaf_has_no_steps():
    result = TreeEvaluator().eval_expr(_num(7))

    assert result.steps == []
    assert result.depth == 1
    assert result.rendered == "7"


@pytest.mark.parametrize(
    "value, text",
    [
        (4.0, "4"),
        (0.125, "0.125"),
        (3e10, "30000000000"),
        (1e20, "1e+20"),
        (2.5e-7, "2.5e-07"),
        (math.inf, "inf"),
        (-math.inf, "-inf"),
    ],
)
def test_format_value_canonical_decimal(value, text):
    assert format_value(value) == text


def test_tree_evaluator_renders_overflowed_leaf_as_readable_literal():
    ast = _bin("-", _num(math.inf), _num(1))

    assert TreeEvaluator().render(ast) == "(1e999 - 1)"


def test_tree_evaluator_dump_matches_model_dump():
    ast = NegateNode(operand=_bin("^", _num(2), _num(0.5)))

    assert TreeEvaluator().dump(ast) == ast.model_dump()


def test_tree_evaluator_dump_handles_deep_left_chain():
    ast = _num(1)
    for _ in range(2000):
        ast = _bin("+", ast, _num(1))

    dumped = TreeEvaluator().dump(ast)

    assert dumped["node_type"] == "binop"
    assert dumped["right"] == {"node_type": "value", "value": 1.0}
