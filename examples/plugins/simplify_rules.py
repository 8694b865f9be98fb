"""Symbolic simplification rules for Woflang.

Each rule inspects the top two stack values.  When the rule applies the
pair is rewritten; otherwise both values are left in place.

    x x simplify_sum        ->  2 x        (follow with * to finish)
    x 1 simplify_mul_one    ->  x
    x 0 simplify_add_zero   ->  x
    x 0 simplify_mul_zero   ->  0
"""
from __future__ import annotations

import logging

from woflang import Value, ValueType

logger = logging.getLogger(__name__)


def _is_int(value, number):
    return value.type is ValueType.INTEGER and value.payload == number


def simplify_sum(interp):
    interp.stack.require(2, "simplify_sum")
    second, first = interp.pop(), interp.pop()
    if first.type is ValueType.SYMBOL and first == second:
        logger.info("%s + %s => 2 * %s", first, second, first)
        interp.push(Value.from_integer(2))
        interp.push(first)
    else:
        interp.push(first)
        interp.push(second)


def _rewrite_when(name, number, result):
    def handler(interp):
        interp.stack.require(2, name)
        operand, value = interp.pop(), interp.pop()
        if _is_int(operand, number):
            interp.push(result(value))
        else:
            interp.push(value)
            interp.push(operand)

    return handler


def register_plugin(interp):
    interp.register("simplify_sum", simplify_sum)
    interp.register("simplify_mul_one", _rewrite_when("simplify_mul_one", 1, lambda x: x))
    interp.register("simplify_add_zero", _rewrite_when("simplify_add_zero", 0, lambda x: x))
    interp.register(
        "simplify_mul_zero",
        _rewrite_when("simplify_mul_zero", 0, lambda x: Value.from_integer(0)),
    )
