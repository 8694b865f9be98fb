"""Trigonometric operators for Woflang.

Drop this file into the plugin directory (``./plugins`` by default) or
pass ``--plugins examples/plugins`` to the CLI.
"""
from __future__ import annotations

import math

from woflang import Value, WoflangError


def _unary(name, fn):
    def handler(interp):
        # Peek first so a domain error leaves the operand in place.
        x = interp.stack.peek(name).as_numeric()
        try:
            result = fn(x)
        except (ValueError, OverflowError) as exc:
            raise WoflangError(f"{name}: {exc} for {x:g}") from exc
        interp.pop(name)
        interp.push(Value.from_float(result))

    return handler


def _constant(number):
    def handler(interp):
        interp.push(Value.from_float(number))

    return handler


def _atan2(interp):
    # y is pushed first, then x: "y x atan2"
    x = interp.stack.pop_numeric("atan2")
    y = interp.stack.pop_numeric("atan2")
    interp.push(Value.from_float(math.atan2(y, x)))


def register_plugin(interp):
    interp.register("pi", _constant(math.pi))
    interp.register("e", _constant(math.e))

    for name in ("sin", "cos", "tan", "asin", "acos", "atan", "sinh", "cosh", "tanh"):
        interp.register(name, _unary(name, getattr(math, name)))
    interp.register("atan2", _atan2)

    interp.register("deg->rad", _unary("deg->rad", math.radians))
    interp.register("rad->deg", _unary("rad->deg", math.degrees))
