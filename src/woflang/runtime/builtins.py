"""Built-in operators registered on every new interpreter.

Arithmetic
    ``+ - * /`` pop two numeric operands (``a b op``) and push a FLOAT,
    whatever the operand tags.  Operands are validated before anything
    is consumed: on a type error or a zero divisor the stack is left
    exactly as it was.

Stack manipulation
    ``dup drop swap clear``.  ``dup``, ``drop`` and ``swap`` raise
    ``StackUnderflowError`` when the stack is too shallow.

Introspection
    ``print`` shows the top value, ``.s`` (alias ``.``) lists the whole
    stack with indices.  Both report an empty stack instead of failing.
"""
from __future__ import annotations

import operator
from collections.abc import Callable
from typing import TYPE_CHECKING

from woflang.core.errors import DivisionByZeroError, TypeMismatchError
from woflang.core.value import Value

if TYPE_CHECKING:
    from woflang.runtime.interpreter import Interpreter
    from woflang.runtime.registry import OperatorRegistry

EMPTY_STACK_TEXT = "(stack empty)"


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def _numeric_operands(interp: "Interpreter", name: str) -> tuple[float, float]:
    """Return the top two operands as ``(a, b)`` without popping them."""
    stack = interp.stack
    stack.require(2, name)
    operands = []
    for value in (stack[-2], stack[-1]):
        if not value.is_numeric:
            raise TypeMismatchError("a numeric value", value.to_text(), name)
        operands.append(float(value.payload))
    return operands[0], operands[1]


def _binary(name: str, fn: Callable[[float, float], float]) -> Callable[["Interpreter"], None]:
    def handler(interp: "Interpreter") -> None:
        a, b = _numeric_operands(interp, name)
        interp.stack.pop(name)
        interp.stack.pop(name)
        interp.push(Value.from_float(fn(a, b)))

    handler.__name__ = handler.__qualname__ = f"builtin_{fn.__name__}"
    return handler


def op_divide(interp: "Interpreter") -> None:
    a, b = _numeric_operands(interp, "/")
    if b == 0.0:
        raise DivisionByZeroError("/")
    interp.stack.pop("/")
    interp.stack.pop("/")
    interp.push(Value.from_float(a / b))


# ---------------------------------------------------------------------------
# Stack manipulation
# ---------------------------------------------------------------------------


def op_dup(interp: "Interpreter") -> None:
    interp.push(interp.stack.peek("dup"))


def op_drop(interp: "Interpreter") -> None:
    interp.stack.pop("drop")


def op_swap(interp: "Interpreter") -> None:
    interp.stack.swap("swap")


def op_clear(interp: "Interpreter") -> None:
    interp.stack.clear()


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------


def op_print(interp: "Interpreter") -> None:
    if not interp.stack:
        interp.emit(EMPTY_STACK_TEXT)
        return
    interp.emit(interp.stack.peek("print").to_text())


def op_show_stack(interp: "Interpreter") -> None:
    interp.emit(format_stack(interp))


def format_stack(interp: "Interpreter") -> str:
    """Render the labelled stack listing used by ``.s``."""
    stack = interp.stack
    if not stack:
        return "Stack [0] (empty)"
    lines = [f"Stack [{stack.depth}]"]
    lines.extend(f"  [{i}] {value.to_text()}" for i, value in enumerate(stack))
    return "\n".join(lines)


def register_builtins(registry: "OperatorRegistry") -> None:
    """Install every built-in operator into ``registry``."""
    registry.register("+", _binary("+", operator.add))
    registry.register("-", _binary("-", operator.sub))
    registry.register("*", _binary("*", operator.mul))
    registry.register("/", op_divide)

    registry.register("dup", op_dup)
    registry.register("drop", op_drop)
    registry.register("swap", op_swap)
    registry.register("clear", op_clear)

    registry.register("print", op_print)
    registry.register(".s", op_show_stack)
    registry.register(".", op_show_stack)
