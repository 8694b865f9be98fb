"""Woflang runtime: operator registry, built-ins and the interpreter."""
from __future__ import annotations

from woflang.runtime.interpreter import Interpreter, InterpreterClosedError
from woflang.runtime.registry import OperatorHandler, OperatorRegistry

__all__ = [
    "Interpreter",
    "InterpreterClosedError",
    "OperatorHandler",
    "OperatorRegistry",
]
