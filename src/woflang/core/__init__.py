"""Core domain model: values, the data stack and error types.

Submodules in core/ do not import from runtime/, plugins/ or cli/.
"""
from __future__ import annotations

from woflang.core.errors import (
    DivisionByZeroError,
    IntegerOverflowError,
    OperatorFailedError,
    ScriptIOError,
    StackUnderflowError,
    TypeMismatchError,
    UnresolvedModuleError,
    WoflangError,
)
from woflang.core.stack import Stack
from woflang.core.value import Unit, Value, ValueType

__all__ = [
    "DivisionByZeroError",
    "IntegerOverflowError",
    "OperatorFailedError",
    "ScriptIOError",
    "Stack",
    "StackUnderflowError",
    "TypeMismatchError",
    "Unit",
    "UnresolvedModuleError",
    "Value",
    "ValueType",
    "WoflangError",
]
