"""woflang — a small stack-based language runtime with plugin operators.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import woflang

    # Run one line and inspect the stack
    interp = woflang.run("5 3 +")
    interp.stack[-1]            # Value(FLOAT, 8.0)

    # Values and tokens
    woflang.tokenize('"hello world" print')   # ['"hello world"', 'print']
    woflang.Value.from_integer(42).to_text()  # '42'

    # Extensions
    with woflang.Interpreter() as interp:
        interp.load_extensions("plugins")
        interp.exec_line("pi 2 / sin print")

    woflang.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path

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
from woflang.lexer.lexer import tokenize
from woflang.runtime.interpreter import Interpreter
from woflang.runtime.registry import OperatorRegistry

__version__: str = "0.1.0"


def run(source: str, plugin_dir: str | Path | None = None) -> Interpreter:
    """Execute ``source`` on a fresh interpreter and return it.

    Parameters
    ----------
    source:
        Woflang source text; may span several lines.
    plugin_dir:
        Optional directory of extension modules loaded before execution.

    Returns
    -------
    Interpreter
        The interpreter, so callers can inspect its stack.

    Raises
    ------
    WoflangError
        The first runtime error, with its ``line`` attribute set.
    """
    interp = Interpreter()
    if plugin_dir is not None:
        interp.load_extensions(plugin_dir)
    interp.exec_source(source)
    return interp


__all__ = [
    "__version__",
    "run",
    "tokenize",
    "Interpreter",
    "OperatorRegistry",
    "Stack",
    "Unit",
    "Value",
    "ValueType",
    "WoflangError",
    "StackUnderflowError",
    "TypeMismatchError",
    "DivisionByZeroError",
    "IntegerOverflowError",
    "OperatorFailedError",
    "UnresolvedModuleError",
    "ScriptIOError",
]
