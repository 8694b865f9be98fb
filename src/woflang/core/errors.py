"""Error types raised by the Woflang runtime.

Every runtime condition derives from ``WoflangError`` so that callers
(the REPL, the script runner, embedding applications) can catch the
whole family at once.  Each subclass carries structured attributes in
addition to its message so the CLI can render precise diagnostics.

Propagation rules
-----------------
``StackUnderflowError``, ``TypeMismatchError``, ``DivisionByZeroError``
and ``IntegerOverflowError`` are raised by operator handlers or literal
parsing and abort the rest of the current line.  The stack keeps
whatever state the previously executed tokens left behind.

``OperatorFailedError`` wraps any other exception escaping an operator
handler, so callers only ever see ``WoflangError`` from dispatch.

``UnresolvedModuleError`` is raised inside the extension loader and is
always caught there; it never reaches the dispatch loop.

``ScriptIOError`` is raised by ``Interpreter.exec_script`` when the
script file cannot be read.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any


class WoflangError(Exception):
    """Base class for all Woflang runtime errors.

    Parameters
    ----------
    message:
        Human-readable description of the problem.

    Attributes
    ----------
    line:
        1-based script line on which the error occurred, filled in by
        ``Interpreter.exec_script``.  ``None`` outside script execution.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.line: int | None = None

    def __str__(self) -> str:
        if self.line is not None:
            return f"line {self.line}: {self.message}"
        return self.message


class StackUnderflowError(WoflangError):
    """Raised when an operator needs more values than the stack holds.

    Parameters
    ----------
    operator:
        Name of the operator (or stack helper) that needed the values.
    needed:
        Number of values the operator requires.
    available:
        Number of values actually on the stack.
    """

    def __init__(self, operator: str, needed: int, available: int) -> None:
        plural = "value" if needed == 1 else "values"
        super().__init__(
            f"stack underflow: {operator} requires {needed} {plural}, "
            f"found {available}"
        )
        self.operator = operator
        self.needed = needed
        self.available = available


class TypeMismatchError(WoflangError):
    """Raised when a value's tag cannot satisfy a requested coercion."""

    def __init__(self, expected: str, value: Any, context: str = "") -> None:
        where = f"{context}: " if context else ""
        super().__init__(f"{where}expected {expected}, got {value!r}")
        self.expected = expected
        self.value = value
        self.context = context


class DivisionByZeroError(WoflangError, ZeroDivisionError):
    """Raised by ``/`` (and plugin operators) on a zero divisor."""

    def __init__(self, operator: str = "/") -> None:
        super().__init__(f"division by zero in {operator}")
        self.operator = operator


class IntegerOverflowError(WoflangError, OverflowError):
    """Raised when an integer does not fit in a signed 64-bit cell."""

    def __init__(self, value: int) -> None:
        super().__init__(f"integer {value} is outside the signed 64-bit range")
        self.value = value


class OperatorFailedError(WoflangError):
    """An operator handler raised something other than a ``WoflangError``.

    The original exception is kept as ``cause`` and as ``__cause__``.
    """

    def __init__(self, operator: str, cause: BaseException) -> None:
        super().__init__(f"{operator} failed: {type(cause).__name__}: {cause}")
        self.operator = operator
        self.cause = cause


class UnresolvedModuleError(WoflangError):
    """An extension file could not be imported or lacks its entry point.

    Raised and caught inside the extension loader only.
    """

    def __init__(self, origin: str | Path, reason: str) -> None:
        super().__init__(f"cannot load extension {origin}: {reason}")
        self.origin = str(origin)
        self.reason = reason


class ScriptIOError(WoflangError):
    """Raised when a script file cannot be opened for reading."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"cannot read script {path}: {reason}")
        self.path = Path(path)
        self.reason = reason
