"""Operator registry for the Woflang interpreter.

Maps operator names (the exact token text, multi-byte symbols
included) to handlers.  A handler is any callable taking the acting
``Interpreter``; it may pop and push values, print, or raise a
``WoflangError``.

Registration is last-write-wins: registering a name that already exists
silently replaces the previous handler.  Plugins rely on this to
override built-in operators.

Example
-------
Register a handler directly::

    def square(interp: Interpreter) -> None:
        x = interp.stack.pop_numeric("square")
        interp.push(Value.from_float(x * x))

    interp.registry.register("square", square)

or with the decorator form::

    @interp.registry.operator("cube")
    def cube(interp: Interpreter) -> None:
        ...
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from woflang.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)

OperatorHandler = Callable[["Interpreter"], None]


class OperatorRegistry:
    """Name-keyed table of operator handlers.

    Lookup is an exact string match: no prefix matching, no case
    folding, no normalisation.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, OperatorHandler] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, handler: OperatorHandler) -> None:
        """Insert or replace the handler for ``name``.

        Parameters
        ----------
        name:
            Operator name as it appears in source text.
        handler:
            Callable invoked with the interpreter when the token is
            dispatched.
        """
        if name in self._handlers:
            logger.debug("Operator %r overridden by %s", name, _describe(handler))
        else:
            logger.debug("Registered operator %r -> %s", name, _describe(handler))
        self._handlers[name] = handler

    def operator(self, name: str) -> Callable[[OperatorHandler], OperatorHandler]:
        """Return a decorator that registers the decorated function as ``name``."""

        def decorator(handler: OperatorHandler) -> OperatorHandler:
            self.register(name, handler)
            return handler

        return decorator

    def unregister(self, name: str) -> None:
        """Remove ``name`` from the table; absent names are ignored."""
        if self._handlers.pop(name, None) is not None:
            logger.debug("Unregistered operator %r", name)

    def clear(self) -> None:
        """Remove every operator."""
        self._handlers.clear()

    def snapshot(self) -> dict[str, OperatorHandler]:
        """Return a copy of the current name-to-handler table."""
        return dict(self._handlers)

    def restore(self, snapshot: dict[str, OperatorHandler]) -> None:
        """Replace the table with ``snapshot`` taken earlier."""
        self._handlers = dict(snapshot)
        logger.debug("Registry restored to %d operator(s)", len(snapshot))

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str) -> OperatorHandler | None:
        """Return the handler for ``name``, or ``None`` if unregistered."""
        return self._handlers.get(name)

    def names(self) -> list[str]:
        """Return all registered operator names in sorted order."""
        return sorted(self._handlers)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"OperatorRegistry(operators={len(self._handlers)})"


def _describe(handler: OperatorHandler) -> str:
    return getattr(handler, "__qualname__", None) or repr(handler)
