"""The Woflang interpreter: dispatch loop and execution surface.

An ``Interpreter`` owns one ``Stack``, one ``OperatorRegistry`` and the
collection of extensions loaded into it.  Nothing is process-global, so
independent interpreters can coexist (one per test, for example).

Lifecycle::

    with Interpreter() as interp:          # built-ins registered here
        interp.load_extensions("plugins")  # once, before execution
        interp.exec_line("5 3 + print")    # then any number of lines

Leaving the ``with`` block (or calling ``shutdown()``) releases the
loaded extensions; the interpreter refuses to execute afterwards.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from woflang.core.errors import OperatorFailedError, ScriptIOError, WoflangError
from woflang.core.stack import Stack
from woflang.core.value import Value
from woflang.grammar.tokens import TokenKind, classify, string_contents
from woflang.lexer.lexer import tokenize
from woflang.runtime.builtins import register_builtins
from woflang.runtime.registry import OperatorHandler, OperatorRegistry

if TYPE_CHECKING:
    from types import TracebackType

    from woflang.plugins.loader import LoadedExtension

logger = logging.getLogger(__name__)


class InterpreterClosedError(WoflangError):
    """Raised when executing code on an interpreter after ``shutdown()``."""

    def __init__(self) -> None:
        super().__init__("interpreter has been shut down")


class Interpreter:
    """Stack machine that tokenizes lines and dispatches each token.

    Parameters
    ----------
    output:
        Text stream that printing operators write to.  Defaults to
        ``sys.stdout`` resolved at write time, so output capture by test
        harnesses keeps working.
    builtins:
        When ``False`` the registry starts empty.
    """

    def __init__(self, output: TextIO | None = None, *, builtins: bool = True) -> None:
        self.stack = Stack()
        self.registry = OperatorRegistry()
        self.extensions: list[LoadedExtension] = []
        self._output = output
        self._closed = False
        if builtins:
            register_builtins(self.registry)

    # ------------------------------------------------------------------
    # Handler-facing helpers
    # ------------------------------------------------------------------

    def register(self, name: str, handler: OperatorHandler) -> None:
        """Register ``handler`` under ``name`` (last registration wins)."""
        self.registry.register(name, handler)

    def push(self, value: Value) -> None:
        """Push ``value`` onto the stack."""
        self.stack.push(value)

    def pop(self, operator: str = "pop") -> Value:
        """Pop the top value, raising ``StackUnderflowError`` when empty."""
        return self.stack.pop(operator)

    def emit(self, text: str) -> None:
        """Write one line of operator output."""
        stream = self._output if self._output is not None else sys.stdout
        stream.write(text + "\n")

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch_token(self, token: str) -> None:
        """Execute a single token.

        Literals are pushed, registered operators are invoked, and any
        other word is pushed as a SYMBOL.  Comment tokens are ignored.

        A handler that fails with anything other than a ``WoflangError``
        is reported as ``OperatorFailedError`` naming the token.
        """
        if self._closed:
            raise InterpreterClosedError()
        kind = classify(token)
        if kind is TokenKind.COMMENT:
            return
        if kind is TokenKind.STRING:
            self.push(Value.from_string(string_contents(token)))
        elif kind is TokenKind.INTEGER:
            self.push(Value.from_integer(int(token)))
        elif kind is TokenKind.FLOAT:
            self.push(Value.from_float(float(token)))
        else:
            handler = self.registry.get(token)
            if handler is not None:
                try:
                    handler(self)
                except WoflangError:
                    raise
                except Exception as exc:
                    raise OperatorFailedError(token, exc) from exc
            else:
                self.push(Value.from_symbol(token))

    def exec_line(self, line: str) -> None:
        """Tokenize ``line`` and dispatch every token up to the first comment.

        Errors raised by a handler propagate immediately; tokens already
        executed keep their effect on the stack.
        """
        if self._closed:
            raise InterpreterClosedError()
        text = line.strip()
        if not text:
            return
        for token in tokenize(text):
            if classify(token) is TokenKind.COMMENT:
                break
            self.dispatch_token(token)

    def exec_source(self, source: str) -> None:
        """Execute multi-line source text, one line at a time.

        The first failing line stops execution; the error's ``line``
        attribute records its 1-based number.
        """
        # Only "\n" ends a line; \f, \v and U+2028 may appear inside strings.
        for lineno, line in enumerate(source.split("\n"), start=1):
            try:
                self.exec_line(line)
            except WoflangError as exc:
                if exc.line is None:
                    exc.line = lineno
                raise

    def exec_script(self, path: str | Path) -> None:
        """Read a UTF-8 script file and execute it line by line.

        Raises
        ------
        ScriptIOError
            If the file cannot be read.
        WoflangError
            The first runtime error, with ``line`` set.
        """
        script = Path(path)
        try:
            source = script.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ScriptIOError(script, str(exc)) from exc
        logger.debug("Executing script %s", script)
        self.exec_source(source)

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------

    def load_extension(self, path: str | Path) -> None:
        """Load one extension module; see ``woflang.plugins.loader``."""
        from woflang.plugins.loader import load_extension

        load_extension(self, path)

    def load_extensions(self, directory: str | Path) -> None:
        """Load every extension module found in ``directory``."""
        from woflang.plugins.loader import load_extensions

        load_extensions(self, directory)

    def load_entrypoints(self, group: str | None = None) -> None:
        """Load extensions advertised by installed distributions."""
        from woflang.plugins.loader import DEFAULT_ENTRYPOINT_GROUP, load_entrypoints

        load_entrypoints(self, group or DEFAULT_ENTRYPOINT_GROUP)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        """True once ``shutdown()`` has run."""
        return self._closed

    def shutdown(self) -> None:
        """Release every loaded extension.  Safe to call more than once."""
        if self._closed:
            return
        from woflang.plugins.loader import release_extensions

        release_extensions(self)
        self._closed = True

    def __enter__(self) -> "Interpreter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: "TracebackType | None",
    ) -> None:
        self.shutdown()

    def __repr__(self) -> str:
        return (
            f"Interpreter(depth={self.stack.depth}, "
            f"operators={len(self.registry)}, extensions={len(self.extensions)})"
        )
