"""Interactive read loop built on ``Interpreter.exec_line``.

Errors raised while executing a line are reported and the loop moves
on to the next line; the stack keeps whatever the failing line left.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from woflang.core.errors import WoflangError
from woflang.runtime.builtins import format_stack
from woflang.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)

PROMPT = "wof> "
EXIT_COMMANDS = frozenset({"quit", "exit"})


def run_repl(
    interp: Interpreter,
    read_line: Callable[[str], str] = input,
    report: Callable[[str], None] | None = None,
    *,
    debug: bool = False,
) -> int:
    """Read and execute lines until end of input or an exit command.

    Parameters
    ----------
    interp:
        The interpreter to drive.  Extensions should already be loaded.
    read_line:
        Called with the prompt; returns one line or raises ``EOFError``.
    report:
        Receives error messages.  Defaults to ``interp.emit``.
    debug:
        When True, the stack listing is printed after every line.

    Returns
    -------
    int
        The number of lines that raised an error.
    """
    report = report or interp.emit
    failures = 0
    while True:
        try:
            line = read_line(PROMPT)
        except EOFError:
            break
        if line.strip() in EXIT_COMMANDS:
            break
        try:
            interp.exec_line(line)
        except WoflangError as exc:
            failures += 1
            logger.debug("Line %r failed: %s", line, exc)
            report(f"Error: {exc}")
        if debug:
            interp.emit(format_stack(interp))
    return failures
