#!/usr/bin/env python3
"""Example: Quickstart — woflang

Minimal working example: run a few lines, inspect the stack, handle an
error and register a custom operator.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install woflang
"""
from __future__ import annotations

import woflang
from woflang import DivisionByZeroError, Interpreter, Value


def square(interp: Interpreter) -> None:
    x = interp.stack.pop_numeric("square")
    interp.push(Value.from_float(x * x))


def main() -> None:
    print(f"woflang version: {woflang.__version__}")

    # Step 1: run source and inspect the result
    interp = woflang.run("5 3 +")
    print(f"5 3 + -> {interp.stack[-1]}")

    # Step 2: strings and unknown words become data
    interp.exec_line('"hello world" foo .s')

    # Step 3: errors stop the line but keep the stack
    interp.exec_line("clear")
    try:
        interp.exec_line("5 0 /")
    except DivisionByZeroError as exc:
        print(f"error: {exc}; stack still holds {[v.to_text() for v in interp.stack]}")

    # Step 4: register an operator of your own
    interp.register("square", square)
    interp.exec_line("clear 12 square print")


if __name__ == "__main__":
    main()
