#!/usr/bin/env python3
"""Example: Loading extension modules — woflang

Loads the example plugins next to this file and uses their operators.

Usage:
    python examples/02_plugins.py
"""
from __future__ import annotations

import logging
from pathlib import Path

from woflang import Interpreter

PLUGIN_DIR = Path(__file__).parent / "plugins"


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    with Interpreter() as interp:
        interp.load_extensions(PLUGIN_DIR)
        print("Loaded:", ", ".join(ext.name for ext in interp.extensions))

        interp.exec_line("pi 2 / sin print")
        interp.exec_line("clear x x simplify_sum .s")


if __name__ == "__main__":
    main()
