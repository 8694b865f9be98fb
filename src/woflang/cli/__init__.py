"""CLI package.

The ``cli`` sub-package contains the Click application.  Each command
is a thin wrapper: build one interpreter, load extensions once, then
execute lines.
"""
from __future__ import annotations
