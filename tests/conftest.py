"""Shared test fixtures for woflang.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import io
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from woflang.runtime.interpreter import Interpreter


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "woflang"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def output() -> io.StringIO:
    """Buffer that captures everything printing operators emit."""
    return io.StringIO()


@pytest.fixture()
def interp(output: io.StringIO) -> Iterator[Interpreter]:
    """A fresh interpreter writing to ``output``; shut down after the test."""
    with Interpreter(output=output) as interpreter:
        yield interpreter


@pytest.fixture()
def plugin_dir(tmp_path: Path) -> Path:
    """An empty directory for extension modules."""
    directory = tmp_path / "plugins"
    directory.mkdir()
    return directory


@pytest.fixture()
def write_plugin(plugin_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes dedented plugin source into ``plugin_dir``."""

    def _write(filename: str, source: str) -> Path:
        path = plugin_dir / filename
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write
