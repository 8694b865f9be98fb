"""Plugin subsystem for Woflang.

The loader module discovers extension modules in a directory or through
``importlib.metadata`` entry-points under the "woflang.plugins" group,
and invokes each module's ``register_plugin(interp)`` entry point.

Example
-------
Declare a plugin in pyproject.toml:

.. code-block:: toml

    [project.entry-points."woflang.plugins"]
    trig = "woflang_trig"
"""
from __future__ import annotations

from woflang.plugins.loader import (
    DEFAULT_ENTRYPOINT_GROUP,
    ENTRY_POINT_NAME,
    LoadedExtension,
    load_entrypoints,
    load_extension,
    load_extensions,
)

__all__ = [
    "DEFAULT_ENTRYPOINT_GROUP",
    "ENTRY_POINT_NAME",
    "LoadedExtension",
    "load_entrypoints",
    "load_extension",
    "load_extensions",
]
