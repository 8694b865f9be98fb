"""Extension loader for the Woflang interpreter.

An extension is a Python module, either a ``.py`` source file or a compiled
extension module, that defines a module-level entry point::

    def register_plugin(interp):
        interp.register("pi", push_pi)

The loader imports the module from its file, resolves
``register_plugin`` and calls it with the interpreter, which gives the
plugin full access to the stack and the operator registry.

Failure isolation
-----------------
A file that cannot be imported, or that lacks the entry point, or whose
entry point raises, is logged and skipped.  Such failures are raised
internally as ``UnresolvedModuleError`` and never escape this module, so
one broken plugin cannot stop the others from loading.  Operators an
entry point registered before raising are rolled back with it.

Lifetime
--------
Every successfully loaded module is recorded as a ``LoadedExtension`` in
``interpreter.extensions`` and stays resident until
``Interpreter.shutdown()``.

Installed distributions may also advertise extensions through the
``woflang.plugins`` entry-point group::

    [project.entry-points."woflang.plugins"]
    trig = "woflang_trig"                 # module with register_plugin
    chem = "woflang_chem:register"        # or the callable itself
"""
from __future__ import annotations

import hashlib
import importlib.machinery
import importlib.metadata
import importlib.util
import logging
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING, Final, Literal

from woflang.core.errors import UnresolvedModuleError

if TYPE_CHECKING:
    from woflang.runtime.interpreter import Interpreter

logger = logging.getLogger(__name__)

ENTRY_POINT_NAME: Final[str] = "register_plugin"
DEFAULT_ENTRYPOINT_GROUP: Final[str] = "woflang.plugins"

SOURCE_SUFFIXES: Final[tuple[str, ...]] = tuple(importlib.machinery.SOURCE_SUFFIXES)
NATIVE_SUFFIXES: Final[tuple[str, ...]] = tuple(importlib.machinery.EXTENSION_SUFFIXES)
MODULE_SUFFIXES: Final[tuple[str, ...]] = SOURCE_SUFFIXES + NATIVE_SUFFIXES

RegisterFunc = Callable[["Interpreter"], None]


@dataclass(frozen=True)
class LoadedExtension:
    """A resident extension module whose entry point has been invoked.

    Parameters
    ----------
    name:
        Display name: the file stem, or the entry-point name.
    module_name:
        Key under which the module lives in ``sys.modules``.
    origin:
        File path, or the entry-point value string.
    module:
        The imported module object.
    source:
        ``"file"`` for directory/file loads, ``"entry-point"`` otherwise.
    registered:
        Always True for recorded extensions: a module is only recorded
        after its entry point returned.
    """

    name: str
    module_name: str
    origin: str
    module: ModuleType | None
    source: Literal["file", "entry-point"] = "file"
    registered: bool = True


# ---------------------------------------------------------------------------
# Module resolution
# ---------------------------------------------------------------------------


def is_extension_file(path: Path) -> bool:
    """Return True if ``path`` carries a loadable module suffix."""
    return path.name.endswith(MODULE_SUFFIXES)


def _extension_stem(path: Path) -> str:
    for suffix in sorted(MODULE_SUFFIXES, key=len, reverse=True):
        if path.name.endswith(suffix):
            return path.name[: -len(suffix)]
    return path.stem


def _unique_module_name(path: Path) -> str:
    digest = hashlib.sha256(str(path.resolve()).encode("utf-8")).hexdigest()[:12]
    safe = "".join(ch if ch.isalnum() else "_" for ch in _extension_stem(path))
    return f"woflang_ext_{safe}_{digest}"


def _open_module(path: Path) -> ModuleType:
    """Import the module stored at ``path`` and return it.

    Compiled modules must be imported under their own name, because the
    init symbol is derived from it; source modules get a unique name so
    two plugins with the same file name cannot collide.
    """
    if path.name.endswith(NATIVE_SUFFIXES):
        module_name = _extension_stem(path)
        if module_name in sys.modules:
            raise UnresolvedModuleError(
                path, f"module name {module_name!r} is already in use"
            )
    else:
        module_name = _unique_module_name(path)

    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
    except (ImportError, ValueError) as exc:
        raise UnresolvedModuleError(path, str(exc)) from exc
    if spec is None or spec.loader is None:
        raise UnresolvedModuleError(path, "not an importable module")

    # Compiled modules are dlopen()ed here, so a corrupt .so fails early.
    try:
        module = importlib.util.module_from_spec(spec)
    except Exception as exc:
        raise UnresolvedModuleError(path, f"{type(exc).__name__}: {exc}") from exc
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        sys.modules.pop(module_name, None)
        raise UnresolvedModuleError(path, f"{type(exc).__name__}: {exc}") from exc
    return module


def _resolve_entry_point(module: ModuleType, origin: str | Path) -> RegisterFunc:
    register = getattr(module, ENTRY_POINT_NAME, None)
    if register is None or not callable(register):
        raise UnresolvedModuleError(origin, f"no callable {ENTRY_POINT_NAME}(interp)")
    return register


def _invoke(register: RegisterFunc, interp: "Interpreter", origin: str | Path) -> None:
    """Call ``register``; on failure undo every registration it made."""
    before = interp.registry.snapshot()
    try:
        register(interp)
    except Exception as exc:
        interp.registry.restore(before)
        raise UnresolvedModuleError(
            origin, f"{ENTRY_POINT_NAME} raised {type(exc).__name__}: {exc}"
        ) from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_extension(interp: "Interpreter", path: str | Path) -> None:
    """Load a single extension file into ``interp``.

    A path that does not exist is skipped silently.  Any other failure
    is logged and the candidate is skipped; nothing is raised.
    """
    candidate = Path(path)
    if not candidate.exists():
        logger.debug("Extension path %s does not exist; skipping.", candidate)
        return

    module: ModuleType | None = None
    try:
        module = _open_module(candidate)
        register = _resolve_entry_point(module, candidate)
        _invoke(register, interp, candidate)
    except UnresolvedModuleError as exc:
        if module is not None:
            sys.modules.pop(module.__name__, None)
        logger.warning("Skipping extension: %s", exc, exc_info=exc.__cause__ is not None)
        return

    interp.extensions.append(
        LoadedExtension(
            name=_extension_stem(candidate),
            module_name=module.__name__,
            origin=str(candidate),
            module=module,
        )
    )
    logger.info("Loaded extension %s from %s", _extension_stem(candidate), candidate)


def load_extensions(interp: "Interpreter", directory: str | Path) -> None:
    """Load every extension module in ``directory`` (non-recursive).

    Regular files with a module suffix are visited in name order; other
    files are ignored.  A missing or non-directory path is a no-op.
    """
    folder = Path(directory)
    if not folder.is_dir():
        logger.debug("Extension directory %s not found; skipping.", folder)
        return
    for entry in sorted(folder.iterdir()):
        if entry.is_file() and is_extension_file(entry):
            load_extension(interp, entry)


def load_entrypoints(interp: "Interpreter", group: str = DEFAULT_ENTRYPOINT_GROUP) -> None:
    """Load extensions declared by installed distributions in ``group``.

    Each entry point may reference either a module exposing
    ``register_plugin`` or the registration callable itself.  Names that
    are already loaded are skipped, so repeated calls are idempotent.
    """
    loaded = {ext.name for ext in interp.extensions if ext.source == "entry-point"}
    for ep in importlib.metadata.entry_points(group=group):
        if ep.name in loaded:
            logger.debug("Entry-point %r already loaded; skipping.", ep.name)
            continue
        origin = str(ep.value)
        try:
            try:
                target = ep.load()
            except Exception as exc:
                raise UnresolvedModuleError(origin, f"{type(exc).__name__}: {exc}") from exc
            if isinstance(target, ModuleType):
                module: ModuleType | None = target
                register = _resolve_entry_point(target, origin)
            elif callable(target):
                module = sys.modules.get(getattr(target, "__module__", ""), None)
                register = target
            else:
                raise UnresolvedModuleError(origin, "entry point is neither a module nor callable")
            _invoke(register, interp, origin)
        except UnresolvedModuleError as exc:
            logger.warning(
                "Skipping entry-point %r from group %r: %s",
                ep.name,
                group,
                exc,
                exc_info=exc.__cause__ is not None,
            )
            continue

        interp.extensions.append(
            LoadedExtension(
                name=ep.name,
                module_name=module.__name__ if module is not None else "",
                origin=origin,
                module=module,
                source="entry-point",
            )
        )
        loaded.add(ep.name)
        logger.info("Loaded entry-point extension %r (%s)", ep.name, origin)


def release_extensions(interp: "Interpreter") -> None:
    """Drop every extension owned by ``interp``.

    File-loaded modules are removed from ``sys.modules``; entry-point
    modules belong to their distribution and stay imported.
    """
    for ext in reversed(interp.extensions):
        if ext.source == "file" and sys.modules.get(ext.module_name) is ext.module:
            del sys.modules[ext.module_name]
        logger.debug("Released extension %s", ext.name)
    interp.extensions.clear()
