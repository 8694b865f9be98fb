"""CLI entry point for woflang.

Invoked as::

    woflang [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m woflang.cli.main

Commands
--------
run         Execute a Woflang script file
exec        Execute source lines given on the command line
repl        Start the interactive read loop
ops         List registered operators and loaded extensions
version     Show version information

Every command builds one interpreter, loads extensions once (from the
plugin directory and, unless disabled, from installed entry-points) and
only then starts executing lines.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from woflang.config import ConfigError, WoflangConfig, load_config
from woflang.core.errors import ScriptIOError, WoflangError
from woflang.runtime.interpreter import Interpreter

console = Console()
err_console = Console(stderr=True)


def _configure_logging(config: WoflangConfig) -> None:
    """Route the ``woflang`` logger through a Rich handler on stderr."""
    logger = logging.getLogger("woflang")
    logger.setLevel(config.logging_level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=err_console, show_path=False, show_time=False))


def _build_interpreter(config: WoflangConfig) -> Interpreter:
    """Construct an interpreter and perform the one-time extension load."""
    interp = Interpreter()
    if config.plugin_dir is not None:
        interp.load_extensions(config.plugin_dir)
    if config.load_entrypoints:
        interp.load_entrypoints(config.entrypoint_group)
    return interp


def _report(exc: WoflangError, where: str) -> None:
    err_console.print(f"[red]Error[/red] in {escape(where)}: {escape(str(exc))}")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="woflang")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.option(
    "--plugins",
    "plugin_dir",
    type=click.Path(file_okay=False),
    envvar="WOFLANG_PLUGIN_DIR",
    default=None,
    help="Directory of extension modules (default: ./plugins)",
)
@click.option(
    "--no-entrypoints",
    is_flag=True,
    default=False,
    help="Do not load extensions from installed packages",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config_path: str | None,
    plugin_dir: str | None,
    no_entrypoints: bool,
    log_level: str | None,
) -> None:
    """Woflang: a small stack-based language with plugin operators."""
    try:
        config = load_config(config_path) if config_path else WoflangConfig()
    except ConfigError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    config = config.merge(
        plugin_dir=Path(plugin_dir) if plugin_dir else None,
        load_entrypoints=False if no_entrypoints else None,
        log_level=log_level,
    )
    _configure_logging(config)
    ctx.obj = config


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from woflang import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]woflang[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@cli.command(name="run")
@click.argument("file", type=click.Path(exists=False))
@click.option(
    "--dump",
    "dump_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default=None,
    help="Print the final stack in the given format",
)
@click.pass_obj
def run_command(config: WoflangConfig, file: str, dump_format: str | None) -> None:
    """Execute a Woflang script.

    FILE is the path to the script.  The first error stops the run.
    """
    with _build_interpreter(config) as interp:
        try:
            interp.exec_script(file)
        except ScriptIOError as exc:
            err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
            sys.exit(1)
        except WoflangError as exc:
            _report(exc, file)
            sys.exit(1)

        if dump_format:
            from woflang.snapshot import StackSerializer

            serializer = StackSerializer()
            if dump_format.lower() == "json":
                text, lang = serializer.to_json(interp.stack), "json"
            else:
                text, lang = serializer.to_yaml(interp.stack), "yaml"
            console.print(Syntax(text, lang))


# ---------------------------------------------------------------------------
# exec command
# ---------------------------------------------------------------------------


@cli.command(name="exec")
@click.argument("lines", nargs=-1, required=True)
@click.option("--quiet", "-q", is_flag=True, default=False, help="Do not show the final stack")
@click.pass_obj
def exec_command(config: WoflangConfig, lines: tuple[str, ...], quiet: bool) -> None:
    """Execute each LINES argument as one line of source.

    Examples:

    \b
        woflang exec "5 3 +"
        woflang exec "1 2 3" "swap" ".s"
    """
    from woflang.runtime.builtins import format_stack

    with _build_interpreter(config) as interp:
        for index, line in enumerate(lines, start=1):
            try:
                interp.exec_line(line)
            except WoflangError as exc:
                _report(exc, f"argument {index}")
                sys.exit(1)
        if not quiet:
            click.echo(format_stack(interp))


# ---------------------------------------------------------------------------
# repl command
# ---------------------------------------------------------------------------


@cli.command(name="repl")
@click.option("--debug", is_flag=True, default=False, help="Show the stack after every line")
@click.pass_obj
def repl_command(config: WoflangConfig, debug: bool) -> None:
    """Start an interactive session.  Type 'quit' or 'exit' to leave."""
    from woflang.runtime.repl import run_repl

    with _build_interpreter(config) as interp:
        console.print("[bold]Woflang[/bold] REPL. Type 'quit' to exit.")
        if interp.extensions:
            names = ", ".join(ext.name for ext in interp.extensions)
            console.print(f"[dim]Extensions: {escape(names)}[/dim]")
        run_repl(
            interp,
            read_line=console.input,
            report=lambda message: err_console.print(f"[red]{escape(message)}[/red]"),
            debug=debug or config.debug,
        )
        console.print("Goodbye from woflang!")


# ---------------------------------------------------------------------------
# ops command
# ---------------------------------------------------------------------------


@cli.command(name="ops")
@click.pass_obj
def ops_command(config: WoflangConfig) -> None:
    """List registered operators and the extensions that were loaded."""
    with _build_interpreter(config) as interp:
        table = Table(title="Operators")
        table.add_column("Name", style="bold")
        table.add_column("Handler")
        for name in interp.registry.names():
            handler = interp.registry.get(name)
            module = getattr(handler, "__module__", "") or ""
            table.add_row(escape(name), escape(module))
        console.print(table)

        if not interp.extensions:
            console.print("  (No extensions loaded.)")
            return
        ext_table = Table(title="Extensions")
        ext_table.add_column("Name", style="bold")
        ext_table.add_column("Source")
        ext_table.add_column("Origin")
        for ext in interp.extensions:
            ext_table.add_row(escape(ext.name), ext.source, escape(ext.origin))
        console.print(ext_table)


if __name__ == "__main__":
    cli()
