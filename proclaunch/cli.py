"""
proclaunch CLI: run an external command and report failures uniformly.

Usage:
    proclaunch run [OPTIONS] EXECUTABLE [ARGS]
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated, Never

import typer

from .command_runner import ProcessLauncher
from .config import ConfigurationError, LauncherConfig
from .errors import ProcessExecutionError
from .logging.console import Colors, log, set_verbose
from .tools.env import load_env, load_user_env

_bootstrapped = False


def bootstrap() -> None:
    """Initialize environment.

    Idempotent. Loads environment variables from ~/.config/proclaunch/.env
    so LauncherConfig.from_env() sees them.
    """
    global _bootstrapped

    if _bootstrapped:
        return

    load_user_env()

    _bootstrapped = True


app = typer.Typer(
    name="proclaunch",
    help="Run external commands and surface failures as a single error",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """proclaunch command line interface."""


@app.command()
def run(
    executable: Annotated[
        str,
        typer.Argument(help="Executable path or name"),
    ],
    args: Annotated[
        str,
        typer.Argument(help="Argument string, passed to the command unsplit"),
    ] = "",
    cwd: Annotated[
        Path | None,
        typer.Option("--cwd", "-C", help="Working directory for the command"),
    ] = None,
    encoding: Annotated[
        str | None,
        typer.Option("--encoding", help="Output encoding (default: utf-8)"),
    ] = None,
    env_file: Annotated[
        Path | None,
        typer.Option("--env-file", help="Extra .env file, overriding the environment"),
    ] = None,
    use_async: Annotated[
        bool,
        typer.Option("--async", help="Run on a worker thread via the async API"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log launch details to stderr"),
    ] = False,
) -> Never:
    """Run EXECUTABLE with ARGS and print its standard output."""
    bootstrap()
    set_verbose(verbose)
    if env_file is not None:
        load_env(env_file)

    try:
        config = LauncherConfig.from_env(validate=False)
        overrides = LauncherConfig(
            encoding=encoding or config.encoding,
            encoding_errors=config.encoding_errors,
            cwd=cwd if cwd is not None else config.cwd,
            create_no_window=config.create_no_window,
        )
        errors = overrides.validate()
        if errors:
            raise ConfigurationError(errors)
    except ConfigurationError as e:
        log("✗", str(e), Colors.RED, stream=sys.stderr)
        raise typer.Exit(2) from e

    launcher = ProcessLauncher(overrides)
    try:
        if use_async:
            output = asyncio.run(launcher.execute_async(executable, args))
        else:
            output = launcher.execute(executable, args)
    except ProcessExecutionError as e:
        log("✗", e.message, Colors.RED, stream=sys.stderr)
        raise typer.Exit(1) from e

    typer.echo(output, nl=False)
    raise typer.Exit(0)
