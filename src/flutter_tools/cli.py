from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

import click
import typer

from flutter_tools.commands.registry import default_commands
from flutter_tools.config import resolve_config_path, runner_defaults
from flutter_tools.exceptions import ToolExit
from flutter_tools.logger import Logger
from flutter_tools.runner.command_runner import FlutterCommandRunner
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import Platform

EXIT_CODE_INTERRUPTED = 130
_HELP_FLAGS = frozenset({"-h", "--help"})
_VERBOSE_FLAGS = frozenset({"-v", "--verbose"})


def wants_verbose_help(args: Sequence[str]) -> bool:
    tokens = set(args)
    return bool(tokens & _HELP_FLAGS) and bool(tokens & _VERBOSE_FLAGS)


def _leading_global_tokens(args: Sequence[str]) -> list[str]:
    tokens: list[str] = []
    for arg in args:
        if not arg.startswith("-"):
            break
        tokens.append(arg)
    return tokens


def create_runner(args: Sequence[str], *, cwd: Path | None = None) -> FlutterCommandRunner:
    base = cwd if cwd is not None else Path.cwd()
    runner = FlutterCommandRunner(
        verbose_help=wants_verbose_help(args),
        cwd=base,
        default_map=runner_defaults(resolve_config_path(base, context.get(Platform))),
    )
    for name, command in default_commands().items():
        runner.add_command(command, name)
    return runner


def _outer_overrides(args: Sequence[str]) -> dict[type, context.Generator]:
    """Verbose logger for traces emitted before the arguments are parsed."""
    if _VERBOSE_FLAGS & set(_leading_global_tokens(args)):
        return {Logger: lambda: Logger(verbose=True)}
    return {}


def run(args: Sequence[str], *, cwd: Path | None = None) -> int:
    """Run one invocation and return its exit code."""
    argv = list(args)
    try:
        with context.override_scope(_outer_overrides(argv)):
            runner = create_runner(argv, cwd=cwd)
            asyncio.run(runner.run(argv))
    except ToolExit as error:
        if error.message:
            typer.secho(error.message, err=True, fg=typer.colors.RED)
        return error.exit_code
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.exceptions.Exit as error:
        return error.exit_code
    except click.Abort:
        typer.echo("Aborted!", err=True)
        return 1
    except KeyboardInterrupt:
        typer.echo("Aborted!", err=True)
        return EXIT_CODE_INTERRUPTED
    return 0


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":  # pragma: no cover
    main()
