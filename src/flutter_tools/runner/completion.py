from __future__ import annotations

from collections.abc import Mapping

import click
from click.shell_completion import get_completion_class, shell_complete

from flutter_tools.runtime.env_policy import COMPLETE_ENV

SUPPORTED_SHELLS: tuple[str, ...] = ("bash", "zsh", "fish")


def try_args_completion(
    command: click.Command,
    *,
    prog_name: str,
    environment: Mapping[str, str],
) -> None:
    """Answer a shell completion request and exit, or return to parse normally.

    Completion requests are signalled by ``_FLUTTER_COMPLETE`` (for example
    ``bash_complete``); click reads ``COMP_WORDS``/``COMP_CWORD`` itself.
    """
    instruction = environment.get(COMPLETE_ENV)
    if not instruction:
        return
    status = shell_complete(command, {}, prog_name, COMPLETE_ENV, instruction)
    raise click.exceptions.Exit(status)


def completion_script(command: click.Command, *, prog_name: str, shell: str) -> str:
    completion_class = get_completion_class(shell)
    if completion_class is None:
        raise click.BadParameter(
            f"Unsupported shell {shell!r}; expected one of {', '.join(SUPPORTED_SHELLS)}.",
            param_hint="SHELL",
        )
    return completion_class(command, {}, prog_name, COMPLETE_ENV).source()
