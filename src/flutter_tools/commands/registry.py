from __future__ import annotations

import click
import typer

from flutter_tools.commands import bash_completion, build, devices, upgrade
from flutter_tools.commands.command_ids import (
    BASH_COMPLETION_COMMAND,
    BUILD_COMMAND,
    DEVICES_COMMAND,
    UPGRADE_COMMAND,
)


def default_commands() -> dict[str, click.Command]:
    """Click commands for every built-in command, keyed by name."""
    return {
        BASH_COMPLETION_COMMAND: typer.main.get_command(bash_completion.app),
        BUILD_COMMAND: typer.main.get_command(build.app),
        DEVICES_COMMAND: typer.main.get_command(devices.app),
        UPGRADE_COMMAND: typer.main.get_command(upgrade.app),
    }
