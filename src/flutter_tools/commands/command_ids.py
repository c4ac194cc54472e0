from __future__ import annotations

# Top-level command names registered on the runner by default.
BUILD_COMMAND = "build"
DEVICES_COMMAND = "devices"
UPGRADE_COMMAND = "upgrade"
BASH_COMPLETION_COMMAND = "bash-completion"

DEFAULT_COMMAND_NAMES: tuple[str, ...] = (
    BASH_COMPLETION_COMMAND,
    BUILD_COMMAND,
    DEVICES_COMMAND,
    UPGRADE_COMMAND,
)
