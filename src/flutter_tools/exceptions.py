"""Exception types shared by the command runner and its collaborators."""

from __future__ import annotations

from typing import NoReturn


class NeverThrown(RuntimeError):
    """Raised by ``never()`` when a path that should be unreachable runs.

    These are programmer errors (duplicate flag declarations, reads of a slot
    nobody registered) and are not meant to be rendered as user diagnostics.
    """

    def __init__(self, message: str, *, env: dict[str, object] | None = None):
        super().__init__(message)
        self.env = dict(env or {})


class ToolExit(Exception):
    """Fatal, non-retriable termination of the current invocation."""

    def __init__(self, message: str | None, *, exit_code: int = 1) -> None:
        super().__init__(message or "")
        self.message = message
        self.exit_code = int(exit_code)

    def __str__(self) -> str:
        return self.message or ""


class ContextSlotMissing(LookupError):
    def __init__(self, slot: type) -> None:
        super().__init__(f"No override or default registered for {slot.__name__}.")
        self.slot = slot


def throw_tool_exit(message: str | None, *, exit_code: int = 1) -> NoReturn:
    raise ToolExit(message, exit_code=exit_code)
