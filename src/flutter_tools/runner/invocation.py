from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

import click


def param_dest(name: str) -> str:
    return name.replace("-", "_")


class CommandPathKind(StrEnum):
    ROOT = "root"
    NAMED = "named"
    NESTED = "nested"


@dataclass(frozen=True)
class CommandPath:
    """Position of a command in the registered hierarchy.

    ``()`` is the root, ``("build",)`` a named top-level command and
    ``("build", "ios")`` a nested subcommand.
    """

    names: tuple[str, ...] = ()

    @property
    def kind(self) -> CommandPathKind:
        if not self.names:
            return CommandPathKind.ROOT
        if len(self.names) == 1:
            return CommandPathKind.NAMED
        return CommandPathKind.NESTED

    @property
    def first(self) -> str | None:
        return self.names[0] if self.names else None

    def child(self, name: str) -> "CommandPath":
        return CommandPath(names=(*self.names, name))

    def __str__(self) -> str:
        return " ".join(self.names)


@dataclass(frozen=True)
class ParsedInvocation:
    """Immutable result of parsing one argument list."""

    flags: Mapping[str, object]
    explicit: frozenset[str]
    command_path: CommandPath = CommandPath()
    rest: tuple[str, ...] = ()
    contexts: tuple[click.Context, ...] = field(default=(), repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", MappingProxyType(dict(self.flags)))

    def __getitem__(self, name: str) -> object:
        return self.flags[param_dest(name)]

    def was_parsed(self, name: str) -> bool:
        """True only when the user supplied ``name`` on the command line."""
        return param_dest(name) in self.explicit

    @property
    def command_name(self) -> str | None:
        return self.command_path.first
