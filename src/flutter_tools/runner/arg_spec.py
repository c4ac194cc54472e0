"""Declaration of the global flags and options the runner accepts.

Declaring is separate from parsing: ``build_global_spec`` produces an
``ArgumentSpec`` from explicit inputs (working directory, verbose help) and
``ArgumentSpec.to_click_params`` turns it into click parameters.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

import click

from flutter_tools.invariants import never
from flutter_tools.runtime.path_policy import PACKAGES_FILE_NAME


class ArgKind(StrEnum):
    FLAG = "flag"
    OPTION = "option"


@dataclass(frozen=True)
class ArgDecl:
    kind: ArgKind
    name: str
    help: str
    abbr: str | None = None
    hidden: bool = False
    negatable: bool = False
    default: object = None
    section: str | None = None

    @property
    def dest(self) -> str:
        return self.name.replace("-", "_")

    def to_click_param(self) -> click.Option:
        decls: list[str] = []
        if self.kind is ArgKind.FLAG and self.negatable:
            decls.append(f"--{self.name}/--no-{self.name}")
        else:
            decls.append(f"--{self.name}")
        if self.abbr is not None:
            decls.append(f"-{self.abbr}")
        if self.kind is ArgKind.FLAG:
            return click.Option(
                [*decls, self.dest],
                is_flag=True,
                default=bool(self.default),
                hidden=self.hidden,
                help=self.help,
            )
        return click.Option(
            [*decls, self.dest],
            type=str,
            default=self.default,
            hidden=self.hidden,
            help=self.help,
            metavar="TEXT",
        )


class ArgumentSpec:
    def __init__(self) -> None:
        self._decls: dict[str, ArgDecl] = {}
        self._abbrs: set[str] = set()
        self._section: str | None = None

    def _register(self, decl: ArgDecl) -> None:
        if decl.name in self._decls:
            never("duplicate global argument", name=decl.name)
        if decl.abbr is not None:
            if decl.abbr in self._abbrs:
                never("duplicate global abbreviation", abbr=decl.abbr)
            self._abbrs.add(decl.abbr)
        self._decls[decl.name] = decl

    def add_separator(self, title: str) -> None:
        self._section = title

    def add_flag(
        self,
        name: str,
        *,
        help: str,
        abbr: str | None = None,
        negatable: bool = True,
        default: bool = False,
        hidden: bool = False,
    ) -> None:
        self._register(
            ArgDecl(
                kind=ArgKind.FLAG,
                name=name,
                help=help,
                abbr=abbr,
                hidden=hidden,
                negatable=negatable,
                default=default,
                section=self._section,
            )
        )

    def add_option(
        self,
        name: str,
        *,
        help: str,
        abbr: str | None = None,
        default: str | None = None,
        hidden: bool = False,
    ) -> None:
        self._register(
            ArgDecl(
                kind=ArgKind.OPTION,
                name=name,
                help=help,
                abbr=abbr,
                hidden=hidden,
                default=default,
                section=self._section,
            )
        )

    def __contains__(self, name: object) -> bool:
        return name in self._decls

    def __getitem__(self, name: str) -> ArgDecl:
        return self._decls[name]

    @property
    def declarations(self) -> tuple[ArgDecl, ...]:
        return tuple(self._decls.values())

    def to_click_params(self) -> list[click.Parameter]:
        return [decl.to_click_param() for decl in self._decls.values()]


def _packages_help(cwd: Path, verbose_help: bool) -> tuple[str, str | None, bool]:
    if (cwd / PACKAGES_FILE_NAME).is_file():
        return (
            f'Path to your "{PACKAGES_FILE_NAME}" file. (defaults to "{PACKAGES_FILE_NAME}")',
            PACKAGES_FILE_NAME,
            not verbose_help,
        )
    return (
        f'Path to your "{PACKAGES_FILE_NAME}" file. (required, since the current '
        f'directory does not contain a "{PACKAGES_FILE_NAME}" file)',
        None,
        False,
    )


def build_global_spec(*, cwd: Path, verbose_help: bool = False) -> ArgumentSpec:
    """Declare every global flag for one run.

    The ``--packages`` default and visibility depend on whether ``cwd``
    holds a packages file, so this is evaluated per run and never cached.
    """
    hide = not verbose_help
    spec = ArgumentSpec()
    spec.add_flag(
        "verbose",
        abbr="v",
        negatable=False,
        help="Noisy logging, including all shell commands executed. "
        "If used with --help, shows hidden options.",
    )
    spec.add_flag(
        "quiet",
        negatable=False,
        hidden=hide,
        help="Reduce the amount of output from some commands.",
    )
    spec.add_flag(
        "wrap",
        default=True,
        hidden=hide,
        help="Toggles output word wrapping, regardless of whether or not the output is a terminal.",
    )
    spec.add_option(
        "wrap-column",
        hidden=hide,
        help="Sets the output wrap column. If not set, uses the width of the terminal. "
        "No wrapping occurs if not writing to a terminal. "
        "Use --no-wrap to turn off wrapping when connected to a terminal.",
    )
    spec.add_option(
        "device-id",
        abbr="d",
        help="Target device id or name (prefixes allowed).",
    )
    spec.add_flag(
        "version",
        negatable=False,
        help="Reports the version of this tool.",
    )
    spec.add_flag(
        "machine",
        negatable=False,
        hidden=hide,
        help="When used with the --version flag, outputs the information using JSON.",
    )
    spec.add_flag(
        "color",
        default=True,
        hidden=hide,
        help="Whether to use terminal colors (requires support for ANSI escape sequences).",
    )
    spec.add_flag(
        "version-check",
        default=True,
        hidden=hide,
        help="Allow Flutter to check for updates when this command runs.",
    )
    spec.add_flag(
        "suppress-analytics",
        negatable=False,
        help="Suppress analytics reporting when this command runs.",
    )
    packages_help, packages_default, packages_hidden = _packages_help(cwd, verbose_help)
    spec.add_option(
        "packages",
        hidden=packages_hidden,
        default=packages_default,
        help=packages_help,
    )
    spec.add_separator("Local build selection options (not normally required)")
    spec.add_option(
        "local-engine-src-path",
        hidden=hide,
        help="Path to your engine src directory, if you are building Flutter locally. "
        "Defaults to $FLUTTER_ENGINE if set.",
    )
    spec.add_option(
        "local-engine",
        hidden=hide,
        help="Name of a build output within the engine out directory, if you are "
        "building Flutter locally. Use this to select a specific version of the "
        "engine if you have built multiple engine targets. This path is relative "
        "to --local-engine-src-path/out.",
    )
    spec.add_separator('Options for testing the "flutter" tool itself')
    spec.add_flag(
        "show-test-device",
        negatable=False,
        hidden=hide,
        help="List the special 'flutter-tester' device in device listings. "
        "This headless device is used to test Flutter tooling.",
    )
    return spec
