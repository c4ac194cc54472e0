from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence
from contextlib import ExitStack
from pathlib import Path
from typing import NoReturn

import click
from click.core import ParameterSource
import typer

from flutter_tools import user_messages
from flutter_tools.cache import Cache
from flutter_tools.invariants import require_not_none
from flutter_tools.runner.arg_spec import ArgumentSpec, build_global_spec
from flutter_tools.runner.completion import try_args_completion
from flutter_tools.runner.invocation import CommandPath, CommandPathKind, ParsedInvocation
from flutter_tools.runner.repo_packages import repo_packages, repo_roots
from flutter_tools.runner.startup import run_startup
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import Platform
from flutter_tools.terminal import OutputPreferences, wrap_text

PROG_NAME = "flutter"
HELP_OPTION_NAMES = ["-h", "--help"]
DESCRIPTION = (
    "Manage your Flutter app development.\n"
    "\n"
    "Common commands:\n"
    "\n"
    "  flutter create <output directory>\n"
    "    Create a new Flutter project in the specified directory.\n"
    "\n"
    "  flutter run [options]\n"
    "    Run your Flutter application on an attached device or in an emulator."
)


def _remaining_args(ctx: click.Context) -> list[str]:
    # click 8.2 keeps the subcommand token in ``_protected_args``; 8.1 stores
    # it in ``protected_args``. Reading __dict__ avoids the 8.2 deprecation.
    protected = ctx.__dict__.get("_protected_args")
    if protected is None:
        protected = ctx.__dict__.get("protected_args") or []
    return [*protected, *ctx.args]


def _context_settings(prefs: OutputPreferences) -> dict[str, object]:
    settings: dict[str, object] = {"help_option_names": list(HELP_OPTION_NAMES)}
    if prefs.wrap_text:
        settings["terminal_width"] = prefs.wrap_column
        settings["max_content_width"] = prefs.wrap_column
    return settings


class RunnerGroup(click.Group):
    """Root command: global options grouped by section, wrapped description."""

    def __init__(self, *args: object, spec: ArgumentSpec, **kwargs: object) -> None:
        super().__init__(*args, **kwargs)
        self._sections = {decl.dest: decl.section for decl in spec.declarations}

    def _write_wrapped(self, formatter: click.HelpFormatter, text: str | None) -> None:
        if not text:
            return
        prefs = context.get(OutputPreferences)
        formatter.write_paragraph()
        formatter.write(
            wrap_text(text, column_width=prefs.wrap_column, should_wrap=prefs.wrap_text) + "\n"
        )

    def format_help_text(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        self._write_wrapped(formatter, self.help)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        self._write_wrapped(formatter, self.epilog)

    def format_options(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        sections: dict[str | None, list[tuple[str, str]]] = {}
        for param in self.get_params(ctx):
            record = param.get_help_record(ctx)
            if record is None:
                continue
            sections.setdefault(self._sections.get(param.name or ""), []).append(record)
        for title, rows in sections.items():
            with formatter.section(title or "Global options"):
                formatter.write_dl(rows)
        self.format_commands(ctx, formatter)


class FlutterCommandRunner:
    """Parses the global flags, runs startup, then hands off to a command."""

    def __init__(
        self,
        *,
        verbose_help: bool = False,
        cwd: Path | None = None,
        default_map: Mapping[str, object] | None = None,
    ) -> None:
        self.verbose_help = verbose_help
        self.cwd = cwd if cwd is not None else Path.cwd()
        self.spec = build_global_spec(cwd=self.cwd, verbose_help=verbose_help)
        self._default_map = dict(default_map or {})
        self.group = RunnerGroup(
            name=PROG_NAME,
            help=DESCRIPTION,
            params=self.spec.to_click_params(),
            spec=self.spec,
            invoke_without_command=True,
            no_args_is_help=False,
            epilog=user_messages.USAGE_FOOTER,
            context_settings=_context_settings(context.get(OutputPreferences)),
        )

    def add_command(self, command: click.Command, name: str | None = None) -> None:
        self.group.add_command(command, name)

    @property
    def commands(self) -> Mapping[str, click.Command]:
        return self.group.commands

    def requires_subcommand(self, name: str) -> bool:
        command = self.group.commands.get(name)
        return isinstance(command, click.Group) and not command.invoke_without_command

    def rewrite_args(self, args: Sequence[str]) -> list[str]:
        """Turn a bare category command into a request for its help."""
        rewritten = list(args)
        if len(rewritten) == 1 and self.requires_subcommand(rewritten[0]):
            rewritten.append(HELP_OPTION_NAMES[0])
        return rewritten

    def _root_context(self) -> click.Context:
        return click.Context(
            self.group,
            info_name=PROG_NAME,
            **_context_settings(context.get(OutputPreferences)),
        )

    def _usage_context(self, root_ctx: click.Context, path: CommandPath) -> click.Context:
        ctx = root_ctx
        command: click.Command = self.group
        for name in path.names:
            if not isinstance(command, click.Group):
                break
            sub = command.get_command(ctx, name)
            if sub is None:
                break
            ctx = click.Context(sub, info_name=name, parent=ctx)
            command = sub
        return ctx

    def _usage_exception(
        self,
        error: click.UsageError,
        root_ctx: click.Context | None,
        path: CommandPath,
    ) -> NoReturn:
        base = root_ctx if root_ctx is not None else self._root_context()
        if path.kind is CommandPathKind.ROOT:
            target = base
        else:
            target = self._usage_context(base, path)
        error.ctx = target
        error.cmd = target.command
        raise error

    def parse(self, args: Sequence[str]) -> ParsedInvocation:
        argv = list(args)
        try_args_completion(
            self.group,
            prog_name=PROG_NAME,
            environment=context.get(Platform).environment,
        )
        path = CommandPath()
        root_ctx: click.Context | None = None
        try:
            root_ctx = self.group.make_context(
                PROG_NAME,
                argv,
                default_map=self._default_map or None,
            )
            contexts = [root_ctx]
            ctx = root_ctx
            remaining = _remaining_args(ctx)
            while isinstance(ctx.command, click.Group) and remaining:
                name, command, remaining = ctx.command.resolve_command(ctx, remaining)
                if name is None or command is None:
                    break
                path = path.child(name)
                ctx.invoked_subcommand = name
                ctx = command.make_context(name, list(remaining), parent=ctx)
                contexts.append(ctx)
                remaining = _remaining_args(ctx)
            if (
                ctx is not root_ctx
                and isinstance(ctx.command, click.Group)
                and not ctx.command.invoke_without_command
            ):
                raise click.UsageError("Missing command.", ctx)
        except click.UsageError as error:
            self._usage_exception(error, root_ctx, path)
        root = require_not_none(root_ctx, reason="root context parsed")
        explicit = frozenset(
            name
            for name in root.params
            if root.get_parameter_source(name) is ParameterSource.COMMANDLINE
        )
        return ParsedInvocation(
            flags=root.params,
            explicit=explicit,
            command_path=path,
            rest=tuple(ctx.args),
            contexts=tuple(contexts),
        )

    async def run(self, args: Sequence[str]) -> None:
        parsed = self.parse(self.rewrite_args(args))
        await self.run_command(parsed)

    async def run_command(self, parsed: ParsedInvocation) -> None:
        await run_startup(self, parsed)

    def print_usage(self, parsed: ParsedInvocation) -> None:
        root_ctx = parsed.contexts[0] if parsed.contexts else self._root_context()
        typer.echo(root_ctx.get_help())

    async def dispatch(self, parsed: ParsedInvocation) -> None:
        if parsed.command_path.kind is CommandPathKind.ROOT:
            self.print_usage(parsed)
            return
        contexts = parsed.contexts
        with ExitStack() as stack:
            for ctx in contexts:
                stack.enter_context(ctx)
            for ctx in contexts[1:-1]:
                click.Command.invoke(ctx.command, ctx)
            leaf = contexts[-1]
            result = leaf.command.invoke(leaf)
            if inspect.isawaitable(result):
                await result

    def get_repo_roots(self) -> list[Path]:
        return repo_roots(context.get(Cache).flutter_root)

    def get_repo_packages(self) -> list[Path]:
        return repo_packages(context.get(Cache).flutter_root)
