"""Ordered startup sequence run once per invocation before dispatch.

Steps before the override scope derive values from the parsed flags
(wrap column, wrapping, test device visibility, local engine). Everything
after runs inside ``context.run`` so the derived values are what the rest of
the invocation observes.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Protocol

import typer

from flutter_tools import user_messages
from flutter_tools.artifacts import Artifacts, get_local_engine
from flutter_tools.cache import Cache
from flutter_tools.devices import TESTER_DEVICE_ID, DeviceManager, FlutterTesterVisibility
from flutter_tools.exceptions import throw_tool_exit
from flutter_tools.local_engine import LocalEngineLocator
from flutter_tools.logger import Logger
from flutter_tools.package_map import PackageMap, normalize_packages_path
from flutter_tools.runner.invocation import ParsedInvocation
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import Platform, cache_already_locked
from flutter_tools.runtime.json_io import dump_json_pretty
from flutter_tools.schema import MachineVersionReportDTO
from flutter_tools.terminal import OutputPreferences, Stdio
from flutter_tools.usage import Usage
from flutter_tools.version import FlutterVersion

if TYPE_CHECKING:
    from pathlib import Path

UPGRADE_COMMAND_NAME = "upgrade"
EXIT_CODE_USAGE = 2
_DECIMAL_INTEGER = re.compile(r"[+-]?[0-9]+")


class Dispatcher(Protocol):
    cwd: Path

    async def dispatch(self, parsed: ParsedInvocation) -> None: ...


def resolve_wrap_column(parsed: ParsedInvocation) -> int | None:
    if not parsed.was_parsed("wrap-column"):
        return None
    raw = parsed["wrap-column"]
    text = str(raw).strip()
    # ASCII decimal digits with an optional sign.
    if _DECIMAL_INTEGER.fullmatch(text) is None:
        throw_tool_exit(user_messages.runner_wrap_column_parse_error(raw))
    column = int(text)
    if column < 0:
        throw_tool_exit(user_messages.runner_wrap_column_invalid(raw))
    return column


def resolve_output_preferences(
    parsed: ParsedInvocation,
    stdio: Stdio,
    wrap_column: int | None,
) -> OutputPreferences:
    terminal_columns = stdio.terminal_columns
    if parsed.was_parsed("wrap"):
        wrap = bool(parsed["wrap"])
    else:
        wrap = terminal_columns is not None and bool(parsed["wrap"])
    return OutputPreferences(
        wrap_text=wrap,
        show_color=bool(parsed["color"]),
        explicit_wrap_column=wrap_column,
        terminal_columns=terminal_columns,
    )


def tester_device_visible(parsed: ParsedInvocation) -> bool:
    return bool(parsed["show-test-device"]) or parsed["device-id"] == TESTER_DEVICE_ID


async def _ensure_version_file(version: FlutterVersion) -> None:
    try:
        await version.ensure_version_file()
    except OSError as error:
        logger = context.get(Logger)
        logger.print_error(user_messages.version_file_write_failed(error))
        logger.print_error(user_messages.VERSION_FILE_PERMISSION_HINT)
        throw_tool_exit(user_messages.VERSION_FILE_TOOL_EXIT)


def _print_version(parsed: ParsedInvocation) -> None:
    version = context.get(FlutterVersion)
    context.get(Usage).send_command("version")
    version.fetch_tags_and_update()
    if parsed["machine"]:
        payload = {
            **version.to_json(),
            "flutterRoot": str(context.get(Cache).flutter_root),
        }
        report = MachineVersionReportDTO.model_validate(payload)
        typer.echo(dump_json_pretty(report.model_dump(by_alias=True)))
    else:
        context.get(Logger).print_status(str(version), important=True)


async def _startup_body(runner: Dispatcher, parsed: ParsedInvocation) -> None:
    logger = context.get(Logger)
    logger.quiet = bool(parsed["quiet"])
    logger.verbose = logger.verbose or bool(parsed["verbose"])

    if not cache_already_locked(context.get(Platform)):
        await context.get(Cache).lock()

    if parsed["suppress-analytics"]:
        context.get(Usage).suppress_analytics = True

    version = context.get(FlutterVersion)
    await _ensure_version_file(version)

    if (
        parsed.command_name != UPGRADE_COMMAND_NAME
        and parsed["version-check"]
        and not parsed["machine"]
    ):
        await version.check_version_freshness()

    if parsed.was_parsed("packages"):
        context.get(PackageMap).global_packages_path = normalize_packages_path(
            str(parsed["packages"]),
            cwd=runner.cwd,
        )

    context.get(DeviceManager).specified_device_id = parsed["device-id"]

    if parsed["version"]:
        _print_version(parsed)
        return

    if parsed["machine"]:
        throw_tool_exit(user_messages.MACHINE_FLAG_REQUIRES_VERSION, exit_code=EXIT_CODE_USAGE)

    await runner.dispatch(parsed)


async def run_startup(runner: Dispatcher, parsed: ParsedInvocation) -> None:
    wrap_column = resolve_wrap_column(parsed)
    overrides: dict[type, context.Generator] = {
        OutputPreferences: context.constant(
            resolve_output_preferences(parsed, context.get(Stdio), wrap_column)
        ),
    }
    if tester_device_visible(parsed):
        overrides[FlutterTesterVisibility] = context.constant(
            FlutterTesterVisibility(visible=True)
        )
    engine_build_paths = await context.get(LocalEngineLocator).find_engine_path(
        parsed["local-engine-src-path"],
        parsed["local-engine"],
    )
    if engine_build_paths is not None:
        overrides[Artifacts] = context.constant(get_local_engine(engine_build_paths))
    await context.run(lambda: _startup_body(runner, parsed), overrides=overrides)
