from __future__ import annotations

from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from flutter_tools.logger import Logger
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import FLUTTER_TOOLS_CONFIG_ENV, Platform
from flutter_tools.runtime.path_policy import DEFAULT_CONFIG_NAME

CONFIGURABLE_RUNNER_KEYS = frozenset(
    {
        "verbose",
        "quiet",
        "wrap",
        "color",
        "version-check",
        "suppress-analytics",
        "device-id",
        "local-engine-src-path",
        "local-engine",
        "show-test-device",
    }
)

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def resolve_config_path(
    cwd: Path | None = None,
    platform: Platform | None = None,
) -> Path:
    if platform is not None:
        explicit = platform.env_path(FLUTTER_TOOLS_CONFIG_ENV)
        if explicit is not None:
            return Path(explicit)
    base = cwd if cwd is not None else Path.cwd()
    return base / DEFAULT_CONFIG_NAME


def load_config(config_path: Path) -> TomlTable:
    return _load_toml(config_path)


def runner_defaults(config_path: Path) -> dict[str, TomlValue]:
    """Global option defaults from the ``[runner]`` table.

    Keys use the flag spelling (``version-check``) and are returned keyed by
    parameter name (``version_check``) so they can seed a click
    ``default_map``. Only ``CONFIGURABLE_RUNNER_KEYS`` are honoured; flags
    whose startup step reads command-line values only (``wrap-column``,
    ``packages``) or that change what the invocation does (``version``,
    ``machine``) are dropped with a trace line.
    """
    data = load_config(config_path)
    section = data.get("runner", {})
    if not isinstance(section, dict):
        return {}
    defaults: dict[str, TomlValue] = {}
    for key, value in section.items():
        if isinstance(value, dict):
            continue
        if key not in CONFIGURABLE_RUNNER_KEYS:
            context.get(Logger).print_trace(
                f"Ignoring [runner] {key} in {config_path}; it can only be set on the command line."
            )
            continue
        defaults[str(key).replace("-", "_")] = value
    return defaults
