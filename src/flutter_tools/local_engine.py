from __future__ import annotations

import os
from pathlib import Path

from flutter_tools import user_messages
from flutter_tools.artifacts import EngineBuildPaths
from flutter_tools.exceptions import throw_tool_exit
from flutter_tools.logger import Logger
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import FLUTTER_ENGINE_ENV, Platform

_HOST_PLATFORM_PREFIXES: tuple[str, ...] = (
    "android_",
    "ios_",
    "web_",
    "linux_",
    "macos_",
    "windows_",
    "fuchsia_",
)


def _absolute(path_text: str) -> Path:
    return Path(os.path.abspath(os.path.expanduser(path_text)))


def host_engine_name(local_engine: str) -> str:
    """Pick the host build matching the runtime mode of ``local_engine``.

    ``android_debug_unopt`` pairs with ``host_debug_unopt``; names without a
    known platform prefix pair with ``host_<name>``.
    """
    if local_engine.startswith("host_"):
        return local_engine
    for prefix in _HOST_PLATFORM_PREFIXES:
        if local_engine.startswith(prefix):
            return "host_" + local_engine[len(prefix):]
    return "host_" + local_engine


class LocalEngineLocator:
    def __init__(self, platform: Platform) -> None:
        self._platform = platform

    def _engine_source_path(self, explicit: str | None) -> Path | None:
        environment = self._platform.env_path(FLUTTER_ENGINE_ENV)
        if explicit is not None and environment is not None:
            explicit_path = _absolute(explicit)
            environment_path = _absolute(environment)
            if explicit_path != environment_path:
                throw_tool_exit(
                    user_messages.local_engine_src_conflict(explicit, environment)
                )
            return explicit_path
        chosen = explicit if explicit is not None else environment
        if chosen is None:
            return None
        return _absolute(chosen)

    async def find_engine_path(
        self,
        engine_source_path: str | None,
        local_engine: str | None,
    ) -> EngineBuildPaths | None:
        if engine_source_path is None and local_engine is None:
            return None
        source = self._engine_source_path(engine_source_path)
        if local_engine is None:
            throw_tool_exit(user_messages.LOCAL_ENGINE_REQUIRED)
        if source is None:
            throw_tool_exit(user_messages.LOCAL_ENGINE_SRC_UNDETECTED)
        out_dir = source / "out"
        target_engine = out_dir / local_engine
        if not target_engine.is_dir():
            throw_tool_exit(user_messages.local_engine_build_missing(target_engine))
        host_engine = out_dir / host_engine_name(local_engine)
        context.get(Logger).print_trace(
            f"Local engine source at {source} (target {target_engine.name}, host {host_engine.name})"
        )
        return EngineBuildPaths(target_engine=target_engine, host_engine=host_engine)


context.register_default(
    LocalEngineLocator,
    lambda: LocalEngineLocator(context.get(Platform)),
)
