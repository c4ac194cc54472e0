from __future__ import annotations

import asyncio
import platform as host_platform
import subprocess
from datetime import datetime, timedelta, timezone
from functools import cached_property
from pathlib import Path
from typing import Callable

from flutter_tools import __version__, user_messages
from flutter_tools.cache import Cache
from flutter_tools.logger import Logger
from flutter_tools.runtime import context
from flutter_tools.runtime.json_io import load_json_object_path, write_json_object_path
from flutter_tools.runtime.path_policy import (
    ENGINE_VERSION_REL_PATH,
    VERSION_CHECK_STAMP_FILE_NAME,
    VERSION_STAMP_FILE_NAME,
)
from flutter_tools.schema import FlutterVersionDTO

UNKNOWN = "unknown"
DEFAULT_REMOTE = "origin"
VERSION_AGE_CONSIDERED_UP_TO_DATE = timedelta(weeks=4)
MAX_TIME_SINCE_LAST_WARNING = timedelta(days=1)
_LAST_WARNING_KEY = "lastTimeWarningWasPrinted"

GitRunner = Callable[[list[str], Path], str | None]


def run_git(args: list[str], cwd: Path) -> str | None:
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except (FileNotFoundError, NotADirectoryError):
        return None
    if completed.returncode != 0:
        return None
    return completed.stdout.strip()


def _parse_timestamp(text: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class FlutterVersion:
    """Version metadata for the checkout at ``flutter_root``."""

    def __init__(
        self,
        flutter_root: Path,
        cache: Cache,
        *,
        git: GitRunner = run_git,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.flutter_root = flutter_root
        self._cache = cache
        self._git = git
        self._clock = clock

    def _git_text(self, *args: str) -> str:
        return self._git(list(args), self.flutter_root) or UNKNOWN

    @property
    def framework_version(self) -> str:
        return __version__

    @cached_property
    def channel(self) -> str:
        upstream = self._git("rev-parse --abbrev-ref --symbolic @{u}".split(), self.flutter_root)
        if not upstream:
            return UNKNOWN
        return upstream.split("/", 1)[-1]

    @cached_property
    def repository_url(self) -> str:
        return self._git_text("ls-remote", "--get-url", DEFAULT_REMOTE)

    @cached_property
    def framework_revision(self) -> str:
        return self._git_text("log", "-n", "1", "--pretty=format:%H")

    @cached_property
    def framework_commit_date(self) -> str:
        return self._git_text("log", "-n", "1", "--pretty=format:%ad", "--date=iso-strict")

    @cached_property
    def engine_revision(self) -> str:
        try:
            text = (self.flutter_root / ENGINE_VERSION_REL_PATH).read_text(encoding="utf-8")
        except OSError:
            return UNKNOWN
        return text.strip() or UNKNOWN

    @property
    def framework_age(self) -> timedelta | None:
        committed = _parse_timestamp(self.framework_commit_date)
        if committed is None:
            return None
        return self._clock() - committed

    def to_dto(self) -> FlutterVersionDTO:
        return FlutterVersionDTO(
            framework_version=self.framework_version,
            channel=self.channel,
            repository_url=self.repository_url,
            framework_revision=self.framework_revision,
            framework_commit_date=self.framework_commit_date,
            engine_revision=self.engine_revision,
            tools_python_version=host_platform.python_version(),
        )

    def to_json(self) -> dict[str, object]:
        return self.to_dto().model_dump(by_alias=True)

    def __str__(self) -> str:
        age = self.framework_age
        age_text = f" ({age.days} days ago)" if age is not None else ""
        return "\n".join(
            (
                f"Flutter {self.framework_version} • channel {self.channel} • {self.repository_url}",
                f"Framework • revision {self.framework_revision[:10]}{age_text} • {self.framework_commit_date}",
                f"Engine • revision {self.engine_revision[:10]}",
                f"Tools • Python {host_platform.python_version()}",
            )
        )

    def _write_version_file(self) -> None:
        stamp = self._cache.stamp_path(VERSION_STAMP_FILE_NAME)
        if stamp.exists():
            return
        stamp.parent.mkdir(parents=True, exist_ok=True)
        stamp.write_text(self.framework_version + "\n", encoding="utf-8")

    async def ensure_version_file(self) -> None:
        """Write the version stamp into the cache if it is missing.

        ``OSError`` propagates so the caller can turn it into a tool exit.
        """
        await asyncio.to_thread(self._write_version_file)

    async def check_version_freshness(self) -> None:
        logger = context.get(Logger)
        age = self.framework_age
        if age is None:
            logger.print_trace("Framework commit date unknown; skipping version freshness check.")
            return
        if age <= VERSION_AGE_CONSIDERED_UP_TO_DATE:
            return
        stamp_path = self._cache.stamp_path(VERSION_CHECK_STAMP_FILE_NAME)
        stamp = load_json_object_path(stamp_path)
        now = self._clock()
        last_warning = _parse_timestamp(str(stamp.get(_LAST_WARNING_KEY, "")))
        if last_warning is not None and now - last_warning < MAX_TIME_SINCE_LAST_WARNING:
            return
        logger.print_warning(user_messages.version_outdated(age.days))
        await asyncio.to_thread(
            write_json_object_path,
            stamp_path,
            {**stamp, _LAST_WARNING_KEY: now.isoformat()},
        )

    def fetch_tags_and_update(self) -> None:
        output = self._git(["fetch", DEFAULT_REMOTE, "--tags"], self.flutter_root)
        if output is None:
            context.get(Logger).print_trace(f"git fetch --tags failed in {self.flutter_root}")
        for name in ("channel", "framework_revision", "framework_commit_date"):
            self.__dict__.pop(name, None)


def _default_version() -> FlutterVersion:
    cache = context.get(Cache)
    return FlutterVersion(cache.flutter_root, cache)


context.register_default(FlutterVersion, _default_version)
