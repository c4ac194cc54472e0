from __future__ import annotations

import asyncio
import atexit
import fcntl
from pathlib import Path
from typing import IO

from flutter_tools.logger import Logger
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import FLUTTER_ROOT_ENV, Platform
from flutter_tools.runtime.path_policy import (
    ARTIFACTS_DIR_NAME,
    CACHE_LOCK_FILE_NAME,
    default_flutter_root,
    resolve_cache_dir,
)
from flutter_tools import user_messages


def flutter_root_from_environment(platform: Platform) -> Path:
    explicit = platform.env_path(FLUTTER_ROOT_ENV)
    if explicit is not None:
        return Path(explicit).expanduser().absolute()
    return default_flutter_root()


class Cache:
    """The artifact cache under ``<flutter root>/bin/cache``.

    ``lock()`` holds an exclusive lock on the cache lockfile until the
    process exits. Calling it again from the same process is a no-op.
    """

    def __init__(self, flutter_root: Path) -> None:
        self.flutter_root = flutter_root
        self._lock_handle: IO[str] | None = None

    @property
    def root(self) -> Path:
        return resolve_cache_dir(self.flutter_root)

    @property
    def artifact_dir(self) -> Path:
        return self.root / ARTIFACTS_DIR_NAME

    def stamp_path(self, name: str) -> Path:
        return self.root / name

    @property
    def is_locked(self) -> bool:
        return self._lock_handle is not None

    async def lock(self) -> None:
        if self._lock_handle is not None:
            return
        self.root.mkdir(parents=True, exist_ok=True)
        handle = open(self.root / CACHE_LOCK_FILE_NAME, "a", encoding="utf-8")
        try:
            try:
                fcntl.flock(handle, fcntl.LOCK_EX | fcntl.LOCK_NB)
            except BlockingIOError:
                context.get(Logger).print_status(user_messages.CACHE_LOCK_WAITING)
                await asyncio.to_thread(fcntl.flock, handle, fcntl.LOCK_EX)
        except BaseException:
            handle.close()
            raise
        self._lock_handle = handle
        atexit.register(self.release_lock)

    def release_lock(self) -> None:
        handle = self._lock_handle
        if handle is None:
            return
        self._lock_handle = None
        fcntl.flock(handle, fcntl.LOCK_UN)
        handle.close()


context.register_default(
    Cache,
    lambda: Cache(flutter_root_from_environment(context.get(Platform))),
)
