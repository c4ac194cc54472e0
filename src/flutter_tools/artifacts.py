from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from flutter_tools.cache import Cache
from flutter_tools.runtime import context


@dataclass(frozen=True)
class EngineBuildPaths:
    target_engine: Path
    host_engine: Path


class Artifacts(Protocol):
    @property
    def engine_root(self) -> Path: ...

    @property
    def is_local_engine(self) -> bool: ...

    def get_artifact_path(self, name: str) -> Path: ...


class CachedArtifacts:
    """Artifacts downloaded into the tool's artifact cache."""

    def __init__(self, cache: Cache) -> None:
        self._cache = cache

    @property
    def engine_root(self) -> Path:
        return self._cache.artifact_dir / "engine"

    @property
    def is_local_engine(self) -> bool:
        return False

    def get_artifact_path(self, name: str) -> Path:
        return self.engine_root / name


class LocalEngineArtifacts:
    """Artifacts taken from a locally built engine out directory."""

    def __init__(self, engine_build_paths: EngineBuildPaths) -> None:
        self.engine_build_paths = engine_build_paths

    @property
    def engine_root(self) -> Path:
        return self.engine_build_paths.target_engine

    @property
    def is_local_engine(self) -> bool:
        return True

    def get_artifact_path(self, name: str) -> Path:
        return self.engine_build_paths.target_engine / name

    def get_host_artifact_path(self, name: str) -> Path:
        return self.engine_build_paths.host_engine / name


def get_local_engine(engine_build_paths: EngineBuildPaths) -> LocalEngineArtifacts:
    return LocalEngineArtifacts(engine_build_paths)


context.register_default(Artifacts, lambda: CachedArtifacts(context.get(Cache)))
