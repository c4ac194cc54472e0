from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

ROOT = Path(__file__).resolve().parents[1]
for _path in (ROOT, ROOT / "src"):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


import pytest

from flutter_tools.cache import Cache
from flutter_tools.runtime import context
from flutter_tools.runtime.env_policy import Platform
from flutter_tools.terminal import Stdio
from flutter_tools.version import FlutterVersion
from tests.fakes import FakeStdio, FlutterEnv, RecordingCache, RecordingVersion


@pytest.fixture(autouse=True)
def _fresh_defaults() -> Iterator[None]:
    context.clear_default_values()
    yield
    context.clear_default_values()


@pytest.fixture
def flutter_env(tmp_path: Path) -> Iterator[FlutterEnv]:
    root = tmp_path / "flutter"
    root.mkdir()
    cwd = tmp_path / "app"
    cwd.mkdir()
    events: list[str] = []
    cache = RecordingCache(root, events)
    env = FlutterEnv(
        root=root,
        cwd=cwd,
        cache=cache,
        version=RecordingVersion(root, cache, events),
        stdio=FakeStdio(columns=None),
        events=events,
    )
    overrides = {
        Platform: context.constant(env.platform()),
        Cache: context.constant(env.cache),
        FlutterVersion: context.constant(env.version),
        Stdio: context.constant(env.stdio),
    }
    with context.override_scope(overrides):
        yield env
