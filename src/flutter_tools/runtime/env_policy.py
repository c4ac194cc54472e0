from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from flutter_tools.runtime import context

FLUTTER_ROOT_ENV = "FLUTTER_ROOT"
FLUTTER_ENGINE_ENV = "FLUTTER_ENGINE"
FLUTTER_ALREADY_LOCKED_ENV = "FLUTTER_ALREADY_LOCKED"
FLUTTER_TOOLS_CONFIG_ENV = "FLUTTER_TOOLS_CONFIG"
COMPLETE_ENV = "_FLUTTER_COMPLETE"


@dataclass(frozen=True)
class Platform:
    environment: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    def env_text(self, name: str, *, default: str = "") -> str:
        return str(self.environment.get(name, default)).strip()

    def env_path(self, name: str) -> str | None:
        return self.env_text(name) or None


def cache_already_locked(platform: Platform) -> bool:
    # A parent flutter process exports exactly "true" when it holds the lock.
    return platform.environment.get(FLUTTER_ALREADY_LOCKED_ENV) == "true"


context.register_default(Platform, Platform)
