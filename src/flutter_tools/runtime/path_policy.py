from __future__ import annotations

from pathlib import Path

PACKAGES_FILE_NAME = ".packages"
PUBSPEC_FILE_NAME = "pubspec.yaml"
REPO_IGNORE_MARKER = ".dartignore"
TOOL_CACHE_DIR_NAME = ".dart_tool"

# Not bin/, and not the repository root itself.
REPO_ROOT_DIR_NAMES: tuple[str, ...] = ("dev", "examples", "packages")

CACHE_REL_PATH = Path("bin/cache")
CACHE_LOCK_FILE_NAME = "lockfile"
VERSION_STAMP_FILE_NAME = "flutter.version"
VERSION_CHECK_STAMP_FILE_NAME = "flutter_version_check.stamp"
ARTIFACTS_DIR_NAME = "artifacts"
ENGINE_VERSION_REL_PATH = Path("bin/internal/engine.version")

DEFAULT_CONFIG_NAME = "flutter_tools.toml"


def resolve_cache_dir(flutter_root: Path) -> Path:
    return flutter_root / CACHE_REL_PATH


def default_flutter_root() -> Path:
    # src/flutter_tools/runtime/path_policy.py -> repository checkout root.
    return Path(__file__).resolve().parents[3]
