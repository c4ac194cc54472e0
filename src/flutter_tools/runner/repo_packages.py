from __future__ import annotations

from pathlib import Path

from flutter_tools.runtime.path_policy import (
    PUBSPEC_FILE_NAME,
    REPO_IGNORE_MARKER,
    REPO_ROOT_DIR_NAMES,
    TOOL_CACHE_DIR_NAME,
)


def repo_roots(flutter_root: Path) -> list[Path]:
    root = flutter_root.absolute()
    return [root / name for name in REPO_ROOT_DIR_NAMES]


def gather_project_paths(root_path: Path) -> list[Path]:
    """Depth-first list of directories under ``root_path`` holding a pubspec.

    A directory with an ignore marker is pruned with everything below it, as
    is any tool cache directory. A directory with its own pubspec is listed
    after its nested packages; callers must not rely on the order.
    """
    if (root_path / REPO_IGNORE_MARKER).is_file():
        return []
    project_paths: list[Path] = []
    for entry in sorted(root_path.iterdir()):
        if entry.is_symlink() or not entry.is_dir():
            continue
        if entry.name == TOOL_CACHE_DIR_NAME:
            continue
        project_paths.extend(gather_project_paths(entry))
    if (root_path / PUBSPEC_FILE_NAME).is_file():
        project_paths.append(root_path)
    return project_paths


def repo_packages(flutter_root: Path) -> list[Path]:
    packages: list[Path] = []
    for root in repo_roots(flutter_root):
        if not root.is_dir():
            continue
        packages.extend(gather_project_paths(root))
    return packages
