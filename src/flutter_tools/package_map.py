from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from flutter_tools.runtime import context
from flutter_tools.runtime.path_policy import PACKAGES_FILE_NAME


@dataclass
class PackageMap:
    """Holds the packages file chosen for this process."""

    global_packages_path: str | None = None

    @property
    def packages_path(self) -> str:
        return self.global_packages_path or PACKAGES_FILE_NAME


def normalize_packages_path(path: str, *, cwd: Path | None = None) -> str:
    # Lexical normalization only; symlinks are left alone.
    expanded = os.path.expanduser(path)
    if cwd is not None and not os.path.isabs(expanded):
        expanded = os.path.join(cwd, expanded)
    return os.path.normpath(os.path.abspath(expanded))


context.register_default(PackageMap, PackageMap)
