from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping


def load_json_object_path(
    path: Path,
    *,
    encoding: str = "utf-8",
) -> dict[str, object]:
    if not path.exists():
        return {}
    try:
        payload = json.loads(path.read_text(encoding=encoding))
    except (OSError, UnicodeError, json.JSONDecodeError):
        return {}
    if not isinstance(payload, Mapping):
        return {}
    return {str(key): value for key, value in payload.items()}


def write_json_object_path(
    path: Path,
    payload: Mapping[str, object],
    *,
    encoding: str = "utf-8",
) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(dict(payload), sort_keys=True) + "\n", encoding=encoding)


def dump_json_pretty(payload: object) -> str:
    # Key order is the caller's insertion order.
    return json.dumps(payload, indent=2, sort_keys=False)
