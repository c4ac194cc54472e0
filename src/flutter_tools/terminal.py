from __future__ import annotations

import shutil
import sys
import textwrap
from dataclasses import dataclass
from typing import TextIO

from flutter_tools.runtime import context

DEFAULT_TERMINAL_COLUMNS = 100


class Stdio:
    """Thin view over the process streams used to detect a terminal."""

    def __init__(self, stdout: TextIO | None = None) -> None:
        self._stdout = stdout

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def has_terminal(self) -> bool:
        isatty = getattr(self.stdout, "isatty", None)
        return bool(isatty is not None and isatty())

    @property
    def terminal_columns(self) -> int | None:
        if not self.has_terminal:
            return None
        return shutil.get_terminal_size().columns

    @property
    def supports_ansi(self) -> bool:
        return self.has_terminal


@dataclass(frozen=True)
class OutputPreferences:
    wrap_text: bool
    show_color: bool = True
    explicit_wrap_column: int | None = None
    terminal_columns: int | None = None

    @classmethod
    def from_stdio(cls, stdio: Stdio) -> "OutputPreferences":
        return cls(
            wrap_text=stdio.has_terminal,
            show_color=stdio.supports_ansi,
            terminal_columns=stdio.terminal_columns,
        )

    @property
    def wrap_column(self) -> int:
        if self.explicit_wrap_column is not None:
            return self.explicit_wrap_column
        if self.terminal_columns is not None:
            return self.terminal_columns
        return DEFAULT_TERMINAL_COLUMNS


def wrap_text(text: str, *, column_width: int, should_wrap: bool) -> str:
    if not should_wrap or column_width <= 0:
        return text
    lines: list[str] = []
    for line in text.splitlines():
        if not line.strip():
            lines.append(line)
            continue
        indent = line[: len(line) - len(line.lstrip())]
        lines.extend(
            textwrap.wrap(
                line,
                width=column_width,
                subsequent_indent=indent,
                break_long_words=False,
                break_on_hyphens=False,
            )
        )
    return "\n".join(lines)


context.register_default(Stdio, Stdio)
context.register_default(
    OutputPreferences,
    lambda: OutputPreferences.from_stdio(context.get(Stdio)),
)
