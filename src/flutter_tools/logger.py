from __future__ import annotations

import typer

from flutter_tools.runtime import context
from flutter_tools.terminal import OutputPreferences, wrap_text


class Logger:
    """Status, warning, error and trace output for one invocation.

    Formatting reads the active ``OutputPreferences`` at print time, so a
    scope pushed after this logger was built still controls wrapping and
    colour.
    """

    def __init__(self, *, verbose: bool = False, quiet: bool = False) -> None:
        self.verbose = verbose
        self.quiet = quiet

    def _format(self, message: str) -> str:
        prefs = context.get(OutputPreferences)
        return wrap_text(
            message,
            column_width=prefs.wrap_column,
            should_wrap=prefs.wrap_text,
        )

    def _color(self) -> bool | None:
        # None lets click decide based on the stream; False strips styles.
        return None if context.get(OutputPreferences).show_color else False

    def print_status(self, message: str, *, emphasis: bool = False, important: bool = False) -> None:
        if self.quiet and not important:
            return
        typer.secho(self._format(message), bold=emphasis or None, color=self._color())

    def print_warning(self, message: str) -> None:
        typer.secho(
            self._format(message),
            err=True,
            fg=typer.colors.YELLOW,
            color=self._color(),
        )

    def print_error(self, message: str) -> None:
        typer.secho(
            self._format(message),
            err=True,
            fg=typer.colors.RED,
            color=self._color(),
        )

    def print_trace(self, message: str) -> None:
        if not self.verbose:
            return
        typer.secho(self._format(message), dim=True, color=self._color())


context.register_default(Logger, Logger)
