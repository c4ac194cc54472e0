from __future__ import annotations

import typer

from flutter_tools.logger import Logger
from flutter_tools.runtime import context
from flutter_tools.version import FlutterVersion

app = typer.Typer(add_completion=False)


@app.command("upgrade", help="Upgrade your copy of Flutter.")
def upgrade() -> None:
    version = context.get(FlutterVersion)
    logger = context.get(Logger)
    logger.print_status(f"Upgrading Flutter from {version.flutter_root}...")
    version.fetch_tags_and_update()
    logger.print_status("")
    logger.print_status(str(version), important=True)
