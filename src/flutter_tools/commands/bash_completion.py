from __future__ import annotations

import typer

from flutter_tools.runner.completion import completion_script

app = typer.Typer(add_completion=False)


@app.command(
    "bash-completion",
    help="Output command line shell completion setup scripts.",
)
def bash_completion(
    ctx: typer.Context,
    shell: str = typer.Argument("bash", help="Shell to emit the script for (bash, zsh or fish)."),
) -> None:
    root = ctx.find_root()
    typer.echo(
        completion_script(root.command, prog_name=root.info_name or "flutter", shell=shell)
    )
