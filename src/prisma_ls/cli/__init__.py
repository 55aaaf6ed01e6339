"""
prisma-ls CLI package.

- lsp.py: language server commands
- schema.py: schema inspection commands
"""

import platform

import typer

from prisma_ls._version import get_version
from prisma_ls.cli.lsp import lsp_app
from prisma_ls.cli.schema import info_command, outline_command

app = typer.Typer(
    help="prisma-ls - text scanner and language server for Prisma schemas",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"prisma-ls {get_version()}")
        typer.echo(f"Python {platform.python_version()} ({platform.python_implementation()})")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
) -> None:
    """prisma-ls CLI main callback for global options."""
    pass


app.add_typer(lsp_app, name="lsp")
app.command(name="outline")(outline_command)
app.command(name="info")(info_command)


def main() -> None:
    app()


__all__ = ["app", "main", "lsp_app", "version_callback"]
