"""
LSP (Language Server Protocol) CLI commands.

Commands for running the prisma-ls server and checking its dependencies.
"""

import logging
import os

import typer

lsp_app = typer.Typer(
    help="Language Server Protocol (LSP) commands.",
    no_args_is_help=True,
)


def configure_logging(log_level: str) -> None:
    """Set the root log level and keep pygls' own registration chatter quiet."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("pygls.feature_manager").setLevel(logging.ERROR)
    logging.getLogger("pygls").setLevel(logging.ERROR)


@lsp_app.command("run")
def lsp_run(
    tcp: bool = typer.Option(
        False,
        "--tcp",
        help="Use TCP transport (for debugging)",
    ),
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        help="TCP host (only used with --tcp)",
    ),
    port: int = typer.Option(
        2087,
        "--port",
        help="TCP port (only used with --tcp)",
    ),
    log_level: str = typer.Option(
        os.getenv("LOG_LEVEL", "INFO"),
        "--log-level",
        help="Logging level (defaults to $LOG_LEVEL or INFO)",
    ),
) -> None:
    """
    Start the prisma-ls server.

    By default uses stdio transport for editor integration.
    Use --tcp --port for debugging with a TCP connection.
    """
    configure_logging(log_level)
    try:
        from prisma_ls.lsp.server import server
    except ImportError as e:
        typer.echo(
            f"Error: LSP dependencies not installed: {e}\nInstall with: pip install prisma-ls",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        if tcp:
            typer.echo(f"Starting prisma-ls on TCP {host}:{port}...", err=True)
            server.start_tcp(host, port)
        else:
            server.start_io()
    except KeyboardInterrupt:
        typer.echo("\nLSP server stopped.", err=True)
    except Exception as e:
        typer.echo(f"Error starting LSP server: {e}", err=True)
        raise typer.Exit(code=1)


@lsp_app.command("check")
def lsp_check() -> None:
    """
    Verify LSP dependencies are installed and show version info.
    """
    errors = []

    try:
        import pygls

        pygls_version = getattr(pygls, "__version__", "unknown")
        typer.echo(f"pygls:        {pygls_version}")
    except ImportError:
        errors.append("pygls")

    try:
        import lsprotocol

        lsprotocol_version = getattr(lsprotocol, "__version__", "unknown")
        typer.echo(f"lsprotocol:   {lsprotocol_version}")
    except ImportError:
        errors.append("lsprotocol")

    if errors:
        typer.echo(
            f"\nMissing dependencies: {', '.join(errors)}\nInstall with: pip install prisma-ls",
            err=True,
        )
        raise typer.Exit(code=1)

    typer.echo("\nAll LSP dependencies installed.")
