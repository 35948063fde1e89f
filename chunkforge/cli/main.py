"""ChunkForge CLI - Main application entry point.

Registers the commands; each lives in ``chunkforge.cli.commands``.
"""

from __future__ import annotations

import typer

from chunkforge.cli.commands import (
    chunk_command,
    classify_command,
    clean_command,
    contact_command,
    stats_command,
)
from chunkforge.cli.console import set_verbose_mode
from chunkforge.core.logging import configure_logging

# Create main Typer application
app = typer.Typer(
    name="chunkforge",
    help="Semantic chunking for resumes and reports",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from chunkforge import __version__

        typer.echo(f"ChunkForge version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", help="Debug logging and full tracebacks"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """ChunkForge - Clean, classify and chunk extracted document text."""
    if verbose:
        set_verbose_mode(True)
        configure_logging(level="DEBUG")

    # If no command provided, show help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("chunk", rich_help_panel="Core")(chunk_command)
app.command("clean", rich_help_panel="Core")(clean_command)
app.command("classify", rich_help_panel="Inspect")(classify_command)
app.command("stats", rich_help_panel="Inspect")(stats_command)
app.command("contact", rich_help_panel="Resumes")(contact_command)


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
