"""CLI subpackage for the super prompt builder.

Provides a modular CLI structure with commands organized by function.
"""

from __future__ import annotations

import typer
from rich.console import Console

# Create main app
app = typer.Typer(
    name="superprompt",
    help="Turn rough prompt ideas into structured super prompts.",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        from .. import __version__

        console.print(f"superprompt {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
):
    """Super Prompt Builder - classify, analyze and expand prompt ideas."""
    pass


# Import and register command modules
from . import db, export, prompts, web  # noqa: E402, F401
