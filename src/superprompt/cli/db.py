"""Database commands - init-db, stats."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from ..config import get_settings
from ..store import AsyncStore
from ..taxonomy import PromptCategory, get_category
from . import app, console


@app.command("init-db")
def init_db(
    db_path: str | None = typer.Option(
        None,
        "--db",
        help="Path to database file.",
    ),
):
    """Initialize the database schema.

    Creates the SQLite database and tables if they don't exist.
    """
    settings = get_settings()
    path = db_path or settings.db_path

    async def _init():
        store = AsyncStore(path)
        await store.connect()
        await store.init_db()
        await store.close()

    asyncio.run(_init())
    console.print(f"[green]✓ Database initialized:[/green] {path}")


@app.command()
def stats(
    user: str = typer.Option(
        ...,
        "--user",
        "-u",
        help="User whose prompts to count.",
    ),
    db_path: str | None = typer.Option(
        None,
        "--db",
        help="Path to database file.",
    ),
):
    """Show saved prompt counts per category."""
    settings = get_settings()
    path = db_path or settings.db_path

    async def _stats():
        store = AsyncStore(path)
        await store.connect()
        await store.init_db()
        stats = await store.get_category_stats(user)
        await store.close()
        return stats

    stats = asyncio.run(_stats())

    if not stats:
        console.print("[yellow]No saved prompts found[/yellow]")
        return

    table = Table(title="Prompts by Category", show_header=True)
    table.add_column("Category", style="bold")
    table.add_column("Prompts", justify="right")
    table.add_column("Share", justify="right")
    table.add_column("Last Used")

    for row in stats:
        table.add_row(
            get_category(PromptCategory(row["category"])).name,
            str(row["count"]),
            f"{row['percentage']:.1f}%",
            (row["last_used"] or "")[:10],
        )

    console.print(table)
