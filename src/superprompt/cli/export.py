"""Export command - write saved prompts to CSV."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer

from ..config import get_settings
from ..errors import NotFoundError
from ..export import export_prompts_csv
from ..models import PromptFilters
from ..store import AsyncStore
from ..taxonomy import PromptCategory
from . import app, console


@app.command()
def export(
    user: str = typer.Option(
        ...,
        "--user",
        "-u",
        help="User whose prompts to export.",
    ),
    output: str = typer.Option(
        "super-prompts.csv",
        "--output",
        "-o",
        help="Output CSV file path.",
    ),
    prompt_id: int | None = typer.Option(
        None,
        "--prompt",
        "-p",
        help="Export only this prompt.",
    ),
    category: PromptCategory | None = typer.Option(
        None,
        "--category",
        "-c",
        help="Only export prompts in this category.",
    ),
    search: str | None = typer.Option(
        None,
        "--search",
        "-s",
        help="Only export prompts matching this text.",
    ),
    db_path: str | None = typer.Option(
        None,
        "--db",
        help="Path to database file.",
    ),
):
    """Export saved prompts to a CSV file."""
    settings = get_settings()
    path = db_path or settings.db_path

    async def _export():
        store = AsyncStore(path)
        await store.connect()
        await store.init_db()
        try:
            return await export_prompts_csv(
                store, user, PromptFilters(category=category, search=search), prompt_id=prompt_id
            )
        finally:
            await store.close()

    try:
        content = asyncio.run(_export())
    except NotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    Path(output).write_text(content, encoding="utf-8")

    console.print(f"[green]✓ Exported to:[/green] {output}")
