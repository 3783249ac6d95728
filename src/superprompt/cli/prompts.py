"""Prompt commands - classify, analyze, generate."""

from __future__ import annotations

import asyncio

import typer
from rich.panel import Panel
from rich.table import Table

from ..analyze import analyze_prompt
from ..classify import classify_prompt
from ..config import get_settings
from ..errors import DomainError, ModelGatewayError
from ..gateway import ModelGateway
from ..generate import run_ai_mode
from ..logging_config import configure_logging
from ..models import AnalysisMode
from ..taxonomy import get_category, get_subcategory
from . import app, console


def _gateway(log_level: str) -> ModelGateway:
    configure_logging(log_level, False)
    try:
        settings = get_settings()
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from e
    return ModelGateway.from_settings(settings)


@app.command()
def classify(
    text: str = typer.Argument(..., help="Prompt idea to classify."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
):
    """Assign a category and subcategory to a prompt idea."""
    gateway = _gateway(log_level)
    result = asyncio.run(classify_prompt(text, gateway))

    table = Table(title="Classification", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Category", f"{get_category(result.category).name} ({result.category.value})")
    if result.subcategory:
        table.add_row("Subcategory", f"{get_subcategory(result.subcategory).name} ({result.subcategory.value})")
    table.add_row("Confidence", f"{result.confidence:.2f}")
    table.add_row("Source", result.reasoning)

    console.print(table)


@app.command()
def analyze(
    text: str = typer.Argument(..., help="Prompt idea to analyze."),
    mode: AnalysisMode = typer.Option(
        AnalysisMode.NORMAL,
        "--mode",
        "-m",
        help="Analysis mode.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
):
    """Generate clarifying questions for a prompt idea."""
    if not text.strip():
        console.print("[red]Error:[/red] Prompt idea cannot be empty")
        raise typer.Exit(1)

    gateway = _gateway(log_level)
    output = asyncio.run(analyze_prompt(text, mode, gateway))

    if not output.questions:
        console.print("[yellow]No questions for this mode[/yellow]")
        return

    table = Table(title=f"Clarifying Questions ({mode.value})", show_header=True, header_style="bold")
    table.add_column("#", width=3)
    table.add_column("Question", width=50)
    table.add_column("Suggestion", width=40)
    if output.auto_answers is not None:
        table.add_column("Auto-answer", width=40)

    for i, q in enumerate(output.questions):
        row = [str(i + 1), q.question, q.suggestion]
        if output.auto_answers is not None:
            row.append(output.auto_answers.get(i, ""))
        table.add_row(*row)

    console.print(table)


@app.command()
def generate(
    text: str = typer.Argument(..., help="Prompt idea to expand."),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level."),
):
    """Analyze, self-answer and generate a super prompt in one step (AI mode)."""
    gateway = _gateway(log_level)

    try:
        result = asyncio.run(run_ai_mode(text, gateway))
    except (DomainError, ModelGatewayError) as e:
        console.print(f"[red]Generation failed:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(f"[dim]Answered {len(result.auto_answers)} of {len(result.questions)} questions automatically[/dim]")
    console.print(Panel(result.super_prompt, title="Super Prompt", expand=False))
