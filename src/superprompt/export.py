"""CSV export of saved prompts."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from .logging_config import get_logger
from .models import PromptAnswer, PromptFilters, SavedPrompt
from .store import AsyncStore
from .taxonomy import get_category, get_subcategory

logger = get_logger(__name__)


class ExportScope(str, Enum):
    """Which prompts an export covers."""

    PROMPT = "prompt"
    BUCKET = "bucket"
    ALL = "all"


CSV_COLUMNS = [
    "title",
    "created_at",
    "bucket_name",
    "category",
    "subcategory",
    "analysis_mode",
    "original_idea",
    "optimized_prompt",
    "latest_playground_answer",
    "latest_answer_notes",
    "latest_answer_date",
]


def format_export_date(value: str | None) -> str:
    """Render an ISO timestamp as DD/MM/YYYY HH:MM (blank when missing)."""
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime("%d/%m/%Y %H:%M")
    except ValueError:
        return value


def flatten_prompt(prompt: SavedPrompt, bucket_name: str, answers: Sequence[PromptAnswer]) -> dict[str, str]:
    """Turn a saved prompt into one CSV row.

    Args:
        prompt: Saved prompt
        bucket_name: Name of the prompt's bucket
        answers: Saved playground answers, newest first

    Returns:
        Row dict keyed by CSV_COLUMNS
    """
    latest = answers[0] if answers else None
    return {
        "title": prompt.title,
        "created_at": format_export_date(prompt.created_at),
        "bucket_name": bucket_name,
        "category": get_category(prompt.category).name,
        "subcategory": get_subcategory(prompt.subcategory).name if prompt.subcategory else "",
        "analysis_mode": prompt.analysis_mode.value,
        "original_idea": prompt.original_idea,
        "optimized_prompt": prompt.super_prompt,
        "latest_playground_answer": latest.answer_text if latest else "",
        "latest_answer_notes": (latest.notes or "") if latest else "",
        "latest_answer_date": format_export_date(latest.created_at) if latest else "",
    }


async def export_prompts_csv(
    store: AsyncStore,
    user_id: str,
    filters: PromptFilters | None = None,
    prompt_id: int | None = None,
) -> str:
    """Export a user's prompts as CSV text.

    Args:
        store: Connected store
        user_id: Owner of the prompts
        filters: Optional filters, same as the prompt list
        prompt_id: Export only this prompt (filters are ignored)

    Returns:
        CSV document with a header row

    Raises:
        NotFoundError: If prompt_id is given and the user does not own it
    """
    if prompt_id is not None:
        prompts = [await store.get_prompt(user_id, prompt_id)]
    else:
        prompts = await store.list_prompts(user_id, filters)
    bucket_names = {bucket.id: bucket.name for bucket in await store.list_buckets(user_id)}

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for prompt in prompts:
        answers = await store.list_answers(user_id, prompt.id)
        writer.writerow(flatten_prompt(prompt, bucket_names.get(prompt.bucket_id, ""), answers))

    logger.info("prompts_exported", user_id=user_id, count=len(prompts), prompt_id=prompt_id)
    return output.getvalue()
