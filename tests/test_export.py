import csv
import io

import pytest

from superprompt.export import CSV_COLUMNS, export_prompts_csv, flatten_prompt, format_export_date
from superprompt.errors import NotFoundError
from superprompt.models import AnswerCreate, PromptCreate, PromptFilters
from superprompt.taxonomy import PromptCategory, PromptSubcategory


def test_format_export_date():
    assert format_export_date("2025-03-07T09:05:00+00:00") == "07/03/2025 09:05"
    assert format_export_date(None) == ""


@pytest.mark.asyncio
async def test_flatten_prompt(store):
    bucket = await store.ensure_default_bucket("alice")
    prompt = await store.create_prompt(
        "alice",
        PromptCreate(
            original_idea="Plan a product launch",
            super_prompt="You are a launch strategist...",
            bucket_id=bucket.id,
            category=PromptCategory.MARKETING,
            subcategory=PromptSubcategory.SOCIAL_MEDIA,
        ),
    )

    row = flatten_prompt(prompt, "Personal", [])
    assert list(row) == CSV_COLUMNS
    assert row["category"] == "Marketing & Advertising"
    assert row["subcategory"] == "Social Media Marketing"
    assert row["optimized_prompt"] == "You are a launch strategist..."
    assert row["latest_playground_answer"] == ""


@pytest.mark.asyncio
async def test_export_prompts_csv(store):
    bucket = await store.ensure_default_bucket("alice")
    prompt = await store.create_prompt(
        "alice",
        PromptCreate(
            original_idea="Explain recursion, with examples",
            super_prompt="You are a CS teacher...",
            bucket_id=bucket.id,
            category=PromptCategory.EDUCATION,
        ),
    )
    await store.save_answer("alice", AnswerCreate(prompt_id=prompt.id, answer_text="Old answer"))
    await store.save_answer("alice", AnswerCreate(prompt_id=prompt.id, answer_text="New answer", notes="Good"))

    content = await export_prompts_csv(store, "alice", PromptFilters())
    rows = list(csv.DictReader(io.StringIO(content)))

    assert len(rows) == 1
    assert rows[0]["bucket_name"] == "Personal"
    assert rows[0]["original_idea"] == "Explain recursion, with examples"
    assert rows[0]["subcategory"] == ""
    assert rows[0]["latest_playground_answer"] == "New answer"
    assert rows[0]["latest_answer_notes"] == "Good"


@pytest.mark.asyncio
async def test_export_is_scoped_to_user(store):
    bucket = await store.ensure_default_bucket("alice")
    await store.create_prompt(
        "alice",
        PromptCreate(original_idea="idea", super_prompt="prompt", bucket_id=bucket.id),
    )

    content = await export_prompts_csv(store, "bob")
    assert content.strip() == ",".join(CSV_COLUMNS)


@pytest.mark.asyncio
async def test_export_single_prompt(store):
    bucket = await store.ensure_default_bucket("alice")
    first = await store.create_prompt(
        "alice",
        PromptCreate(original_idea="First idea", super_prompt="First prompt", bucket_id=bucket.id),
    )
    await store.create_prompt(
        "alice",
        PromptCreate(original_idea="Second idea", super_prompt="Second prompt", bucket_id=bucket.id),
    )

    content = await export_prompts_csv(store, "alice", prompt_id=first.id)
    rows = list(csv.DictReader(io.StringIO(content)))

    assert [r["original_idea"] for r in rows] == ["First idea"]
    with pytest.raises(NotFoundError):
        await export_prompts_csv(store, "bob", prompt_id=first.id)
