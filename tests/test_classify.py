import pytest

from superprompt.classify import build_classification_prompt, classify_by_keywords, classify_prompt
from superprompt.taxonomy import PromptCategory, PromptSubcategory


def test_keyword_fallback_blog_post():
    result = classify_by_keywords("Write a blog post about AI safety for policy makers")
    assert result.category == PromptCategory.CONTENT_WRITING
    assert result.subcategory == PromptSubcategory.BLOG_ARTICLES
    assert result.confidence == 0.6
    assert result.reasoning == "keyword_fallback"


def test_keyword_fallback_no_match():
    result = classify_by_keywords("lorem ipsum dolor sit amet")
    assert result.category == PromptCategory.GENERAL
    assert result.subcategory == PromptSubcategory.UNCATEGORIZED
    assert result.confidence == 0.3
    assert result.reasoning == "keyword_fallback_default"


def test_keyword_ties_keep_declaration_order():
    # One keyword each for software development and creative design
    result = classify_by_keywords("code and design")
    assert result.category == PromptCategory.SOFTWARE_DEV
    assert result.subcategory == PromptSubcategory.AI_ML_DEV


def test_keyword_scoring_is_case_insensitive():
    result = classify_by_keywords("IMPROVE OUR SEO RANKING AND BACKLINK PROFILE")
    assert result.category == PromptCategory.SEO_RESEARCH


def test_keyword_scoring_is_deterministic():
    text = "Plan a kanban workflow for my team's sprint"
    assert classify_by_keywords(text) == classify_by_keywords(text)


def test_classification_prompt_contains_idea_and_taxonomy():
    prompt = build_classification_prompt("Build a REST API")
    assert "Build a REST API" in prompt
    assert "software-development" in prompt
    assert '{"category":' in prompt


@pytest.mark.asyncio
async def test_empty_input(gateway, mock_llm):
    result = await classify_prompt("   ", gateway)
    assert result.category == PromptCategory.GENERAL
    assert result.subcategory == PromptSubcategory.UNCATEGORIZED
    assert result.confidence == 1.0
    mock_llm.ainvoke.assert_not_called()


@pytest.mark.asyncio
async def test_too_short_input(gateway, mock_llm):
    result = await classify_prompt("write", gateway)
    assert result.subcategory == PromptSubcategory.UNCATEGORIZED
    assert result.confidence == 0.5
    mock_llm.ainvoke.assert_not_called()


@pytest.mark.asyncio
async def test_ai_classification(gateway, reply_with, llm_configs):
    reply_with('{"category":"software-development","subcategory":"web-development"}')
    result = await classify_prompt("Build a React dashboard for my startup", gateway)

    assert result.category == PromptCategory.SOFTWARE_DEV
    assert result.subcategory == PromptSubcategory.WEB_DEV
    assert result.confidence == 0.85
    assert result.reasoning == "ai"
    assert llm_configs[0].temperature == 0.7
    assert llm_configs[0].max_output_tokens == 256


@pytest.mark.asyncio
async def test_ai_classification_fenced(gateway, reply_with):
    reply_with('```json\n{"category":"marketing-advertising","subcategory":"email-marketing"}\n```')
    result = await classify_prompt("Draft a newsletter for our spring sale", gateway)
    assert result.subcategory == PromptSubcategory.EMAIL_MARKETING


@pytest.mark.asyncio
async def test_mismatched_subcategory_is_corrected(gateway, reply_with):
    reply_with({"category": "software-development", "subcategory": "blog-articles"})
    result = await classify_prompt("Build a React dashboard for my startup", gateway)

    assert result.category == PromptCategory.SOFTWARE_DEV
    assert result.subcategory == PromptSubcategory.AI_ML_DEV
    assert result.confidence == 0.6
    assert result.reasoning == "ai_subcategory_corrected"


@pytest.mark.asyncio
async def test_missing_subcategory_is_corrected(gateway, reply_with):
    reply_with({"category": "education-learning"})
    result = await classify_prompt("Create a lesson on fractions", gateway)
    assert result.category == PromptCategory.EDUCATION
    assert result.subcategory == PromptSubcategory.COURSE_CONTENT
    assert result.reasoning == "ai_subcategory_corrected"


@pytest.mark.asyncio
async def test_unknown_category_uses_keywords(gateway, reply_with):
    reply_with({"category": "cooking", "subcategory": "recipes"})
    result = await classify_prompt("Write a blog post about AI safety for policy makers", gateway)
    assert result.category == PromptCategory.CONTENT_WRITING
    assert result.reasoning == "keyword_fallback"


@pytest.mark.asyncio
async def test_model_failure_uses_keywords(gateway, mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("boom")
    result = await classify_prompt("Write a blog post about AI safety for policy makers", gateway)
    assert result.category == PromptCategory.CONTENT_WRITING
    assert result.subcategory == PromptSubcategory.BLOG_ARTICLES
    assert result.confidence == 0.6


@pytest.mark.asyncio
async def test_unparseable_reply_uses_keywords(gateway, reply_with):
    reply_with("I think this is about writing.")
    result = await classify_prompt("lorem ipsum dolor sit amet", gateway)
    assert result.category == PromptCategory.GENERAL
    assert result.confidence == 0.3
