from superprompt.taxonomy import CATEGORIES, PromptCategory
from superprompt.templates import (
    PROMPT_TEMPLATES,
    TemplateDifficulty,
    filter_templates,
    get_template,
    get_templates_by_category,
    get_top_templates,
    search_templates,
)


def test_table_is_consistent():
    for template_id, template in PROMPT_TEMPLATES.items():
        assert template.id == template_id
        assert template.category in CATEGORIES
        assert 1 <= template.popularity <= 10
        assert template.tags
        assert template.prompt.strip()


def test_get_template():
    assert get_template("executive-summary").category == PromptCategory.BUSINESS_COMM
    assert get_template("missing") is None


def test_top_templates_sorted_by_popularity():
    top = get_top_templates(3)
    assert [t.id for t in top] == ["prd-generator", "professional-email", "seo-blog-post"]
    assert len(get_top_templates()) == 10
    assert len(get_top_templates(50)) == len(PROMPT_TEMPLATES)


def test_templates_by_category():
    ids = [t.id for t in get_templates_by_category(PromptCategory.SOFTWARE_DEV)]
    assert ids == ["prd-generator", "api-documentation", "code-review-analyzer"]
    assert get_templates_by_category(PromptCategory.PRODUCTIVITY) == []


def test_search_matches_title_description_and_tags():
    assert [t.id for t in search_templates("PRD")] == ["prd-generator"]
    assert "data-analysis-report" in [t.id for t in search_templates("business intelligence")]
    assert "interactive-tutorial" in [t.id for t in search_templates("step-by-step")]
    assert search_templates("blockchain") == []


def test_filter_templates():
    assert len(filter_templates()) == len(PROMPT_TEMPLATES)
    assert len(filter_templates(search="   ")) == len(PROMPT_TEMPLATES)

    advanced = filter_templates(difficulty=TemplateDifficulty.ADVANCED)
    assert [t.id for t in advanced] == ["code-review-analyzer", "data-analysis-report"]

    combined = filter_templates(PromptCategory.SOFTWARE_DEV, TemplateDifficulty.INTERMEDIATE, "api")
    assert [t.id for t in combined] == ["api-documentation"]
