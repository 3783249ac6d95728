"""Two-tier prompt classification.

The model is asked for a {category, subcategory} pair first. If the call
fails, the reply is unusable, or the category is not in the taxonomy, a
deterministic keyword scorer takes over. Classification never raises.
"""

from __future__ import annotations

from .errors import ModelGatewayError, ResponseParseError
from .gateway import ModelGateway, analytical_config
from .logging_config import get_logger
from .models import ClassificationPayload, ClassificationResult, Outcome
from .parsing import parse_response
from .prompts import CLASSIFICATION_PROMPT
from .taxonomy import (
    CATEGORIES,
    PromptCategory,
    PromptSubcategory,
    first_subcategory,
    format_taxonomy_for_prompt,
    get_subcategory,
    parse_category,
    parse_subcategory,
    subcategories_for,
)

logger = get_logger(__name__)

MIN_CLASSIFIABLE_LENGTH = 10

AI_CONFIDENCE = 0.85
CORRECTED_CONFIDENCE = 0.6
KEYWORD_MATCH_CONFIDENCE = 0.6
KEYWORD_MISS_CONFIDENCE = 0.3


def _uncategorized(confidence: float, reasoning: str) -> ClassificationResult:
    return ClassificationResult(
        category=PromptCategory.GENERAL,
        subcategory=PromptSubcategory.UNCATEGORIZED,
        confidence=confidence,
        reasoning=reasoning,
    )


def _keyword_score(text: str, keywords: tuple[str, ...]) -> int:
    """Number of keywords that appear in the (lowercased) text."""
    return sum(1 for keyword in keywords if keyword.lower() in text)


def classify_by_keywords(text: str) -> ClassificationResult:
    """Classify by counting taxonomy keywords found in the text.

    A category or subcategory only wins with a strictly higher score, so ties
    go to whichever was declared first. General is the baseline with score 0.

    Args:
        text: Idea text

    Returns:
        ClassificationResult with confidence 0.6 if any category keyword
        matched, otherwise general-other/uncategorized with 0.3
    """
    lowered = text.lower()

    best_category = PromptCategory.GENERAL
    best_score = 0
    for category in CATEGORIES.values():
        score = _keyword_score(lowered, category.keywords)
        if score > best_score:
            best_category, best_score = category.id, score

    if best_score == 0:
        return _uncategorized(KEYWORD_MISS_CONFIDENCE, "keyword_fallback_default")

    best_subcategory = first_subcategory(best_category)
    best_sub_score = 0
    for sub in subcategories_for(best_category):
        score = _keyword_score(lowered, sub.keywords)
        if score > best_sub_score:
            best_subcategory, best_sub_score = sub.id, score

    return ClassificationResult(
        category=best_category,
        subcategory=best_subcategory,
        confidence=KEYWORD_MATCH_CONFIDENCE,
        reasoning="keyword_fallback",
    )


def build_classification_prompt(text: str) -> str:
    """Fill the classification template with the taxonomy and the idea."""
    return CLASSIFICATION_PROMPT.format(taxonomy=format_taxonomy_for_prompt(), idea=text)


async def _classify_with_model(text: str, gateway: ModelGateway) -> Outcome[ClassificationResult]:
    """AI path; degrades to keyword scoring on any failure."""
    try:
        raw = await gateway.call(build_classification_prompt(text), analytical_config())
        payload = parse_response(raw, ClassificationPayload)
    except ModelGatewayError as e:
        return Outcome(classify_by_keywords(text), f"model_error: {e}")
    except ResponseParseError as e:
        return Outcome(classify_by_keywords(text), f"parse_{e.kind.value}: {e}")
    except Exception as e:
        logger.exception("classification_unexpected_error")
        return Outcome(classify_by_keywords(text), f"unexpected: {e}")

    category = parse_category(payload.category)
    if category is None:
        return Outcome(classify_by_keywords(text), f"unknown_category: {payload.category!r}")

    subcategory = parse_subcategory(payload.subcategory)
    if subcategory is not None and get_subcategory(subcategory).parent == category:
        return Outcome(
            ClassificationResult(
                category=category,
                subcategory=subcategory,
                confidence=AI_CONFIDENCE,
                reasoning="ai",
            )
        )

    # Category is trustworthy, subcategory is not: use the category's default
    logger.info(
        "classification_subcategory_corrected",
        category=category.value,
        returned_subcategory=payload.subcategory,
    )
    return Outcome(
        ClassificationResult(
            category=category,
            subcategory=first_subcategory(category),
            confidence=CORRECTED_CONFIDENCE,
            reasoning="ai_subcategory_corrected",
        )
    )


async def classify_prompt(text: str, gateway: ModelGateway) -> ClassificationResult:
    """Assign a category and subcategory to an idea.

    Args:
        text: Idea text
        gateway: Model gateway for the AI path

    Returns:
        Best-effort ClassificationResult; never raises
    """
    stripped = (text or "").strip()
    if not stripped:
        return _uncategorized(1.0, "empty_input")
    if len(stripped) < MIN_CLASSIFIABLE_LENGTH:
        return _uncategorized(0.5, "too_short")

    outcome = await _classify_with_model(stripped, gateway)
    result = outcome.value

    if outcome.is_fallback:
        logger.warning(
            "classification_fallback",
            reason=outcome.fallback_reason,
            category=result.category.value,
            subcategory=result.subcategory.value if result.subcategory else None,
        )
    else:
        logger.info(
            "prompt_classified",
            category=result.category.value,
            subcategory=result.subcategory.value if result.subcategory else None,
            confidence=result.confidence,
            reasoning=result.reasoning,
        )
    return result
