"""Super prompt generation.

Unlike classification and analysis there is no safe substitute for the final
prompt, so generation failures always reach the caller.
"""

from __future__ import annotations

from typing import Sequence

from .analyze import analyze_prompt
from .errors import DomainValidationError
from .gateway import GENERATION_MAX_TOKENS, ModelGateway, creative_config
from .logging_config import get_logger
from .models import AIModeResult, AnalysisMode, QAPair
from .prompts import GENERATION_PROMPT

logger = get_logger(__name__)


def build_generation_context(idea: str, qa_pairs: Sequence[QAPair]) -> str:
    """Assemble the generation prompt.

    Pairs with a blank answer are skipped; numbering keeps each pair's
    1-based position in the full list.
    """
    context = GENERATION_PROMPT + idea + "\n\n"
    context += "Additional context from clarifying questions:\n"

    for index, qa in enumerate(qa_pairs, start=1):
        if qa.answer and qa.answer.strip():
            context += f"\n{index}. {qa.question}\n"
            context += f"Answer: {qa.answer}\n"

    context += "\n\nNow generate the comprehensive super prompt:"
    return context


async def generate_super_prompt(idea: str, qa_pairs: Sequence[QAPair], gateway: ModelGateway) -> str:
    """Turn an idea plus answered questions into a super prompt.

    Args:
        idea: The user's original idea
        qa_pairs: Clarifying questions and answers (may be empty)
        gateway: Model gateway

    Returns:
        The super prompt, trimmed

    Raises:
        DomainValidationError: If the idea is blank
        ModelGatewayError: If the model call fails or returns no text
    """
    if not idea or not idea.strip():
        raise DomainValidationError("Invalid initial prompt provided")

    answered = sum(1 for qa in qa_pairs if qa.answer and qa.answer.strip())
    logger.info("generation_started", idea_chars=len(idea), questions=len(qa_pairs), answered=answered)

    text = await gateway.call(
        build_generation_context(idea, qa_pairs),
        creative_config(GENERATION_MAX_TOKENS),
    )
    super_prompt = text.strip()

    logger.info("super_prompt_generated", chars=len(super_prompt))
    return super_prompt


async def run_ai_mode(idea: str, gateway: ModelGateway) -> AIModeResult:
    """Analyze, self-answer and generate in one go (AI mode).

    Analysis falls back to static questions and answers if needed; the
    generation step can still fail and raises like generate_super_prompt.
    """
    if not idea or not idea.strip():
        raise DomainValidationError("Invalid prompt provided")

    analysis = await analyze_prompt(idea, AnalysisMode.AI, gateway)
    super_prompt = await generate_super_prompt(idea, analysis.to_qa_pairs(), gateway)

    return AIModeResult(
        questions=analysis.questions,
        auto_answers=analysis.auto_answers or {},
        super_prompt=super_prompt,
    )
