"""Clarifying-question analysis for an idea.

One model call per analysis. The mode's config picks the template, the
output contract and the fallback set. Analysis never raises: when the model
fails or returns something unusable, the mode's static questions are used so
the workflow can continue.
"""

from __future__ import annotations

from .errors import ModelGatewayError, ResponseParseError
from .gateway import ModelGateway
from .logging_config import get_logger
from .models import AIAnalysisPayload, AnalysisMode, AnalysisOutput, Outcome, Question, RawQuestion
from .modes import ModeConfig, get_mode_config
from .parsing import parse_response

logger = get_logger(__name__)


class AnalysisContractError(ValueError):
    """The model reply parsed but has too few questions or no self-answers."""

    pass


def fallback_output(mode: AnalysisMode) -> AnalysisOutput:
    """Static analysis result for a mode."""
    config = get_mode_config(mode)
    return AnalysisOutput(
        questions=[q.model_copy() for q in config.fallback_questions],
        auto_answers=dict(config.fallback_auto_answers) if config.auto_answer else None,
        mode=mode,
    )


def clamp_questions(questions: list[RawQuestion], config: ModeConfig) -> list[Question]:
    """Enforce the mode's question bounds.

    Results above the maximum are truncated (the model orders questions by
    importance); results below the minimum are rejected.

    Raises:
        AnalysisContractError: If there are fewer than config.min_questions
    """
    if len(questions) < config.min_questions:
        raise AnalysisContractError(
            f"Expected at least {config.min_questions} questions, got {len(questions)}"
        )
    return [
        Question(question=q.question, suggestion=q.suggestion)
        for q in questions[: config.max_questions]
    ]


def _parse_questions(raw: str, mode: AnalysisMode, config: ModeConfig) -> AnalysisOutput:
    """Apply the mode's output contract to the model text."""
    if config.auto_answer:
        payload: AIAnalysisPayload = parse_response(raw, AIAnalysisPayload)
        if not payload.questions:
            raise AnalysisContractError("No questions in response")
        questions = clamp_questions(payload.questions, config)
        auto_answers = {
            index: answer
            for index, answer in sorted(payload.auto_answers.items())
            if 0 <= index < len(questions) and answer.strip()
        }
        if not auto_answers:
            raise AnalysisContractError("No usable auto-answers in response")
        return AnalysisOutput(questions=questions, auto_answers=auto_answers, mode=mode)

    raw_questions: list[RawQuestion] = parse_response(raw, list[RawQuestion])
    return AnalysisOutput(questions=clamp_questions(raw_questions, config), mode=mode)


async def _analyze(text: str, mode: AnalysisMode, gateway: ModelGateway) -> Outcome[AnalysisOutput]:
    config = get_mode_config(mode)

    try:
        raw = await gateway.call(config.template + text, config.generation_config())
        return Outcome(_parse_questions(raw, mode, config))
    except ModelGatewayError as e:
        reason = f"model_error: {e}"
    except ResponseParseError as e:
        reason = f"parse_{e.kind.value}: {e}"
    except AnalysisContractError as e:
        reason = f"contract: {e}"
    except Exception as e:
        logger.exception("analysis_unexpected_error", mode=mode.value)
        reason = f"unexpected: {e}"

    return Outcome(fallback_output(mode), reason)


async def analyze_prompt(text: str, mode: AnalysisMode, gateway: ModelGateway) -> AnalysisOutput:
    """Produce clarifying questions (and self-answers in AI mode) for an idea.

    Args:
        text: The user's idea
        mode: Analysis mode; MANUAL returns no questions without calling the model
        gateway: Model gateway

    Returns:
        AnalysisOutput whose question count lies within the mode's bounds;
        never raises
    """
    config = get_mode_config(mode)
    if config.template is None:
        return AnalysisOutput(questions=[], auto_answers=None, mode=mode)

    outcome = await _analyze(text, mode, gateway)
    output = outcome.value

    if outcome.is_fallback:
        logger.warning("analysis_fallback", mode=mode.value, reason=outcome.fallback_reason)
    else:
        logger.info(
            "prompt_analyzed",
            mode=mode.value,
            questions=len(output.questions),
            auto_answers=len(output.auto_answers) if output.auto_answers is not None else None,
        )
    return output
