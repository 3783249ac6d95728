"""Run a saved prompt against the model to see what it produces."""

from __future__ import annotations

import time

from .errors import DomainValidationError
from .gateway import PLAYGROUND_MAX_TOKENS, ModelGateway, creative_config
from .logging_config import get_logger
from .models import PlaygroundResult

logger = get_logger(__name__)

MAX_PLAYGROUND_PROMPT_CHARS = 10_000


async def run_playground(prompt_text: str, gateway: ModelGateway) -> PlaygroundResult:
    """Execute a prompt and time the answer.

    Raises:
        DomainValidationError: If the prompt is blank or too long
        ModelGatewayError: If the model call fails or returns no text
    """
    trimmed = (prompt_text or "").strip()
    if not trimmed:
        raise DomainValidationError("Prompt text cannot be empty")
    if len(trimmed) > MAX_PLAYGROUND_PROMPT_CHARS:
        raise DomainValidationError(
            f"Prompt text exceeds maximum length of {MAX_PLAYGROUND_PROMPT_CHARS:,} characters"
        )

    started = time.perf_counter()
    answer = await gateway.call(trimmed, creative_config(PLAYGROUND_MAX_TOKENS))
    elapsed_ms = int((time.perf_counter() - started) * 1000)

    logger.info("playground_answer_generated", chars=len(answer), generation_time_ms=elapsed_ms)
    return PlaygroundResult(answer=answer, generation_time_ms=elapsed_ms)
