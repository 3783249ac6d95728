"""Model Gateway: the single entry point to the chat model.

Every classification, analysis, generation and playground call goes through
`ModelGateway.call`. The gateway applies sampling parameters, retries
transient transport errors, and turns every failure (including an empty
reply) into `ModelGatewayError`. It never looks at what the text says.
"""

from __future__ import annotations

from typing import Any, Callable

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, ConfigDict, Field

from .config import Settings
from .errors import ModelGatewayError
from .logging_config import get_logger
from .retry_policy import llm_retry

logger = get_logger(__name__)

# Temperatures by use case
CREATIVE_TEMPERATURE = 1.0  # Generation, playground, extensive analysis
BALANCED_TEMPERATURE = 0.9  # Normal and AI mode analysis
ANALYTICAL_TEMPERATURE = 0.7  # Classification

# Output caps by operation
CLASSIFICATION_MAX_TOKENS = 256
ANALYSIS_MAX_TOKENS = 4096
EXTENSIVE_MAX_TOKENS = 6144
GENERATION_MAX_TOKENS = 8192
PLAYGROUND_MAX_TOKENS = 8192

DEFAULT_TOP_P = 0.95
DEFAULT_TOP_K = 40

EMPTY_RESPONSE_MESSAGE = "No response from AI model"


class GenerationConfig(BaseModel):
    """Sampling parameters for one model call."""

    model_config = ConfigDict(frozen=True)

    temperature: float = Field(..., ge=0.0, le=2.0)
    top_p: float = Field(default=DEFAULT_TOP_P, ge=0.0, le=1.0)
    top_k: int = Field(default=DEFAULT_TOP_K, ge=1)
    max_output_tokens: int = Field(..., ge=1)


def creative_config(max_tokens: int = GENERATION_MAX_TOKENS) -> GenerationConfig:
    """Config for creative outputs (generation, playground)."""
    return GenerationConfig(temperature=CREATIVE_TEMPERATURE, max_output_tokens=max_tokens)


def balanced_config(max_tokens: int = ANALYSIS_MAX_TOKENS) -> GenerationConfig:
    """Config for question generation."""
    return GenerationConfig(temperature=BALANCED_TEMPERATURE, max_output_tokens=max_tokens)


def analytical_config(max_tokens: int = CLASSIFICATION_MAX_TOKENS) -> GenerationConfig:
    """Config for short, consistent outputs (classification)."""
    return GenerationConfig(temperature=ANALYTICAL_TEMPERATURE, max_output_tokens=max_tokens)


PRESETS: dict[str, GenerationConfig] = {
    "creative": creative_config(),
    "balanced": balanced_config(),
    "analytical": analytical_config(),
}


LLMFactory = Callable[[GenerationConfig], BaseChatModel]


def build_chat_model(settings: Settings, config: GenerationConfig) -> BaseChatModel:
    """Build a LangChain chat model for the configured provider.

    Args:
        settings: Application settings (provider, model name, API keys)
        config: Sampling parameters for this call

    Returns:
        Chat model with the sampling parameters applied
    """
    if settings.llm_provider == "google":
        return ChatGoogleGenerativeAI(
            model=settings.gemini_model,
            google_api_key=settings.google_api_key or None,
            temperature=config.temperature,
            top_p=config.top_p,
            top_k=config.top_k,
            max_output_tokens=config.max_output_tokens,
        )

    # OpenAI has no top-k parameter
    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key or None,
        temperature=config.temperature,
        top_p=config.top_p,
        max_tokens=config.max_output_tokens,
    )


def _message_text(response: Any) -> str:
    """Extract plain text from a LangChain message (or a bare string)."""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return "" if content is None else str(content)


class ModelGateway:
    """Uniform, fallible text-in/text-out access to the chat model."""

    def __init__(self, llm_factory: LLMFactory, top_p: float = DEFAULT_TOP_P, top_k: int = DEFAULT_TOP_K):
        """Initialize the gateway.

        Args:
            llm_factory: Builds a chat model for a given GenerationConfig
            top_p: Base nucleus-sampling width applied to every call
            top_k: Base token-diversity cap applied to every call
        """
        self._llm_factory = llm_factory
        self.top_p = top_p
        self.top_k = top_k

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelGateway":
        """Create a gateway backed by the configured provider."""
        return cls(
            lambda config: build_chat_model(settings, config),
            top_p=settings.top_p,
            top_k=settings.top_k,
        )

    @llm_retry
    async def _invoke(self, llm: BaseChatModel, prompt_text: str) -> Any:
        return await llm.ainvoke(prompt_text)

    async def call(self, prompt_text: str, config: GenerationConfig) -> str:
        """Send one prompt to the model and return its text.

        Args:
            prompt_text: Full prompt
            config: Sampling parameters (base top_p/top_k are applied on top)

        Returns:
            Non-empty response text (not stripped)

        Raises:
            ModelGatewayError: On transport/provider failure or empty text
        """
        effective = config.model_copy(update={"top_p": self.top_p, "top_k": self.top_k})
        logger.debug(
            "model_call_started",
            prompt_chars=len(prompt_text),
            temperature=effective.temperature,
            max_output_tokens=effective.max_output_tokens,
        )

        try:
            llm = self._llm_factory(effective)
            response = await self._invoke(llm, prompt_text)
        except Exception as e:
            logger.error("model_call_failed", error=str(e), error_type=type(e).__name__)
            raise ModelGatewayError(f"Model call failed: {e}") from e

        text = _message_text(response)
        if not text.strip():
            logger.warning("model_call_empty")
            raise ModelGatewayError(EMPTY_RESPONSE_MESSAGE)

        logger.debug("model_call_completed", response_chars=len(text))
        return text
