"""Pydantic models for model payloads, core results and stored records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .taxonomy import PromptCategory, PromptSubcategory

T = TypeVar("T")


class AnalysisMode(str, Enum):
    """How deep the analysis goes and who answers the questions."""

    AI = "ai"  # Model generates and answers its own questions
    NORMAL = "normal"  # Model generates 4-6 questions, user answers
    EXTENSIVE = "extensive"  # Model generates 8-12 questions, user answers
    MANUAL = "manual"  # No analysis, user saves a prompt directly


class ApiModel(BaseModel):
    """Base for models that travel to clients as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """A value plus the reason it came from a fallback path, if it did."""

    value: T
    fallback_reason: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.fallback_reason is not None


# =============================================================================
# Model response payloads
# =============================================================================


class RawQuestion(BaseModel):
    """One question object as returned by the model."""

    question: str = ""
    suggestion: str = ""

    @field_validator("question", "suggestion", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> str:
        """Missing or null fields become empty strings; scalars are stringified."""
        if v is None:
            return ""
        if isinstance(v, (str, int, float, bool)):
            return str(v)
        raise ValueError("question fields must be text")


class AIAnalysisPayload(BaseModel):
    """Combined questions + self-answers object returned in AI mode."""

    model_config = ConfigDict(populate_by_name=True)

    questions: list[RawQuestion] = Field(default_factory=list)
    auto_answers: dict[int, str] = Field(default_factory=dict, alias="autoAnswers")

    @field_validator("questions", mode="before")
    @classmethod
    def null_questions(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("auto_answers", mode="before")
    @classmethod
    def coerce_answers(cls, v: Any) -> Any:
        if v is None:
            return {}
        if isinstance(v, list):
            # Some models answer with a plain list in question order
            v = dict(enumerate(v))
        if isinstance(v, dict):
            return {k: ("" if a is None else str(a)) for k, a in v.items()}
        return v


class ClassificationPayload(BaseModel):
    """Minimal {category, subcategory} object returned by the classifier."""

    category: str
    subcategory: str | None = None


# =============================================================================
# Core results
# =============================================================================


class Question(ApiModel):
    """A clarifying question with an example answer."""

    question: str
    suggestion: str = ""


class QAPair(ApiModel):
    """A question and the answer given to it (possibly blank)."""

    question: str
    answer: str = ""


class ClassificationResult(ApiModel):
    """Category assignment for a prompt."""

    category: PromptCategory
    subcategory: PromptSubcategory | None = None
    confidence: float = Field(..., ge=0.0, le=1.0)
    reasoning: str = Field(default="", description="Short tag naming the path that produced this result")


class AnalysisOutput(ApiModel):
    """Questions produced for an idea, plus self-answers in AI mode."""

    questions: list[Question]
    auto_answers: dict[int, str] | None = None
    mode: AnalysisMode

    def to_qa_pairs(self) -> list[QAPair]:
        """Pair each question with its auto-answer (blank when missing)."""
        answers = self.auto_answers or {}
        return [QAPair(question=q.question, answer=answers.get(i, "")) for i, q in enumerate(self.questions)]


class AIModeResult(ApiModel):
    """Everything produced by a one-shot AI mode run."""

    questions: list[Question]
    auto_answers: dict[int, str]
    super_prompt: str
    mode: AnalysisMode = AnalysisMode.AI


class PlaygroundResult(ApiModel):
    """Answer produced when testing a prompt against the model."""

    answer: str
    generation_time_ms: int


# =============================================================================
# Stored records
# =============================================================================


class Bucket(ApiModel):
    """A user-owned folder for saved prompts."""

    id: int
    user_id: str
    name: str
    color: str
    icon: str
    created_at: str
    updated_at: str
    prompt_count: int = 0
    last_used_at: str | None = None


class SavedPrompt(ApiModel):
    """A prompt saved by a user."""

    id: int
    user_id: str
    title: str
    original_idea: str
    super_prompt: str
    bucket_id: int
    category: PromptCategory
    subcategory: PromptSubcategory | None = None
    analysis_mode: AnalysisMode
    questions: list[Question] = Field(default_factory=list)
    answers: dict[int, str] = Field(default_factory=dict)
    created_at: str


class PromptCreate(ApiModel):
    """Fields accepted when saving a prompt."""

    original_idea: str
    super_prompt: str
    bucket_id: int
    title: str | None = None
    category: PromptCategory = PromptCategory.GENERAL
    subcategory: PromptSubcategory | None = None
    analysis_mode: AnalysisMode = AnalysisMode.NORMAL
    questions: list[Question] = Field(default_factory=list)
    answers: dict[int, str] = Field(default_factory=dict)


class PromptFilters(ApiModel):
    """Filters for listing saved prompts."""

    category: PromptCategory | None = None
    subcategory: PromptSubcategory | None = None
    bucket_id: int | None = None
    search: str | None = None


class PromptAnswer(ApiModel):
    """A playground answer saved against a prompt."""

    id: int
    prompt_id: int
    user_id: str
    answer_text: str
    notes: str | None = None
    tokens_used: int | None = None
    generation_time_ms: int | None = None
    created_at: str


class AnswerCreate(ApiModel):
    """Fields accepted when saving a playground answer."""

    prompt_id: int
    answer_text: str
    notes: str | None = None
    tokens_used: int | None = None
    generation_time_ms: int | None = None
