"""Per-mode analysis configuration.

Each AnalysisMode maps to one ModeConfig holding everything that differs
between modes: question bounds, sampling, the prompt template, the expected
output contract and the static fallback set. The orchestrator dispatches on
this table instead of branching on the mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .gateway import (
    ANALYSIS_MAX_TOKENS,
    BALANCED_TEMPERATURE,
    CREATIVE_TEMPERATURE,
    EXTENSIVE_MAX_TOKENS,
    GenerationConfig,
)
from .models import AnalysisMode, Question
from .prompts import (
    AI_MODE_ANALYSIS_PROMPT,
    EXTENSIVE_MODE_ANALYSIS_PROMPT,
    NORMAL_MODE_ANALYSIS_PROMPT,
)

BASE_FALLBACK_QUESTIONS: tuple[Question, ...] = (
    Question(
        question="Who is the target audience for this content?",
        suggestion="e.g., beginners, professionals, students, general public",
    ),
    Question(
        question="What tone and style should be used?",
        suggestion="e.g., formal, casual, technical, conversational",
    ),
    Question(
        question="What format should the output be in?",
        suggestion="e.g., essay, bullet points, step-by-step guide",
    ),
    Question(
        question="Are there any specific constraints or requirements?",
        suggestion="e.g., word count, specific topics to include/avoid",
    ),
)

EXTENSIVE_FALLBACK_QUESTIONS: tuple[Question, ...] = BASE_FALLBACK_QUESTIONS + (
    Question(
        question="What is the primary goal or objective?",
        suggestion="e.g., educate, persuade, inform, entertain",
    ),
    Question(
        question="What is the context or background for this request?",
        suggestion="e.g., project type, industry, use case",
    ),
    Question(
        question="Are there any examples or references to follow?",
        suggestion="e.g., similar content, style guides, templates",
    ),
    Question(
        question="What are the success criteria?",
        suggestion="e.g., engagement metrics, clarity, completeness",
    ),
)

# One answer per BASE_FALLBACK_QUESTIONS entry, same order
FALLBACK_AUTO_ANSWERS: Mapping[int, str] = MappingProxyType({
    0: "General audience with moderate familiarity with the topic",
    1: "Professional yet accessible tone, balancing expertise with clarity",
    2: "Well-structured format with clear sections and actionable points",
    3: "Comprehensive coverage while maintaining readability and engagement",
})


@dataclass(frozen=True)
class ModeConfig:
    """Everything the orchestrator needs to run one mode."""

    min_questions: int
    max_questions: int
    temperature: float
    max_output_tokens: int
    auto_answer: bool
    template: str | None
    fallback_questions: tuple[Question, ...] = ()
    fallback_auto_answers: Mapping[int, str] = field(default_factory=dict)

    def generation_config(self) -> GenerationConfig:
        """Sampling parameters for this mode's analysis call."""
        return GenerationConfig(temperature=self.temperature, max_output_tokens=self.max_output_tokens)


@dataclass(frozen=True)
class ModeMetadata:
    """Display information for a mode."""

    id: AnalysisMode
    name: str
    description: str
    icon: str
    estimated_time: str
    question_count: str
    badge: str


MODE_CONFIGS: Mapping[AnalysisMode, ModeConfig] = MappingProxyType({
    AnalysisMode.AI: ModeConfig(
        min_questions=4,
        max_questions=6,
        temperature=BALANCED_TEMPERATURE,
        max_output_tokens=ANALYSIS_MAX_TOKENS,
        auto_answer=True,
        template=AI_MODE_ANALYSIS_PROMPT,
        fallback_questions=BASE_FALLBACK_QUESTIONS,
        fallback_auto_answers=FALLBACK_AUTO_ANSWERS,
    ),
    AnalysisMode.NORMAL: ModeConfig(
        min_questions=4,
        max_questions=6,
        temperature=BALANCED_TEMPERATURE,
        max_output_tokens=ANALYSIS_MAX_TOKENS,
        auto_answer=False,
        template=NORMAL_MODE_ANALYSIS_PROMPT,
        fallback_questions=BASE_FALLBACK_QUESTIONS,
    ),
    AnalysisMode.EXTENSIVE: ModeConfig(
        min_questions=8,
        max_questions=12,
        temperature=CREATIVE_TEMPERATURE,
        max_output_tokens=EXTENSIVE_MAX_TOKENS,
        auto_answer=False,
        template=EXTENSIVE_MODE_ANALYSIS_PROMPT,
        fallback_questions=EXTENSIVE_FALLBACK_QUESTIONS,
    ),
    # Manual entry skips analysis entirely
    AnalysisMode.MANUAL: ModeConfig(
        min_questions=0,
        max_questions=0,
        temperature=0.0,
        max_output_tokens=1,
        auto_answer=False,
        template=None,
    ),
})

MODE_METADATA: Mapping[AnalysisMode, ModeMetadata] = MappingProxyType({
    AnalysisMode.AI: ModeMetadata(
        id=AnalysisMode.AI,
        name="AI Mode",
        description="Fully automated generation. AI analyzes, answers questions, and creates your super prompt in one step.",
        icon="Zap",
        estimated_time="~20-30 seconds",
        question_count="4-6 questions (automated)",
        badge="Fastest",
    ),
    AnalysisMode.NORMAL: ModeMetadata(
        id=AnalysisMode.NORMAL,
        name="Normal Mode",
        description="Balanced approach with AI-generated questions and your input. Ideal for most use cases.",
        icon="Brain",
        estimated_time="~2-3 minutes",
        question_count="4-6 questions",
        badge="Balanced",
    ),
    AnalysisMode.EXTENSIVE: ModeMetadata(
        id=AnalysisMode.EXTENSIVE,
        name="Extensive Mode",
        description="Deep analysis with comprehensive questions covering all aspects. Best for complex, critical prompts.",
        icon="Microscope",
        estimated_time="~5-7 minutes",
        question_count="8-12 questions",
        badge="Most Detailed",
    ),
    AnalysisMode.MANUAL: ModeMetadata(
        id=AnalysisMode.MANUAL,
        name="Manual Entry",
        description="Direct prompt entry without analysis workflow",
        icon="FileText",
        estimated_time="< 1 min",
        question_count="0",
        badge="MANUAL",
    ),
})


def get_mode_config(mode: AnalysisMode) -> ModeConfig:
    """Get configuration for a specific mode."""
    return MODE_CONFIGS[mode]
