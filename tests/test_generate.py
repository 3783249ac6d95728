import pytest

from superprompt.errors import DomainValidationError, ModelGatewayError
from superprompt.generate import build_generation_context, generate_super_prompt, run_ai_mode
from superprompt.models import AnalysisMode, QAPair
from superprompt.playground import run_playground
from superprompt.prompts import GENERATION_PROMPT

IDEA = "Write a blog post about AI safety for policy makers"


def test_generation_context_layout():
    context = build_generation_context(
        "Write a poem",
        [
            QAPair(question="Who is it for?", answer="My mother"),
            QAPair(question="What tone?", answer="   "),
            QAPair(question="How long?", answer="Short"),
        ],
    )

    assert context == (
        GENERATION_PROMPT
        + "Write a poem\n\n"
        + "Additional context from clarifying questions:\n"
        + "\n1. Who is it for?\nAnswer: My mother\n"
        + "\n3. How long?\nAnswer: Short\n"
        + "\n\nNow generate the comprehensive super prompt:"
    )


def test_generation_context_without_answers():
    context = build_generation_context("Write a poem", [])
    assert context.endswith(
        "Write a poem\n\nAdditional context from clarifying questions:\n\n\nNow generate the comprehensive super prompt:"
    )


@pytest.mark.asyncio
async def test_generate_super_prompt(gateway, reply_with, llm_configs):
    reply_with("  You are a senior policy analyst...  \n")
    result = await generate_super_prompt(IDEA, [QAPair(question="Audience?", answer="Regulators")], gateway)

    assert result == "You are a senior policy analyst..."
    assert llm_configs[0].temperature == 1.0
    assert llm_configs[0].max_output_tokens == 8192


@pytest.mark.asyncio
async def test_generate_rejects_blank_idea(gateway, mock_llm):
    with pytest.raises(DomainValidationError, match="Invalid initial prompt provided"):
        await generate_super_prompt("   ", [], gateway)
    mock_llm.ainvoke.assert_not_called()


@pytest.mark.asyncio
async def test_generate_empty_reply_raises(gateway, reply_with):
    reply_with("")
    with pytest.raises(ModelGatewayError, match="No response from AI model"):
        await generate_super_prompt(IDEA, [], gateway)


@pytest.mark.asyncio
async def test_generate_model_error_propagates(gateway, mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("down")
    with pytest.raises(ModelGatewayError):
        await generate_super_prompt(IDEA, [], gateway)


@pytest.mark.asyncio
async def test_run_ai_mode(gateway, reply_with, mock_llm):
    reply_with(
        {
            "questions": [{"question": f"Q{i}?", "suggestion": ""} for i in range(4)],
            "autoAnswers": {"0": "Regulators", "2": "Bullet points"},
        },
        "Final super prompt",
    )
    result = await run_ai_mode(IDEA, gateway)

    assert result.mode == AnalysisMode.AI
    assert result.super_prompt == "Final super prompt"
    assert result.auto_answers == {0: "Regulators", 2: "Bullet points"}
    assert len(result.questions) == 4

    generation_prompt = mock_llm.ainvoke.await_args_list[1].args[0]
    assert "\n1. Q0?\nAnswer: Regulators\n" in generation_prompt
    assert "\n3. Q2?\nAnswer: Bullet points\n" in generation_prompt
    assert "Q1?" not in generation_prompt


@pytest.mark.asyncio
async def test_run_ai_mode_uses_fallback_answers(gateway, reply_with):
    reply_with("not json", "Final super prompt")
    result = await run_ai_mode(IDEA, gateway)
    assert len(result.questions) == 4
    assert len(result.auto_answers) == 4
    assert result.super_prompt == "Final super prompt"


@pytest.mark.asyncio
async def test_playground(gateway, reply_with, llm_configs):
    reply_with("Here is the answer")
    result = await run_playground("  Explain quantum computing  ", gateway)
    assert result.answer == "Here is the answer"
    assert result.generation_time_ms >= 0
    assert llm_configs[0].max_output_tokens == 8192


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "   ", "x" * 10_001])
async def test_playground_rejects_invalid_text(gateway, mock_llm, text):
    with pytest.raises(DomainValidationError):
        await run_playground(text, gateway)
    mock_llm.ainvoke.assert_not_called()
