import pytest
from langchain_core.messages import AIMessage

from superprompt.errors import ModelGatewayError
from superprompt.gateway import (
    PRESETS,
    ModelGateway,
    analytical_config,
    balanced_config,
    creative_config,
)


def test_presets():
    assert creative_config().temperature == 1.0
    assert creative_config().max_output_tokens == 8192
    assert balanced_config().temperature == 0.9
    assert analytical_config().temperature == 0.7
    assert analytical_config().max_output_tokens == 256
    assert set(PRESETS) == {"creative", "balanced", "analytical"}


@pytest.mark.asyncio
async def test_call_returns_text(gateway, reply_with, mock_llm):
    reply_with("Hello world")
    text = await gateway.call("Say hello", creative_config())
    assert text == "Hello world"
    mock_llm.ainvoke.assert_awaited_once_with("Say hello")


@pytest.mark.asyncio
async def test_call_applies_base_sampling(mock_llm, reply_with):
    seen = []

    def factory(config):
        seen.append(config)
        return mock_llm

    reply_with("ok")
    gateway = ModelGateway(factory, top_p=0.5, top_k=10)
    await gateway.call("prompt", analytical_config(128))

    assert seen[0].temperature == 0.7
    assert seen[0].max_output_tokens == 128
    assert seen[0].top_p == 0.5
    assert seen[0].top_k == 10


@pytest.mark.asyncio
async def test_call_flattens_content_parts(gateway, mock_llm):
    mock_llm.ainvoke.return_value = AIMessage(
        content=[{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}]
    )
    assert await gateway.call("prompt", creative_config()) == "Hello there"


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["", "   \n  "])
async def test_empty_response_raises(gateway, mock_llm, content):
    mock_llm.ainvoke.return_value = AIMessage(content=content)
    with pytest.raises(ModelGatewayError, match="No response from AI model"):
        await gateway.call("prompt", creative_config())


@pytest.mark.asyncio
async def test_provider_error_is_wrapped(gateway, mock_llm):
    mock_llm.ainvoke.side_effect = RuntimeError("quota exceeded")
    with pytest.raises(ModelGatewayError, match="quota exceeded"):
        await gateway.call("prompt", creative_config())
    # Provider errors are not retried
    assert mock_llm.ainvoke.await_count == 1
