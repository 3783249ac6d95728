import json

import pytest
from unittest.mock import MagicMock, AsyncMock
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import AIMessage

from superprompt.gateway import ModelGateway
from superprompt.store import AsyncStore


@pytest.fixture
def mock_llm():
    """Mock LangChain Chat Model."""
    llm = MagicMock(spec=BaseChatModel)
    llm.ainvoke = AsyncMock()
    return llm


@pytest.fixture
def reply_with(mock_llm):
    """Make the mock model answer with the given text (or JSON-serializable value)."""

    def _reply(*replies):
        messages = [
            AIMessage(content=r if isinstance(r, str) else json.dumps(r))
            for r in replies
        ]
        if len(messages) == 1:
            mock_llm.ainvoke.return_value = messages[0]
        else:
            mock_llm.ainvoke.side_effect = messages

    return _reply


@pytest.fixture
def llm_configs():
    """GenerationConfigs passed to the LLM factory, in call order."""
    return []


@pytest.fixture
def gateway(mock_llm, llm_configs):
    """ModelGateway backed by the mock model."""

    def factory(config):
        llm_configs.append(config)
        return mock_llm

    return ModelGateway(factory)


@pytest.fixture
async def store():
    """Initialized in-memory store."""
    store = AsyncStore(":memory:")
    await store.connect()
    await store.init_db()
    yield store
    await store.close()


@pytest.fixture
def sample_questions():
    return [
        {"question": "Who is the audience?", "suggestion": "e.g., developers"},
        {"question": "What tone?", "suggestion": "e.g., casual"},
        {"question": "What format?", "suggestion": "e.g., list"},
        {"question": "Any constraints?", "suggestion": "e.g., 500 words"},
        {"question": "What is the goal?", "suggestion": "e.g., educate"},
    ]
