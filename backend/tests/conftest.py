from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from app.cache import MemoryStore
from app.config import Settings
from app.llm import CompletionClient
from app.main import create_app


class FakeCompletions:
    """Mimics ``client.chat.completions`` and records every call."""

    def __init__(self, content="  simplified  ", error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="test-key",
        extension_id="chrome-extension://abcdef",
        dev_token="s3cret",
        word_limit=50,
    )


@pytest.fixture
def completions():
    return FakeCompletions()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(settings, completions, store):
    llm = CompletionClient(settings, client=SimpleNamespace(chat=SimpleNamespace(completions=completions)))
    app = create_app(settings, llm=llm, store=store)
    return TestClient(app)
