from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from main import create_app
from utils.config import Settings


@pytest.fixture
def completion_factory():
    """Build objects shaped like `chat.completions.create` responses."""

    def _make(content, prompt_tokens=120, completion_tokens=80):
        choices = [] if content is None else [SimpleNamespace(message=SimpleNamespace(content=content))]
        usage = SimpleNamespace(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)
        return SimpleNamespace(choices=choices, usage=usage)

    return _make


@pytest.fixture
def openai_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock()
    return client


@pytest.fixture
def app(openai_client):
    app = create_app(Settings(api_key="test-key"))
    # The lifespan is not run by a bare TestClient, so the mock stands in for it.
    app.state.openai_client = openai_client
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def make_image():
    """Write a small image file and return its path."""

    def _make(path, color=(200, 80, 40), image_format="PNG"):
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", (12, 8), color).save(path, format=image_format)
        return path

    return _make
