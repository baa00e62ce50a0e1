"""Pytest fixtures for openai-wire tests."""

import os
from unittest.mock import patch

import pytest

from helpers import make_chat_chunk, sse_event
from openai_wire.config import Settings


@pytest.fixture
def mock_env_vars():
    """Mock environment variables for testing."""
    env_vars = {
        "OPENAI_API_KEY": "test-api-key",
        "OPENAI_ORGANIZATION": "org-test",
        "OPENAI_BASE_URL": "https://api.test/v1",
        "LOG_LEVEL": "DEBUG",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def settings(mock_env_vars) -> Settings:
    """Create Settings instance with mocked environment."""
    return Settings()


@pytest.fixture
def chat_stream_body() -> bytes:
    """A complete streamed chat response, terminated by [DONE]."""
    events = [
        make_chat_chunk(role="assistant"),
        make_chat_chunk(content="Héllo, "),
        make_chat_chunk(content="wörld! 🌍"),
        make_chat_chunk(finish_reason="stop"),
    ]
    body = "".join(sse_event(e) for e in events) + sse_event("[DONE]")
    return body.encode("utf-8")
