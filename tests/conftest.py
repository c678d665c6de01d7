"""
Shared pytest configuration and fixtures for modelmux tests.

Provides scripted in-memory language models so pipeline and factory tests
never touch a provider SDK or the network.
"""

import os
from typing import Any, AsyncIterator, List, Optional, Sequence, Tuple
from unittest.mock import patch

import pytest

from modelmux.core.language_model import LanguageModel
from modelmux.core.types import (
    CallParams,
    GenerateResult,
    StreamFinish,
    StreamPart,
    TextDelta,
    Usage,
)

# Environment variables that change Settings or provider behaviour
MODELMUX_ENV_VARS = (
    "MODELMUX_ENV",
    "MODELMUX_LOG_LEVEL",
    "MODELMUX_MIDDLEWARE",
    "MODELMUX_DEFAULT_MODEL",
    "MODELMUX_DEFAULT_TEMPERATURE",
    "MODELMUX_DEFAULT_MAX_TOKENS",
    "MODELMUX_CACHE_MAX_ENTRIES",
    "MODELMUX_BLOCKED_TERMS",
    "AWS_REGION",
    "AWS_PROFILE",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_SESSION_TOKEN",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")


class ScriptedModel(LanguageModel):
    """
    Language model that replays a fixed script.

    Records every call as ``(call_type, params)`` in ``calls`` and sets
    ``closed`` when its stream generator is finalized.
    """

    def __init__(
        self,
        provider: str = "fake",
        model_id: str = "fake-model",
        text: str = "hello",
        deltas: Sequence[str] = ("a", "b"),
        finish_reason: Optional[str] = "stop",
        usage: Usage = Usage(input_tokens=3, output_tokens=2),
        error: Optional[Exception] = None,
        fail_after: Optional[int] = None,
    ):
        self._provider = provider
        self._model_id = model_id
        self.text = text
        self.deltas = list(deltas)
        self.finish_reason = finish_reason
        self.usage = usage
        self.error = error
        self.fail_after = fail_after
        self.calls: List[Tuple[str, CallParams]] = []
        self.closed = False

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model_id(self) -> str:
        return self._model_id

    async def generate(self, params: CallParams) -> GenerateResult:
        self.calls.append(("generate", params))
        if self.error is not None:
            raise self.error
        return GenerateResult(
            text=self.text, finish_reason=self.finish_reason, usage=self.usage
        )

    async def stream(self, params: CallParams) -> AsyncIterator[StreamPart]:
        self.calls.append(("stream", params))
        try:
            for position, delta in enumerate(self.deltas):
                if self.fail_after is not None and position == self.fail_after:
                    raise self.error
                yield TextDelta(text=delta)
            if self.fail_after is not None and self.fail_after >= len(self.deltas):
                raise self.error
            yield StreamFinish(finish_reason=self.finish_reason, usage=self.usage)
        finally:
            self.closed = True


async def _collect(stream: AsyncIterator[Any]) -> List[Any]:
    return [part async for part in stream]


@pytest.fixture
def collect():
    """Coroutine function draining an async iterator into a list."""
    return _collect


@pytest.fixture
def make_model():
    """Factory for ScriptedModel instances with a custom script."""
    return ScriptedModel


@pytest.fixture
def scripted_model() -> ScriptedModel:
    """Scripted model with default script: text "hello", deltas ["a", "b"]."""
    return ScriptedModel()


@pytest.fixture
def params() -> CallParams:
    """Single-message call parameters."""
    return CallParams.from_text("What is the capital of France?")


@pytest.fixture
def clean_env():
    """Run the test with every modelmux and provider variable unset."""
    with patch.dict("os.environ", {}, clear=False):
        for name in MODELMUX_ENV_VARS:
            os.environ.pop(name, None)
        yield
