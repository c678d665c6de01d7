"""
Unit tests for the LangChain chat model adapter.

Uses LangChain's GenericFakeChatModel for real message handling and mocks
for call-argument and cancellation checks.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import GenericFakeChatModel
from langchain_core.messages import AIMessage, AIMessageChunk

from modelmux.core.exceptions import GenerationAbortedError
from modelmux.core.langchain_adapter import LangChainLanguageModel
from modelmux.core.types import CallParams, StreamFinish, TextDelta, Usage


def fake_chat_model(*contents):
    """GenericFakeChatModel replying with ``contents`` in order."""
    return GenericFakeChatModel(messages=iter([AIMessage(content=c) for c in contents]))


def hanging_stream_model(first_chunk="first"):
    """Chat model mock whose stream yields one chunk and then blocks."""
    state = {"closed": False}

    async def astream(messages, **kwargs):
        try:
            yield AIMessageChunk(content=first_chunk)
            await asyncio.sleep(10)
            yield AIMessageChunk(content="never")
        finally:
            state["closed"] = True

    chat_model = MagicMock()
    chat_model.astream = astream
    return chat_model, state


class TestGenerate:
    """Test single-shot generation."""

    @pytest.mark.asyncio
    async def test_generate_returns_text_and_metadata(self):
        message = AIMessage(
            content="Paris",
            response_metadata={"finish_reason": "stop", "model_name": "gpt-4o-mini"},
            usage_metadata={"input_tokens": 12, "output_tokens": 1, "total_tokens": 13},
        )
        model = LangChainLanguageModel(
            GenericFakeChatModel(messages=iter([message])), "openai", "gpt-4o-mini"
        )

        result = await model.generate(CallParams.from_text("Capital of France?"))

        assert result.text == "Paris"
        assert result.finish_reason == "stop"
        assert result.usage == Usage(input_tokens=12, output_tokens=1)
        assert result.response_metadata["model_name"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_anthropic_stop_reason_is_used(self):
        message = AIMessage(content="ok", response_metadata={"stop_reason": "end_turn"})
        model = LangChainLanguageModel(
            GenericFakeChatModel(messages=iter([message])), "anthropic", "claude-x"
        )

        result = await model.generate(CallParams.from_text("hi"))

        assert result.finish_reason == "end_turn"

    @pytest.mark.asyncio
    async def test_content_blocks_are_flattened(self):
        message = AIMessage(
            content=[{"type": "text", "text": "Hello "}, {"type": "text", "text": "there"}]
        )
        model = LangChainLanguageModel(
            GenericFakeChatModel(messages=iter([message])), "bedrock", "claude"
        )

        result = await model.generate(CallParams.from_text("hi"))

        assert result.text == "Hello there"

    @pytest.mark.asyncio
    async def test_call_settings_are_forwarded(self):
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")
        params = CallParams.from_text(
            "hi",
            system="be brief",
            temperature=0.2,
            max_tokens=64,
            stop_sequences=["END"],
            timeout=5.0,
            provider_options={"seed": 7},
        )

        await model.generate(params)

        messages = chat_model.ainvoke.call_args.args[0]
        assert [m.type for m in messages] == ["system", "human"]
        assert chat_model.ainvoke.call_args.kwargs == {
            "temperature": 0.2,
            "max_tokens": 64,
            "timeout": 5.0,
            "stop": ["END"],
            "seed": 7,
        }

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        error = RuntimeError("invalid api key")
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(side_effect=error)
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")

        with pytest.raises(RuntimeError) as exc_info:
            await model.generate(CallParams.from_text("hi"))

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_abort_during_generate(self):
        """Test that setting the signal cancels the in-flight call."""
        cancelled = asyncio.Event()

        async def slow_invoke(messages, **kwargs):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        chat_model = MagicMock()
        chat_model.ainvoke = slow_invoke
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)

        with pytest.raises(GenerationAbortedError):
            await model.generate(CallParams.from_text("hi", abort_signal=signal))

        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_abort_before_generate(self):
        chat_model = MagicMock()
        chat_model.ainvoke = AsyncMock(return_value=AIMessage(content="ok"))
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")
        signal = asyncio.Event()
        signal.set()

        with pytest.raises(GenerationAbortedError):
            await model.generate(CallParams.from_text("hi", abort_signal=signal))


class TestStream:
    """Test streaming."""

    @pytest.mark.asyncio
    async def test_stream_yields_deltas_then_finish(self, collect):
        model = LangChainLanguageModel(fake_chat_model("hello big world"), "openai", "gpt-4o")

        parts = await collect(model.stream(CallParams.from_text("hi")))

        deltas = [p for p in parts if isinstance(p, TextDelta)]
        assert "".join(d.text for d in deltas) == "hello big world"
        assert all(d.text for d in deltas)
        assert isinstance(parts[-1], StreamFinish)
        assert sum(isinstance(p, StreamFinish) for p in parts) == 1

    @pytest.mark.asyncio
    async def test_abort_after_first_delta(self):
        """Test that nothing is delivered after the abort point."""
        model = LangChainLanguageModel(fake_chat_model("one two three"), "openai", "gpt-4o")
        signal = asyncio.Event()

        parts = []
        async for part in model.stream(CallParams.from_text("hi", abort_signal=signal)):
            parts.append(part)
            if isinstance(part, TextDelta):
                signal.set()

        assert parts[0] == TextDelta(text="one")
        assert len(parts) == 2
        assert parts[-1].finish_reason == "abort"

    @pytest.mark.asyncio
    async def test_abort_while_waiting_for_chunk(self):
        """Test that a blocked upstream is cancelled and closed on abort."""
        chat_model, state = hanging_stream_model()
        model = LangChainLanguageModel(chat_model, "bedrock", "claude")
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)

        parts = [part async for part in model.stream(CallParams.from_text("hi", abort_signal=signal))]

        assert parts == [
            TextDelta(text="first"),
            StreamFinish(finish_reason="abort", usage=Usage()),
        ]
        assert state["closed"] is True

    @pytest.mark.asyncio
    async def test_adapter_does_not_log(self, caplog):
        chat_model, _ = hanging_stream_model()
        model = LangChainLanguageModel(chat_model, "bedrock", "claude")
        signal = asyncio.Event()
        asyncio.get_running_loop().call_later(0.01, signal.set)

        with caplog.at_level("DEBUG"):
            async for _ in model.stream(CallParams.from_text("hi", abort_signal=signal)):
                pass

        assert [r for r in caplog.records if r.name.startswith("modelmux")] == []

    @pytest.mark.asyncio
    async def test_consumer_cancellation_propagates(self):
        """Test that cancelling the consuming task raises CancelledError, not a close error."""
        chat_model, state = hanging_stream_model()
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")
        received = []
        first_delta = asyncio.Event()

        async def consume():
            params = CallParams.from_text("hi", abort_signal=asyncio.Event())
            async for part in model.stream(params):
                received.append(part)
                first_delta.set()

        task = asyncio.create_task(consume())
        await first_delta.wait()
        await asyncio.sleep(0.01)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert received == [TextDelta(text="first")]
        assert state["closed"] is True

    @pytest.mark.asyncio
    async def test_wait_for_timeout_propagates(self):
        """Test that a deadline on the consumer surfaces as a timeout."""
        chat_model, state = hanging_stream_model()
        model = LangChainLanguageModel(chat_model, "anthropic", "claude-x")
        received = []

        async def consume():
            params = CallParams.from_text("hi", abort_signal=asyncio.Event())
            async for part in model.stream(params):
                received.append(part)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(consume(), 0.05)

        assert received == [TextDelta(text="first")]
        assert state["closed"] is True

    @pytest.mark.asyncio
    async def test_stream_usage_is_summed(self, collect):
        async def astream(messages, **kwargs):
            yield AIMessageChunk(
                content="a", usage_metadata={"input_tokens": 5, "output_tokens": 0, "total_tokens": 5}
            )
            yield AIMessageChunk(
                content="b",
                usage_metadata={"input_tokens": 0, "output_tokens": 2, "total_tokens": 2},
                response_metadata={"stop_reason": "end_turn"},
            )

        chat_model = MagicMock()
        chat_model.astream = astream
        model = LangChainLanguageModel(chat_model, "anthropic", "claude-x")

        parts = await collect(model.stream(CallParams.from_text("hi")))

        assert parts == [
            TextDelta(text="a"),
            TextDelta(text="b"),
            StreamFinish(finish_reason="end_turn", usage=Usage(input_tokens=5, output_tokens=2)),
        ]

    @pytest.mark.asyncio
    async def test_mid_stream_error_propagates(self):
        async def astream(messages, **kwargs):
            yield AIMessageChunk(content="partial")
            raise ConnectionError("reset by peer")

        chat_model = MagicMock()
        chat_model.astream = astream
        model = LangChainLanguageModel(chat_model, "openai", "gpt-4o")

        received = []
        with pytest.raises(ConnectionError):
            async for part in model.stream(CallParams.from_text("hi")):
                received.append(part)

        assert received == [TextDelta(text="partial")]

    def test_identity(self):
        model = LangChainLanguageModel(fake_chat_model("x"), "anthropic", "claude-x")

        assert model.provider == "anthropic"
        assert model.model_id == "claude-x"
        assert repr(model)
