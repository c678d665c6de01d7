"""
Adapter from LangChain chat models to the ``LanguageModel`` contract.

All supported backends (ChatAnthropic, ChatBedrockConverse, ChatOpenAI)
share LangChain's ``BaseChatModel`` surface, so one adapter covers them:
``ainvoke`` backs ``generate`` and ``astream`` backs ``stream``. The adapter
is also where the caller's abort signal is honoured, since it is the last
point before the provider's network call.
"""

import asyncio
from typing import Any, AsyncIterator, Awaitable, Dict, Mapping, Optional, TypeVar

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import convert_to_messages

from modelmux.core.exceptions import GenerationAbortedError
from modelmux.core.language_model import LanguageModel
from modelmux.core.types import (
    CallParams,
    GenerateResult,
    StreamFinish,
    StreamPart,
    TextDelta,
    Usage,
)

T = TypeVar("T")

# Providers report the stop reason under different metadata keys
_FINISH_REASON_KEYS = ("finish_reason", "stop_reason", "stopReason")


def _content_text(content: Any) -> str:
    """Flatten LangChain message content (str or list of blocks) to text."""
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _finish_reason(metadata: Optional[Mapping[str, Any]]) -> Optional[str]:
    if not metadata:
        return None
    for key in _FINISH_REASON_KEYS:
        if metadata.get(key):
            return str(metadata[key])
    return None


def _usage(usage_metadata: Optional[Mapping[str, Any]]) -> Usage:
    if not usage_metadata:
        return Usage()
    return Usage(
        input_tokens=int(usage_metadata.get("input_tokens", 0) or 0),
        output_tokens=int(usage_metadata.get("output_tokens", 0) or 0),
    )


async def _race_abort(awaitable: Awaitable[T], abort_signal: Optional[asyncio.Event]) -> T:
    """
    Await ``awaitable`` unless ``abort_signal`` is set first.

    Raises:
        GenerationAbortedError: If the signal fires before the awaitable
            completes. The pending awaitable is cancelled and awaited so the
            provider call is torn down before this returns.
    """
    if abort_signal is None:
        return await awaitable

    task = asyncio.ensure_future(awaitable)
    if abort_signal.is_set():
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise GenerationAbortedError("Call aborted before it started")

    waiter = asyncio.ensure_future(abort_signal.wait())
    try:
        done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        waiter.cancel()
        if not task.done():
            # The upstream generator must be idle again before anyone closes it
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    if task in done:
        return task.result()

    await asyncio.gather(task, return_exceptions=True)
    raise GenerationAbortedError("Call aborted by caller")


class LangChainLanguageModel(LanguageModel):
    """
    ``LanguageModel`` backed by any LangChain ``BaseChatModel``.

    Args:
        chat_model: Configured LangChain chat model instance
        provider: Provider name reported by ``provider``
        model_id: Backend-specific model name reported by ``model_id``

    Example:
        >>> from langchain_openai import ChatOpenAI
        >>> model = LangChainLanguageModel(ChatOpenAI(model="gpt-4o"), "openai", "gpt-4o")
        >>> result = await model.generate(CallParams.from_text("Hi"))
    """

    def __init__(self, chat_model: BaseChatModel, provider: str, model_id: str):
        self._chat_model = chat_model
        self._provider = provider
        self._model_id = model_id

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model_id(self) -> str:
        return self._model_id

    @property
    def chat_model(self) -> BaseChatModel:
        """The wrapped LangChain chat model."""
        return self._chat_model

    @staticmethod
    def _invocation_kwargs(params: CallParams) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if params.temperature is not None:
            kwargs["temperature"] = params.temperature
        if params.max_tokens is not None:
            kwargs["max_tokens"] = params.max_tokens
        if params.top_p is not None:
            kwargs["top_p"] = params.top_p
        if params.timeout is not None:
            kwargs["timeout"] = params.timeout
        if params.stop_sequences:
            kwargs["stop"] = list(params.stop_sequences)
        kwargs.update(params.provider_options)
        return kwargs

    async def generate(self, params: CallParams) -> GenerateResult:
        messages = convert_to_messages(params.prompt)
        message = await _race_abort(
            self._chat_model.ainvoke(messages, **self._invocation_kwargs(params)),
            params.abort_signal,
        )
        return GenerateResult(
            text=_content_text(message.content),
            finish_reason=_finish_reason(message.response_metadata),
            usage=_usage(getattr(message, "usage_metadata", None)),
            response_metadata=dict(message.response_metadata or {}),
        )

    async def stream(self, params: CallParams) -> AsyncIterator[StreamPart]:
        messages = convert_to_messages(params.prompt)
        upstream = self._chat_model.astream(messages, **self._invocation_kwargs(params))
        abort_signal = params.abort_signal

        finish_reason: Optional[str] = None
        input_tokens = 0
        output_tokens = 0
        try:
            while True:
                if abort_signal is not None and abort_signal.is_set():
                    finish_reason = "abort"
                    break
                try:
                    chunk = await _race_abort(upstream.__anext__(), abort_signal)
                except StopAsyncIteration:
                    break
                except GenerationAbortedError:
                    finish_reason = "abort"
                    break

                if abort_signal is not None and abort_signal.is_set():
                    finish_reason = "abort"
                    break

                text = _content_text(chunk.content)
                if text:
                    yield TextDelta(text=text)

                reason = _finish_reason(chunk.response_metadata)
                if reason:
                    finish_reason = reason
                chunk_usage = _usage(getattr(chunk, "usage_metadata", None))
                input_tokens += chunk_usage.input_tokens
                output_tokens += chunk_usage.output_tokens
        finally:
            await upstream.aclose()

        yield StreamFinish(
            finish_reason=finish_reason,
            usage=Usage(input_tokens=input_tokens, output_tokens=output_tokens),
        )
