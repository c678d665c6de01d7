"""
Logging middleware.

Logs every generate and stream call: parameters at DEBUG, completion with
finish reason, token usage and elapsed time at INFO, failures at ERROR.
Errors are re-raised unchanged after logging. A short call ID ties the log
lines of one call together.
"""

import logging
import time
from typing import AsyncIterator, Awaitable, Callable, Optional
from uuid import uuid4

from modelmux.core.language_model import LanguageModel
from modelmux.core.middleware import MiddlewareStage, closing_stream
from modelmux.core.types import (
    CallParams,
    GenerateResult,
    StreamFinish,
    StreamPart,
    TextDelta,
)
from modelmux.utils.logger import get_logger


def _describe_params(params: CallParams) -> str:
    return (
        f"messages={len(params.prompt)}, temperature={params.temperature}, "
        f"max_tokens={params.max_tokens}"
    )


def create_logging_middleware(logger: Optional[logging.Logger] = None) -> MiddlewareStage:
    """
    Create a stage that logs model calls.

    Args:
        logger: Logger to write to (default: ``modelmux.middleware.logging``)

    Returns:
        MiddlewareStage: Logging stage with generate and stream wrappers
    """
    log = logger or get_logger("modelmux.middleware.logging")

    async def wrap_generate(
        *,
        do_generate: Callable[[], Awaitable[GenerateResult]],
        params: CallParams,
        model: LanguageModel,
    ) -> GenerateResult:
        call_id = str(uuid4())[:8]
        log.debug(f"[{call_id}] generate {model.provider}:{model.model_id} ({_describe_params(params)})")
        start_time = time.time()
        try:
            result = await do_generate()
        except Exception as exc:
            log.error(
                f"[{call_id}] generate {model.provider}:{model.model_id} failed after "
                f"{time.time() - start_time:.3f}s: {exc}"
            )
            raise
        log.info(
            f"[{call_id}] generate {model.provider}:{model.model_id} finished "
            f"({result.finish_reason}) - {result.usage.total_tokens} tokens "
            f"in {time.time() - start_time:.3f}s"
        )
        return result

    async def wrap_stream(
        *,
        do_stream: Callable[[], AsyncIterator[StreamPart]],
        params: CallParams,
        model: LanguageModel,
    ) -> AsyncIterator[StreamPart]:
        call_id = str(uuid4())[:8]
        log.debug(f"[{call_id}] stream {model.provider}:{model.model_id} ({_describe_params(params)})")
        start_time = time.time()
        deltas = 0
        try:
            async with closing_stream(do_stream()) as parts:
                async for part in parts:
                    if isinstance(part, TextDelta):
                        deltas += 1
                    elif isinstance(part, StreamFinish):
                        log.info(
                            f"[{call_id}] stream {model.provider}:{model.model_id} finished "
                            f"({part.finish_reason}) - {deltas} chunks, "
                            f"{part.usage.total_tokens} tokens in {time.time() - start_time:.3f}s"
                        )
                    yield part
        except Exception as exc:
            log.error(
                f"[{call_id}] stream {model.provider}:{model.model_id} failed after "
                f"{deltas} chunks: {exc}"
            )
            raise

    return MiddlewareStage(
        name="logging",
        wrap_generate=wrap_generate,
        wrap_stream=wrap_stream,
    )
