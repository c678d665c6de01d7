"""
Result cache middleware.

Caches complete generate results and complete streams in a bounded,
in-memory LRU keyed on the model and the call parameters. A cached stream
is replayed part for part, finish marker included. Streams that fail or
are aborted are never stored.
"""

import hashlib
import json
from collections import OrderedDict
from typing import Any, AsyncIterator, Awaitable, Callable, List, Optional

from modelmux.core.language_model import LanguageModel
from modelmux.core.middleware import MiddlewareStage, closing_stream
from modelmux.core.types import (
    CallParams,
    CallType,
    GenerateResult,
    StreamFinish,
    StreamPart,
)


class ResultCache:
    """
    Bounded least-recently-used cache.

    Args:
        max_entries: Capacity; the least recently used entry is evicted
            when it is exceeded
    """

    def __init__(self, max_entries: int = 256):
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        if key not in self._entries:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        return self._entries[key]

    def put(self, key: str, value: Any) -> None:
        self._entries[key] = value
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries


def cache_key(model: LanguageModel, params: CallParams, call_type: CallType) -> str:
    """Stable key for a call; ignores the abort signal and timeout."""
    payload = {
        "call_type": call_type,
        "provider": model.provider,
        "model_id": model.model_id,
        "prompt": params.prompt,
        "temperature": params.temperature,
        "max_tokens": params.max_tokens,
        "top_p": params.top_p,
        "stop_sequences": params.stop_sequences,
        "provider_options": params.provider_options,
    }
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def create_cache_middleware(
    max_entries: int = 256, cache: Optional[ResultCache] = None
) -> MiddlewareStage:
    """
    Create a caching stage.

    Args:
        max_entries: Capacity of a new cache (ignored when ``cache`` is given)
        cache: Existing cache to share between stages

    Returns:
        MiddlewareStage: Caching stage with generate and stream wrappers

    Raises:
        ValueError: If ``max_entries`` is not positive
    """
    store = cache if cache is not None else ResultCache(max_entries)

    async def wrap_generate(
        *,
        do_generate: Callable[[], Awaitable[GenerateResult]],
        params: CallParams,
        model: LanguageModel,
    ) -> GenerateResult:
        key = cache_key(model, params, "generate")
        cached = store.get(key)
        if cached is not None:
            return cached
        result = await do_generate()
        store.put(key, result)
        return result

    async def wrap_stream(
        *,
        do_stream: Callable[[], AsyncIterator[StreamPart]],
        params: CallParams,
        model: LanguageModel,
    ) -> AsyncIterator[StreamPart]:
        key = cache_key(model, params, "stream")
        cached = store.get(key)
        if cached is not None:
            for part in cached:
                yield part
            return

        recorded: List[StreamPart] = []
        async with closing_stream(do_stream()) as parts:
            async for part in parts:
                recorded.append(part)
                yield part

        finish = recorded[-1] if recorded else None
        if isinstance(finish, StreamFinish) and finish.finish_reason != "abort":
            store.put(key, tuple(recorded))

    return MiddlewareStage(name="cache", wrap_generate=wrap_generate, wrap_stream=wrap_stream)
