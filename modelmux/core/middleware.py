"""
Middleware composition for language model handles.

A ``MiddlewarePipeline`` is an ordered, immutable list of
``MiddlewareStage`` objects. Each stage may define any of three hooks:

    transform_params(*, params, call_type) -> CallParams
        Rewrite call parameters. May be sync or async.
    wrap_generate(*, do_generate, params, model) -> GenerateResult
        Async. Must await ``do_generate()`` to run the rest of the chain.
    wrap_stream(*, do_stream, params, model) -> AsyncIterator[StreamPart]
        Returns an async iterator. Must consume ``do_stream()`` and forward
        the ``StreamFinish`` marker exactly once.

Ordering:
    Parameters pass through every ``transform_params`` in list order before
    any call wrapping runs. For wrapping, the first stage is the outermost:
    ``[S1, S2, S3]`` composes to ``S1(S2(S3(real_call)))``. Stages missing a
    hook are transparent at that step.

Example:
    >>> upper = MiddlewareStage(name="upper", wrap_stream=uppercase_stream)
    >>> pipeline = MiddlewarePipeline([logging_stage, upper])
    >>> handle = pipeline.wrap(bare_model)
"""

import functools
import inspect
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    Optional,
    Sequence,
    Tuple,
)

from modelmux.core.exceptions import MiddlewareConstructionError
from modelmux.core.language_model import LanguageModel
from modelmux.core.types import CallParams, CallType, GenerateResult, StreamPart

TransformParamsHook = Callable[..., Any]
WrapGenerateHook = Callable[..., Awaitable[GenerateResult]]
WrapStreamHook = Callable[..., AsyncIterator[StreamPart]]
StageFactory = Callable[[], "MiddlewareStage"]

_HOOKS = ("transform_params", "wrap_generate", "wrap_stream")


@dataclass(frozen=True)
class MiddlewareStage:
    """
    One unit of cross-cutting behaviour around model calls.

    Attributes:
        name: Stage name used in logs and error messages
        transform_params: Optional parameter rewrite hook
        wrap_generate: Optional wrapper around single-shot generation
        wrap_stream: Optional wrapper around streaming
    """

    name: str = "anonymous"
    transform_params: Optional[TransformParamsHook] = None
    wrap_generate: Optional[WrapGenerateHook] = None
    wrap_stream: Optional[WrapStreamHook] = None


@asynccontextmanager
async def closing_stream(iterator: AsyncIterator[Any]):
    """Close ``iterator`` on exit if it supports ``aclose``."""
    try:
        yield iterator
    finally:
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()


def _compose(terminal: Callable[[], Any], hooks: Sequence[Callable[..., Any]], continuation: str, params: CallParams, model: LanguageModel) -> Callable[[], Any]:
    """Nest ``hooks`` around ``terminal`` so that ``hooks[0]`` is outermost."""
    call = terminal
    for hook in reversed(hooks):
        call = functools.partial(hook, **{continuation: call, "params": params, "model": model})
    return call


class MiddlewarePipeline:
    """
    Ordered, immutable list of middleware stages.

    Args:
        stages: Stages in application order (first = outermost)

    Raises:
        MiddlewareConstructionError: If an item is not a ``MiddlewareStage``
            or one of its hooks is not callable
    """

    def __init__(self, stages: Iterable[MiddlewareStage] = ()):
        validated = []
        for position, stage in enumerate(stages):
            if not isinstance(stage, MiddlewareStage):
                raise MiddlewareConstructionError(
                    f"Middleware at position {position} is not a MiddlewareStage: {stage!r}",
                    details={"stage": position},
                )
            for hook_name in _HOOKS:
                hook = getattr(stage, hook_name)
                if hook is not None and not callable(hook):
                    raise MiddlewareConstructionError(
                        f"Middleware '{stage.name}' has a non-callable {hook_name}",
                        details={"stage": stage.name, "hook": hook_name},
                    )
            validated.append(stage)
        self._stages: Tuple[MiddlewareStage, ...] = tuple(validated)

    @classmethod
    def from_factories(cls, factories: Iterable[StageFactory]) -> "MiddlewarePipeline":
        """
        Build every stage eagerly, failing as a whole if any factory fails.

        Args:
            factories: Zero-argument callables returning a ``MiddlewareStage``

        Returns:
            MiddlewarePipeline: Pipeline holding the built stages

        Raises:
            MiddlewareConstructionError: Chained from the factory's error
        """
        stages = []
        for position, factory in enumerate(factories):
            name = getattr(factory, "__name__", f"#{position}")
            try:
                stages.append(factory())
            except MiddlewareConstructionError:
                raise
            except Exception as e:
                raise MiddlewareConstructionError(
                    f"Failed to build middleware '{name}': {e}",
                    details={"stage": name},
                ) from e
        return cls(stages)

    @property
    def stages(self) -> Tuple[MiddlewareStage, ...]:
        return self._stages

    def __len__(self) -> int:
        return len(self._stages)

    def __repr__(self) -> str:
        names = ", ".join(stage.name for stage in self._stages)
        return f"MiddlewarePipeline([{names}])"

    async def transform_params(self, params: CallParams, call_type: CallType) -> CallParams:
        """Run every ``transform_params`` hook in list order."""
        for stage in self._stages:
            if stage.transform_params is None:
                continue
            result = stage.transform_params(params=params, call_type=call_type)
            if inspect.isawaitable(result):
                result = await result
            params = result
        return params

    def compose_generate(self, model: LanguageModel, params: CallParams) -> Callable[[], Awaitable[GenerateResult]]:
        """Return a zero-argument coroutine function running the full generate chain."""
        hooks = [s.wrap_generate for s in self._stages if s.wrap_generate is not None]
        return _compose(lambda: model.generate(params), hooks, "do_generate", params, model)

    def compose_stream(self, model: LanguageModel, params: CallParams) -> Callable[[], AsyncIterator[StreamPart]]:
        """Return a zero-argument function producing the full stream chain."""
        hooks = [s.wrap_stream for s in self._stages if s.wrap_stream is not None]
        return _compose(lambda: model.stream(params), hooks, "do_stream", params, model)

    def wrap(self, model: LanguageModel) -> "WrappedLanguageModel":
        """Wrap ``model`` so every call runs through this pipeline."""
        return WrappedLanguageModel(model, self)


class WrappedLanguageModel(LanguageModel):
    """
    ``LanguageModel`` that runs a middleware pipeline around another one.

    Reports the inner model's ``provider`` and ``model_id`` so callers
    cannot tell it apart from the bare model.
    """

    def __init__(self, model: LanguageModel, pipeline: MiddlewarePipeline):
        self._model = model
        self._pipeline = pipeline

    @property
    def provider(self) -> str:
        return self._model.provider

    @property
    def model_id(self) -> str:
        return self._model.model_id

    @property
    def inner(self) -> LanguageModel:
        return self._model

    @property
    def pipeline(self) -> MiddlewarePipeline:
        return self._pipeline

    async def generate(self, params: CallParams) -> GenerateResult:
        params = await self._pipeline.transform_params(params, "generate")
        return await self._pipeline.compose_generate(self._model, params)()

    async def stream(self, params: CallParams) -> AsyncIterator[StreamPart]:
        params = await self._pipeline.transform_params(params, "stream")
        async with closing_stream(self._pipeline.compose_stream(self._model, params)()) as parts:
            async for part in parts:
                yield part
