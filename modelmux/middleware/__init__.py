"""
Built-in middleware stages.

Stages are selected by name through ``MODELMUX_MIDDLEWARE`` (comma list,
applied in the order given, first = outermost):

    logging     log calls, results and failures
    cache       in-memory LRU of generate results and complete streams
    defaults    fill unset temperature / max_tokens from settings
    guardrails  reject prompts containing MODELMUX_BLOCKED_TERMS
"""

from typing import Callable, Dict, Iterable, List

from modelmux.config.settings import Settings
from modelmux.core.exceptions import MiddlewareConstructionError
from modelmux.core.middleware import MiddlewareStage, StageFactory
from modelmux.middleware.cache import ResultCache, create_cache_middleware
from modelmux.middleware.defaults import create_defaults_middleware
from modelmux.middleware.guardrails import create_guardrails_middleware
from modelmux.middleware.logging_middleware import create_logging_middleware

BUILTIN_MIDDLEWARE: Dict[str, Callable[[Settings], MiddlewareStage]] = {
    "logging": lambda settings: create_logging_middleware(),
    "cache": lambda settings: create_cache_middleware(settings.CACHE_MAX_ENTRIES),
    "defaults": lambda settings: create_defaults_middleware(
        temperature=settings.DEFAULT_TEMPERATURE,
        max_tokens=settings.DEFAULT_MAX_TOKENS,
    ),
    "guardrails": lambda settings: create_guardrails_middleware(settings.BLOCKED_TERMS),
}


def build_stage_factories(names: Iterable[str], settings: Settings) -> List[StageFactory]:
    """
    Turn middleware names into zero-argument stage factories.

    Args:
        names: Built-in stage names in application order
        settings: Settings the stages are configured from

    Returns:
        List[StageFactory]: Factories for ``MiddlewarePipeline.from_factories``

    Raises:
        MiddlewareConstructionError: If a name is not a built-in stage
    """
    factories = []
    for name in names:
        builder = BUILTIN_MIDDLEWARE.get(name)
        if builder is None:
            available = ", ".join(sorted(BUILTIN_MIDDLEWARE))
            raise MiddlewareConstructionError(
                f"Unknown middleware: {name}. Available: {available}",
                details={"stage": name},
            )

        def factory(builder=builder, settings=settings):
            return builder(settings)

        factory.__name__ = name
        factories.append(factory)
    return factories


__all__ = [
    "BUILTIN_MIDDLEWARE",
    "ResultCache",
    "build_stage_factories",
    "create_cache_middleware",
    "create_defaults_middleware",
    "create_guardrails_middleware",
    "create_logging_middleware",
]
