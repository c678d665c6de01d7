"""
modelmux - one call surface for many LLM providers.

Resolve a ``<namespace>:<model>`` identifier to a ready-to-call model
wrapped in configurable middleware:

    >>> from modelmux import CallParams, get_model
    >>> model = get_model("anthropic:claude-3-5-haiku-20241022")
    >>> result = await model.generate(CallParams.from_text("Hello"))
"""

from modelmux.config.llm_factory import ModelFactory, get_image_model, get_model
from modelmux.core import (
    CallParams,
    GenerateResult,
    LanguageModel,
    MiddlewarePipeline,
    MiddlewareStage,
    ModelMuxError,
    StreamFinish,
    StreamPart,
    TextDelta,
    Usage,
)
from modelmux.version import __version__

__all__ = [
    "CallParams",
    "GenerateResult",
    "LanguageModel",
    "MiddlewarePipeline",
    "MiddlewareStage",
    "ModelFactory",
    "ModelMuxError",
    "StreamFinish",
    "StreamPart",
    "TextDelta",
    "Usage",
    "__version__",
    "get_image_model",
    "get_model",
]
