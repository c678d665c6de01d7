"""Core contracts, value types and middleware composition."""

from modelmux.core.exceptions import (
    GenerationAbortedError,
    GuardrailViolationError,
    InvalidModelIdentifierError,
    MiddlewareConstructionError,
    ModelMuxError,
    ProviderNotConfiguredError,
    ProviderRegistrationError,
)
from modelmux.core.language_model import LanguageModel
from modelmux.core.middleware import (
    MiddlewarePipeline,
    MiddlewareStage,
    WrappedLanguageModel,
)
from modelmux.core.types import (
    CallParams,
    GenerateResult,
    StreamFinish,
    StreamPart,
    TextDelta,
    Usage,
)

__all__ = [
    "CallParams",
    "GenerateResult",
    "GenerationAbortedError",
    "GuardrailViolationError",
    "InvalidModelIdentifierError",
    "LanguageModel",
    "MiddlewareConstructionError",
    "MiddlewarePipeline",
    "MiddlewareStage",
    "ModelMuxError",
    "ProviderNotConfiguredError",
    "ProviderRegistrationError",
    "StreamFinish",
    "StreamPart",
    "TextDelta",
    "Usage",
    "WrappedLanguageModel",
]
