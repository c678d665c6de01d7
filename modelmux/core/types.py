"""
Value types shared by every language model handle.

Call parameters, single-shot results and stream parts are plain frozen
dataclasses. Middleware stages rewrite them with ``dataclasses.replace`` so
that fields they do not know about (the abort signal in particular) always
reach the provider call.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

CallType = Literal["generate", "stream"]


@dataclass(frozen=True)
class Usage:
    """Token usage reported by a provider."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class CallParams:
    """
    Parameters for a single generate or stream call.

    Attributes:
        prompt: Chat messages as ``{"role": ..., "content": ...}`` dicts.
            Roles: "system", "user", "assistant".
        temperature: Sampling temperature, provider default when None
        max_tokens: Maximum tokens in the response, provider default when None
        top_p: Nucleus sampling parameter
        stop_sequences: Sequences that end generation
        timeout: Request timeout in seconds, passed to the provider call
        abort_signal: Set by the caller to cancel the call
        provider_options: Extra provider-specific keyword arguments
    """

    prompt: List[Dict[str, Any]]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None
    stop_sequences: Optional[List[str]] = None
    timeout: Optional[float] = None
    abort_signal: Optional[asyncio.Event] = field(default=None, compare=False)
    provider_options: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, system: Optional[str] = None, **kwargs: Any) -> "CallParams":
        """Build params for a single user message, with an optional system prompt."""
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": text})
        return cls(prompt=messages, **kwargs)


@dataclass(frozen=True)
class GenerateResult:
    """Complete result of a single-shot generate call."""

    text: str
    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)
    response_metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TextDelta:
    """An incremental piece of streamed text."""

    text: str


@dataclass(frozen=True)
class StreamFinish:
    """Completion marker; the last part of every stream."""

    finish_reason: Optional[str] = None
    usage: Usage = field(default_factory=Usage)


StreamPart = Union[TextDelta, StreamFinish]
