"""
Callable model contract.

Every provider's native chat model is adapted to ``LanguageModel`` before it
enters the middleware pipeline, and every wrapped handle returned to
application code implements it as well. The rest of modelmux programs
against this interface only, never against a provider SDK type.

Example:
    >>> model = get_model("anthropic:claude-3-5-haiku-20241022")
    >>> result = await model.generate(CallParams.from_text("Hello!"))
    >>> async for part in model.stream(CallParams.from_text("Hello!")):
    ...     if isinstance(part, TextDelta):
    ...         print(part.text, end="")
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator

from modelmux.core.types import CallParams, GenerateResult, StreamPart


class LanguageModel(ABC):
    """
    Abstract two-operation language model.

    ``generate`` returns one complete result. ``stream`` yields ``TextDelta``
    increments followed by exactly one ``StreamFinish`` marker.
    """

    @property
    @abstractmethod
    def provider(self) -> str:
        """
        Provider identifier.

        Returns:
            str: Provider name (e.g., "anthropic", "bedrock", "openai")
        """
        pass

    @property
    @abstractmethod
    def model_id(self) -> str:
        """Backend-specific model name (namespace already stripped)."""
        pass

    @abstractmethod
    async def generate(self, params: CallParams) -> GenerateResult:
        """
        Run a single-shot completion.

        Args:
            params: Call parameters

        Returns:
            GenerateResult: Complete model response

        Raises:
            GenerationAbortedError: If ``params.abort_signal`` fires first
            Exception: Any provider SDK error, unmodified
        """
        pass

    @abstractmethod
    def stream(self, params: CallParams) -> AsyncIterator[StreamPart]:
        """
        Stream a completion.

        Args:
            params: Call parameters

        Yields:
            StreamPart: ``TextDelta`` increments, then one ``StreamFinish``
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(provider={self.provider!r}, model_id={self.model_id!r})"
