"""
Model factory for provider-agnostic model instantiation.

This module provides the single entry point application code uses to get a
ready-to-call model: ``get_model("anthropic:claude-3-5-haiku-20241022")``.
The identifier is resolved through the provider registry and the resulting
model is wrapped in the configured middleware pipeline. Handles are built
fresh on every call; nothing is cached here.
"""

from typing import Any, Dict, Optional

from modelmux.config.providers.openai_provider import OpenAIProvider
from modelmux.config.providers.registry import (
    ProviderRegistry,
    ProviderTag,
    build_default_registry,
)
from modelmux.config.settings import Settings, get_settings
from modelmux.core.image_model import OpenAIImageModel
from modelmux.core.language_model import LanguageModel
from modelmux.core.middleware import MiddlewarePipeline


class ModelFactory:
    """
    Factory that resolves identifiers and applies middleware.

    Args:
        registry: Provider registry used for identifier resolution
        pipeline: Middleware applied to every model handle
        provider_settings: Per-provider construction defaults, overridden
            by settings passed to ``get_model``
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        pipeline: Optional[MiddlewarePipeline] = None,
        provider_settings: Optional[Dict[ProviderTag, Dict[str, Any]]] = None,
    ):
        self.registry = registry
        self.pipeline = pipeline if pipeline is not None else MiddlewarePipeline()
        self._provider_settings = dict(provider_settings or {})

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ModelFactory":
        """
        Build a factory from application settings.

        Uses the default provider registry and the built-in middleware
        named in ``settings.MIDDLEWARE``, in that order.

        Raises:
            MiddlewareConstructionError: If a stage is unknown or fails to build
        """
        # Imported here; the middleware package depends on config.settings
        from modelmux.middleware import build_stage_factories

        settings = settings or get_settings()
        pipeline = MiddlewarePipeline.from_factories(
            build_stage_factories(settings.MIDDLEWARE, settings)
        )
        return cls(
            build_default_registry(),
            pipeline,
            provider_settings={ProviderTag.BEDROCK: {"region_name": settings.AWS_REGION}},
        )

    def get_model(
        self, identifier: str, settings: Optional[Dict[str, Any]] = None
    ) -> LanguageModel:
        """
        Get a middleware-wrapped model for ``identifier``.

        Args:
            identifier: ``<namespace>:<model>`` or a bare model name for the
                default provider
            settings: Optional provider settings (e.g. ``api_key``)

        Returns:
            LanguageModel: Wrapped model handle

        Raises:
            InvalidModelIdentifierError: If the identifier is empty or malformed
            ProviderRegistrationError: If no provider can serve the identifier
            ProviderNotConfiguredError: If the provider lacks credentials
        """
        match = self.registry.match(identifier)
        provider_settings = {
            **self._provider_settings.get(match.tag, {}),
            **(settings or {}),
        }
        model = self.registry.resolve(identifier, provider_settings or None)
        return self.pipeline.wrap(model)

    def get_image_model(
        self, name: str = OpenAIProvider.DEFAULT_IMAGE_MODEL, **kwargs: Any
    ) -> OpenAIImageModel:
        """
        Get the OpenAI image generation handle.

        Raises:
            ProviderNotConfiguredError: If no OpenAI API key is available
        """
        entry = self.registry.get(ProviderTag.OPENAI)
        provider = entry.provider if entry is not None and entry.provider else OpenAIProvider()
        return provider.create_image_model(name, **kwargs)


_factory: Optional[ModelFactory] = None


def get_factory() -> ModelFactory:
    """Get the process-wide factory, built from settings on first use."""
    global _factory
    if _factory is None:
        _factory = ModelFactory.from_settings(get_settings())
    return _factory


def reset_factory() -> None:
    """Drop the process-wide factory so the next call rebuilds it."""
    global _factory
    _factory = None


def get_model(identifier: str, settings: Optional[Dict[str, Any]] = None) -> LanguageModel:
    """
    Get a ready-to-call model for ``identifier``.

    Example:
        >>> model = get_model("anthropic:claude-3-5-haiku-20241022")
        >>> result = await model.generate(CallParams.from_text("Hello"))
    """
    return get_factory().get_model(identifier, settings)


def get_image_model(name: str = OpenAIProvider.DEFAULT_IMAGE_MODEL, **kwargs: Any) -> OpenAIImageModel:
    """Get the OpenAI image generation handle (default: dall-e-3)."""
    return get_factory().get_image_model(name, **kwargs)
