"""
LLM provider layer for modelmux.

Architecture:
    ILLMProvider (ABC) - Interface every backend family implements
    ProviderRegistry - Ordered entries; resolves model identifiers
    Concrete providers - AnthropicProvider, BedrockProvider, OpenAIProvider

Usage:
    >>> from modelmux.config.providers import build_default_registry
    >>>
    >>> registry = build_default_registry()
    >>> model = registry.resolve("anthropic:claude-3-5-sonnet-20241022")
"""

from modelmux.config.providers.base_provider import ILLMProvider
from modelmux.config.providers.registry import (
    NAMESPACE_DELIMITER,
    IdentifierMatch,
    ProviderEntry,
    ProviderRegistry,
    ProviderTag,
    build_default_registry,
)

__all__ = [
    "ILLMProvider",
    "IdentifierMatch",
    "NAMESPACE_DELIMITER",
    "ProviderEntry",
    "ProviderRegistry",
    "ProviderTag",
    "build_default_registry",
]
