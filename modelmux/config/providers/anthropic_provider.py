"""
Anthropic Direct API provider implementation.

Selected by identifiers of the form ``anthropic:<model>``, e.g.
``anthropic:claude-3-5-sonnet-20241022``. Creates ChatAnthropic instances
via LangChain.

Example:
    >>> from modelmux.config.providers.anthropic_provider import AnthropicProvider
    >>> provider = AnthropicProvider()
    >>> if provider.is_configured():
    ...     model = provider.create_language_model("claude-3-5-haiku-20241022")
"""

import os
from typing import Any

from modelmux.config.providers.base_provider import ILLMProvider
from modelmux.core.exceptions import ProviderNotConfiguredError


class AnthropicProvider(ILLMProvider):
    """
    Anthropic Direct API provider.

    Provides access to Claude models through Anthropic's official API.
    Requires ANTHROPIC_API_KEY environment variable (or ``api_key`` setting).
    """

    @property
    def name(self) -> str:
        return "anthropic"

    @property
    def display_name(self) -> str:
        return "Anthropic Direct API"

    def is_configured(self) -> bool:
        """
        Check if Anthropic API key is present.

        Returns:
            bool: True if ANTHROPIC_API_KEY is set
        """
        api_key = os.environ.get("ANTHROPIC_API_KEY")
        return bool(api_key and api_key.strip())

    def create_chat_model(self, model_id: str, **kwargs: Any) -> Any:
        """
        Create a ChatAnthropic instance.

        Args:
            model_id: Anthropic model name (e.g., "claude-3-5-haiku-20241022")
            **kwargs: Additional ChatAnthropic parameters (api_key, temperature, ...)

        Returns:
            ChatAnthropic: Configured LangChain chat model

        Raises:
            ImportError: If langchain-anthropic not installed
            ProviderNotConfiguredError: If no API key is available
        """
        try:
            from langchain_anthropic import ChatAnthropic
        except ImportError:
            raise ImportError(
                "langchain-anthropic package not installed. "
                "Install with: pip install langchain-anthropic"
            )

        # Prefer kwarg, fallback to environment
        api_key = kwargs.pop("api_key", None) or os.environ.get("ANTHROPIC_API_KEY")
        if not api_key:
            raise ProviderNotConfiguredError(
                "ANTHROPIC_API_KEY not found in environment or settings.",
                details={
                    "provider": self.name,
                    "model_id": model_id,
                    "help": self.get_configuration_help(),
                },
            )

        return ChatAnthropic(model=model_id, api_key=api_key, **kwargs)

    def get_configuration_help(self) -> str:
        return (
            "Configure Anthropic Direct API:\n\n"
            "1. Get API key from: https://console.anthropic.com/\n"
            "2. Set environment variable:\n"
            "   export ANTHROPIC_API_KEY=sk-ant-...\n\n"
            "Or add to .env file:\n"
            "   ANTHROPIC_API_KEY=sk-ant-..."
        )
