"""
OpenAI provider implementation.

The default provider: any identifier without a recognised namespace tag is
passed to it whole (``gpt-4o-mini``, ``gpt-4o``, ...). Also builds the
image generation handle.
"""

import os
from typing import Any, Optional

from modelmux.config.providers.base_provider import ILLMProvider
from modelmux.core.exceptions import ProviderNotConfiguredError
from modelmux.core.image_model import OpenAIImageModel


class OpenAIProvider(ILLMProvider):
    """
    OpenAI API provider.

    Requires OPENAI_API_KEY environment variable (or ``api_key`` setting).
    OPENAI_BASE_URL points the client at any OpenAI-compatible endpoint.
    """

    DEFAULT_IMAGE_MODEL = "dall-e-3"

    @property
    def name(self) -> str:
        return "openai"

    @property
    def namespace(self) -> Optional[str]:
        # Catch-all provider; never selected by a tag
        return None

    @property
    def display_name(self) -> str:
        return "OpenAI"

    def is_configured(self) -> bool:
        api_key = os.environ.get("OPENAI_API_KEY")
        return bool(api_key and api_key.strip())

    def _api_key(self, model_id: str, api_key: Optional[str]) -> str:
        api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ProviderNotConfiguredError(
                "OPENAI_API_KEY not found in environment or settings.",
                details={
                    "provider": self.name,
                    "model_id": model_id,
                    "help": self.get_configuration_help(),
                },
            )
        return api_key

    def create_chat_model(self, model_id: str, **kwargs: Any) -> Any:
        """
        Create a ChatOpenAI instance.

        Args:
            model_id: OpenAI model name (e.g., "gpt-4o-mini")
            **kwargs: Additional ChatOpenAI parameters (api_key, base_url, ...)

        Returns:
            ChatOpenAI: Configured LangChain chat model

        Raises:
            ImportError: If langchain-openai not installed
            ProviderNotConfiguredError: If no API key is available
        """
        try:
            from langchain_openai import ChatOpenAI
        except ImportError:
            raise ImportError(
                "langchain-openai package not installed. "
                "Install with: pip install langchain-openai"
            )

        api_key = self._api_key(model_id, kwargs.pop("api_key", None))
        base_url = kwargs.pop("base_url", None) or os.environ.get("OPENAI_BASE_URL")
        if base_url:
            kwargs["base_url"] = base_url

        return ChatOpenAI(model=model_id, api_key=api_key, **kwargs)

    def create_image_model(self, model_id: str = DEFAULT_IMAGE_MODEL, **kwargs: Any) -> OpenAIImageModel:
        """
        Create an image generation handle.

        Args:
            model_id: Image model name (default: "dall-e-3")
            **kwargs: Additional ``AsyncOpenAI`` client parameters

        Returns:
            OpenAIImageModel: Image handle

        Raises:
            ProviderNotConfiguredError: If no API key is available
        """
        from openai import AsyncOpenAI

        api_key = self._api_key(model_id, kwargs.pop("api_key", None))
        base_url = kwargs.pop("base_url", None) or os.environ.get("OPENAI_BASE_URL")
        if base_url:
            kwargs["base_url"] = base_url
        return OpenAIImageModel(model_id, AsyncOpenAI(api_key=api_key, **kwargs))

    def get_configuration_help(self) -> str:
        return (
            "Configure OpenAI:\n\n"
            "1. Get API key from: https://platform.openai.com/api-keys\n"
            "2. Set environment variable:\n"
            "   export OPENAI_API_KEY=sk-...\n\n"
            "Optional: OPENAI_BASE_URL for OpenAI-compatible endpoints."
        )
