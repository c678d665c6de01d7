"""
Base provider interface for LLM backends.

This module defines the abstract interface every backend family implements.
A provider knows how to build its SDK's LangChain chat model from a
backend-specific model name; ``create_language_model`` then adapts that
chat model to the ``LanguageModel`` contract the rest of modelmux uses.

Example:
    >>> class MyProvider(ILLMProvider):
    ...     @property
    ...     def name(self) -> str:
    ...         return "my_provider"
    ...
    ...     def is_configured(self) -> bool:
    ...         return bool(os.environ.get("MY_API_KEY"))
    ...     # ... implement create_chat_model
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from modelmux.core.langchain_adapter import LangChainLanguageModel
from modelmux.core.language_model import LanguageModel


class ILLMProvider(ABC):
    """
    Abstract interface for LLM providers.

    The interface ensures:
    - Uniform construction from a backend-specific model name
    - Consistent credential checks before any network call
    - Every backend ends up behind the same ``LanguageModel`` surface
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Provider identifier (lowercase, no spaces).

        Returns:
            str: Provider name (e.g., "anthropic", "bedrock", "openai")
        """
        pass

    @property
    def namespace(self) -> Optional[str]:
        """
        Namespace tag that selects this provider in a model identifier.

        Returns:
            Optional[str]: Tag without delimiter, or None for the default
            (catch-all) provider
        """
        return self.name

    @property
    def display_name(self) -> str:
        """
        Human-friendly provider name for UI display.

        Returns:
            str: Display name (e.g., "Anthropic Direct API")
        """
        return self.name.title()

    @abstractmethod
    def is_configured(self) -> bool:
        """
        Check if provider has credentials/configuration present.

        Does NOT verify they are valid; that happens at the first API call.

        Returns:
            bool: True if required configuration is present
        """
        pass

    @abstractmethod
    def create_chat_model(self, model_id: str, **kwargs: Any) -> Any:
        """
        Create a LangChain chat model instance.

        Args:
            model_id: Model identifier (provider-specific format)
            **kwargs: Provider-specific parameters

        Returns:
            BaseChatModel: LangChain chat model instance

        Raises:
            ImportError: If required LangChain package not installed
            ProviderNotConfiguredError: If required credentials are missing
        """
        pass

    def create_language_model(
        self, model_id: str, settings: Optional[Dict[str, Any]] = None
    ) -> LanguageModel:
        """
        Create a ready-to-call ``LanguageModel`` for ``model_id``.

        This is the constructor registered with ``ProviderRegistry``.

        Args:
            model_id: Backend-specific model name, passed through unmodified
            settings: Optional provider settings forwarded to ``create_chat_model``

        Returns:
            LanguageModel: Adapted chat model
        """
        chat_model = self.create_chat_model(model_id, **(settings or {}))
        return LangChainLanguageModel(chat_model, provider=self.name, model_id=model_id)

    def get_configuration_help(self) -> str:
        """
        Get help text for configuring this provider.

        Returns:
            str: Configuration instructions for the user
        """
        return f"Configure {self.display_name} by setting required environment variables."
