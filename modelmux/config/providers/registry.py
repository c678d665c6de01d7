"""
Provider registry and model identifier resolution.

A model identifier is either ``<namespace>:<backend-model-name>`` or a bare
backend model name. The registry holds one ``ProviderEntry`` per backend
family in a fixed order. Resolution walks that order, and the first entry
whose ``<namespace>:`` prefix matches wins; the remainder of the identifier
is passed unmodified to that entry's constructor. When nothing matches,
the whole identifier goes to the default entry.

Usage:
    >>> from modelmux.config.providers import build_default_registry
    >>>
    >>> registry = build_default_registry()
    >>> registry.match("bedrock:anthropic.claude-3-haiku-20240307-v1:0")
    IdentifierMatch(tag=<ProviderTag.BEDROCK: 'bedrock'>, model_name='anthropic.claude-3-haiku-20240307-v1:0', is_default=False)
    >>> model = registry.resolve("gpt-4o-mini")  # default provider (OpenAI)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from modelmux.config.providers.base_provider import ILLMProvider
from modelmux.core.exceptions import (
    InvalidModelIdentifierError,
    ProviderRegistrationError,
)
from modelmux.core.language_model import LanguageModel

NAMESPACE_DELIMITER = ":"

ProviderConstructor = Callable[[str, Optional[Dict[str, Any]]], LanguageModel]


class ProviderTag(Enum):
    """Supported provider families."""

    ANTHROPIC = "anthropic"
    BEDROCK = "bedrock"
    OPENAI = "openai"


@dataclass(frozen=True)
class ProviderEntry:
    """
    Registry entry for one provider family.

    Attributes:
        tag: Provider family
        constructor: ``(model_name, settings) -> LanguageModel``
        namespace: Identifier prefix without delimiter; None marks the
            default (catch-all) entry
        provider: Provider object the constructor belongs to, if any
    """

    tag: ProviderTag
    constructor: ProviderConstructor
    namespace: Optional[str] = None
    provider: Optional[ILLMProvider] = None

    @property
    def is_default(self) -> bool:
        return self.namespace is None

    @property
    def prefix(self) -> Optional[str]:
        if self.namespace is None:
            return None
        return f"{self.namespace}{NAMESPACE_DELIMITER}"


@dataclass(frozen=True)
class IdentifierMatch:
    """
    Outcome of matching an identifier against the registry.

    Attributes:
        tag: Selected provider family
        model_name: Backend-specific model name handed to the constructor
        is_default: True when no namespace matched and the default entry
            was selected
    """

    tag: ProviderTag
    model_name: str
    is_default: bool


class ProviderRegistry:
    """
    Ordered registry of provider entries.

    Entries are matched in registration order. Tags and namespaces are
    unique, and there is at most one default entry. The registry is built
    once at startup and not mutated afterwards.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register_provider(ProviderTag.ANTHROPIC, AnthropicProvider())
        >>> registry.register_provider(ProviderTag.OPENAI, OpenAIProvider())
        >>> registry.match("anthropic:claude-3-5-haiku-20241022").model_name
        'claude-3-5-haiku-20241022'
    """

    def __init__(self, entries: Iterable[ProviderEntry] = ()):
        self._entries: List[ProviderEntry] = []
        self._default: Optional[ProviderEntry] = None
        for entry in entries:
            self.register(entry)

    def register(self, entry: ProviderEntry) -> None:
        """
        Register a provider entry.

        Args:
            entry: Entry to append to the matching order

        Raises:
            ProviderRegistrationError: If the tag or namespace is already
                registered, the namespace is malformed, or a second default
                entry is registered
        """
        for existing in self._entries:
            if existing.tag is entry.tag:
                raise ProviderRegistrationError(
                    f"Provider already registered: {entry.tag.value}",
                    details={"tag": entry.tag.value},
                )
            if entry.namespace is not None and existing.namespace == entry.namespace:
                raise ProviderRegistrationError(
                    f"Namespace already registered: {entry.namespace}",
                    details={"namespace": entry.namespace},
                )

        if entry.is_default:
            if self._default is not None:
                raise ProviderRegistrationError(
                    f"Default provider already registered: {self._default.tag.value}",
                    details={"tag": entry.tag.value},
                )
            self._default = entry
        elif not entry.namespace or NAMESPACE_DELIMITER in entry.namespace:
            raise ProviderRegistrationError(
                f"Invalid namespace for provider {entry.tag.value}: {entry.namespace!r}",
                details={"tag": entry.tag.value, "namespace": entry.namespace},
            )

        self._entries.append(entry)

    def register_provider(self, tag: ProviderTag, provider: ILLMProvider) -> ProviderEntry:
        """
        Register an ``ILLMProvider`` under ``tag`` using its namespace.

        Returns:
            ProviderEntry: The entry that was registered
        """
        entry = ProviderEntry(
            tag=tag,
            constructor=provider.create_language_model,
            namespace=provider.namespace,
            provider=provider,
        )
        self.register(entry)
        return entry

    @property
    def entries(self) -> Tuple[ProviderEntry, ...]:
        return tuple(self._entries)

    @property
    def default_entry(self) -> Optional[ProviderEntry]:
        return self._default

    def get(self, tag: ProviderTag) -> Optional[ProviderEntry]:
        """Get the entry registered for ``tag``, or None."""
        for entry in self._entries:
            if entry.tag is tag:
                return entry
        return None

    def get_provider_names(self) -> List[str]:
        """Provider names in matching order (default last)."""
        names = [e.tag.value for e in self._entries if not e.is_default]
        if self._default is not None:
            names.append(self._default.tag.value)
        return names

    def match(self, identifier: str) -> IdentifierMatch:
        """
        Select the entry for ``identifier`` without constructing anything.

        Args:
            identifier: Model identifier

        Returns:
            IdentifierMatch: Selected tag and backend-specific model name

        Raises:
            InvalidModelIdentifierError: If the identifier is empty or a
                namespace is followed by nothing
            ProviderRegistrationError: If nothing matches and no default
                entry is registered
        """
        if not identifier:
            raise InvalidModelIdentifierError(
                "Model identifier must be a non-empty string",
                details={"identifier": identifier},
            )

        for entry in self._entries:
            if entry.is_default or not identifier.startswith(entry.prefix):
                continue
            model_name = identifier[len(entry.prefix):]
            if not model_name:
                raise InvalidModelIdentifierError(
                    f"Model identifier '{identifier}' names no model after the namespace",
                    details={"identifier": identifier},
                )
            return IdentifierMatch(tag=entry.tag, model_name=model_name, is_default=False)

        if self._default is None:
            raise ProviderRegistrationError(
                f"No provider matches '{identifier}' and no default provider is registered",
                details={"identifier": identifier},
            )
        return IdentifierMatch(tag=self._default.tag, model_name=identifier, is_default=True)

    def resolve(self, identifier: str, settings: Optional[Dict[str, Any]] = None) -> LanguageModel:
        """
        Resolve ``identifier`` to a bare ``LanguageModel``.

        Performs no network I/O. Errors raised by the selected constructor
        (e.g. missing credentials) propagate unmodified.

        Args:
            identifier: Model identifier
            settings: Optional provider settings passed to the constructor

        Returns:
            LanguageModel: Unwrapped model object
        """
        match = self.match(identifier)
        entry = self._default if match.is_default else self.get(match.tag)
        return entry.constructor(match.model_name, settings)


def build_default_registry() -> ProviderRegistry:
    """
    Build the registry with all supported providers.

    Matching order: Anthropic (``anthropic:``), Bedrock (``bedrock:``),
    then OpenAI as the default for everything else.
    """
    from modelmux.config.providers.anthropic_provider import AnthropicProvider
    from modelmux.config.providers.bedrock_provider import BedrockProvider
    from modelmux.config.providers.openai_provider import OpenAIProvider

    registry = ProviderRegistry()
    registry.register_provider(ProviderTag.ANTHROPIC, AnthropicProvider())
    registry.register_provider(ProviderTag.BEDROCK, BedrockProvider())
    registry.register_provider(ProviderTag.OPENAI, OpenAIProvider())
    return registry
