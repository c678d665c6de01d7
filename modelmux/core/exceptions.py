"""
Core exceptions for modelmux.

This module provides the exception hierarchy raised while resolving model
identifiers, building middleware pipelines and invoking language models.
Provider SDK errors are never translated into these types; they propagate
to the caller exactly as the SDK raised them.
"""

from typing import Any, Dict, Optional


class ModelMuxError(Exception):
    """Base exception for all modelmux errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        return self.message


class InvalidModelIdentifierError(ModelMuxError, ValueError):
    """
    Raised when a model identifier cannot be resolved to a backend model name.

    Covers the empty identifier and a namespace tag with nothing after the
    delimiter (e.g. ``"anthropic:"``).

    Attributes:
        message: Human-readable error message
        details: Contains:
            - identifier: The identifier that was rejected
    """

    pass


class ProviderRegistrationError(ModelMuxError):
    """
    Raised when the provider registry is inconsistent.

    Examples are two entries sharing a namespace tag, a second default
    entry, or resolving against a registry that has no default provider.
    """

    pass


class ProviderNotConfiguredError(ModelMuxError):
    """
    Raised by a provider constructor when required configuration is missing.

    Attributes:
        message: Human-readable error message
        details: Contains:
            - provider: Provider name (anthropic | bedrock | openai)
            - model_id: Backend-specific model name that was requested
            - help: Configuration instructions for the user

    Example:
        try:
            model = get_model("anthropic:claude-3-5-haiku-20241022")
        except ProviderNotConfiguredError as e:
            print(e.message)
            print(e.details["help"])
    """

    pass


class MiddlewareConstructionError(ModelMuxError):
    """
    Raised when a middleware stage cannot be built or is malformed.

    Pipeline construction is all-or-nothing: when this is raised no
    partially built pipeline is returned.

    Attributes:
        message: Human-readable error message
        details: Contains:
            - stage: Name or position of the failing stage
    """

    pass


class GenerationAbortedError(ModelMuxError):
    """Raised from ``generate`` when the caller's abort signal fires first."""

    pass


class GuardrailViolationError(ModelMuxError):
    """
    Raised by the guardrail middleware when a prompt contains a blocked term.

    Attributes:
        message: Human-readable error message
        details: Contains:
            - terms: Blocked terms found in the prompt
    """

    pass
