"""Default call settings middleware."""

from dataclasses import replace
from typing import Any, Dict, Optional

from modelmux.core.middleware import MiddlewareStage
from modelmux.core.types import CallParams, CallType


def create_defaults_middleware(
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    top_p: Optional[float] = None,
    provider_options: Optional[Dict[str, Any]] = None,
) -> MiddlewareStage:
    """
    Create a stage that fills in call settings the caller left unset.

    Values given explicitly in ``CallParams`` always win; provider options
    are merged with the caller's keys taking precedence.
    """
    defaults_options = dict(provider_options or {})

    def transform_params(*, params: CallParams, call_type: CallType) -> CallParams:
        return replace(
            params,
            temperature=params.temperature if params.temperature is not None else temperature,
            max_tokens=params.max_tokens if params.max_tokens is not None else max_tokens,
            top_p=params.top_p if params.top_p is not None else top_p,
            provider_options={**defaults_options, **params.provider_options},
        )

    return MiddlewareStage(name="defaults", transform_params=transform_params)
