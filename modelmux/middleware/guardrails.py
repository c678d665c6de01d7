"""
Prompt guardrail middleware.

Rejects calls whose prompt contains a blocked term before any provider
request is made. Matching is case-insensitive on the text content of every
message; non-text content blocks are ignored.
"""

from typing import Any, Iterable, List

from modelmux.core.exceptions import GuardrailViolationError
from modelmux.core.middleware import MiddlewareStage
from modelmux.core.types import CallParams, CallType


def _message_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return " ".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return ""


def create_guardrails_middleware(blocked_terms: Iterable[str]) -> MiddlewareStage:
    """
    Create a stage that blocks prompts containing any of ``blocked_terms``.

    Args:
        blocked_terms: Terms to reject (case-insensitive substring match)

    Returns:
        MiddlewareStage: Guardrail stage (``transform_params`` only)

    Raises:
        ValueError: If no non-empty term is given
    """
    terms: List[str] = [term.strip().lower() for term in blocked_terms if term and term.strip()]
    if not terms:
        raise ValueError("Guardrails middleware requires at least one blocked term")

    def transform_params(*, params: CallParams, call_type: CallType) -> CallParams:
        text = " ".join(_message_text(m.get("content")) for m in params.prompt).lower()
        found = [term for term in terms if term in text]
        if found:
            raise GuardrailViolationError(
                f"Prompt contains blocked terms: {', '.join(found)}",
                details={"terms": found, "call_type": call_type},
            )
        return params

    return MiddlewareStage(name="guardrails", transform_params=transform_params)
