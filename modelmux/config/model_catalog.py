"""
Static catalog of selectable models.

Display metadata for UIs and the CLI. The core never reads it: it only
ever sees the ``api_identifier`` strings.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class ModelEntry:
    """
    One selectable model.

    Attributes:
        id: Catalog key
        label: Human-friendly name
        api_identifier: Model identifier passed to ``get_model``
        description: Short description of the model
    """

    id: str
    label: str
    api_identifier: str
    description: str


MODELS: List[ModelEntry] = [
    # Amazon Bedrock
    ModelEntry(
        id="bedrock:anthropic.claude-3-haiku-20240307-v1:0",
        label="Bedrock - Claude 3 Haiku",
        api_identifier="bedrock:anthropic.claude-3-haiku-20240307-v1:0",
        description="Anthropic Claude on Amazon Bedrock with Haiku 3 variant",
    ),
    ModelEntry(
        id="bedrock:anthropic.claude-3-5-haiku-20241022-v1:0",
        label="Bedrock - Claude 3.5 Haiku",
        api_identifier="bedrock:anthropic.claude-3-5-haiku-20241022-v1:0",
        description="Anthropic Claude on Amazon Bedrock with Haiku 3.5 variant",
    ),
    ModelEntry(
        id="bedrock:anthropic.claude-3-5-sonnet-20241022-v2:0",
        label="Bedrock - Claude 3.5 Sonnet V2",
        api_identifier="bedrock:anthropic.claude-3-5-sonnet-20241022-v2:0",
        description="Anthropic Claude on Amazon Bedrock with Sonnet variant",
    ),
    # OpenAI
    ModelEntry(
        id="gpt-4o-mini",
        label="OpenAI - GPT 4o mini",
        api_identifier="gpt-4o-mini",
        description="Small model for fast, lightweight tasks",
    ),
    ModelEntry(
        id="gpt-4o",
        label="OpenAI - GPT 4o",
        api_identifier="gpt-4o",
        description="For complex, multi-step tasks",
    ),
    # Anthropic
    ModelEntry(
        id="anthropic:claude-3-5-haiku-20241022",
        label="Anthropic - Claude 3.5 Haiku",
        api_identifier="anthropic:claude-3-5-haiku-20241022",
        description="Anthropic's faster Claude model for simpler tasks",
    ),
    ModelEntry(
        id="anthropic:claude-3-5-sonnet-20241022",
        label="Anthropic - Claude 3.5 Sonnet V2",
        api_identifier="anthropic:claude-3-5-sonnet-20241022",
        description="Anthropic's advanced Claude model for complex tasks",
    ),
]

DEFAULT_MODEL_NAME = "gpt-4o-mini"


def get_model_entry(model_id: str) -> Optional[ModelEntry]:
    """Get a catalog entry by id, or None."""
    for entry in MODELS:
        if entry.id == model_id:
            return entry
    return None


def list_models() -> List[ModelEntry]:
    """List all catalog entries."""
    return list(MODELS)
