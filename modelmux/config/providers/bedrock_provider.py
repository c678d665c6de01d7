"""
AWS Bedrock provider implementation.

Selected by identifiers of the form ``bedrock:<model-id>``, e.g.
``bedrock:anthropic.claude-3-5-haiku-20241022-v1:0``. Only the leading
``bedrock:`` tag is stripped; Bedrock model IDs keep their own colons.

Key features:
- AWS IAM credential management (explicit keys or the boto3 default chain)
- Region selection (default: us-east-1)
- ChatBedrockConverse LangChain integration
"""

import os
from typing import Any

from modelmux.config.providers.base_provider import ILLMProvider


class BedrockProvider(ILLMProvider):
    """
    AWS Bedrock provider.

    Configuration:
        AWS_ACCESS_KEY_ID: AWS access key ID (optional, boto3 chain otherwise)
        AWS_SECRET_ACCESS_KEY: AWS secret access key
        AWS_SESSION_TOKEN: Session token for temporary credentials (optional)
        AWS_REGION: AWS region (optional, default: us-east-1)
    """

    DEFAULT_REGION = "us-east-1"

    @property
    def name(self) -> str:
        return "bedrock"

    @property
    def display_name(self) -> str:
        return "AWS Bedrock"

    def is_configured(self) -> bool:
        """
        Check if AWS credentials are present.

        Returns:
            bool: True if explicit keys or an AWS profile are configured
        """
        has_keys = bool(
            os.environ.get("AWS_ACCESS_KEY_ID")
            and os.environ.get("AWS_SECRET_ACCESS_KEY")
        )
        return has_keys or bool(os.environ.get("AWS_PROFILE"))

    def create_chat_model(self, model_id: str, **kwargs: Any) -> Any:
        """
        Create a ChatBedrockConverse instance.

        Args:
            model_id: Bedrock model ID (e.g., "anthropic.claude-3-haiku-20240307-v1:0")
            **kwargs: Additional parameters:
                - region_name: AWS region (default: AWS_REGION or us-east-1)
                - aws_access_key_id: Override AWS access key
                - aws_secret_access_key: Override AWS secret key
                - any other ChatBedrockConverse field

        Returns:
            ChatBedrockConverse: LangChain chat model instance

        Raises:
            ImportError: If langchain-aws not installed
        """
        try:
            from langchain_aws import ChatBedrockConverse
        except ImportError:
            raise ImportError(
                "langchain-aws package not installed. "
                "Install with: pip install langchain-aws"
            )

        bedrock_params = {"model_id": model_id}

        # Region from kwargs, environment or default
        region = kwargs.pop("region_name", None) or os.environ.get(
            "AWS_REGION", self.DEFAULT_REGION
        )
        bedrock_params["region_name"] = region

        # Explicit credentials only when both halves are present
        aws_access_key = kwargs.pop("aws_access_key_id", None) or os.environ.get(
            "AWS_ACCESS_KEY_ID"
        )
        aws_secret_key = kwargs.pop("aws_secret_access_key", None) or os.environ.get(
            "AWS_SECRET_ACCESS_KEY"
        )
        if aws_access_key and aws_secret_key:
            bedrock_params["aws_access_key_id"] = aws_access_key
            bedrock_params["aws_secret_access_key"] = aws_secret_key
            session_token = os.environ.get("AWS_SESSION_TOKEN")
            if session_token:
                bedrock_params["aws_session_token"] = session_token

        bedrock_params.update(kwargs)
        return ChatBedrockConverse(**bedrock_params)

    def get_configuration_help(self) -> str:
        return (
            "Configure AWS Bedrock by setting environment variables:\n\n"
            "  AWS_ACCESS_KEY_ID=AKIA...\n"
            "  AWS_SECRET_ACCESS_KEY=...\n"
            "  AWS_REGION=us-east-1  # Default region for Bedrock API\n\n"
            "Or configure a profile with `aws configure` and set AWS_PROFILE.\n"
            "Note: Model availability varies by region."
        )
