"""
Image generation handle.

A thin async wrapper over the OpenAI Images API. It is not part of the
chat ``LanguageModel`` contract and has no middleware pipeline.
"""

from dataclasses import dataclass
from typing import Any, List, Optional


@dataclass(frozen=True)
class GeneratedImage:
    """One generated image; exactly one of ``url`` / ``b64_json`` is set."""

    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class OpenAIImageModel:
    """
    Image model backed by ``openai.AsyncOpenAI``.

    Args:
        model_id: Image model name (e.g., "dall-e-3")
        client: Configured ``AsyncOpenAI`` client
    """

    provider = "openai"

    def __init__(self, model_id: str, client: Any):
        self.model_id = model_id
        self._client = client

    async def generate(
        self,
        prompt: str,
        n: int = 1,
        size: str = "1024x1024",
        response_format: str = "url",
        **kwargs: Any,
    ) -> List[GeneratedImage]:
        """
        Generate images for ``prompt``.

        Args:
            prompt: Text description of the image
            n: Number of images (dall-e-3 only supports 1)
            size: Image dimensions
            response_format: "url" or "b64_json"
            **kwargs: Extra ``images.generate`` parameters (quality, style, ...)

        Returns:
            List[GeneratedImage]: Generated images
        """
        response = await self._client.images.generate(
            model=self.model_id,
            prompt=prompt,
            n=n,
            size=size,
            response_format=response_format,
            **kwargs,
        )
        return [
            GeneratedImage(
                url=getattr(item, "url", None),
                b64_json=getattr(item, "b64_json", None),
                revised_prompt=getattr(item, "revised_prompt", None),
            )
            for item in response.data
        ]
