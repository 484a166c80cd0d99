"""Base classes for AI providers."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from ...utils.errors import UpstreamFormatError
from ...utils.html import strip_code_fences

JSON_INSTRUCTION = """You must respond with valid JSON only.
Do not include any explanatory text, markdown formatting, or code blocks.
The response should be parseable by json.loads().

"""


class BaseProvider(ABC):
    """Base class for AI providers."""

    provider: str = "base"

    def __init__(self, default_model: Optional[str] = None):
        """Initialize the provider.

        Args:
            default_model: The default model to use for text generation. If None, uses the configured default.
        """
        self.logger = logging.getLogger(__name__)
        self._default_model = default_model

    @property
    def default_model(self) -> Optional[str]:
        """Get the default model for this provider."""
        return self._default_model

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Generate text from the model.

        Args:
            prompt: The input prompt
            system_prompt: Optional system instruction
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate

        Returns:
            Generated text

        Raises:
            ProviderError: If generation fails
            RateLimitError: If rate limit is exceeded
        """
        pass

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: Optional[int] = None,
    ) -> Any:
        """Generate JSON from the model.

        Returns:
            The decoded JSON value (object or array)

        Raises:
            ProviderError: If generation fails
            RateLimitError: If rate limit is exceeded
            UpstreamFormatError: If the answer is not JSON
        """
        text = await self.generate_text(
            JSON_INSTRUCTION + prompt,
            system_prompt=system_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return self.parse_json(text)

    def parse_json(self, text: str) -> Any:
        cleaned = strip_code_fences(text)
        try:
            return json.loads(cleaned)
        except json.JSONDecodeError as e:
            self.logger.error(f"Couldn't parse JSON from {self.provider} response: {cleaned[:500]}")
            raise UpstreamFormatError(
                f"Invalid JSON response: {e}", details={"provider": self.provider}
            ) from e
