"""Groq AI provider implementation."""

import logging
from typing import Dict, List, Optional

import groq
from groq import AsyncGroq
from groq.types.chat import ChatCompletion

from ...config import settings
from ...utils.errors import ProviderError, RateLimitError
from .base import BaseProvider


class GroqProvider(BaseProvider):
    """Groq chat-completions implementation."""

    provider = "groq"

    def __init__(self, api_key: str, default_model: Optional[str] = None):
        """Initialize the Groq provider.

        Args:
            api_key: Groq API key
            default_model: The default model to use for text generation. If None, uses the configured default.
        """
        super().__init__(default_model=default_model)
        self.client = AsyncGroq(api_key=api_key)
        self.model = default_model or settings.ai.groq_model
        self.logger = logging.getLogger(__name__)

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Generate text from the model."""
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        try:
            response: ChatCompletion = await self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except groq.RateLimitError as e:
            retry_after = float(e.response.headers.get("retry-after", "60"))
            raise RateLimitError(self.provider, retry_after=retry_after) from e
        except groq.APIError as e:
            self.logger.error(f"Groq generation failed: {e}")
            raise ProviderError(f"Groq error: {str(e)}", details={"provider": self.provider}) from e

        if not response.choices or not response.choices[0].message.content:
            raise ProviderError("Empty response from model", details={"provider": self.provider})
        return response.choices[0].message.content
