"""Google AI provider implementation."""

import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions

from ...config import settings
from ...utils.errors import ProviderError, RateLimitError
from .base import BaseProvider


class GoogleAIProvider(BaseProvider):
    """Provider for Google's Generative AI API (Gemini)."""

    provider = "google"

    def __init__(self, default_model: Optional[str] = None):
        super().__init__(default_model=default_model)
        genai.configure(api_key=settings.ai.google_api_key.get_secret_value())
        self._default_model = default_model or settings.ai.default_model
        self.logger = logging.getLogger(__name__)

    async def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Generate text from the model."""
        generate_config = genai.types.GenerationConfig(temperature=temperature, max_output_tokens=max_tokens)
        try:
            model_instance = genai.GenerativeModel(
                model_name=self._default_model,
                generation_config=generate_config,
                system_instruction=system_prompt,
            )
            response = await model_instance.generate_content_async(prompt)
            text = response.text
        except exceptions.ResourceExhausted as e:
            # Google's API returns 429 as ResourceExhausted
            raise RateLimitError(self.provider, retry_after=60.0) from e
        except Exception as e:
            self.logger.error(f"Google generation failed: {e}")
            raise ProviderError(f"Google error: {str(e)}", details={"provider": self.provider}) from e

        if not text:
            raise ProviderError("Empty response from model", details={"provider": self.provider})
        return text
