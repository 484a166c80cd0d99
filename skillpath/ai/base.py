"""AI model wrapper: prompt formatting, retries and response validation."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from ..config import PROVIDER_TYPE, settings
from ..utils.errors import ProviderError, RateLimitError, UpstreamFormatError
from .prompts.base import Prompt
from .providers.base import BaseProvider
from .providers.google import GoogleAIProvider
from .providers.groq import GroqProvider

T = TypeVar("T")


@dataclass
class AIModel:
    """A provider plus the retry policy used for every query."""

    provider: BaseProvider
    max_retries: int = field(default_factory=lambda: settings.ai.max_retries)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    @classmethod
    def default(cls, provider_type: Optional[PROVIDER_TYPE] = None) -> "AIModel":
        """Model backed by ``provider_type``, or the ``AI_PROVIDER`` setting."""
        provider_type = provider_type or settings.ai.default_provider
        if provider_type == PROVIDER_TYPE.GROQ:
            provider: BaseProvider = GroqProvider(api_key=settings.ai.groq_api_key.get_secret_value())
        else:
            provider = GoogleAIProvider()
        return cls(provider=provider)

    async def _call(self, make_request, max_retries: int) -> Any:
        retries = 0
        while True:
            try:
                return await make_request()
            except RateLimitError as e:
                if retries >= max_retries:
                    raise
                wait_time = e.retry_after or 60.0
                self.logger.debug(f"Rate limit exceeded, waiting {wait_time} seconds")
                await asyncio.sleep(wait_time)
            except ProviderError as e:
                if retries >= max_retries:
                    raise
                self.logger.debug(f"Provider error, retrying: {e}")
            retries += 1

    async def text(self, prompt: Union[Prompt, str], max_retries: Optional[int] = None, **kwargs: Any) -> str:
        """Query the model for free-form text.

        Args:
            prompt: The prompt template or raw string to process
            max_retries: Retries on provider failure; defaults to the configured value
            **kwargs: Variables to format the prompt template with

        Raises:
            ProviderError: If the provider fails to generate a response
            RateLimitError: If the provider keeps rate limiting
        """
        formatted, system_prompt, temperature = self._render(prompt, **kwargs)
        return await self._call(
            lambda: self.provider.generate_text(formatted, system_prompt=system_prompt, temperature=temperature),
            self.max_retries if max_retries is None else max_retries,
        )

    async def structured(
        self,
        prompt: Union[Prompt, str],
        response_model: Type[T],
        max_retries: Optional[int] = None,
        **kwargs: Any,
    ) -> T:
        """Query the model for JSON and validate it against ``response_model``.

        ``response_model`` may be any type pydantic can validate, such as a
        model class or ``List[Model]``.

        Raises:
            ProviderError: If the provider fails to generate a response
            UpstreamFormatError: If the answer is not JSON or has the wrong shape
        """
        formatted, system_prompt, temperature = self._render(prompt, **kwargs)
        data = await self._call(
            lambda: self.provider.generate_json(formatted, system_prompt=system_prompt, temperature=temperature),
            self.max_retries if max_retries is None else max_retries,
        )
        return validate_response(data, response_model)

    @staticmethod
    def _render(prompt: Union[Prompt, str], **kwargs: Any):
        if isinstance(prompt, Prompt):
            return prompt.format(**kwargs), prompt.system_prompt, prompt.temperature
        return prompt, None, Prompt.temperature


def validate_response(data: Any, response_model: Type[T]) -> T:
    """Validate decoded model output, raising UpstreamFormatError on mismatch."""
    try:
        return TypeAdapter(response_model).validate_python(data)
    except ValidationError as e:
        logging.getLogger(__name__).error(f"Model response failed validation: {e}")
        raise UpstreamFormatError(
            "Model response did not match the expected format",
            details={"errors": e.errors(include_url=False, include_context=False, include_input=False)},
        ) from e
