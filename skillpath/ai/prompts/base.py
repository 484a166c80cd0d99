"""Base prompt class."""

from typing import Any, List


class Prompt:
    """Base class for all prompts."""

    temperature: float = 0.7

    def __init__(self, template: str, system_prompt: str):
        """Initialize the prompt.

        Args:
            template: The prompt template string
            system_prompt: The system prompt
        """
        self.template = template
        self.system_prompt = system_prompt

    def format(self, **kwargs: Any) -> str:
        """Format the prompt template with variables.

        Args:
            **kwargs: Variables to format the template with

        Returns:
            str: The formatted prompt
        """
        return self.template.format(**kwargs)


def join_values(values: List[str], empty: str = "None") -> str:
    return ", ".join(values) if values else empty
