from .base import BaseProvider
from .google import GoogleAIProvider
from .groq import GroqProvider

__all__ = ["BaseProvider", "GoogleAIProvider", "GroqProvider"]
