from .base import Prompt
from .career import CareerPathPrompt
from .mentor import MentorPrompt
from .roadmap import RoadmapFeedbackPrompt, RoadmapPrompt
from .suggestions import SuggestionPrompt

__all__ = [
    "CareerPathPrompt",
    "MentorPrompt",
    "Prompt",
    "RoadmapFeedbackPrompt",
    "RoadmapPrompt",
    "SuggestionPrompt",
]
