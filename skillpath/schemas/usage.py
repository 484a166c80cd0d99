"""Schemas for per-feature daily usage counters."""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class FeatureKind(str, Enum):
    """Features gated by a daily usage cap."""

    ROADMAP = "roadmap"
    CHATBOT = "chatbot"
    AI_SUGGESTIONS = "ai-suggestions"
    CAREER_TRACK = "career-track"


# Fixed per-feature daily caps
DAILY_CAPS: Dict[FeatureKind, int] = {
    FeatureKind.ROADMAP: 10,
    FeatureKind.CHATBOT: 10,
    FeatureKind.AI_SUGGESTIONS: 3,
    FeatureKind.CAREER_TRACK: 3,
}

# User document field holding each feature's counters
USAGE_FIELDS: Dict[FeatureKind, str] = {
    FeatureKind.ROADMAP: "roadmap_usage",
    FeatureKind.CHATBOT: "chatbot_usage",
    FeatureKind.AI_SUGGESTIONS: "ai_suggestions_usage",
    FeatureKind.CAREER_TRACK: "career_track_usage",
}


class UsageCounter(BaseModel):
    """Number of uses of one feature on one UTC calendar day."""

    day: str = Field(..., description="ISO calendar date (YYYY-MM-DD, UTC)")
    count: int = Field(default=0, ge=0)

    model_config = ConfigDict(json_schema_extra={"example": {"day": "2025-03-14", "count": 2}})


class UsageStatus(BaseModel):
    """Result of checking a feature's counters for today."""

    can_use: bool = Field(..., serialization_alias="canUse")
    usage_count: int = Field(..., serialization_alias="usageCount")
    remaining_count: int = Field(..., serialization_alias="remainingCount")

    model_config = ConfigDict(populate_by_name=True)


class UsageOverview(BaseModel):
    """Today's status for every gated feature."""

    roadmap: UsageStatus
    chatbot: UsageStatus
    ai_suggestions: UsageStatus = Field(..., serialization_alias="aiSuggestions")
    career_track: UsageStatus = Field(..., serialization_alias="careerTrack")

    model_config = ConfigDict(populate_by_name=True)
