"""Schemas for the mentor's progress insights and next-step suggestions."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .progress import NodeProgress
from .usage import UsageOverview


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RoadmapInsight(_CamelModel):
    """Progress and recent activity for one roadmap."""

    roadmap_id: str = Field(..., serialization_alias="roadmapId")
    completed: int
    total: int
    completion_rate: float = Field(..., serialization_alias="completionRate")
    last_updated: Optional[datetime] = Field(None, serialization_alias="lastUpdated")
    this_week: int = Field(0, serialization_alias="thisWeek")
    this_month: int = Field(0, serialization_alias="thisMonth")
    completed_nodes: List[NodeProgress] = Field(default_factory=list, serialization_alias="completedNodes")


class TotalProgress(BaseModel):
    completed: int
    total: int
    percentage: int


class StreakInfo(_CamelModel):
    current: int
    last_activity: Optional[datetime] = Field(None, serialization_alias="lastActivity")
    unique_active_days: int = Field(0, serialization_alias="uniqueActiveDays")
    average_nodes_per_day: float = Field(0.0, serialization_alias="averageNodesPerDay")


class RecentCompletion(_CamelModel):
    node_id: str = Field(..., serialization_alias="nodeId")
    roadmap_id: str = Field(..., serialization_alias="roadmapId")
    timestamp: datetime


class ActivitySummary(_CamelModel):
    this_week: int = Field(..., serialization_alias="thisWeek")
    this_month: int = Field(..., serialization_alias="thisMonth")
    most_active_roadmap: Optional[RoadmapInsight] = Field(None, serialization_alias="mostActiveRoadmap")
    recent_completions: List[RecentCompletion] = Field(default_factory=list, serialization_alias="recentCompletions")


class RoadmapCounts(_CamelModel):
    bookmarked: int
    following: int
    ai_generated: int = Field(..., serialization_alias="aiGenerated")
    active_roadmaps: int = Field(..., serialization_alias="activeRoadmaps")
    bookmarked_with_progress: int = Field(..., serialization_alias="bookmarkedWithProgress")
    bookmarked_without_progress: int = Field(..., serialization_alias="bookmarkedWithoutProgress")


class CareerSummary(_CamelModel):
    paths_saved: int = Field(..., serialization_alias="pathsSaved")
    latest_goal: Optional[str] = Field(None, serialization_alias="latestGoal")
    ai_suggestions_saved: int = Field(..., serialization_alias="aiSuggestionsSaved")


class Insights(_CamelModel):
    total_progress: TotalProgress = Field(..., serialization_alias="totalProgress")
    roadmap_progress: List[RoadmapInsight] = Field(..., serialization_alias="roadmapProgress")
    streak: StreakInfo
    activity: ActivitySummary
    roadmaps: RoadmapCounts
    career: CareerSummary
    usage: UsageOverview
    recommendations: List[str] = Field(default_factory=list)


class InsightsResponse(BaseModel):
    success: bool = True
    insights: Insights


class Priority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK = {Priority.URGENT: 4, Priority.HIGH: 3, Priority.MEDIUM: 2, Priority.LOW: 1}


class NextStep(_CamelModel):
    """A rule-based suggestion for what to study next."""

    type: str
    title: str
    description: str
    priority: Priority
    urgency: Optional[Priority] = None
    roadmap_id: Optional[str] = Field(None, serialization_alias="roadmapId")
    details: Dict[str, Any] = Field(default_factory=dict)

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self.urgency or self.priority]


class NextStepStats(_CamelModel):
    total_roadmaps: int = Field(..., serialization_alias="totalRoadmaps")
    total_completed_nodes: int = Field(..., serialization_alias="totalCompletedNodes")
    total_nodes: int = Field(..., serialization_alias="totalNodes")
    overall_completion_rate: float = Field(..., serialization_alias="overallCompletionRate")
    current_streak: int = Field(..., serialization_alias="currentStreak")
    bookmarked_roadmaps: int = Field(..., serialization_alias="bookmarkedRoadmaps")
    ai_generated_roadmaps: int = Field(..., serialization_alias="aiGeneratedRoadmaps")
    has_career_path: bool = Field(..., serialization_alias="hasCareerPath")


class NextStepsMetadata(_CamelModel):
    total_suggestions: int = Field(..., serialization_alias="totalSuggestions")
    priority_breakdown: Dict[str, int] = Field(..., serialization_alias="priorityBreakdown")
    user_stats: NextStepStats = Field(..., serialization_alias="userStats")
    usage_limits: UsageOverview = Field(..., serialization_alias="usageLimits")
    last_updated: datetime = Field(..., serialization_alias="lastUpdated")


class NextStepsResponse(BaseModel):
    success: bool = True
    suggestions: List[NextStep]
    metadata: NextStepsMetadata
