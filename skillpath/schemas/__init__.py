"""Schema package exports."""

from .content import Article, SmartFeedResponse, SourceInfo
from .progress import CompletedNode, ProgressStats, RoadmapProgress
from .usage import DAILY_CAPS, FeatureKind, UsageCounter, UsageStatus

__all__ = [
    "Article",
    "CompletedNode",
    "DAILY_CAPS",
    "FeatureKind",
    "ProgressStats",
    "RoadmapProgress",
    "SmartFeedResponse",
    "SourceInfo",
    "UsageCounter",
    "UsageStatus",
]
