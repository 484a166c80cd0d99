"""Article feed aggregation."""

from .aggregator import ContentAggregator
from .sources import ContentSource, DevToSource, MediumSource, build_sources
from .tags import DEFAULT_TAG_KEY, ROADMAP_TAG_MAP, tags_for

__all__ = [
    "ContentAggregator",
    "ContentSource",
    "DEFAULT_TAG_KEY",
    "DevToSource",
    "MediumSource",
    "ROADMAP_TAG_MAP",
    "build_sources",
    "tags_for",
]
