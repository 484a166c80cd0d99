"""Shared FastAPI dependencies."""

from functools import lru_cache

from fastapi import Request

from ..ai.base import AIModel
from ..services.content import ContentAggregator, build_sources


@lru_cache(maxsize=1)
def get_ai_model() -> AIModel:
    """The configured AI model, created on first use."""
    return AIModel.default()


def get_content_aggregator(request: Request) -> ContentAggregator:
    return ContentAggregator(build_sources(request.app.state.http_client))
