"""Article feeds for roadmaps, merged from external sources."""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..config import settings
from ..schemas.content import Article, Pagination, SmartFeedResponse, SourcesResponse
from ..services.content import DEFAULT_TAG_KEY, ContentAggregator, tags_for
from ..services.content.aggregator import filter_by_source
from ..utils.errors import ValidationFailure
from .dependencies import get_content_aggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/content", tags=["content"])


def _feed_response(
    articles: List[Article], page: int, aggregator: ContentAggregator
) -> SmartFeedResponse:
    return SmartFeedResponse(
        articles=articles,
        pagination=Pagination(current_page=page, has_more=len(articles) > 0),
        available_sources=aggregator.available_sources(),
    )


# Registered before /smart-feed/{roadmap_id} so "default" is not taken as a roadmap id
@router.get("/smart-feed/default", response_model=SmartFeedResponse)
async def default_feed(
    page: int = Query(1, ge=1),
    source: Optional[str] = Query(None, description="Source name to keep, or 'all'"),
    aggregator: ContentAggregator = Depends(get_content_aggregator),
) -> SmartFeedResponse:
    """General programming articles for anonymous users and users without bookmarks."""
    articles = await aggregator.fetch_mixed(
        tags_for(DEFAULT_TAG_KEY), limit=settings.content.default_feed_limit, page=page
    )
    return _feed_response(filter_by_source(articles, source), page, aggregator)


@router.get("/smart-feed/{roadmap_id}", response_model=SmartFeedResponse)
async def smart_feed(
    roadmap_id: str,
    page: int = Query(1, ge=1),
    source: Optional[str] = Query(None, description="Source name to keep, or 'all'"),
    aggregator: ContentAggregator = Depends(get_content_aggregator),
) -> SmartFeedResponse:
    """Articles for a roadmap's tags, newest first.

    Raises:
        ValidationFailure: If the roadmap id has no tag mapping
    """
    tags = tags_for(roadmap_id)
    if tags is None:
        raise ValidationFailure("Invalid roadmap ID", details={"roadmapId": roadmap_id})

    articles = await aggregator.fetch_mixed(tags, limit=settings.content.feed_limit, page=page)
    articles = filter_by_source(articles, source)
    logger.debug(f"Smart feed for {roadmap_id} page {page}: {len(articles)} articles")
    return _feed_response(articles, page, aggregator)


@router.get("/sources", response_model=SourcesResponse)
async def list_sources(aggregator: ContentAggregator = Depends(get_content_aggregator)) -> SourcesResponse:
    return SourcesResponse(sources=aggregator.available_sources())
