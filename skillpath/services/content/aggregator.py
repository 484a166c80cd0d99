"""Mixing articles from several feeds into one newest-first list."""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from dateutil import parser as date_parser

from ...schemas.content import Article, SourceInfo
from ...utils.errors import ContentSourceError
from .sources import ContentSource, articles_per_source

logger = logging.getLogger(__name__)

SOURCES_PER_TAG = 2

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def rotate_sources(sources: Sequence[ContentSource], page: int, count: int) -> List[ContentSource]:
    """Pick ``count`` sources starting at an offset that moves with the page.

    Successive pages start from a different source, so paging surfaces
    different feeds instead of always hitting the same one first.
    """
    if not sources:
        return []
    start = (page - 1) % len(sources)
    return [sources[(start + i) % len(sources)] for i in range(count)]


def dedupe_by_url(articles: Iterable[Article]) -> List[Article]:
    """Keep the first article seen for each URL."""
    seen = set()
    unique = []
    for article in articles:
        if article.url in seen:
            continue
        seen.add(article.url)
        unique.append(article)
    return unique


def published_sort_key(article: Article) -> datetime:
    """Publication time as an aware datetime; unparseable dates sort last."""
    if not article.published_at:
        return _OLDEST
    try:
        published = date_parser.parse(article.published_at)
    except (ValueError, OverflowError):
        return _OLDEST
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    return published


def sort_newest_first(articles: List[Article]) -> List[Article]:
    # sorted() is stable, so ties keep fetch order
    return sorted(articles, key=published_sort_key, reverse=True)


def filter_by_source(articles: List[Article], source: Optional[str]) -> List[Article]:
    """Keep articles from ``source`` (case-insensitive); ``None``/``"all"`` keeps everything."""
    if not source or source.lower() == "all":
        return articles
    wanted = source.lower()
    return [article for article in articles if article.source.lower() == wanted]


class ContentAggregator:
    """Fetches, merges and orders articles from the configured sources."""

    def __init__(self, sources: Sequence[ContentSource]):
        self.sources = list(sources)

    def available_sources(self) -> List[SourceInfo]:
        return [source.info() for source in self.sources]

    async def fetch_mixed(self, tags: List[str], limit: int = 3, page: int = 1) -> List[Article]:
        """Fetch articles for every tag, de-duplicate by URL and sort newest first.

        A source that fails for a tag contributes nothing for that tag; the
        others still count. Nothing is cached, every call hits the sources.

        Args:
            tags: Feed tags to query
            limit: Target number of articles per tag, split across sources
            page: Page hint forwarded to the sources

        Returns:
            Unique articles, newest first
        """
        sources_per_tag = min(SOURCES_PER_TAG, len(self.sources))
        per_source = articles_per_source(limit, sources_per_tag)

        results: List[Article] = []
        for tag in tags:
            for source in rotate_sources(self.sources, page, sources_per_tag):
                try:
                    articles = await source.fetch_articles(tag, per_source, page)
                except ContentSourceError as e:
                    logger.warning(f"Error fetching from {source.key} for tag {tag}: {e.message}")
                    continue
                except Exception:
                    logger.exception(f"Unexpected error fetching from {source.key} for tag {tag}")
                    continue
                results.extend(articles)

        unique = dedupe_by_url(results)
        logger.debug(f"Fetched {len(results)} articles for {len(tags)} tags, {len(unique)} unique")
        return sort_newest_first(unique)
