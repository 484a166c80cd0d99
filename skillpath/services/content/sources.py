"""External article feeds."""

import logging
import math
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from ...config import settings
from ...schemas.content import Article, SourceInfo
from ...utils.errors import ContentSourceError
from ...utils.html import first_image_src, html_to_text

WORDS_PER_MINUTE = 200
DESCRIPTION_LENGTH = 150


class ContentSource(ABC):
    """An external feed that lists articles for a tag."""

    key: str = "base"
    name: str = "Base"

    def __init__(self, client: httpx.AsyncClient):
        self.client = client
        self.logger = logging.getLogger(__name__)

    def info(self) -> SourceInfo:
        return SourceInfo(id=self.key, name=self.name)

    @abstractmethod
    async def fetch_articles(self, tag: str, limit: int = 3, page: int = 1) -> List[Article]:
        """Fetch up to ``limit`` articles for ``tag``.

        Raises:
            ContentSourceError: If the feed cannot be fetched
        """

    async def _get_json(self, url: str, params: Dict[str, Any]) -> Any:
        try:
            response = await self.client.get(url, params=params)
        except httpx.HTTPError as e:
            raise ContentSourceError(self.name, f"Error fetching {self.name} articles: {e}") from e

        if response.status_code != 200:
            raise ContentSourceError(self.name, f"Error fetching {self.name} articles: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ContentSourceError(self.name, f"Invalid JSON from {self.name}: {e}") from e


class DevToSource(ContentSource):
    """Dev.to public articles API."""

    key = "devto"
    name = "Dev.to"

    async def fetch_articles(self, tag: str, limit: int = 3, page: int = 1) -> List[Article]:
        data = await self._get_json(
            f"{settings.content.devto_base_url}/articles",
            {"tag": tag, "per_page": limit, "page": page},
        )
        if not isinstance(data, list):
            raise ContentSourceError(self.name, "Unexpected Dev.to response shape")
        return [self._parse_item(item, tag) for item in data]

    def _parse_item(self, item: Dict[str, Any], tag: str) -> Article:
        reading_time = item.get("reading_time_minutes")
        return Article(
            title=item.get("title", ""),
            url=item.get("url", ""),
            tag=tag,
            published_at=item.get("published_at"),
            source=self.name,
            image=item.get("cover_image") or item.get("social_image") or None,
            article_id=f"devto-{item.get('id')}",
            description=item.get("description") or None,
            author=(item.get("user") or {}).get("name") or None,
            read_time=f"{reading_time} min read" if reading_time else None,
        )


class MediumSource(ContentSource):
    """Medium tag feeds, read through an RSS-to-JSON bridge.

    The bridge returns the whole feed, so paging is done here.
    """

    key = "medium"
    name = "Medium"

    async def fetch_articles(self, tag: str, limit: int = 3, page: int = 1) -> List[Article]:
        data = await self._get_json(
            settings.content.rss2json_url,
            {"rss_url": f"https://medium.com/feed/tag/{tag}"},
        )
        items = (data or {}).get("items") or []
        start = (page - 1) * limit
        return [
            self._parse_item(item, tag, page, index)
            for index, item in enumerate(items[start : start + limit])
        ]

    def _parse_item(self, item: Dict[str, Any], tag: str, page: int, index: int) -> Article:
        content = item.get("content") or ""
        description = item.get("description")
        return Article(
            title=item.get("title", ""),
            url=item.get("link", ""),
            tag=tag,
            published_at=item.get("pubDate"),
            source=self.name,
            image=first_image_src(content) if content else None,
            article_id=f"medium-{tag}-{page}-{index}",
            description=self._summarize(description),
            author=item.get("author") or None,
            read_time=f"{self.read_time_minutes(content)} min read",
        )

    @staticmethod
    def read_time_minutes(html: str) -> int:
        words = len(re.findall(r"\S+", html_to_text(html))) if html else 0
        # Half-up rounding, so 300 words is 2 minutes
        return max(1, math.floor(words / WORDS_PER_MINUTE + 0.5))

    @staticmethod
    def _summarize(description: Optional[str]) -> Optional[str]:
        if not description:
            return None
        return html_to_text(description)[:DESCRIPTION_LENGTH] + "..."


SOURCE_CLASSES = [DevToSource, MediumSource]


def build_sources(client: httpx.AsyncClient) -> List[ContentSource]:
    """Instantiate every known source, in rotation order."""
    return [source_class(client) for source_class in SOURCE_CLASSES]


def articles_per_source(limit: int, sources_per_tag: int) -> int:
    return math.ceil(limit / sources_per_tag) if sources_per_tag else 0
