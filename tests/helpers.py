"""Fakes shared by the tests."""

from typing import Dict, List, Optional

from skillpath.ai.providers.base import BaseProvider
from skillpath.schemas.content import Article
from skillpath.services.content.sources import ContentSource
from skillpath.utils.errors import ContentSourceError


def make_article(url: str, published_at: Optional[str] = None, source: str = "Fake", tag: str = "python") -> Article:
    return Article(
        title=f"Article {url}",
        url=url,
        tag=tag,
        published_at=published_at,
        source=source,
        article_id=url,
    )


class FakeSource(ContentSource):
    """Source returning canned articles per tag and recording every call."""

    def __init__(self, key: str, articles: Optional[Dict[str, List[Article]]] = None, fail: bool = False):
        super().__init__(client=None)
        self.key = key
        self.name = key.title()
        self.articles = articles or {}
        self.fail = fail
        self.calls: List[tuple] = []

    async def fetch_articles(self, tag: str, limit: int = 3, page: int = 1) -> List[Article]:
        self.calls.append((tag, limit, page))
        if self.fail:
            raise ContentSourceError(self.name, "boom")
        return self.articles.get(tag, [])[:limit]


class ScriptedProvider(BaseProvider):
    """Returns queued answers; exceptions in the queue are raised."""

    provider = "scripted"

    def __init__(self, answers: List):
        super().__init__()
        self.answers = list(answers)
        self.prompts: List[str] = []
        self.system_prompts: List[Optional[str]] = []

    async def generate_text(self, prompt, system_prompt=None, temperature=0.7, max_tokens=None) -> str:
        self.prompts.append(prompt)
        self.system_prompts.append(system_prompt)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer
