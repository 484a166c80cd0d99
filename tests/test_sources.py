import httpx
import pytest

from skillpath.services.content.sources import DevToSource, MediumSource, build_sources
from skillpath.utils.errors import ContentSourceError

DEVTO_ITEM = {
    "id": 101,
    "title": "Async Python",
    "url": "https://dev.to/someone/async-python",
    "published_at": "2025-02-01T10:00:00Z",
    "cover_image": None,
    "social_image": "https://dev.to/social.png",
    "description": "Event loops explained",
    "user": {"name": "Someone"},
    "reading_time_minutes": 4,
}


def medium_item(index: int, words: int = 10) -> dict:
    return {
        "title": f"Post {index}",
        "link": f"https://medium.com/p/{index}",
        "pubDate": "2025-02-01 09:00:00",
        "author": "Writer",
        "description": "<p>" + "word " * 100 + "</p>",
        "content": '<figure><img src="https://cdn/img.png"></figure><p>' + "word " * words + "</p>",
    }


def client_for(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_devto_maps_articles_and_passes_paging():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen.update(request.url.params)
        return httpx.Response(200, json=[DEVTO_ITEM])

    async with client_for(handler) as client:
        articles = await DevToSource(client).fetch_articles("python", limit=3, page=2)

    assert seen == {"tag": "python", "per_page": "3", "page": "2"}
    article = articles[0]
    assert article.source == "Dev.to"
    assert article.article_id == "devto-101"
    assert article.image == "https://dev.to/social.png"
    assert article.author == "Someone"
    assert article.read_time == "4 min read"
    assert article.tag == "python"


async def test_devto_error_status_raises():
    async with client_for(lambda request: httpx.Response(503)) as client:
        with pytest.raises(ContentSourceError):
            await DevToSource(client).fetch_articles("python")


async def test_network_failure_raises_source_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    async with client_for(handler) as client:
        with pytest.raises(ContentSourceError):
            await MediumSource(client).fetch_articles("python")


async def test_medium_pages_locally():
    items = [medium_item(i) for i in range(7)]

    async with client_for(lambda request: httpx.Response(200, json={"items": items})) as client:
        articles = await MediumSource(client).fetch_articles("python", limit=3, page=2)

    assert [a.url for a in articles] == ["https://medium.com/p/3", "https://medium.com/p/4", "https://medium.com/p/5"]
    assert [a.article_id for a in articles] == ["medium-python-2-0", "medium-python-2-1", "medium-python-2-2"]


async def test_medium_extracts_image_summary_and_read_time():
    item = medium_item(0, words=450)

    async with client_for(lambda request: httpx.Response(200, json={"items": [item]})) as client:
        (article,) = await MediumSource(client).fetch_articles("python", limit=3, page=1)

    assert article.image == "https://cdn/img.png"
    assert article.read_time == "2 min read"
    assert article.description.endswith("...")
    assert len(article.description) == 153
    assert "<p>" not in article.description


async def test_medium_page_past_end_is_empty():
    async with client_for(lambda request: httpx.Response(200, json={"items": [medium_item(0)]})) as client:
        assert await MediumSource(client).fetch_articles("python", limit=3, page=3) == []


def test_read_time_has_minimum_of_one_minute():
    assert MediumSource.read_time_minutes("") == 1
    assert MediumSource.read_time_minutes("<p>short</p>") == 1
    assert MediumSource.read_time_minutes("<p>" + "w " * 300 + "</p>") == 2


def test_build_sources_order():
    assert [s.key for s in build_sources(client=None)] == ["devto", "medium"]
