import math

import pytest

from skillpath.services.content.aggregator import (
    ContentAggregator,
    dedupe_by_url,
    filter_by_source,
    rotate_sources,
    sort_newest_first,
)
from skillpath.services.content.sources import articles_per_source

from .helpers import FakeSource, make_article


async def test_duplicate_url_kept_once_from_first_source():
    first = FakeSource("alpha", {"python": [make_article("https://x/shared", "2025-01-02", source="Alpha")]})
    second = FakeSource("beta", {"python": [make_article("https://x/shared", "2025-01-02", source="Beta")]})

    articles = await ContentAggregator([first, second]).fetch_mixed(["python"], limit=6, page=1)

    assert [a.url for a in articles] == ["https://x/shared"]
    assert articles[0].source == "Alpha"


async def test_articles_sorted_newest_first():
    source = FakeSource(
        "alpha",
        {
            "python": [
                make_article("https://x/1", "2025-01-01T10:00:00Z"),
                make_article("https://x/3", "2025-01-03T10:00:00Z"),
                make_article("https://x/2", "2025-01-02T10:00:00Z"),
            ]
        },
    )

    articles = await ContentAggregator([source]).fetch_mixed(["python"], limit=3, page=1)

    assert [a.url for a in articles] == ["https://x/3", "https://x/2", "https://x/1"]


async def test_failing_source_contributes_nothing():
    healthy = FakeSource("alpha", {"python": [make_article("https://x/1", "2025-01-01")]})
    broken = FakeSource("beta", fail=True)

    articles = await ContentAggregator([broken, healthy]).fetch_mixed(["python"], limit=6, page=1)

    assert [a.url for a in articles] == ["https://x/1"]
    assert broken.calls == [("python", 3, 1)]


async def test_each_tag_queries_sources_with_split_limit():
    alpha, beta, gamma = FakeSource("alpha"), FakeSource("beta"), FakeSource("gamma")

    await ContentAggregator([alpha, beta, gamma]).fetch_mixed(["python", "rust"], limit=6, page=1)

    assert alpha.calls == [("python", 3, 1), ("rust", 3, 1)]
    assert beta.calls == [("python", 3, 1), ("rust", 3, 1)]
    assert gamma.calls == []


async def test_page_rotates_starting_source():
    alpha, beta, gamma = FakeSource("alpha"), FakeSource("beta"), FakeSource("gamma")

    await ContentAggregator([alpha, beta, gamma]).fetch_mixed(["python"], limit=8, page=2)

    assert alpha.calls == []
    assert beta.calls == [("python", 4, 2)]
    assert gamma.calls == [("python", 4, 2)]


def test_rotation_wraps_around():
    sources = ["a", "b", "c"]

    assert rotate_sources(sources, page=3, count=2) == ["c", "a"]
    assert rotate_sources(sources, page=4, count=2) == ["a", "b"]
    assert rotate_sources([], page=1, count=2) == []


async def test_single_source_gets_whole_limit():
    only = FakeSource("alpha")

    await ContentAggregator([only]).fetch_mixed(["python"], limit=6, page=5)

    assert only.calls == [("python", 6, 5)]


@pytest.mark.parametrize("limit,sources,expected", [(6, 2, 3), (8, 2, 4), (7, 2, 4), (6, 1, 6)])
def test_articles_per_source(limit, sources, expected):
    assert articles_per_source(limit, sources) == expected == math.ceil(limit / sources)


def test_undated_articles_sort_last_and_ties_keep_order():
    articles = [
        make_article("https://x/none"),
        make_article("https://x/a", "2025-02-01"),
        make_article("https://x/garbage", "not a date"),
        make_article("https://x/b", "2025-02-01"),
    ]

    ordered = [a.url for a in sort_newest_first(articles)]

    assert ordered == ["https://x/a", "https://x/b", "https://x/none", "https://x/garbage"]


def test_mixed_date_formats_compare_correctly():
    # Medium reports naive "YYYY-MM-DD HH:MM:SS", Dev.to ISO with a zone
    articles = [
        make_article("https://x/medium", "2025-02-01 09:00:00"),
        make_article("https://x/devto", "2025-02-01T10:00:00Z"),
    ]

    assert [a.url for a in sort_newest_first(articles)] == ["https://x/devto", "https://x/medium"]


def test_dedupe_is_stable():
    articles = [make_article("https://x/1"), make_article("https://x/2"), make_article("https://x/1")]

    assert [a.url for a in dedupe_by_url(articles)] == ["https://x/1", "https://x/2"]


def test_filter_by_source_is_case_insensitive():
    articles = [make_article("https://x/1", source="Dev.to"), make_article("https://x/2", source="Medium")]

    assert [a.url for a in filter_by_source(articles, "medium")] == ["https://x/2"]
    assert filter_by_source(articles, "all") == articles
    assert filter_by_source(articles, None) == articles


def test_available_sources():
    aggregator = ContentAggregator([FakeSource("alpha"), FakeSource("beta")])

    assert [(s.id, s.name) for s in aggregator.available_sources()] == [("alpha", "Alpha"), ("beta", "Beta")]
