import pytest
from pydantic import ValidationError

from beanie import PydanticObjectId

from skillpath.schemas.roadmaps import CustomRoadmap, Rating, RoadmapNode
from skillpath.services.roadmaps import candidate_names, name_from_identifier
from skillpath.utils.utils import parse_object_id, round_half_up, slugify

TREE = {
    "name": "Python",
    "children": [
        {
            "name": "Basics",
            "timeframe": "2 weeks",
            "children": [
                {"name": "Syntax", "children": [{"name": "Variables"}, {"name": "Loops"}]},
                {"name": "Tooling", "children": [{"name": "pip"}]},
            ],
        },
        {"name": "Web", "timeframe": "1 month", "dividerText": "Next up", "children": []},
    ],
}


def test_tree_parses_nested_children():
    root = RoadmapNode.model_validate(TREE)

    assert root.children[0].timeframe == "2 weeks"
    assert root.children[1].divider_text == "Next up"
    assert [n.name for n in root.walk()] == ["Python", "Basics", "Syntax", "Variables", "Loops", "Tooling", "pip", "Web"]
    assert root.count_nodes() == 8
    assert root.depth() == 4


def test_tree_rejects_nameless_node():
    bad = {"name": "Python", "children": [{"children": []}]}

    with pytest.raises(ValidationError):
        RoadmapNode.model_validate(bad)


def test_tree_serializes_with_aliases():
    root = RoadmapNode.model_validate(TREE)

    assert root.model_dump(by_alias=True)["children"][1]["dividerText"] == "Next up"


@pytest.mark.parametrize(
    "name,slug",
    [
        ("Full Stack Developer", "full-stack-developer"),
        ("C++ Roadmap 2025", "c-roadmap-2025"),
        ("  UI / UX   Design ", "ui-ux-design"),
        ("Node.js -- Backend", "nodejs-backend"),
    ],
)
def test_slugify(name, slug):
    assert slugify(name) == slug


def test_candidate_names_from_identifier():
    assert name_from_identifier("full-stack") == "Full Stack"
    assert candidate_names("python") == [
        "Python Developer Roadmap for Beginners to Advanced 2025",
        "Python Developer Roadmap 2025",
        "Python Roadmap 2025",
        "Python Developer",
        "Python",
    ]


def test_parse_object_id():
    assert parse_object_id("507f1f77bcf86cd799439011") is not None
    assert parse_object_id("python") is None


def ratings_of(*values):
    return [Rating(user_id=PydanticObjectId(), value=v) for v in values]


def test_average_rating_rounds_half_up():
    roadmap = CustomRoadmap.model_construct(ratings=ratings_of(3, 3, 3, 4))

    roadmap.refresh_rating_stats()

    assert roadmap.rating_stats.average_rating == 3.3
    assert roadmap.rating_stats.rating_count == 4


def test_rerating_replaces_earlier_rating():
    rater, other = PydanticObjectId(), PydanticObjectId()
    roadmap = CustomRoadmap.model_construct(ratings=[Rating(user_id=rater, value=5)])

    roadmap.rate(rater, 2)
    roadmap.rate(other, 5)

    assert [r.value for r in roadmap.ratings] == [2, 5]
    assert roadmap.rating_stats.average_rating == 3.5
    assert roadmap.rating_stats.rating_count == 2


def test_no_ratings_reset_stats():
    roadmap = CustomRoadmap.model_construct(ratings=[])

    roadmap.refresh_rating_stats()

    assert (roadmap.rating_stats.average_rating, roadmap.rating_stats.rating_count) == (0, 0)


@pytest.mark.parametrize("value,digits,expected", [(3.25, 1, 3.3), (0.05, 1, 0.1), (2.5, 0, 3.0), (33.333, 1, 33.3)])
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected
