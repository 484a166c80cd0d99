from datetime import datetime, timedelta, timezone

from skillpath.services.progress import completed_nodes, has_completed, stats, toggle

NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


def test_first_toggle_creates_progress_entry():
    progress = toggle([], "js-roadmap", "node-1", now=NOW)

    assert len(progress) == 1
    entry = progress[0]
    assert entry.roadmap_id == "js-roadmap"
    assert [(n.node_id, n.completed) for n in entry.completed_nodes] == [("node-1", True)]
    assert entry.last_updated == NOW


def test_toggle_twice_removes_node():
    progress = toggle([], "js-roadmap", "node-1", now=NOW)
    toggle(progress, "js-roadmap", "node-1", now=NOW + timedelta(minutes=1))

    assert progress[0].completed_nodes == []
    assert not has_completed(progress, "js-roadmap", "node-1")


def test_toggle_pair_restores_prior_state():
    progress = toggle([], "js-roadmap", "node-1", now=NOW)
    before = [n.node_id for n in progress[0].completed_nodes]

    toggle(progress, "js-roadmap", "node-2", now=NOW)
    toggle(progress, "js-roadmap", "node-2", now=NOW)

    assert [n.node_id for n in progress[0].completed_nodes] == before


def test_completion_follows_toggle_parity():
    progress = []
    for n in range(1, 6):
        toggle(progress, "py", "node", now=NOW)
        assert has_completed(progress, "py", "node") is (n % 2 == 1)


def test_total_nodes_overwritten_only_when_given():
    progress = toggle([], "py", "a", total_nodes=40, now=NOW)
    toggle(progress, "py", "b", now=NOW)
    assert progress[0].total_nodes == 40

    toggle(progress, "py", "c", total_nodes=12, now=NOW)
    assert progress[0].total_nodes == 12


def test_roadmaps_are_tracked_independently():
    progress = toggle([], "py", "intro", now=NOW)
    toggle(progress, "js", "intro", now=NOW)

    assert has_completed(progress, "py", "intro")
    assert has_completed(progress, "js", "intro")
    toggle(progress, "py", "intro", now=NOW)
    assert not has_completed(progress, "py", "intro")
    assert has_completed(progress, "js", "intro")


def test_completed_nodes_keep_insertion_order():
    progress = []
    for i, node in enumerate(["c", "a", "b"]):
        toggle(progress, "py", node, now=NOW + timedelta(seconds=i))

    assert [n.node_id for n in completed_nodes(progress, "py")] == ["c", "a", "b"]


def test_stats_on_untouched_roadmap():
    result = stats([], "py")

    assert result.total_completed == 0
    assert result.completed_nodes == []
    assert result.last_updated is None


def test_stats_counts_completed_nodes():
    progress = toggle([], "py", "a", now=NOW)
    later = NOW + timedelta(hours=1)
    toggle(progress, "py", "b", now=later)

    result = stats(progress, "py")
    assert result.total_completed == 2
    assert result.last_updated == later
    assert result.model_dump(by_alias=True)["totalCompleted"] == 2


def test_toggle_to_incomplete_still_refreshes_last_updated():
    progress = toggle([], "py", "a", now=NOW)
    later = NOW + timedelta(days=1)
    toggle(progress, "py", "a", now=later)

    assert progress[0].last_updated == later
