"""Roadmap progress tracking.

A node is complete exactly when it appears in its roadmap's
``completed_nodes``; toggling a complete node removes it rather than storing
``completed=False``. ``total_nodes`` is whatever the client last reported and
is not checked against the roadmap's structure.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from ..schemas.progress import CompletedNode, NodeProgress, ProgressStats, RoadmapProgress, ToggleResponse
from ..schemas.users import User
from ..utils.errors import SkillpathError
from . import store

logger = logging.getLogger(__name__)

MAX_TOGGLE_ATTEMPTS = 5


def _now() -> datetime:
    return datetime.now(timezone.utc)


def find_progress(progress_list: List[RoadmapProgress], roadmap_id: str) -> Optional[RoadmapProgress]:
    return next((p for p in progress_list if p.roadmap_id == roadmap_id), None)


def toggle(
    progress_list: List[RoadmapProgress],
    roadmap_id: str,
    node_id: str,
    total_nodes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[RoadmapProgress]:
    """Flip a node's completion within a roadmap.

    Args:
        progress_list: The user's progress entries, updated in place
        roadmap_id: Roadmap the node belongs to
        node_id: Node to toggle
        total_nodes: Node count reported by the client; overwrites the stored value
        now: Timestamp to record

    Returns:
        The updated progress list
    """
    now = now or _now()
    progress = find_progress(progress_list, roadmap_id)
    if progress is None:
        progress = RoadmapProgress(roadmap_id=roadmap_id, last_updated=now)
        progress_list.append(progress)

    if total_nodes is not None:
        progress.total_nodes = total_nodes

    index = next((i for i, node in enumerate(progress.completed_nodes) if node.node_id == node_id), None)
    if index is None:
        progress.completed_nodes.append(CompletedNode(node_id=node_id, completed=True, timestamp=now))
    else:
        del progress.completed_nodes[index]

    progress.last_updated = now
    return progress_list


def has_completed(progress_list: List[RoadmapProgress], roadmap_id: str, node_id: str) -> bool:
    progress = find_progress(progress_list, roadmap_id)
    if progress is None:
        return False
    return any(node.node_id == node_id for node in progress.completed_nodes)


def completed_nodes(progress_list: List[RoadmapProgress], roadmap_id: str) -> List[NodeProgress]:
    """Completed nodes for a roadmap, in the order they were completed."""
    progress = find_progress(progress_list, roadmap_id)
    if progress is None:
        return []
    return [NodeProgress(node_id=node.node_id, timestamp=node.timestamp) for node in progress.completed_nodes]


def stats(progress_list: List[RoadmapProgress], roadmap_id: str) -> ProgressStats:
    progress = find_progress(progress_list, roadmap_id)
    if progress is None:
        return ProgressStats(total_completed=0, completed_nodes=[], last_updated=None)
    nodes = completed_nodes(progress_list, roadmap_id)
    return ProgressStats(total_completed=len(nodes), completed_nodes=nodes, last_updated=progress.last_updated)


def completion_timestamp(progress_list: List[RoadmapProgress], roadmap_id: str, node_id: str) -> Optional[datetime]:
    progress = find_progress(progress_list, roadmap_id)
    if progress is None:
        return None
    node = next((n for n in progress.completed_nodes if n.node_id == node_id), None)
    return node.timestamp if node else None


async def toggle_node(user: User, roadmap_id: str, node_id: str, total_nodes: Optional[int] = None) -> ToggleResponse:
    """Toggle a node and persist the user's progress.

    The write only succeeds if nobody changed the progress since it was read;
    otherwise the latest progress is reloaded and the toggle re-applied.
    """
    for attempt in range(1, MAX_TOGGLE_ATTEMPTS + 1):
        expected_version = user.progress_version
        toggle(user.roadmap_progress, roadmap_id, node_id, total_nodes)

        if await store.set_progress_if_unchanged(user.id, expected_version, user.roadmap_progress):
            user.progress_version = expected_version + 1
            break

        logger.debug(f"Progress for user {user.id} changed concurrently, retrying toggle (attempt {attempt})")
        user = await store.get_user(user.id)
    else:
        raise SkillpathError("Progress changed concurrently, please retry", status_code=409)

    completed = has_completed(user.roadmap_progress, roadmap_id, node_id)
    timestamp = completion_timestamp(user.roadmap_progress, roadmap_id, node_id) if completed else None
    logger.info(f"User {user.id} toggled {roadmap_id}/{node_id} -> {'completed' if completed else 'incomplete'}")
    return ToggleResponse(success=True, completed=completed, timestamp=timestamp or _now())
