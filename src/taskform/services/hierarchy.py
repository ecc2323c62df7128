"""Cycle prevention for parent selection in the task hierarchy."""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATE_LIMIT = 5


class HierarchyNode(Protocol):
    id: str
    title: str
    parent_id: Optional[str]


NodeT = TypeVar("NodeT", bound=HierarchyNode)


def build_children_map(all_tasks: Iterable[HierarchyNode]) -> dict[str, list[str]]:
    """Map each parent id to the ids of its direct children, in input order."""

    children: dict[str, list[str]] = {}
    for task in all_tasks:
        if task.parent_id:
            children.setdefault(task.parent_id, []).append(task.id)
    return children


def compute_excluded(
    task_id: Optional[str], all_tasks: Iterable[HierarchyNode]
) -> set[str]:
    """Return ``task_id`` plus every task in its subtree.

    None of the returned ids may become the task's parent. A task that has
    not been stored yet has no subtree and excludes nothing.
    """

    if not task_id:
        return set()

    children = build_children_map(all_tasks)
    excluded = {task_id}
    queue = deque([task_id])
    while queue:
        current = queue.popleft()
        for child_id in children.get(current, ()):
            if child_id not in excluded:
                excluded.add(child_id)
                queue.append(child_id)

    logger.debug("Task %s excludes %d ids from parent selection", task_id, len(excluded))
    return excluded


def filter_candidate_parents(
    search_text: str,
    all_tasks: Sequence[NodeT],
    excluded: set[str],
    limit: int = DEFAULT_CANDIDATE_LIMIT,
) -> list[NodeT]:
    """Return selectable parents whose title contains ``search_text``.

    Matching is case-insensitive, keeps the order of ``all_tasks`` and stops
    after ``limit`` results. A blank search yields nothing.
    """

    if not search_text or not search_text.strip():
        return []

    needle = search_text.lower()
    matches: list[NodeT] = []
    for task in all_tasks:
        if len(matches) >= limit:
            break
        if task.id in excluded:
            continue
        if needle in task.title.lower():
            matches.append(task)
    return matches


__all__ = [
    "HierarchyNode",
    "build_children_map",
    "compute_excluded",
    "filter_candidate_parents",
]
