"""Reconstruction of comment trees from flat lists with parent references."""

import logging
from collections.abc import Callable, Iterable
from typing import NamedTuple

from ..config import settings
from ..models import CommentNode

logger = logging.getLogger(__name__)


class HierarchyResult(NamedTuple):
    """Forest produced by build_hierarchy."""

    roots: list[CommentNode]
    attached_count: int


def mark_orphan(node: CommentNode) -> CommentNode:
    """Prefix a node's content with the orphan marker so readers can tell it was a reply."""
    if node.content.startswith(settings.orphan_marker):
        return node
    node.content = f"{settings.orphan_marker} {node.content}".rstrip()
    return node


def _closes_cycle(node_id: str, parent_id: str, linked_parents: dict[str, str]) -> bool:
    """Check whether linking node_id under parent_id would make node_id its own ancestor."""
    current: str | None = parent_id
    while current is not None:
        if current == node_id:
            return True
        current = linked_parents.get(current)
    return False


def build_hierarchy(
    nodes: Iterable[CommentNode],
    on_orphan: Callable[[CommentNode], CommentNode] | None = None,
    log: logging.Logger | None = None,
) -> HierarchyResult:
    """
    Build a forest from nodes that reference their parent by id.

    The id map is complete before any node is attached, so the result does
    not depend on whether parents precede their replies in the input. Each
    node is attached at most once: later duplicates of an id are dropped and
    links that would close a cycle leave the node at root level.

    Args:
        nodes: Flat nodes in source order, replies lists empty
        on_orphan: Called for nodes whose declared parent is absent; its return
            value is placed at root level
        log: Optional logger for diagnostics, defaults to the module logger

    Returns:
        HierarchyResult with root nodes in source order and the number of
        nodes attached under a parent
    """
    log = log or logger

    by_id: dict[str, CommentNode] = {}
    ordered: list[CommentNode] = []
    for node in nodes:
        if node.id in by_id:
            log.debug(f"Dropping duplicate comment id {node.id}")
            continue
        by_id[node.id] = node
        ordered.append(node)

    roots: list[CommentNode] = []
    linked_parents: dict[str, str] = {}
    attached_count = 0
    orphan_count = 0

    for node in ordered:
        parent_id = node.parent_id
        if not parent_id:
            roots.append(node)
            continue

        parent = by_id.get(parent_id)
        if parent is None:
            orphan_count += 1
            roots.append(on_orphan(node) if on_orphan else node)
            continue

        if parent is node or _closes_cycle(node.id, parent_id, linked_parents):
            log.debug(f"Comment {node.id} would be its own ancestor, keeping it at root level")
            roots.append(node)
            continue

        parent.replies.append(node)
        linked_parents[node.id] = parent_id
        attached_count += 1

    if orphan_count:
        log.debug(f"Promoted {orphan_count} orphaned comments to root level")

    return HierarchyResult(roots=roots, attached_count=attached_count)
