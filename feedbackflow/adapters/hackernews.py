"""Hacker News item pools to canonical threads."""

import logging

from ..models import CommentNode, CommentThread, HackerNewsItem, parse_timestamp
from ..utils import sanitize
from .base import author_or_unknown, build_metadata

logger = logging.getLogger(__name__)

SOURCE_TYPE = "HackerNews"
PLACEHOLDER_TITLE = "Comments on unavailable story"


def _is_removed(item: HackerNewsItem) -> bool:
    return bool(item.deleted) or bool(item.dead)


class _ItemPool:
    """Items by id, plus the children each item only names through ``parent``."""

    def __init__(self, items: list[HackerNewsItem]):
        self.items: dict[int, HackerNewsItem] = {}
        for item in items:
            self.items.setdefault(item.id, item)

        self.by_parent: dict[int, list[int]] = {}
        for item in self.items.values():
            if item.parent is not None:
                self.by_parent.setdefault(item.parent, []).append(item.id)

        self.visited: set[int] = set()

    def is_orphan(self, item: HackerNewsItem) -> bool:
        """Check whether no converted story or live comment leads to this item."""
        if item.parent is None:
            return True
        parent = self.items.get(item.parent)
        if parent is None:
            return True
        # A live story that was not converted, e.g. one without a title
        return parent.type != "comment" and not _is_removed(parent) and parent.id not in self.visited

    def child_ids(self, item: HackerNewsItem) -> list[int]:
        """Children in ``kids`` order, then those missing from ``kids`` in pool order."""
        listed = set(item.kids)
        return list(item.kids) + [
            child_id for child_id in self.by_parent.get(item.id, []) if child_id not in listed
        ]

    def resolve(self, child_ids: list[int]) -> list[CommentNode]:
        """Resolve child ids against the pool, depth first, skipping removed items."""
        roots: list[CommentNode] = []
        stack = [(iter(child_ids), roots)]
        while stack:
            pending, target = stack[-1]
            child_id = next(pending, None)
            if child_id is None:
                stack.pop()
                continue

            item = self.items.get(child_id)
            if item is None or _is_removed(item) or child_id in self.visited:
                continue
            self.visited.add(child_id)

            node = CommentNode(
                id=str(item.id),
                parent_id=str(item.parent) if item.parent is not None else None,
                author=author_or_unknown(item.by),
                content=sanitize(item.text),
                created_at=parse_timestamp(item.time),
                score=item.score,
            )
            target.append(node)
            stack.append((iter(self.child_ids(item)), node.replies))
        return roots


def _placeholder_thread(pool: _ItemPool, for_analysis: bool, log: logging.Logger) -> CommentThread | None:
    """Collect live comments whose story is missing from the pool into a synthesized thread."""
    top_level = [
        item
        for item in pool.items.values()
        if item.type == "comment"
        and not _is_removed(item)
        and item.id not in pool.visited
        and pool.is_orphan(item)
    ]
    if not top_level:
        return None

    roots = pool.resolve([item.id for item in top_level])
    if not roots:
        return None

    story_ids = sorted({item.parent for item in top_level if item.parent is not None})
    log.warning(
        f"Story missing from Hacker News payload, grouping {len(roots)} top-level comments "
        f"under a placeholder thread"
    )
    return CommentThread(
        id=str(story_ids[0]) if len(story_ids) == 1 else "hackernews-placeholder",
        title=PLACEHOLDER_TITLE,
        author=author_or_unknown(None),
        created_at=roots[0].created_at,
        source_type=SOURCE_TYPE,
        metadata=build_metadata(for_analysis, {"Placeholder": True, "StoryIds": story_ids}),
        comments=roots,
    )


def convert_hackernews(
    items: list[HackerNewsItem],
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert a pool of Hacker News items to threads.

    Every live story in the pool becomes a thread; its comment tree is
    rebuilt by following ``kids`` through the pool, plus comments that
    only name their parent. Deleted and dead items are skipped together
    with their replies. Comment text is HTML and gets sanitized. Comments
    whose story is not in the pool are kept under a placeholder thread
    after the story threads.

    Args:
        items: Stories and comments, in any order
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics

    Returns:
        One thread per story, plus a placeholder thread for orphaned comments
    """
    log = log or logger

    pool = _ItemPool(items)

    threads = []
    for story in pool.items.values():
        if story.type != "story" or _is_removed(story) or not story.title:
            continue
        pool.visited.add(story.id)
        threads.append(
            CommentThread(
                id=str(story.id),
                title=story.title,
                description=sanitize(story.text) or None,
                author=author_or_unknown(story.by),
                created_at=parse_timestamp(story.time),
                url=story.url,
                source_type=SOURCE_TYPE,
                metadata=build_metadata(
                    for_analysis,
                    {
                        "Score": story.score or 0,
                        "Descendants": story.descendants or 0,
                        "Type": story.type,
                    },
                ),
                comments=pool.resolve(pool.child_ids(story)),
            )
        )

    placeholder = _placeholder_thread(pool, for_analysis, log)
    if placeholder is not None:
        threads.append(placeholder)

    log.debug(f"Converted {len(threads)} Hacker News threads from {len(pool.items)} items")
    return threads
