"""BlueSky and Twitter post pools to canonical threads."""

import logging
from typing import Any

from ..models import (
    BlueSkyFeedbackResponse,
    CommentNode,
    CommentThread,
    TwitterFeedbackResponse,
)
from ..models.platforms import SocialPost
from .base import author_or_unknown, build_metadata, stable_id, truncate_for_title

logger = logging.getLogger(__name__)

BLUESKY_SOURCE_TYPE = "BlueSky"
TWITTER_SOURCE_TYPE = "Twitter"
ORPHAN_THREAD_TITLE = "Replies to unavailable posts"


class _PostTreeBuilder:
    """
    Builds reply trees for root posts out of a flat pool.

    Replies of a post are its embedded replies followed by every pool item
    that names it as parent. Each post is placed once.
    """

    def __init__(self, items: list[SocialPost], for_analysis: bool):
        self.items = items
        self.for_analysis = for_analysis
        self.visited: set[str] = set()
        self.by_parent: dict[str, list[SocialPost]] = {}
        for item in items:
            if item.parent_id:
                self.by_parent.setdefault(item.parent_id, []).append(item)

    def children_of(self, post: SocialPost) -> list[SocialPost]:
        """Find the direct replies to a post."""
        return list(post.replies) + self.by_parent.get(post.id, [])

    def replies_to(self, post: SocialPost) -> list[CommentNode]:
        replies: list[CommentNode] = []
        self._attach_replies(post, replies)
        return replies

    def to_node(self, post: SocialPost) -> CommentNode:
        node = self._node(post)
        self._attach_replies(post, node.replies)
        return node

    def _node(self, post: SocialPost) -> CommentNode:
        return CommentNode(
            id=post.id,
            parent_id=post.parent_id,
            author=author_or_unknown(post.author_name, post.author_username, post.author),
            content=post.content,
            created_at=post.timestamp_utc,
            metadata=build_metadata(self.for_analysis, {"AuthorUsername": post.author_username}),
        )

    def _attach_replies(self, post: SocialPost, target: list[CommentNode]) -> None:
        """Fill target with the reply tree under post, depth first."""
        stack = [(iter(self.children_of(post)), target)]
        while stack:
            pending, replies = stack[-1]
            child = next(pending, None)
            if child is None:
                stack.pop()
                continue
            if child.id in self.visited:
                continue
            self.visited.add(child.id)
            node = self._node(child)
            replies.append(node)
            stack.append((iter(self.children_of(child)), node.replies))

    def unplaced(self) -> list[CommentNode]:
        """Place posts not reachable from any root, replies to missing posts first."""
        pool_ids = {item.id for item in self.items}
        missing_parent = [item for item in self.items if item.parent_id not in pool_ids]
        leftovers = []
        for item in missing_parent + self.items:
            if item.id in self.visited:
                continue
            self.visited.add(item.id)
            leftovers.append(self.to_node(item))
        return leftovers


def _convert_posts(
    items: list[SocialPost],
    source_type: str,
    response_metadata: dict[str, Any],
    for_analysis: bool,
    log: logging.Logger,
) -> list[CommentThread]:
    builder = _PostTreeBuilder(items, for_analysis)

    threads = []
    for post in items:
        if post.parent_id or post.id in builder.visited:
            continue
        builder.visited.add(post.id)
        threads.append(
            CommentThread(
                id=post.id,
                title=truncate_for_title(post.content),
                description=post.content or None,
                author=author_or_unknown(post.author_name, post.author_username, post.author),
                created_at=post.timestamp_utc,
                source_type=source_type,
                metadata=build_metadata(
                    for_analysis,
                    {"AuthorUsername": post.author_username or post.author, **response_metadata},
                ),
                comments=builder.replies_to(post),
            )
        )

    orphans = builder.unplaced()
    if orphans:
        log.warning(f"{len(orphans)} {source_type} replies reference posts that were not fetched")
        threads.append(
            CommentThread(
                id=stable_id(source_type, *(orphan.id for orphan in orphans)),
                title=ORPHAN_THREAD_TITLE,
                author=author_or_unknown(None),
                created_at=orphans[0].created_at,
                source_type=source_type,
                metadata=build_metadata(for_analysis, response_metadata),
                comments=orphans,
            )
        )

    return threads


def convert_bluesky(
    response: BlueSkyFeedbackResponse,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert a BlueSky post pool to threads.

    Posts without a parent are thread roots. Replies whose parent is not in
    the pool are grouped into an extra thread instead of being dropped.

    Args:
        response: Posts and replies returned by the fetch layer
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics

    Returns:
        One thread per root post
    """
    return _convert_posts(
        response.items,
        BLUESKY_SOURCE_TYPE,
        {
            "ProcessedPostCount": response.processed_post_count,
            "MayBeIncomplete": response.may_be_incomplete,
        },
        for_analysis,
        log or logger,
    )


def convert_twitter(
    response: TwitterFeedbackResponse,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """Convert a Twitter post pool to threads, same rules as BlueSky."""
    return _convert_posts(
        response.items,
        TWITTER_SOURCE_TYPE,
        {
            "ProcessedTweetCount": response.processed_tweet_count,
            "MayBeIncomplete": response.may_be_incomplete,
        },
        for_analysis,
        log or logger,
    )
