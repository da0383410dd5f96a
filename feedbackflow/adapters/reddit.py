"""Reddit submissions to canonical threads."""

import logging

from ..models import CommentNode, CommentThread, RedditComment, RedditThread
from ..utils import build_hierarchy
from .base import author_or_unknown, build_metadata

logger = logging.getLogger(__name__)

SOURCE_TYPE = "Reddit"

# Reddit "fullname" prefixes for comments and submissions
_FULLNAME_PREFIXES = ("t1_", "t3_")


def _strip_fullname(value: str | None) -> str | None:
    if value and value[:3] in _FULLNAME_PREFIXES:
        return value[3:]
    return value


def _convert_comment(comment: RedditComment) -> CommentNode:
    return CommentNode(
        id=_strip_fullname(comment.id),
        parent_id=_strip_fullname(comment.parent_id),
        author=author_or_unknown(comment.author),
        content=comment.body,
        created_at=comment.created_utc,
        score=comment.score,
        replies=[_convert_comment(reply) for reply in comment.replies],
    )


def _convert_comments(
    comments: list[RedditComment], thread_id: str, log: logging.Logger
) -> list[CommentNode]:
    """
    Copy comments into the canonical shape.

    Listings arrive either pre-nested or as a flat list with parent ids.
    Top-level nodes are passed through the hierarchy builder so flat lists
    get linked; nested nodes reference the submission and remain roots.
    """
    nodes = [_convert_comment(comment) for comment in comments]
    if not any(node.parent_id and node.parent_id != thread_id for node in nodes):
        return nodes

    result = build_hierarchy(nodes, log=log)
    log.debug(f"Linked {result.attached_count} flat Reddit comments in thread {thread_id}")
    return result.roots


def convert_reddit_thread(
    thread: RedditThread,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> CommentThread:
    """Convert a single Reddit submission."""
    log = log or logger
    thread_id = _strip_fullname(thread.id)
    return CommentThread(
        id=thread_id,
        title=thread.title,
        description=thread.self_text or None,
        author=author_or_unknown(thread.author),
        created_at=thread.created_utc,
        url=thread.url or None,
        source_type=SOURCE_TYPE,
        metadata=build_metadata(
            for_analysis,
            {
                "Subreddit": thread.subreddit,
                "Score": thread.score,
                "UpvoteRatio": thread.upvote_ratio,
                "NumComments": thread.num_comments,
                "Permalink": thread.permalink,
            },
        ),
        comments=_convert_comments(thread.comments, thread_id, log),
    )


def convert_reddit(
    threads: list[RedditThread],
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert Reddit submissions to threads.

    Args:
        threads: Submissions with their comments
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics

    Returns:
        One thread per submission
    """
    return [convert_reddit_thread(thread, for_analysis, log) for thread in threads]
