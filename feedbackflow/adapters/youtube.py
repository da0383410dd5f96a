"""YouTube videos to canonical threads."""

import logging

from ..models import CommentNode, CommentThread, YouTubeComment, YouTubeVideo
from ..utils import build_hierarchy, mark_orphan, sanitize
from .base import author_or_unknown, build_metadata

logger = logging.getLogger(__name__)

SOURCE_TYPE = "YouTube"


def _convert_comments(
    comments: list[YouTubeComment], log: logging.Logger
) -> list[CommentNode]:
    nodes = [
        CommentNode(
            id=comment.id,
            parent_id=comment.parent_id,
            author=author_or_unknown(comment.author),
            content=sanitize(comment.text),
            created_at=comment.published_at,
        )
        for comment in comments
    ]
    result = build_hierarchy(nodes, on_orphan=mark_orphan, log=log)
    log.debug(
        f"Built {len(result.roots)} root comments with {result.attached_count} replies"
    )
    return result.roots


def convert_youtube(
    videos: list[YouTubeVideo],
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert YouTube videos and their flat comment lists to threads.

    Replies reference their top-level comment through parent_id. Replies
    whose parent was not fetched stay in the thread at root level, marked
    as replies to an unavailable comment.

    Args:
        videos: Videos with comments
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics

    Returns:
        One thread per video
    """
    log = log or logger
    threads = []
    for video in videos:
        threads.append(
            CommentThread(
                id=video.id,
                title=video.title or "Untitled Video",
                description=video.description or None,
                author=author_or_unknown(video.channel_title, video.author),
                created_at=video.published_at,
                url=video.url,
                source_type=SOURCE_TYPE,
                metadata=build_metadata(
                    for_analysis,
                    {
                        "ChannelId": video.channel_id,
                        "ViewCount": video.view_count,
                        "LikeCount": video.like_count,
                        "CommentCount": video.comment_count,
                    },
                ),
                comments=_convert_comments(video.comments, log),
            )
        )
    return threads
