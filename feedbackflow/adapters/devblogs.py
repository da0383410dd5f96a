"""DevBlogs articles to canonical threads."""

import logging

from ..models import EPOCH, CommentNode, CommentThread, DevBlogsArticle, DevBlogsComment
from ..utils import sanitize
from .base import author_or_unknown, stable_id

logger = logging.getLogger(__name__)

SOURCE_TYPE = "DevBlogs"


def _convert_comments(comments: list[DevBlogsComment], path: str) -> list[CommentNode]:
    nodes = []
    for index, comment in enumerate(comments):
        # Position in the tree stands in for a missing id
        comment_id = comment.id or stable_id(path, str(index))
        nodes.append(
            CommentNode(
                id=comment_id,
                parent_id=comment.parent_id,
                author=author_or_unknown(comment.author),
                content=sanitize(comment.body_html),
                created_at=comment.published_utc or EPOCH,
                replies=_convert_comments(comment.replies, comment_id),
            )
        )
    return nodes


def convert_devblogs(
    article: DevBlogsArticle,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert a DevBlogs article and its nested comments to a thread.

    Comment bodies are HTML and get sanitized. The article id is derived
    from its URL since the source does not provide one.
    """
    log = log or logger
    thread_id = stable_id(article.url or article.title or "")
    log.debug(f"Converting DevBlogs article {article.url} with {len(article.comments)} top-level comments")
    return [
        CommentThread(
            id=thread_id,
            title=article.title or "Untitled Article",
            author=author_or_unknown(None),
            created_at=EPOCH,
            url=article.url,
            source_type=SOURCE_TYPE,
            comments=_convert_comments(article.comments, thread_id),
        )
    ]
