"""Projection of canonical threads to minified structures."""

from ..models import CommentNode, CommentThread, MinifiedCommentNode, MinifiedCommentThread
from .renderer import CommentBudget, render_thread


def _minify_node(comment: CommentNode) -> MinifiedCommentNode:
    return MinifiedCommentNode(
        author=comment.author,
        content=comment.content,
        created_at=comment.created_at,
        score=comment.score,
    )


def minify_comments(comments: list[CommentNode]) -> list[MinifiedCommentNode]:
    """Minify a comment forest, keeping its shape and order."""
    minified: list[MinifiedCommentNode] = []
    stack = [(comment, minified) for comment in reversed(comments)]
    while stack:
        comment, siblings = stack.pop()
        node = _minify_node(comment)
        siblings.append(node)
        stack.extend((reply, node.replies) for reply in reversed(comment.replies))
    return minified


def minify_comment(comment: CommentNode) -> MinifiedCommentNode:
    return minify_comments([comment])[0]


def minify_thread(thread: CommentThread) -> MinifiedCommentThread:
    """
    Convert a thread to its minified form.

    Ids, parent ids, urls and metadata are dropped; author, content,
    timestamps, scores and the reply hierarchy are kept.
    """
    return MinifiedCommentThread(
        title=thread.title,
        description=thread.description,
        author=thread.author,
        created_at=thread.created_at,
        platform=thread.source_type,
        comments=minify_comments(thread.comments),
    )


def minify_threads(threads: list[CommentThread]) -> list[MinifiedCommentThread]:
    return [minify_thread(thread) for thread in threads]


def minify_text(threads: list[MinifiedCommentThread]) -> str:
    """Render minified threads in the full text layout, without a comment budget."""
    if not threads:
        return ""

    out: list[str] = []
    budget = CommentBudget()
    for thread in threads:
        render_thread(
            out,
            title=thread.title,
            description=thread.description,
            author=thread.author,
            created_at=thread.created_at,
            source=thread.platform,
            url=None,
            comments=thread.comments,
            slim=False,
            budget=budget,
        )
    return "".join(out)
