"""Markdown-like text layout shared by the preparer and the minifier."""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


class RenderableComment(Protocol):
    author: str
    content: str
    created_at: datetime
    score: int | None

    @property
    def replies(self) -> Sequence["RenderableComment"]: ...


class CommentBudget:
    """Comment blocks left to emit; shared by every thread of one rendering call."""

    def __init__(self, limit: int | None = None):
        self.remaining = None if limit is None else max(limit, 0)
        self.used = 0

    @property
    def exhausted(self) -> bool:
        return self.remaining is not None and self.remaining <= 0

    def take(self) -> None:
        self.used += 1
        if self.remaining is not None:
            self.remaining -= 1


def _indent_block(text: str, indent: str) -> str:
    return "\n".join(f"{indent}{line}" if line else line for line in text.split("\n"))


def render_comment(out: list[str], comment: RenderableComment, depth: int, slim: bool) -> None:
    """Append one comment block."""
    indent = "  " * depth
    if slim:
        out.append(f"{indent}**{comment.author}**:\n")
    else:
        out.append(f"{indent}**{comment.author}** ({comment.created_at.strftime(TIMESTAMP_FORMAT)}):\n")
    out.append(f"{_indent_block(comment.content, indent)}\n")
    if not slim and comment.score is not None and comment.score > 0:
        out.append(f"{indent}_Score: {comment.score}_\n")
    out.append("\n")


def render_comments(
    out: list[str],
    comments: Sequence[RenderableComment],
    depth: int,
    slim: bool,
    budget: CommentBudget,
) -> None:
    """Append comments depth first, parents before replies, until the budget runs out."""
    stack = [(comment, depth) for comment in reversed(comments)]
    while stack and not budget.exhausted:
        comment, level = stack.pop()
        render_comment(out, comment, level, slim)
        budget.take()
        stack.extend((reply, level + 1) for reply in reversed(comment.replies))


def render_thread(
    out: list[str],
    *,
    title: str,
    description: str | None,
    author: str,
    created_at: datetime,
    source: str,
    url: str | None,
    comments: Sequence[RenderableComment],
    slim: bool,
    budget: CommentBudget,
) -> None:
    """Append a thread header followed by its comments and a separator."""
    out.append(f"# {title}\n")

    if description:
        out.append("\n")
        out.append(f"{description}\n")

    if not slim:
        out.append("\n")
        out.append(f"Author: {author}\n")
        out.append(f"Created: {created_at.strftime(TIMESTAMP_FORMAT)}\n")
        out.append(f"Source: {source}\n")
        if url:
            out.append(f"URL: {url}\n")

    out.append("\n")

    if comments:
        out.append("## Comments\n")
        out.append("\n")
        render_comments(out, comments, 0, slim, budget)

    out.append("---\n")
    out.append("\n")
