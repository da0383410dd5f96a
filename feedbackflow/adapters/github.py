"""GitHub issues, pull requests and discussions to canonical threads."""

import logging

from ..models import EPOCH, CommentNode, CommentThread, GithubComment, GithubDiscussion, GithubIssue
from ..utils import build_hierarchy, mark_orphan
from .base import author_or_unknown, build_metadata, stable_id

logger = logging.getLogger(__name__)

ISSUE_SOURCE_TYPE = "GitHub Issue"
DISCUSSION_SOURCE_TYPE = "GitHub Discussion"


def _convert_comments(
    comments: list[GithubComment], for_analysis: bool, log: logging.Logger
) -> list[CommentNode]:
    nodes = [
        CommentNode(
            id=comment.id,
            parent_id=comment.parent_id,
            author=author_or_unknown(comment.author),
            content=comment.content,
            created_at=comment.created_at,
            url=comment.url,
            metadata=build_metadata(
                for_analysis,
                {
                    "CodeContext": comment.code_context,
                    "FilePath": comment.file_path,
                    "LinePosition": comment.line_position,
                },
            ),
        )
        for comment in comments
    ]
    return build_hierarchy(nodes, on_orphan=mark_orphan, log=log).roots


def convert_github_issues(
    issues: list[GithubIssue],
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert GitHub issues and pull requests to threads.

    Review comments keep their file path, line position and code context as
    comment metadata.

    Args:
        issues: Issues with their comments
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics

    Returns:
        One thread per issue
    """
    log = log or logger
    return [
        CommentThread(
            id=issue.id,
            title=issue.title,
            description=issue.body or None,
            author=author_or_unknown(issue.author),
            created_at=issue.created_at,
            url=issue.url,
            source_type=ISSUE_SOURCE_TYPE,
            metadata=build_metadata(
                for_analysis,
                {
                    "Upvotes": issue.upvotes,
                    "Labels": list(issue.labels),
                    "LastUpdated": issue.last_updated,
                },
            ),
            comments=_convert_comments(issue.comments, for_analysis, log),
        )
        for issue in issues
    ]


def convert_github_discussions(
    discussions: list[GithubDiscussion],
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert GitHub discussions to threads.

    Discussions carry no id, author or creation date: the id is derived from
    the URL, the author is unknown and the date is the epoch.
    """
    log = log or logger
    return [
        CommentThread(
            id=stable_id(discussion.url, discussion.title),
            title=discussion.title,
            author=author_or_unknown(None),
            created_at=EPOCH,
            url=discussion.url,
            source_type=DISCUSSION_SOURCE_TYPE,
            metadata=build_metadata(for_analysis, {"AnswerId": discussion.answer_id}),
            comments=_convert_comments(discussion.comments, for_analysis, log),
        )
        for discussion in discussions
    ]
