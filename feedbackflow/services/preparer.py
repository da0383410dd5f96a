"""Service layer preparing comment data for AI analysis."""

import logging
from typing import Any, NamedTuple

from ..config import settings
from ..models import CommentNode, CommentThread
from .dispatcher import deserialize, dispatch
from .renderer import CommentBudget, render_thread

logger = logging.getLogger(__name__)


class PreparedComments(NamedTuple):
    """Text handed to the analysis model and the number of comments it contains."""

    text: str
    comment_count: int


class ReductionEstimate(NamedTuple):
    """Payload size before and after preparation."""

    original_bytes: int
    prepared_bytes: int
    reduction_percent: float


def truncation_note(max_comments: int) -> str:
    return f"_Note: Analysis limited to {max_comments} comments for optimal performance._\n"


def count_comments(comments: list[CommentNode]) -> int:
    """Count comments in a forest, replies included."""
    total = 0
    stack = list(comments)
    while stack:
        comment = stack.pop()
        total += 1
        stack.extend(comment.replies)
    return total


def threads_to_text(
    threads: list[CommentThread],
    max_comments: int,
    use_slimmed_format: bool,
) -> PreparedComments:
    """
    Render threads as markdown-like text under a comment budget.

    One budget is shared by all threads. Comments are emitted depth first in
    source order; once the budget is spent, the remaining comments and
    threads are left out and a truncation note is appended.

    Args:
        threads: Canonical threads in the order they should appear
        max_comments: Maximum number of comment blocks to emit
        use_slimmed_format: Leave out thread metadata, timestamps and scores

    Returns:
        PreparedComments with the text and the number of comments emitted
    """
    if not threads:
        return PreparedComments("", 0)

    max_comments = max(max_comments, 0)
    budget = CommentBudget(max_comments)
    out: list[str] = []

    for thread in threads:
        if budget.exhausted:
            break
        render_thread(
            out,
            title=thread.title,
            description=thread.description,
            author=thread.author,
            created_at=thread.created_at,
            source=thread.source_type,
            url=thread.url,
            comments=thread.comments,
            slim=use_slimmed_format,
            budget=budget,
        )

    total_comments = sum(count_comments(thread.comments) for thread in threads)
    if total_comments > max_comments:
        out.append(truncation_note(max_comments))
        logger.info(f"Truncated {total_comments} comments to {budget.used} for analysis")

    return PreparedComments("".join(out), budget.used)


def prepare_for_analysis(
    data: Any,
    max_comments: int | None = None,
    use_slimmed_format: bool | None = None,
    log: logging.Logger | None = None,
) -> PreparedComments:
    """
    Prepare platform data for analysis as compact text.

    Args:
        data: SourcePayload or bare platform payload from the fetch layer
        max_comments: Maximum number of comments to include, defaults to settings
        use_slimmed_format: Omit metadata, ids and timestamps, defaults to settings
        log: Optional logger for diagnostics

    Returns:
        PreparedComments; empty text and zero count when nothing could be converted
    """
    log = log or logger

    if data is None:
        return PreparedComments("", 0)

    if max_comments is None:
        max_comments = settings.default_max_comments
    if use_slimmed_format is None:
        use_slimmed_format = settings.use_slimmed_format

    threads = dispatch(data, for_analysis=use_slimmed_format, log=log)
    if not threads:
        log.debug(f"No threads converted from type {type(data).__name__}")
        return PreparedComments("", 0)

    prepared = threads_to_text(threads, max_comments, use_slimmed_format)
    log.info(f"Prepared {prepared.comment_count} comments from {len(threads)} threads")
    return prepared


def prepare_json_for_analysis(
    json_content: str,
    service_type: str,
    max_comments: int | None = None,
    use_slimmed_format: bool | None = None,
    log: logging.Logger | None = None,
) -> PreparedComments:
    """
    Prepare raw JSON from a platform for analysis.

    When the JSON cannot be parsed as any shape known for the service type,
    the original JSON is returned verbatim with a comment count of zero so
    the caller can still send it on as opaque text.

    Args:
        json_content: Raw JSON string
        service_type: Platform label (github, reddit, hackernews, youtube, bluesky, twitter, devblogs)
        max_comments: Maximum number of comments to include, defaults to settings
        use_slimmed_format: Omit metadata, defaults to settings
        log: Optional logger for diagnostics

    Returns:
        PreparedComments
    """
    log = log or logger

    if not json_content or not json_content.strip():
        return PreparedComments("", 0)

    payload = deserialize(json_content, service_type, log)
    if payload is None:
        log.info(f"Could not parse {service_type} JSON, passing it through unchanged")
        return PreparedComments(json_content, 0)

    return prepare_for_analysis(payload, max_comments, use_slimmed_format, log)


def estimate_reduction(original: str, prepared: str) -> ReductionEstimate:
    """
    Estimate the size reduction of prepared text compared to the raw payload.

    Args:
        original: Raw JSON payload
        prepared: Prepared text

    Returns:
        ReductionEstimate with UTF-8 byte counts and the reduction in percent
    """
    original_bytes = len(original.encode("utf-8"))
    prepared_bytes = len(prepared.encode("utf-8"))
    reduction_percent = (
        round((1 - prepared_bytes / original_bytes) * 100, 1) if original_bytes > 0 else 0.0
    )
    return ReductionEstimate(original_bytes, prepared_bytes, reduction_percent)
