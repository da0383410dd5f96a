"""Tests for preparing comment data for analysis."""

import json
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from feedbackflow.config import settings
from feedbackflow.models import EPOCH, CommentNode, CommentThread, SourceKind, SourcePayload
from feedbackflow.services import (
    count_comments,
    estimate_reduction,
    prepare_for_analysis,
    prepare_json_for_analysis,
    threads_to_text,
)
from feedbackflow.services.preparer import truncation_note

HN_ITEMS = [
    {"id": 1, "type": "story", "by": "alice", "title": "T", "url": "https://x", "kids": [2], "time": 0},
    {"id": 2, "type": "comment", "by": "bob", "parent": 1, "text": "&lt;b&gt;hi&lt;/b&gt;", "time": 60},
]


def comment(comment_id, content, replies=None, score=None, author="bob"):
    return CommentNode(
        id=comment_id,
        author=author,
        content=content,
        created_at=EPOCH + timedelta(minutes=1),
        score=score,
        replies=replies or [],
    )


def thread(thread_id, comments, title="T"):
    return CommentThread(
        id=thread_id,
        title=title,
        author="alice",
        created_at=EPOCH,
        url="https://x",
        source_type="HackerNews",
        comments=comments,
    )


class TestThreadsToText:
    """Test suite for threads_to_text."""

    def test_empty(self):
        """Test that no threads give empty text."""
        assert threads_to_text([], 10, True) == ("", 0)

    def test_full_format(self):
        """Test the full layout with metadata, timestamps and scores."""
        prepared = threads_to_text([thread("1", [comment("2", "**hi**", score=3)])], 10, False)

        assert prepared.comment_count == 1
        assert prepared.text == (
            "# T\n"
            "\n"
            "Author: alice\n"
            "Created: 1970-01-01 00:00\n"
            "Source: HackerNews\n"
            "URL: https://x\n"
            "\n"
            "## Comments\n"
            "\n"
            "**bob** (1970-01-01 00:01):\n"
            "**hi**\n"
            "_Score: 3_\n"
            "\n"
            "---\n"
            "\n"
        )

    def test_slim_format(self):
        """Test that the slim layout leaves out metadata, timestamps and scores."""
        prepared = threads_to_text([thread("1", [comment("2", "**hi**", score=3)])], 10, True)

        assert prepared.text == "# T\n\n## Comments\n\n**bob**:\n**hi**\n\n---\n\n"

    def test_zero_score_omitted(self):
        """Test that a zero score produces no score line."""
        prepared = threads_to_text([thread("1", [comment("2", "text", score=0)])], 10, False)
        assert "_Score:" not in prepared.text

    def test_replies_indented(self):
        """Test that replies are indented under their parent, multi-line content included."""
        tree = comment("1", "parent", replies=[comment("2", "line one\nline two", author="carol")])
        prepared = threads_to_text([thread("t", [tree])], 10, True)

        assert "**bob**:\nparent\n\n  **carol**:\n  line one\n  line two\n\n" in prepared.text
        assert prepared.comment_count == 2

    def test_sibling_order_preserved(self):
        """Test that comments keep their source order."""
        prepared = threads_to_text([thread("t", [comment("1", "first"), comment("2", "second")])], 10, True)
        assert prepared.text.index("first") < prepared.text.index("second")

    def test_budget_limits_comments(self):
        """Test that the comment budget is respected and a note is appended."""
        tree = comment("1", "a", replies=[comment("2", "b"), comment("3", "c")])
        prepared = threads_to_text([thread("t", [tree])], 2, True)

        assert prepared.comment_count == 2
        assert "a\n" in prepared.text
        assert "b\n" in prepared.text
        assert "  c\n" not in prepared.text
        assert prepared.text.endswith(truncation_note(2))

    def test_budget_shared_across_threads(self):
        """Test that one budget covers every thread."""
        threads = [
            thread("1", [comment("a", "one"), comment("b", "two")], title="First"),
            thread("2", [comment("c", "three"), comment("d", "four")], title="Second"),
            thread("3", [comment("e", "five")], title="Third"),
        ]
        prepared = threads_to_text(threads, 3, True)

        assert prepared.comment_count == 3
        assert "# Second" in prepared.text
        assert "three" in prepared.text
        assert "four" not in prepared.text
        assert "# Third" not in prepared.text

    def test_no_note_when_within_budget(self):
        """Test that no note is added when every comment fits."""
        prepared = threads_to_text([thread("t", [comment("1", "a")])], 1, True)
        assert "_Note:" not in prepared.text

    def test_zero_and_negative_budget(self):
        """Test that a zero or negative budget emits no comments."""
        threads = [thread("t", [comment("1", "a")])]

        assert threads_to_text(threads, 0, True).comment_count == 0
        negative = threads_to_text(threads, -5, True)
        assert negative.comment_count == 0
        assert negative.text == truncation_note(0)

    def test_deterministic(self):
        """Test that the same input always renders the same text."""
        threads = [thread("t", [comment("1", "a", replies=[comment("2", "b")])])]
        assert threads_to_text(threads, 5, False) == threads_to_text(threads, 5, False)


class TestPrepareForAnalysis:
    """Test suite for prepare_for_analysis and prepare_json_for_analysis."""

    def test_none_payload(self):
        """Test that a missing payload prepares to nothing."""
        assert prepare_for_analysis(None) == ("", 0)

    def test_unrecognized_payload(self):
        """Test that an unrecognized payload prepares to nothing."""
        assert prepare_for_analysis(["not", "models"]) == ("", 0)

    def test_payload_slim(self):
        """Test preparing a labelled payload in the slim layout."""
        payload = SourcePayload(kind=SourceKind.HACKERNEWS, data=HN_ITEMS)
        prepared = prepare_for_analysis(payload, max_comments=10, use_slimmed_format=True)

        assert prepared.comment_count == 1
        assert "# T\n" in prepared.text
        assert "**bob**:\n**hi**\n" in prepared.text
        assert "Author:" not in prepared.text

    def test_payload_full(self):
        """Test preparing a labelled payload in the full layout."""
        payload = SourcePayload(kind=SourceKind.HACKERNEWS, data=HN_ITEMS)
        prepared = prepare_for_analysis(payload, max_comments=10, use_slimmed_format=False)

        assert "Author: alice\n" in prepared.text
        assert "Source: HackerNews\n" in prepared.text
        assert "**bob** (1970-01-01 00:01):\n" in prepared.text

    def test_defaults_from_settings(self):
        """Test that the comment limit defaults to the configured value."""
        payload = SourcePayload(kind=SourceKind.HACKERNEWS, data=HN_ITEMS)
        with patch.object(settings, "default_max_comments", 0):
            prepared = prepare_for_analysis(payload)

        assert prepared.comment_count == 0
        assert truncation_note(0) in prepared.text

    def test_json_blank(self):
        """Test that blank JSON prepares to nothing."""
        assert prepare_json_for_analysis("", "reddit") == ("", 0)
        assert prepare_json_for_analysis("   ", "reddit") == ("", 0)

    def test_json_unparseable_passed_through(self):
        """Test that JSON of an unknown shape is returned unchanged."""
        content = '{"unexpected": true}'
        assert prepare_json_for_analysis(content, "reddit") == (content, 0)
        assert prepare_json_for_analysis("{not json", "github") == ("{not json", 0)

    def test_json_hackernews(self):
        """Test preparing raw Hacker News JSON."""
        prepared = prepare_json_for_analysis(json.dumps(HN_ITEMS), "hackernews", max_comments=10)

        assert prepared.comment_count == 1
        assert "**hi**" in prepared.text

    def test_json_reddit_keeps_every_thread(self):
        """Test that every thread of a Reddit list is prepared."""
        content = json.dumps(
            [
                {"id": "a", "title": "First", "comments": [{"id": "c1", "body": "x", "author": "u"}]},
                {"id": "b", "title": "Second", "comments": [{"id": "c2", "body": "y", "author": "v"}]},
            ]
        )
        prepared = prepare_json_for_analysis(content, "reddit", max_comments=10, use_slimmed_format=True)

        assert prepared.comment_count == 2
        assert "# First" in prepared.text
        assert "# Second" in prepared.text


class TestHelpers:
    """Test suite for counting and size estimation helpers."""

    def test_count_comments(self):
        """Test counting a nested forest."""
        forest = [comment("1", "a", replies=[comment("2", "b", replies=[comment("3", "c")])]), comment("4", "d")]
        assert count_comments(forest) == 4
        assert count_comments([]) == 0

    def test_estimate_reduction(self):
        """Test reduction estimates in bytes and percent."""
        estimate = estimate_reduction("abcd", "ab")

        assert estimate.original_bytes == 4
        assert estimate.prepared_bytes == 2
        assert estimate.reduction_percent == 50.0

    def test_estimate_reduction_empty_original(self):
        """Test that an empty original gives no reduction."""
        assert estimate_reduction("", "").reduction_percent == 0.0

    def test_estimate_reduction_utf8(self):
        """Test that sizes are measured in UTF-8 bytes."""
        assert estimate_reduction("é", "").original_bytes == 2


def reply_chain(depth):
    root = comment("0", "start")
    current = root
    for index in range(1, depth):
        reply = comment(str(index), "reply")
        current.replies.append(reply)
        current = reply
    return root


class TestDeepThreads:
    """Test suite for very long reply chains."""

    def test_count_deep_chain(self):
        """Test counting a chain deeper than the recursion limit."""
        assert count_comments([reply_chain(3000)]) == 3000

    def test_render_deep_chain_within_budget(self):
        """Test rendering a deep chain stops at the budget."""
        prepared = threads_to_text([thread("t", [reply_chain(1500)])], 1200, True)

        assert prepared.comment_count == 1200
        assert prepared.text.endswith(truncation_note(1200))
