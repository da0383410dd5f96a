"""Tests for routing payloads to adapters."""

import json
from unittest.mock import MagicMock

from feedbackflow.models import (
    GithubDiscussion,
    GithubIssue,
    HackerNewsItem,
    RedditThread,
    SourceKind,
    SourcePayload,
    TwitterFeedbackResponse,
    YouTubeVideo,
)
from feedbackflow.services import deserialize, dispatch, dispatch_json, infer_payload

HN_ITEMS = [
    {"id": 1, "type": "story", "by": "alice", "title": "T", "kids": [2], "time": 0},
    {"id": 2, "type": "comment", "by": "bob", "parent": 1, "text": "&lt;b&gt;hi&lt;/b&gt;", "time": 60},
]

ISSUE = {"id": "I_1", "title": "Bug", "url": "https://github.com/o/r/issues/1", "comments": []}
DISCUSSION = {"title": "Idea", "url": "https://github.com/o/r/discussions/2", "comments": []}


class TestInferPayload:
    """Test suite for infer_payload."""

    def test_tagged_payload_returned_as_is(self):
        """Test that labelled payloads pass through."""
        payload = SourcePayload(kind=SourceKind.YOUTUBE, data=[])
        assert infer_payload(payload) is payload

    def test_infer_lists(self):
        """Test inferring the source kind from a list of models."""
        videos = [YouTubeVideo(id="v1")]
        assert infer_payload(videos).kind == SourceKind.YOUTUBE

        issues = [GithubIssue.model_validate(ISSUE)]
        assert infer_payload(issues).kind == SourceKind.GITHUB_ISSUES

        discussions = [GithubDiscussion.model_validate(DISCUSSION)]
        assert infer_payload(discussions).kind == SourceKind.GITHUB_DISCUSSIONS

        items = [HackerNewsItem.model_validate(item) for item in HN_ITEMS]
        assert infer_payload(items).kind == SourceKind.HACKERNEWS

    def test_infer_single_models(self):
        """Test inferring the source kind from a single model."""
        thread = RedditThread(id="abc", title="T")
        payload = infer_payload(thread)
        assert payload.kind == SourceKind.REDDIT
        assert payload.data == [thread]

        response = TwitterFeedbackResponse()
        assert infer_payload(response).kind == SourceKind.TWITTER

    def test_unknown_shapes(self):
        """Test that unrecognized data is not labelled."""
        assert infer_payload("text") is None
        assert infer_payload([]) is None
        assert infer_payload([1, 2, 3]) is None
        assert infer_payload({"id": "x"}) is None


class TestDispatch:
    """Test suite for dispatch."""

    def test_unknown_payload_gives_no_threads(self):
        """Test that unrecognized payloads convert to an empty list."""
        assert dispatch("not a payload") == []
        assert dispatch(None) == []

    def test_mismatched_payload_gives_no_threads(self):
        """Test that data not matching its label converts to an empty list."""
        payload = SourcePayload(kind=SourceKind.REDDIT, data=[{"id": "x"}])
        assert dispatch(payload) == []

    def test_labelled_raw_data(self):
        """Test that raw dictionaries are validated against the labelled shape."""
        payload = SourcePayload(kind=SourceKind.HACKERNEWS, data=HN_ITEMS)
        threads = dispatch(payload)

        assert len(threads) == 1
        assert threads[0].comments[0].content == "**hi**"

    def test_models_dispatched(self):
        """Test dispatching a list of platform models."""
        items = [HackerNewsItem.model_validate(item) for item in HN_ITEMS]
        threads = dispatch(items, for_analysis=True)

        assert threads[0].title == "T"
        assert threads[0].metadata is None

    def test_custom_logger_used(self):
        """Test that a caller-supplied logger receives diagnostics."""
        log = MagicMock()
        dispatch(SourcePayload(kind=SourceKind.HACKERNEWS, data=HN_ITEMS), log=log)
        assert log.debug.called


class TestDeserialize:
    """Test suite for deserialize and dispatch_json."""

    def test_github_issue(self):
        """Test that issue JSON is recognized as issues."""
        payload = deserialize(json.dumps([ISSUE]), "github")
        assert payload.kind == SourceKind.GITHUB_ISSUES

    def test_github_discussion(self):
        """Test falling back to discussions when the issue shape does not match."""
        payload = deserialize(json.dumps([DISCUSSION]), "github")
        assert payload.kind == SourceKind.GITHUB_DISCUSSIONS

    def test_github_neither(self):
        """Test that JSON matching no GitHub shape is rejected."""
        assert deserialize(json.dumps([{"foo": 1}]), "github") is None
        assert deserialize("[]", "github") is None

    def test_case_insensitive_keys(self):
        """Test that PascalCase keys are accepted."""
        content = json.dumps([{"Id": "1", "Title": "Bug", "URL": "https://x", "Comments": []}])
        payload = deserialize(content, "GitHub")

        assert payload.kind == SourceKind.GITHUB_ISSUES
        assert payload.data[0].title == "Bug"

    def test_hackernews_nested_list(self):
        """Test that a list of item lists uses the first list."""
        payload = deserialize(json.dumps([HN_ITEMS, [{"id": 9}]]), "hackernews")

        assert payload.kind == SourceKind.HACKERNEWS
        assert [item.id for item in payload.data] == [1, 2]

    def test_hackernews_flat_list(self):
        """Test a flat item list."""
        payload = deserialize(json.dumps(HN_ITEMS), "hackernews")
        assert len(payload.data) == 2

    def test_reddit_single_thread(self):
        """Test that a single Reddit thread object is accepted."""
        payload = deserialize(json.dumps({"id": "abc", "title": "T", "comments": []}), "reddit")

        assert payload.kind == SourceKind.REDDIT
        assert len(payload.data) == 1

    def test_invalid_json(self):
        """Test that malformed JSON is rejected without raising."""
        assert deserialize("{not json", "reddit") is None
        assert dispatch_json("{not json", "reddit") == []

    def test_unknown_service_type(self):
        """Test that an unsupported service type is rejected."""
        assert deserialize(json.dumps(HN_ITEMS), "myspace") is None

    def test_dispatch_json(self):
        """Test converting raw JSON in one step."""
        threads = dispatch_json(json.dumps(HN_ITEMS), "hackernews")

        assert len(threads) == 1
        assert threads[0].author == "alice"
