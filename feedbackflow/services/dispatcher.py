"""Routing of platform payloads to the matching adapter."""

import logging
from collections.abc import Callable
from typing import Any, NamedTuple

from pydantic import TypeAdapter, ValidationError

from ..adapters import (
    convert_bluesky,
    convert_devblogs,
    convert_github_discussions,
    convert_github_issues,
    convert_hackernews,
    convert_reddit,
    convert_twitter,
    convert_youtube,
)
from ..models import (
    BlueSkyFeedbackResponse,
    CommentThread,
    DevBlogsArticle,
    GithubDiscussion,
    GithubIssue,
    HackerNewsItem,
    RedditThread,
    SourceKind,
    SourcePayload,
    TwitterFeedbackResponse,
    YouTubeVideo,
)

logger = logging.getLogger(__name__)

Converter = Callable[..., list[CommentThread]]

_CONVERTERS: dict[SourceKind, Converter] = {
    SourceKind.YOUTUBE: convert_youtube,
    SourceKind.REDDIT: convert_reddit,
    SourceKind.GITHUB_ISSUES: convert_github_issues,
    SourceKind.GITHUB_DISCUSSIONS: convert_github_discussions,
    SourceKind.HACKERNEWS: convert_hackernews,
    SourceKind.BLUESKY: convert_bluesky,
    SourceKind.TWITTER: convert_twitter,
    SourceKind.DEVBLOGS: convert_devblogs,
}

# Shape each adapter expects its payload in
_SHAPES: dict[SourceKind, TypeAdapter] = {
    SourceKind.YOUTUBE: TypeAdapter(list[YouTubeVideo]),
    SourceKind.REDDIT: TypeAdapter(list[RedditThread]),
    SourceKind.GITHUB_ISSUES: TypeAdapter(list[GithubIssue]),
    SourceKind.GITHUB_DISCUSSIONS: TypeAdapter(list[GithubDiscussion]),
    SourceKind.HACKERNEWS: TypeAdapter(list[HackerNewsItem]),
    SourceKind.BLUESKY: TypeAdapter(BlueSkyFeedbackResponse),
    SourceKind.TWITTER: TypeAdapter(TwitterFeedbackResponse),
    SourceKind.DEVBLOGS: TypeAdapter(DevBlogsArticle),
}

# Model types recognized when a caller passes a bare payload
_SINGLE_TYPES: tuple[tuple[type, SourceKind], ...] = (
    (BlueSkyFeedbackResponse, SourceKind.BLUESKY),
    (TwitterFeedbackResponse, SourceKind.TWITTER),
    (DevBlogsArticle, SourceKind.DEVBLOGS),
    (RedditThread, SourceKind.REDDIT),
)
_LIST_TYPES: tuple[tuple[type, SourceKind], ...] = (
    (YouTubeVideo, SourceKind.YOUTUBE),
    (RedditThread, SourceKind.REDDIT),
    (GithubIssue, SourceKind.GITHUB_ISSUES),
    (GithubDiscussion, SourceKind.GITHUB_DISCUSSIONS),
    (HackerNewsItem, SourceKind.HACKERNEWS),
)


class _Candidate(NamedTuple):
    """One shape a JSON document may be parsed as."""

    kind: SourceKind
    adapter: TypeAdapter
    unwrap: Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


def _first_or_empty(value: list) -> Any:
    return value[0] if value else []


def _as_list(value: Any) -> list:
    return [value]


# Shapes tried in order for each service type hint; the first non-empty result wins
_JSON_CANDIDATES: dict[str, tuple[_Candidate, ...]] = {
    "github": (
        _Candidate(SourceKind.GITHUB_ISSUES, _SHAPES[SourceKind.GITHUB_ISSUES], _identity),
        _Candidate(SourceKind.GITHUB_DISCUSSIONS, _SHAPES[SourceKind.GITHUB_DISCUSSIONS], _identity),
    ),
    "reddit": (
        _Candidate(SourceKind.REDDIT, _SHAPES[SourceKind.REDDIT], _identity),
        _Candidate(SourceKind.REDDIT, TypeAdapter(RedditThread), _as_list),
    ),
    "hackernews": (
        _Candidate(SourceKind.HACKERNEWS, TypeAdapter(list[list[HackerNewsItem]]), _first_or_empty),
        _Candidate(SourceKind.HACKERNEWS, _SHAPES[SourceKind.HACKERNEWS], _identity),
    ),
    "youtube": (_Candidate(SourceKind.YOUTUBE, _SHAPES[SourceKind.YOUTUBE], _identity),),
    "bluesky": (_Candidate(SourceKind.BLUESKY, _SHAPES[SourceKind.BLUESKY], _identity),),
    "twitter": (_Candidate(SourceKind.TWITTER, _SHAPES[SourceKind.TWITTER], _identity),),
    "devblogs": (_Candidate(SourceKind.DEVBLOGS, _SHAPES[SourceKind.DEVBLOGS], _identity),),
}


SUPPORTED_SERVICE_TYPES = tuple(_JSON_CANDIDATES)


def _is_empty(value: Any) -> bool:
    return isinstance(value, list) and not value


def infer_payload(data: Any) -> SourcePayload | None:
    """
    Label a bare platform payload with its source kind.

    Args:
        data: A SourcePayload, a platform model or a homogeneous list of models

    Returns:
        SourcePayload, or None when the shape is not recognized
    """
    if isinstance(data, SourcePayload):
        return data

    for model_type, kind in _SINGLE_TYPES:
        if isinstance(data, model_type):
            if kind is SourceKind.REDDIT:
                return SourcePayload(kind=kind, data=[data])
            return SourcePayload(kind=kind, data=data)

    if isinstance(data, list) and data:
        for model_type, kind in _LIST_TYPES:
            if all(isinstance(item, model_type) for item in data):
                return SourcePayload(kind=kind, data=data)

    return None


def dispatch(
    data: Any,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """
    Convert a platform payload to canonical threads.

    Args:
        data: SourcePayload or bare platform payload
        for_analysis: Omit metadata to keep the payload small
        log: Optional logger for diagnostics, passed on to the adapter

    Returns:
        Converted threads, empty when the payload is not recognized
    """
    log = log or logger

    payload = infer_payload(data)
    if payload is None:
        log.debug(f"No adapter for payload of type {type(data).__name__}")
        return []

    try:
        source = _SHAPES[payload.kind].validate_python(payload.data)
    except ValidationError as e:
        log.debug(f"Payload does not match the {payload.kind.value} shape: {e.error_count()} errors")
        return []

    threads = _CONVERTERS[payload.kind](source, for_analysis=for_analysis, log=log)
    log.debug(f"Dispatched {payload.kind.value} payload into {len(threads)} threads")
    return threads


def deserialize(json_content: str, service_type: str, log: logging.Logger | None = None) -> SourcePayload | None:
    """
    Parse raw JSON according to a service type hint.

    Each candidate shape for the hint is tried in order and the first one
    that parses to a non-empty result is used. Parse failures are swallowed
    so the caller can fall back to the raw text.

    Args:
        json_content: Raw JSON from the fetch layer
        service_type: Platform label such as "github" or "hackernews"
        log: Optional logger for diagnostics

    Returns:
        SourcePayload, or None when no candidate shape matched
    """
    log = log or logger

    candidates = _JSON_CANDIDATES.get((service_type or "").lower())
    if not candidates:
        log.debug(f"Unknown service type: {service_type}")
        return None

    for candidate in candidates:
        try:
            parsed = candidate.unwrap(candidate.adapter.validate_json(json_content))
        except ValidationError as e:
            log.debug(f"JSON is not a {candidate.kind.value} payload: {e.error_count()} errors")
            continue
        if _is_empty(parsed):
            continue
        return SourcePayload(kind=candidate.kind, data=parsed)

    return None


def dispatch_json(
    json_content: str,
    service_type: str,
    for_analysis: bool = False,
    log: logging.Logger | None = None,
) -> list[CommentThread]:
    """Parse raw JSON for the given service type and convert it to threads."""
    payload = deserialize(json_content, service_type, log)
    if payload is None:
        return []
    return dispatch(payload, for_analysis, log)
