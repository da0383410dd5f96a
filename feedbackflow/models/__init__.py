"""Data models package."""

from .api import MinifyRequest, MinifyResponse, PrepareRequest, PrepareResponse
from .comment import CommentNode, CommentThread, MinifiedCommentNode, MinifiedCommentThread
from .platforms import (
    BlueSkyFeedbackItem,
    BlueSkyFeedbackResponse,
    DevBlogsArticle,
    DevBlogsComment,
    GithubComment,
    GithubDiscussion,
    GithubIssue,
    HackerNewsItem,
    RedditComment,
    RedditThread,
    TwitterFeedbackItem,
    TwitterFeedbackResponse,
    YouTubeComment,
    YouTubeVideo,
)
from .sources import SourceKind, SourcePayload
from .timestamps import EPOCH, parse_timestamp

__all__ = [
    "MinifyRequest",
    "MinifyResponse",
    "PrepareRequest",
    "PrepareResponse",
    "CommentNode",
    "CommentThread",
    "MinifiedCommentNode",
    "MinifiedCommentThread",
    "BlueSkyFeedbackItem",
    "BlueSkyFeedbackResponse",
    "DevBlogsArticle",
    "DevBlogsComment",
    "GithubComment",
    "GithubDiscussion",
    "GithubIssue",
    "HackerNewsItem",
    "RedditComment",
    "RedditThread",
    "TwitterFeedbackItem",
    "TwitterFeedbackResponse",
    "YouTubeComment",
    "YouTubeVideo",
    "SourceKind",
    "SourcePayload",
    "EPOCH",
    "parse_timestamp",
]
