"""Platform adapters converting source payloads to canonical threads."""

from .devblogs import convert_devblogs
from .github import convert_github_discussions, convert_github_issues
from .hackernews import convert_hackernews
from .reddit import convert_reddit, convert_reddit_thread
from .social import convert_bluesky, convert_twitter
from .youtube import convert_youtube

__all__ = [
    "convert_bluesky",
    "convert_devblogs",
    "convert_github_discussions",
    "convert_github_issues",
    "convert_hackernews",
    "convert_reddit",
    "convert_reddit_thread",
    "convert_twitter",
    "convert_youtube",
]
