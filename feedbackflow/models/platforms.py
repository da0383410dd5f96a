"""Input models for the platform payloads handed over by the fetch layer."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .timestamps import EPOCH, Timestamp


class PlatformModel(BaseModel):
    """
    Base for platform payload models.

    Keys are matched case-insensitively and without underscores, so
    camelCase, PascalCase and snake_case payloads all validate. Explicit
    nulls are dropped so that field defaults apply.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    # Alternate source keys, normalized like the field names, mapped to a field
    key_aliases: ClassVar[dict[str, str]] = {}

    @model_validator(mode="before")
    @classmethod
    def _normalize_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        known = {name.replace("_", "").lower(): name for name in cls.model_fields}
        known.update(cls.key_aliases)
        normalized: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue
            target = known.get(str(key).replace("_", "").lower(), key)
            normalized.setdefault(target, value)
        return normalized


class YouTubeComment(PlatformModel):
    """Comment or reply on a YouTube video."""

    id: str
    parent_id: str | None = None
    author: str | None = None
    text: str | None = None
    published_at: Timestamp = EPOCH


class YouTubeVideo(PlatformModel):
    """YouTube video with its flat comment list."""

    id: str
    title: str | None = None
    description: str = ""
    url: str | None = None
    published_at: Timestamp = EPOCH
    channel_id: str = ""
    channel_title: str = ""
    author: str | None = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    comments: list[YouTubeComment] = Field(default_factory=list)


class RedditComment(PlatformModel):
    """Reddit comment, either pre-nested or flat with a parent reference."""

    key_aliases: ClassVar[dict[str, str]] = {"createdat": "created_utc"}

    id: str
    parent_id: str | None = None
    author: str | None = None
    body: str = ""
    created_utc: Timestamp = EPOCH
    score: int | None = None
    replies: list["RedditComment"] = Field(default_factory=list)

    @field_validator("replies", mode="before")
    @classmethod
    def _empty_replies(cls, value: Any) -> Any:
        # Reddit sends "" instead of an empty listing
        return value if isinstance(value, list) else []


class RedditThread(PlatformModel):
    """Reddit submission and its comments."""

    key_aliases: ClassVar[dict[str, str]] = {"createdat": "created_utc"}

    id: str
    title: str
    author: str | None = None
    self_text: str = ""
    url: str = ""
    subreddit: str = ""
    score: int = 0
    upvote_ratio: float = 0.0
    num_comments: int = 0
    permalink: str = ""
    created_utc: Timestamp = EPOCH
    comments: list[RedditComment] = Field(default_factory=list)


class GithubComment(PlatformModel):
    """Issue, pull request or discussion comment, including review comments."""

    id: str
    parent_id: str | None = None
    author: str = ""
    content: str = ""
    created_at: Timestamp = EPOCH
    url: str | None = None
    code_context: str | None = None
    file_path: str | None = None
    line_position: int | None = None


class GithubIssue(PlatformModel):
    """GitHub issue or pull request."""

    id: str
    title: str
    url: str
    comments: list[GithubComment]
    author: str = ""
    body: str = ""
    created_at: Timestamp = EPOCH
    last_updated: Timestamp = EPOCH
    upvotes: int = 0
    labels: list[str] = Field(default_factory=list)


class GithubDiscussion(PlatformModel):
    """GitHub discussion. The source provides no id, author or date."""

    title: str
    url: str
    comments: list[GithubComment]
    answer_id: str | None = None


class HackerNewsItem(PlatformModel):
    """Story or comment from the Hacker News item pool."""

    id: int
    type: str | None = None
    by: str | None = None
    time: int = 0
    text: str | None = None
    title: str | None = None
    url: str | None = None
    score: int | None = None
    descendants: int | None = None
    parent: int | None = None
    kids: list[int] = Field(default_factory=list)
    deleted: bool | None = None
    dead: bool | None = None


class SocialPost(PlatformModel):
    """Short-form social post; root posts have no parent id."""

    id: str
    author: str = ""
    author_name: str | None = None
    author_username: str | None = None
    content: str = ""
    timestamp_utc: Timestamp = EPOCH
    parent_id: str | None = None
    replies: list["SocialPost"] = Field(default_factory=list)


class BlueSkyFeedbackItem(SocialPost):
    """BlueSky post or reply."""

    replies: list["BlueSkyFeedbackItem"] = Field(default_factory=list)


class BlueSkyFeedbackResponse(PlatformModel):
    """Flat pool of BlueSky posts returned by the fetch layer."""

    items: list[BlueSkyFeedbackItem] = Field(default_factory=list)
    processed_post_count: int = 0
    may_be_incomplete: bool = False


class TwitterFeedbackItem(SocialPost):
    """Tweet or reply."""

    replies: list["TwitterFeedbackItem"] = Field(default_factory=list)


class TwitterFeedbackResponse(PlatformModel):
    """Flat pool of tweets returned by the fetch layer."""

    items: list[TwitterFeedbackItem] = Field(default_factory=list)
    processed_tweet_count: int = 0
    may_be_incomplete: bool = False
    rate_limit_info: dict[str, Any] | None = None


class DevBlogsComment(PlatformModel):
    """Blog comment with inline replies; body is HTML."""

    id: str | None = None
    author: str | None = None
    body_html: str | None = None
    published_utc: Timestamp | None = None
    parent_id: str | None = None
    replies: list["DevBlogsComment"] = Field(default_factory=list)


class DevBlogsArticle(PlatformModel):
    """Blog article and its comment tree."""

    title: str | None = None
    url: str | None = None
    comments: list[DevBlogsComment] = Field(default_factory=list)
