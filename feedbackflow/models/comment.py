"""Canonical, platform-agnostic comment models."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .timestamps import EPOCH


class CommentNode(BaseModel):
    """A single comment with its nested replies."""

    id: str = Field(..., description="Identifier, unique within its thread")
    parent_id: str | None = Field(None, description="Parent comment id, None for top-level comments")
    author: str = Field("Unknown", description="Display name of the comment author")
    content: str = Field("", description="Sanitized comment text")
    created_at: datetime = Field(EPOCH, description="When the comment was created")
    score: int | None = Field(None, description="Upvotes/points if the platform has them")
    url: str | None = Field(None, description="Direct link to the comment if available")
    metadata: dict[str, Any] | None = Field(
        None, description="Platform-specific extras, omitted in for-analysis mode"
    )
    replies: list["CommentNode"] = Field(default_factory=list, description="Direct replies in source order")


class CommentThread(BaseModel):
    """A top-level discussion unit (video, post, issue, story, article) and its comments."""

    id: str = Field(..., description="Identifier of the thread")
    title: str = Field("", description="Title of the thread/post/video")
    description: str | None = Field(None, description="Body of the original post")
    author: str = Field("Unknown", description="Author of the original post")
    created_at: datetime = Field(EPOCH, description="When the thread was created")
    url: str | None = Field(None, description="Link to the original post")
    source_type: str = Field("", description="Platform label (YouTube, Reddit, GitHub Issue, ...)")
    metadata: dict[str, Any] | None = Field(
        None, description="Platform-specific extras, omitted in for-analysis mode"
    )
    comments: list[CommentNode] = Field(default_factory=list, description="Root comments of the thread")


class MinifiedCommentNode(BaseModel):
    """Comment projection carrying only what analysis needs."""

    model_config = ConfigDict(populate_by_name=True)

    author: str = Field("", alias="a")
    content: str = Field("", alias="c")
    created_at: datetime = Field(EPOCH, alias="t")
    score: int | None = Field(None, alias="s")
    replies: list["MinifiedCommentNode"] = Field(default_factory=list, alias="r")


class MinifiedCommentThread(BaseModel):
    """Thread projection without ids, urls or metadata."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("", alias="t")
    description: str | None = Field(None, alias="d")
    author: str = Field("", alias="a")
    created_at: datetime = Field(EPOCH, alias="c")
    platform: str = Field("", alias="p")
    comments: list[MinifiedCommentNode] = Field(default_factory=list, alias="co")
