"""Tagged union of the platform payloads the core knows how to convert."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SourceKind(str, Enum):
    YOUTUBE = "youtube"
    REDDIT = "reddit"
    GITHUB_ISSUES = "github_issues"
    GITHUB_DISCUSSIONS = "github_discussions"
    HACKERNEWS = "hackernews"
    BLUESKY = "bluesky"
    TWITTER = "twitter"
    DEVBLOGS = "devblogs"


class SourcePayload(BaseModel):
    """Platform payload labelled with the adapter that understands it."""

    kind: SourceKind = Field(..., description="Which platform produced the payload")
    data: Any = Field(..., description="Platform model, or list of platform models")
