"""Request and response models for the HTTP endpoints."""

from pydantic import BaseModel, Field

from ..config import settings
from .comment import MinifiedCommentThread


class PrepareRequest(BaseModel):
    """Raw platform JSON to prepare for analysis."""

    content: str = Field(..., description="Raw JSON returned by the platform fetch layer")
    service_type: str = Field(..., description="Platform label, e.g. github, reddit, hackernews")
    max_comments: int = Field(
        default=settings.default_max_comments,
        ge=0,
        le=settings.max_comment_limit,
        description="Maximum number of comments to include",
    )
    use_slimmed_format: bool = Field(
        default=settings.use_slimmed_format,
        description="Omit metadata, timestamps and scores to minimize tokens",
    )


class PrepareResponse(BaseModel):
    """Prepared text and size statistics."""

    text: str = Field(..., description="Prepared text, or the raw content when it could not be parsed")
    comment_count: int = Field(..., description="Number of comments included in the text")
    original_bytes: int = Field(..., description="UTF-8 size of the raw content")
    prepared_bytes: int = Field(..., description="UTF-8 size of the prepared text")
    reduction_percent: float = Field(..., description="Size reduction in percent")


class MinifyRequest(BaseModel):
    """Raw platform JSON to minify."""

    content: str = Field(..., description="Raw JSON returned by the platform fetch layer")
    service_type: str = Field(..., description="Platform label, e.g. github, reddit, hackernews")


class MinifyResponse(BaseModel):
    """Minified threads and their text rendering."""

    threads: list[MinifiedCommentThread] = Field(..., description="Minified threads with short keys")
    text: str = Field(..., description="Full text rendering of the minified threads")
