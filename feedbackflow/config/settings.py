"""Application configuration management."""

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # API Configuration
    api_title: str = "FeedbackFlow Comment Preparation API"
    api_version: str = "1.0.0"
    api_description: str = "Normalizes platform comment data and prepares it for AI analysis"
    api_prefix: str = "/api/v1"

    # Preparation Configuration
    default_max_comments: int = 500
    max_comment_limit: int = 5000
    use_slimmed_format: bool = True

    # Normalization Configuration
    unknown_author: str = "Unknown"
    orphan_marker: str = "[Reply to unavailable comment]"
    title_max_length: int = 100  # root posts without a title use truncated content

    # Development Configuration
    debug: bool = False

    model_config = ConfigDict(env_file=".env", env_file_encoding="utf-8")


# Global settings instance
settings = Settings()
