"""
Library configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Library configuration from environment variables.

    Every setting can be overridden with an environment variable named after the
    field and prefixed with ``TWEET_ENTITIES_`` (e.g. ``TWEET_ENTITIES_LOG_LEVEL``).
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Link targets used to build the autolink defaults record
    username_url_base: str = "http://twitter.com/"
    hashtag_url_base: str = "http://twitter.com/search?q="
    list_url_base: Optional[str] = None  # List linking stays off until a base is set

    model_config = {
        "env_prefix": "TWEET_ENTITIES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
