# Data models for extracted entities and autolink options

from .entities import (
    CodepointRange,
    ExtractedHashtag,
    ExtractedMention,
    ExtractedReplyTarget,
    ExtractedUrl,
)
from .options import (
    DEFAULT_AUTOLINK_OPTIONS,
    AutolinkOptions,
    build_default_options,
    resolve_autolink_options,
)

__all__ = [
    "CodepointRange",
    "ExtractedMention",
    "ExtractedReplyTarget",
    "ExtractedHashtag",
    "ExtractedUrl",
    "AutolinkOptions",
    "DEFAULT_AUTOLINK_OPTIONS",
    "build_default_options",
    "resolve_autolink_options",
]
