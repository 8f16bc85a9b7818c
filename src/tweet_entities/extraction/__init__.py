"""
Entity extraction for short messages.

Public API:
    - extract_mentioned_screen_names / extract_mentioned_screen_names_with_indices
    - extract_reply_target / extract_reply_screen_name
    - extract_urls / extract_urls_with_indices
    - extract_hashtags / extract_hashtags_with_indices
    - Extractor: Extraction over a custom Grammar
    - CodepointIndex: Offset translation to codepoints

Example usage:
    >>> from tweet_entities.extraction import extract_mentioned_screen_names_with_indices
    >>>
    >>> for mention in extract_mentioned_screen_names_with_indices("😀 @bob"):
    ...     print(mention.screen_name, mention.indices)
    bob (2, 6)
"""

from .codepoints import CodepointIndex, unit_width
from .extractor import (
    DEFAULT_EXTRACTOR,
    Extractor,
    extract_hashtags,
    extract_hashtags_with_indices,
    extract_mentioned_screen_names,
    extract_mentioned_screen_names_with_indices,
    extract_reply_screen_name,
    extract_reply_target,
    extract_urls,
    extract_urls_with_indices,
)

__all__ = [
    # Main API
    "extract_mentioned_screen_names",
    "extract_mentioned_screen_names_with_indices",
    "extract_reply_target",
    "extract_reply_screen_name",
    "extract_urls",
    "extract_urls_with_indices",
    "extract_hashtags",
    "extract_hashtags_with_indices",
    # Components
    "Extractor",
    "DEFAULT_EXTRACTOR",
    "CodepointIndex",
    "unit_width",
]
