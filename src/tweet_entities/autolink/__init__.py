"""
Markup-safe auto-linking of hashtags, URLs and mentions.

Public API:
    - auto_link: All three passes (hashtags, URLs, mentions)
    - auto_link_hashtags / auto_link_urls_custom / auto_link_usernames
    - Autolinker: Auto-linking over a custom Grammar or defaults record
    - tokenize: Markup-safe tokenizer
    - html_escape / render_tag_attributes / percent_encode

Example usage:
    >>> from tweet_entities.autolink import auto_link_hashtags
    >>>
    >>> auto_link_hashtags("#fun", {"suppress_no_follow": True})
    '<a href="http://twitter.com/search?q=fun" title="fun" class="tweet-url hashtag">#fun</a>'
"""

from .autolinker import (
    DEFAULT_AUTOLINKER,
    HTML_ATTR_NO_FOLLOW,
    Autolinker,
    accept_all,
    auto_link,
    auto_link_hashtags,
    auto_link_urls_custom,
    auto_link_usernames,
)
from .escaping import HTML_ENTITIES, html_escape, percent_encode, render_tag_attributes
from .tokenizer import Run, RunKind, tokenize

__all__ = [
    # Main API
    "auto_link",
    "auto_link_hashtags",
    "auto_link_urls_custom",
    "auto_link_usernames",
    "Autolinker",
    "DEFAULT_AUTOLINKER",
    "accept_all",
    "HTML_ATTR_NO_FOLLOW",
    # Markup helpers
    "tokenize",
    "Run",
    "RunKind",
    "html_escape",
    "render_tag_attributes",
    "percent_encode",
    "HTML_ENTITIES",
]
