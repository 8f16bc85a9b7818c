"""
Regular-expression grammar for mentions, replies, hashtags and URLs.

Patterns are compiled once at import time and never mutated, so the module
level grammar instance is safe to share between threads.
"""

import re
from typing import Iterator, Optional

from .base import Grammar, GrammarMatch, OffsetUnit


AT_SIGNS = "@＠"
HASH_SIGNS = "#＃"
LATIN_ACCENTS = "À-ÖØ-öø-ÿ"

SCREEN_NAME = r"[a-zA-Z0-9_]{1,20}"
HASHTAG_CHARS = f"0-9A-Za-z_{LATIN_ACCENTS}"
HASHTAG_LETTERS = f"A-Za-z_{LATIN_ACCENTS}"

# ASCII punctuation, the POSIX [:punct:] class
PUNCTUATION = r"!-/:-@\[-`{-~"
DOMAIN_CHAR = rf"[^{PUNCTUATION}\s]"

URL_PATH_CHARS = r"[a-z0-9!*';:=+$/%#\[\]\-_,~]"
URL_PATH_ENDING_CHARS = r"[a-z0-9=#/]"
URL_QUERY_CHARS = r"[a-z0-9!*'();:&=+$/%#\[\]\-_.,~]"
URL_QUERY_ENDING_CHARS = r"[a-z0-9_&=#]"

MENTION_PATTERN = re.compile(
    rf"(^|[^a-zA-Z0-9_])([{AT_SIGNS}])({SCREEN_NAME})(?=([\s\S]{{0,3}}))"
)

REPLY_PATTERN = re.compile(rf"^\s*[{AT_SIGNS}]({SCREEN_NAME})")

# Text following a screen name that makes it part of a longer identifier
END_MENTION_PATTERN = re.compile(rf"^(?:[{AT_SIGNS}{LATIN_ACCENTS}]|://)")

HASHTAG_PATTERN = re.compile(
    rf"(^|[^0-9A-Za-z&/{LATIN_ACCENTS}])"
    rf"([{HASH_SIGNS}])"
    rf"([0-9]*[{HASHTAG_LETTERS}][{HASHTAG_CHARS}]*)"
    rf"()(?![{HASHTAG_CHARS}{HASH_SIGNS}])"
)

VALID_DOMAIN = (
    rf"(?:{DOMAIN_CHAR}[.-](?={DOMAIN_CHAR})|{DOMAIN_CHAR})+"
    r"\.[a-z]{2,}(?::[0-9]+)?"
)

# Wikipedia-style "(disambiguation)" segments and "@user/" segments
URL_PATH_SEGMENT = (
    rf"(?:\({URL_PATH_CHARS}+\)|@{URL_PATH_CHARS}+/|[.,]?{URL_PATH_CHARS})"
)

URL_PATTERN = re.compile(
    r"("  # 1: full match
    r"""(^|[^/"':!=]|:)"""  # 2: preceding character
    r"("  # 3: url
    r"((?:https?://)?)"  # 4: scheme, empty when absent
    rf"({VALID_DOMAIN})"  # 5: domain and optional port
    rf"(/{URL_PATH_SEGMENT}*{URL_PATH_ENDING_CHARS}?)?"  # 6: path
    rf"(\?{URL_QUERY_CHARS}*{URL_QUERY_ENDING_CHARS})?"  # 7: query
    r"))",
    re.IGNORECASE,
)

LIST_SLUG_PATTERN = re.compile(r"(/[a-zA-Z][a-zA-Z0-9_\-]{0,79})")


class RegexGrammar(Grammar):
    """
    Grammar backed by the module level compiled patterns.

    Offsets are Python string indices, i.e. codepoints.
    """

    offset_unit = OffsetUnit.CODEPOINT

    def mentions(self, text: str) -> Iterator[GrammarMatch]:
        for match in MENTION_PATTERN.finditer(text):
            yield GrammarMatch.from_re(match)

    def reply(self, text: str) -> Optional[GrammarMatch]:
        match = REPLY_PATTERN.match(text)
        return GrammarMatch.from_re(match) if match else None

    def hashtags(self, text: str) -> Iterator[GrammarMatch]:
        for match in HASHTAG_PATTERN.finditer(text):
            yield GrammarMatch.from_re(match)

    def urls(self, text: str) -> Iterator[GrammarMatch]:
        for match in URL_PATTERN.finditer(text):
            yield GrammarMatch.from_re(match)

    def is_trailing_identifier(self, trailing: str) -> bool:
        return bool(trailing) and END_MENTION_PATTERN.match(trailing) is not None

    def list_slug(self, text: str, pos: int) -> Optional[GrammarMatch]:
        match = LIST_SLUG_PATTERN.match(text, pos)
        return GrammarMatch.from_re(match) if match else None


# Shared default grammar
DEFAULT_GRAMMAR = RegexGrammar()
