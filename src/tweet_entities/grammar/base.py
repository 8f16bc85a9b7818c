"""
Grammar interface for entity matching.

A grammar supplies the five matchers the extractor and the autolinker need.
The matching technology is up to the implementation; only the capture layout
of each matcher is fixed:

    mentions(text)   1 leading boundary, 2 sigil, 3 screen name, 4 trailing context
    reply(text)      1 screen name
    hashtags(text)   1 leading boundary, 2 marker, 3 tag text, 4 trailing boundary
    urls(text)       1 full match, 2 leading boundary, 3 url, 4 scheme (may be
                     empty), 5 domain, 6 path, 7 query
    is_trailing_identifier(trailing)

Offsets are reported in the grammar's ``offset_unit``.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class OffsetUnit(str, Enum):
    """Unit a grammar reports capture offsets in."""

    CODEPOINT = "codepoint"
    UTF8 = "utf-8"  # Byte offsets into the UTF-8 encoding
    UTF16 = "utf-16"  # Code-unit offsets into the UTF-16 encoding


@dataclass(frozen=True)
class GrammarMatch:
    """
    One match produced by a grammar matcher.

    Index 0 is the whole match; unmatched captures have a ``None`` group and a
    ``(-1, -1)`` span, as with ``re``.

    Attributes:
        groups: Captured strings, index 0 being the whole match
        spans: (start, end) offsets of each capture in the grammar's unit
    """

    groups: Tuple[Optional[str], ...]
    spans: Tuple[Tuple[int, int], ...]

    @classmethod
    def from_re(cls, match: "re.Match[str]") -> "GrammarMatch":
        """Wrap an ``re`` match object."""
        count = len(match.groups()) + 1
        return cls(
            groups=tuple(match.group(i) for i in range(count)),
            spans=tuple(match.span(i) for i in range(count)),
        )

    def group(self, index: int = 0) -> Optional[str]:
        return self.groups[index]

    def start(self, index: int = 0) -> int:
        return self.spans[index][0]

    def end(self, index: int = 0) -> int:
        return self.spans[index][1]


class Grammar(ABC):
    """
    Abstract base class for entity grammars.

    Implementations must be immutable once built so a single instance can be
    shared by every caller and thread.
    """

    offset_unit: OffsetUnit = OffsetUnit.CODEPOINT

    @abstractmethod
    def mentions(self, text: str) -> Iterator[GrammarMatch]:
        """Yield every mention candidate in order of occurrence."""

    @abstractmethod
    def reply(self, text: str) -> Optional[GrammarMatch]:
        """Return the mention anchored at the start of ``text``, if any."""

    @abstractmethod
    def hashtags(self, text: str) -> Iterator[GrammarMatch]:
        """Yield every hashtag in order of occurrence."""

    @abstractmethod
    def urls(self, text: str) -> Iterator[GrammarMatch]:
        """Yield every URL-shaped match, with or without a scheme."""

    @abstractmethod
    def is_trailing_identifier(self, trailing: str) -> bool:
        """
        Check a mention's trailing context.

        Args:
            trailing: The few characters following the screen name

        Returns:
            True if the mention is really part of a longer identifier
            (an email address, a longer accented name, a URL scheme)
        """

    def list_slug(self, text: str, pos: int) -> Optional[GrammarMatch]:
        """
        Match a ``/slug`` list suffix starting exactly at ``pos``.

        Capture 1 is the slug including its leading slash. Grammars without
        list support keep this default and never produce list links.
        """
        return None
