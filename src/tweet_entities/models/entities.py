"""
Data models for extracted message entities.

Every entity is an immutable value computed from one input string. Ranges are
0-based, end-exclusive and counted in Unicode codepoints of that string.
"""

from typing import Tuple

from pydantic import BaseModel, Field, model_validator


class CodepointRange(BaseModel):
    """Half-open span of codepoints in the scanned text."""

    start: int = Field(description="Codepoint offset of the first character", ge=0)
    end: int = Field(description="Codepoint offset just past the last character", ge=0)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_order(self) -> "CodepointRange":
        if self.end < self.start:
            raise ValueError(f"range end {self.end} precedes start {self.start}")
        return self

    @property
    def indices(self) -> Tuple[int, int]:
        """(start, end) pair."""
        return (self.start, self.end)


class ExtractedMention(BaseModel):
    """An @-mention. The range covers the sigil and the screen name."""

    screen_name: str = Field(description="Screen name without the leading sigil")
    range: CodepointRange

    model_config = {"frozen": True}

    @property
    def indices(self) -> Tuple[int, int]:
        return self.range.indices


class ExtractedReplyTarget(BaseModel):
    """The mention opening a message, marking it as a reply."""

    screen_name: str = Field(description="Screen name being replied to")

    model_config = {"frozen": True}


class ExtractedHashtag(BaseModel):
    """A #-hashtag. The range covers the marker, the tag text and its trailing boundary."""

    text: str = Field(description="Tag text without the leading marker")
    range: CodepointRange

    model_config = {"frozen": True}

    @property
    def indices(self) -> Tuple[int, int]:
        return self.range.indices


class ExtractedUrl(BaseModel):
    """A URL carrying an explicit scheme."""

    url: str = Field(description="URL exactly as written, scheme included")
    range: CodepointRange

    model_config = {"frozen": True}

    @property
    def indices(self) -> Tuple[int, int]:
        return self.range.indices
