"""
Offset translation from grammar units to Unicode codepoints.

A grammar may report match offsets as codepoints, UTF-8 bytes or UTF-16 code
units. Entity ranges are always codepoints of the scanned string, so every
offset goes through a CodepointIndex built for that string.
"""

from bisect import bisect_right
from typing import List, Optional, Union

from ..grammar.base import OffsetUnit


def unit_width(char: str, unit: OffsetUnit) -> int:
    """
    Number of offset units one codepoint occupies.

    Args:
        char: A single character
        unit: Unit to measure in

    Returns:
        1 for codepoints, 1-4 for UTF-8 bytes, 1-2 for UTF-16 code units
    """
    if unit is OffsetUnit.UTF8:
        return len(char.encode("utf-8", "surrogatepass"))
    if unit is OffsetUnit.UTF16:
        return 2 if ord(char) > 0xFFFF else 1
    return 1


class CodepointIndex:
    """
    Translate offsets over one string into codepoint offsets.

    The table of unit offsets is built on first use and kept on the instance;
    create one instance per call and let it go with the call.

    Examples:
        >>> index = CodepointIndex("😀 @bob", OffsetUnit.UTF16)
        >>> index.to_codepoint(3)
        2
    """

    def __init__(self, text: str, unit: Union[OffsetUnit, str] = OffsetUnit.CODEPOINT):
        self.text = text
        self.unit = OffsetUnit(unit)
        self._starts: Optional[List[int]] = None

    def __len__(self) -> int:
        return len(self.text)

    def _unit_starts(self) -> List[int]:
        # starts[i] is the unit offset of codepoint i; the last entry is the total
        if self._starts is None:
            starts = [0]
            total = 0
            for char in self.text:
                total += unit_width(char, self.unit)
                starts.append(total)
            self._starts = starts
        return self._starts

    def to_codepoint(self, offset: int) -> int:
        """
        Convert a unit offset to a codepoint offset.

        Offsets inside a multi-unit character map to the start of that
        character. Negative offsets clamp to 0 and offsets past the end clamp
        to the codepoint length.

        Args:
            offset: Offset in this index's unit

        Returns:
            Codepoint offset within ``[0, len(text)]``
        """
        if offset <= 0:
            return 0
        if self.unit is OffsetUnit.CODEPOINT:
            return min(offset, len(self))
        return min(bisect_right(self._unit_starts(), offset) - 1, len(self))

    def span(self, start: int, end: int) -> tuple:
        """Convert a (start, end) unit span to codepoints."""
        return (self.to_codepoint(start), self.to_codepoint(end))
