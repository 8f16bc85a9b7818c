"""
Markup-safe tokenizer.

Splits text into runs of plain text and tag markup so rewriting passes only
ever touch plain text. A depth counter tracks ``<`` and ``>``: the first ``<``
opens a tag run, the ``>`` bringing the depth back to zero closes it. A ``>``
outside any tag is plain text and an unterminated ``<`` makes the rest of the
text a tag run.

Text between an ``<a ...>`` tag and its ``</a>`` is already link text and is
never eligible for linking.

Limitation: this is a heuristic for simple, well-formed tags. A ``>`` inside a
quoted attribute value ends the tag early, and malformed or deeply nested
markup is not repaired.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import List


class RunKind(str, Enum):
    """Classification of a tokenizer run."""

    TEXT = "text"  # Plain text, eligible for linking
    TAG = "tag"  # Tag markup, copied verbatim
    LINK_TEXT = "link_text"  # Plain text inside an existing anchor


@dataclass(frozen=True)
class Run:
    """A contiguous slice of the tokenized text."""

    kind: RunKind
    text: str

    @property
    def eligible(self) -> bool:
        return self.kind is RunKind.TEXT


_DELIMITER_PATTERN = re.compile(r"[<>]")
_ANCHOR_OPEN_PATTERN = re.compile(r"<a[\s>]", re.IGNORECASE)
_ANCHOR_CLOSE_PATTERN = re.compile(r"</a\s*>", re.IGNORECASE)


def tokenize(text: str) -> List[Run]:
    """
    Partition text into text, tag and link-text runs.

    Joining the text of the returned runs gives back the input unchanged.

    Args:
        text: Text that may contain markup

    Returns:
        Runs in order of occurrence; empty runs are omitted

    Examples:
        >>> [(run.kind.value, run.text) for run in tokenize("hi <b>@joe</b>")]
        [('text', 'hi '), ('tag', '<b>'), ('text', '@joe'), ('tag', '</b>')]
    """
    if not text:
        return []

    runs: List[Run] = []
    depth = 0
    anchor_depth = 0
    run_start = 0

    for delimiter in _DELIMITER_PATTERN.finditer(text):
        pos = delimiter.start()

        if delimiter.group(0) == "<":
            if depth == 0:
                _append_text(runs, text[run_start:pos], anchor_depth)
                run_start = pos
            depth += 1
        elif depth > 0:
            depth -= 1
            if depth == 0:
                tag = text[run_start : pos + 1]
                runs.append(Run(RunKind.TAG, tag))
                anchor_depth = _track_anchor(tag, anchor_depth)
                run_start = pos + 1

    tail = text[run_start:]
    if depth > 0:
        runs.append(Run(RunKind.TAG, tail))
    else:
        _append_text(runs, tail, anchor_depth)

    return runs


def _append_text(runs: List[Run], chunk: str, anchor_depth: int) -> None:
    if chunk:
        runs.append(Run(RunKind.LINK_TEXT if anchor_depth else RunKind.TEXT, chunk))


def _track_anchor(tag: str, anchor_depth: int) -> int:
    if _ANCHOR_OPEN_PATTERN.match(tag):
        return anchor_depth + 1
    if anchor_depth and _ANCHOR_CLOSE_PATTERN.match(tag):
        return anchor_depth - 1
    return anchor_depth
