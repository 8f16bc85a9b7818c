"""
HTML escaping, attribute rendering and query-string encoding for generated links.
"""

import re
from typing import Any, Mapping, Optional
from urllib.parse import quote_plus


HTML_ENTITIES = {
    "&": "&amp;",
    ">": "&gt;",
    "<": "&lt;",
    '"': "&quot;",
    "'": "&#39;",
}

_HTML_ESCAPE_PATTERN = re.compile(r"[&\"'><]")

# Attributes rendered as name="name" when truthy and dropped otherwise
BOOLEAN_ATTRIBUTES = frozenset(
    [
        "allowfullscreen",
        "async",
        "autofocus",
        "autoplay",
        "checked",
        "controls",
        "default",
        "defer",
        "disabled",
        "formnovalidate",
        "hidden",
        "inert",
        "ismap",
        "itemscope",
        "loop",
        "multiple",
        "muted",
        "novalidate",
        "open",
        "readonly",
        "required",
        "reversed",
        "selected",
    ]
)


def html_escape(text: Optional[str]) -> str:
    """
    Escape the five HTML special characters.

    Args:
        text: Text to escape (None gives an empty string)

    Returns:
        Text with ``& > < " '`` replaced by entities

    Examples:
        >>> html_escape('<b>"Tom" & \\'Jerry\\'</b>')
        '&lt;b&gt;&quot;Tom&quot; &amp; &#39;Jerry&#39;&lt;/b&gt;'
    """
    if not text:
        return ""
    return _HTML_ESCAPE_PATTERN.sub(lambda m: HTML_ENTITIES[m.group(0)], text)


def render_tag_attributes(attributes: Optional[Mapping[str, Any]]) -> str:
    """
    Render a mapping as an HTML attribute string.

    Attributes are sorted by their rendered text so output is deterministic.
    ``None`` values are skipped, list values are joined with spaces and every
    value is HTML-escaped.

    Args:
        attributes: Attribute name to value mapping

    Returns:
        String starting with a space (``' class="x" rel="nofollow"'``), or an
        empty string when nothing is rendered
    """
    if not attributes:
        return ""

    rendered = []
    for key, value in attributes.items():
        name = str(key)
        if value is None:
            continue

        if name in BOOLEAN_ATTRIBUTES:
            if value:
                rendered.append(f'{name}="{name}"')
            continue

        if isinstance(value, bool):
            value = str(value).lower()
        elif isinstance(value, (list, tuple)):
            value = " ".join(str(item) for item in value)

        rendered.append(f'{name}="{html_escape(str(value))}"')

    if not rendered:
        return ""
    return " " + " ".join(sorted(rendered))


def percent_encode(text: str) -> str:
    """
    Encode text for a URL query string.

    Spaces become ``+``; everything outside ``A-Z a-z 0-9 _ . - ~`` is
    percent-encoded as UTF-8.

    Examples:
        >>> percent_encode("café au lait")
        'caf%C3%A9+au+lait'
    """
    return quote_plus(text, safe="")
