"""
Auto-linking of hashtags, URLs and mentions.

Each pass tokenizes the current text and rewrites matches found in plain text
runs only, so markup already present, including anchors created by an earlier
pass, is copied through untouched. ``auto_link`` runs the passes in the order
hashtags, URLs, mentions.
"""

from typing import Any, Callable, Iterator, List, Mapping, Optional, Tuple, Union

from ..extraction.codepoints import CodepointIndex
from ..grammar import DEFAULT_GRAMMAR, Grammar, GrammarMatch
from ..logging_config import get_logger
from ..models.options import (
    DEFAULT_AUTOLINK_OPTIONS,
    AutolinkOptions,
    resolve_autolink_options,
)
from .escaping import html_escape, percent_encode, render_tag_attributes
from .tokenizer import tokenize


logger = get_logger(__name__)

# HTML attribute for robot nofollow behavior
HTML_ATTR_NO_FOLLOW = ' rel="nofollow"'

OptionsArg = Union[AutolinkOptions, Mapping[str, Any], None]
Validator = Callable[[str], Tuple[bool, str]]
HashtagTransform = Callable[[str], str]

# Builds the replacement for one match, or returns None to keep the original text
_Renderer = Callable[[GrammarMatch, str, CodepointIndex], Optional[Tuple[int, str]]]


def accept_all(screen_name: str) -> Tuple[bool, str]:
    """Default validator: every screen name is valid and titled with itself."""
    return True, screen_name


def _target_attribute(options: AutolinkOptions) -> str:
    if not options.target:
        return ""
    return f'target="{html_escape(options.target)}" '


def _no_follow_attribute(options: AutolinkOptions) -> str:
    return "" if options.suppress_no_follow else HTML_ATTR_NO_FOLLOW


class Autolinker:
    """
    Wraps entities in anchor markup.

    Args:
        grammar: Grammar used to find entities
        defaults: Options record filling whatever a call leaves unset

    Examples:
        >>> Autolinker().auto_link_usernames("hi @joe")
        'hi @<a title="joe" class="tweet-url username" href="http://twitter.com/joe" rel="nofollow">joe</a>'
    """

    def __init__(
        self,
        grammar: Grammar = DEFAULT_GRAMMAR,
        defaults: AutolinkOptions = DEFAULT_AUTOLINK_OPTIONS,
    ):
        self.grammar = grammar
        self.defaults = defaults

    def auto_link(
        self,
        text: Optional[str],
        options: OptionsArg = None,
        href_options: Optional[Mapping[str, Any]] = None,
        validator: Optional[Validator] = None,
    ) -> str:
        """
        Link hashtags, then URLs, then mentions.

        Each pass consumes the previous pass's output; anchors produced earlier
        are opaque to the later passes.

        Args:
            text: Message text
            options: Autolink options for the hashtag and mention passes
            href_options: Extra anchor attributes for the URL pass
            validator: Screen name validator for the mention pass

        Returns:
            Text with every entity wrapped in an anchor
        """
        linked = self.auto_link_hashtags(text, options)
        linked = self.auto_link_urls_custom(linked, href_options)
        return self.auto_link_usernames(linked, options, validator)

    def auto_link_usernames(
        self,
        text: Optional[str],
        options: OptionsArg = None,
        validator: Optional[Validator] = None,
    ) -> str:
        """
        Link @-mentions (and ``@user/list`` references when lists are enabled).

        ``validator(screen_name)`` returns ``(is_valid, title)``. Invalid names
        are left as they were written; validator exceptions propagate.

        Args:
            text: Message text
            options: Autolink options
            validator: Screen name validator, defaults to accepting every name

        Returns:
            Text with valid mentions linked
        """
        resolved = resolve_autolink_options(options, self.defaults)
        validate = validator or accept_all
        extra_html = _no_follow_attribute(resolved)
        target = _target_attribute(resolved)
        url_class = html_escape(resolved.url_class)
        stats = {"linked": 0, "skipped": 0}

        def render(match: GrammarMatch, chunk: str, index: CodepointIndex):
            if self.grammar.is_trailing_identifier(match.group(4) or ""):
                stats["skipped"] += 1
                return None

            before, sigil, screen_name = match.group(1), match.group(2), match.group(3)
            end = index.to_codepoint(match.end(3))

            slug = None
            if resolved.links_lists:
                slug_match = self.grammar.list_slug(chunk, match.end(3))
                if slug_match is not None:
                    slug = slug_match.group(1)
                    end = index.to_codepoint(slug_match.end(1))

            is_valid, title = validate(screen_name)
            if not is_valid:
                stats["skipped"] += 1
                logger.debug("mention_link_rejected", screen_name=screen_name)
                return None

            stats["linked"] += 1
            if slug is not None:
                name = html_escape(screen_name + slug)
                return end, (
                    f'{before}{sigil}<a class="{url_class} {html_escape(resolved.list_class)}" '
                    f'{target}href="{html_escape(resolved.list_url_base)}{name}"{extra_html}>'
                    f"{name}</a>"
                )

            name = html_escape(screen_name)
            return end, (
                f'{before}{sigil}<a title="{html_escape(title)}" '
                f'class="{url_class} {html_escape(resolved.username_class)}" '
                f'{target}href="{html_escape(resolved.username_url_base)}{name}"{extra_html}>'
                f"{name}</a>"
            )

        linked = self._rewrite(text, self.grammar.mentions, render)
        logger.debug("usernames_autolinked", **stats)
        return linked

    def auto_link_hashtags(
        self,
        text: Optional[str],
        options: OptionsArg = None,
        transform: Optional[HashtagTransform] = None,
    ) -> str:
        """
        Link #-hashtags to the hashtag search URL.

        Args:
            text: Message text
            options: Autolink options
            transform: Optional hook rewriting the tag text before it is linked

        Returns:
            Text with hashtags linked
        """
        resolved = resolve_autolink_options(options, self.defaults)
        extra_html = _no_follow_attribute(resolved)
        target = _target_attribute(resolved)
        css_class = f"{html_escape(resolved.url_class)} {html_escape(resolved.hashtag_class)}"
        url_base = html_escape(resolved.hashtag_url_base)
        stats = {"linked": 0}

        def render(match: GrammarMatch, chunk: str, index: CodepointIndex):
            before, marker, tag, boundary = (
                match.group(1),
                match.group(2),
                match.group(3),
                match.group(4) or "",
            )
            if transform is not None:
                tag = transform(tag)

            stats["linked"] += 1
            return index.to_codepoint(match.end(0)), (
                f'{before}<a href="{url_base}{percent_encode(tag)}" title="{html_escape(tag)}" '
                f'{target}class="{css_class}"{extra_html}>'
                f"{html_escape(marker)}{html_escape(tag)}{html_escape(boundary)}</a>"
            )

        linked = self._rewrite(text, self.grammar.hashtags, render)
        logger.debug("hashtags_autolinked", **stats)
        return linked

    def auto_link_urls_custom(
        self, text: Optional[str], href_options: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Link URLs that carry a scheme.

        Every entry of ``href_options`` becomes an anchor attribute.
        ``rel="nofollow"`` is added unless ``href_options`` holds a truthy
        ``suppress_no_follow``, which is never rendered itself.

        Args:
            text: Message text
            href_options: Extra anchor attributes

        Returns:
            Text with URLs linked; schemeless matches are left as written
        """
        attributes = dict(href_options or {})
        if not attributes.pop("suppress_no_follow", False):
            attributes["rel"] = "nofollow"
        html_attrs = render_tag_attributes(attributes)
        stats = {"linked": 0, "skipped": 0}

        def render(match: GrammarMatch, chunk: str, index: CodepointIndex):
            if not match.group(4):
                stats["skipped"] += 1
                return None

            url = html_escape(match.group(3))
            stats["linked"] += 1
            return index.to_codepoint(match.end(0)), (
                f'{match.group(2)}<a href="{url}"{html_attrs}>{url}</a>'
            )

        linked = self._rewrite(text, self.grammar.urls, render)
        logger.debug("urls_autolinked", **stats)
        return linked

    def _rewrite(
        self,
        text: Optional[str],
        find: Callable[[str], Iterator[GrammarMatch]],
        render: _Renderer,
    ) -> str:
        if not text:
            return ""

        parts: List[str] = []
        for run in tokenize(text):
            if run.eligible:
                parts.append(self._rewrite_chunk(run.text, find, render))
            else:
                parts.append(run.text)
        return "".join(parts)

    def _rewrite_chunk(
        self,
        chunk: str,
        find: Callable[[str], Iterator[GrammarMatch]],
        render: _Renderer,
    ) -> str:
        index = CodepointIndex(chunk, self.grammar.offset_unit)
        parts: List[str] = []
        last = 0

        for match in find(chunk):
            start = index.to_codepoint(match.start(0))
            if start < last:
                # Overlaps a span already consumed by a list slug
                continue

            rendered = render(match, chunk, index)
            if rendered is None:
                continue

            end, replacement = rendered
            parts.append(chunk[last:start])
            parts.append(replacement)
            last = end

        parts.append(chunk[last:])
        return "".join(parts)


# Shared autolinker over the default grammar and defaults record
DEFAULT_AUTOLINKER = Autolinker()

auto_link = DEFAULT_AUTOLINKER.auto_link
auto_link_usernames = DEFAULT_AUTOLINKER.auto_link_usernames
auto_link_hashtags = DEFAULT_AUTOLINKER.auto_link_hashtags
auto_link_urls_custom = DEFAULT_AUTOLINKER.auto_link_urls_custom
