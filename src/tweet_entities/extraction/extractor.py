"""
Entity extraction over a pluggable grammar.

Extracts mentions, the reply target, hashtags and URLs from message text and
reports each entity with its codepoint range in that text. Every extraction
method takes an optional callback that is called once per result, in order.
"""

from typing import Any, Callable, List, Optional

from ..grammar import DEFAULT_GRAMMAR, Grammar
from ..logging_config import get_logger
from ..models.entities import (
    CodepointRange,
    ExtractedHashtag,
    ExtractedMention,
    ExtractedReplyTarget,
    ExtractedUrl,
)
from .codepoints import CodepointIndex


logger = get_logger(__name__)

Callback = Callable[[Any], None]


def _notify(results: list, callback: Optional[Callback]) -> list:
    if callback is not None:
        for result in results:
            callback(result)
    return results


class Extractor:
    """
    Runs a grammar over text and builds entity records.

    Every method is a pure function of its text argument. ``None`` or empty text
    gives an empty result. Exceptions raised by a callback propagate.

    Examples:
        >>> extractor = Extractor()
        >>> extractor.extract_mentioned_screen_names("cc @joe and @jane")
        ['joe', 'jane']
    """

    def __init__(self, grammar: Grammar = DEFAULT_GRAMMAR):
        self.grammar = grammar

    def _index(self, text: str) -> CodepointIndex:
        return CodepointIndex(text, self.grammar.offset_unit)

    def extract_mentioned_screen_names(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> List[str]:
        """Screen names mentioned in ``text``, in order, without the sigil."""
        names = [
            mention.screen_name
            for mention in self.extract_mentioned_screen_names_with_indices(text)
        ]
        return _notify(names, callback)

    def extract_mentioned_screen_names_with_indices(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> List[ExtractedMention]:
        """
        Extract mentions with their ranges.

        Candidates whose trailing context marks them as part of a longer
        identifier (``foo@bar.com``, ``@joe@host``) are dropped.

        Args:
            text: Message text
            callback: Called with each ExtractedMention

        Returns:
            ExtractedMention list ordered by position; each range spans the
            sigil and the screen name
        """
        if not text:
            return []

        index = self._index(text)
        mentions = []
        rejected = 0

        for match in self.grammar.mentions(text):
            if self.grammar.is_trailing_identifier(match.group(4) or ""):
                rejected += 1
                continue

            start, end = index.span(match.start(2), match.end(3))
            mentions.append(
                ExtractedMention(
                    screen_name=match.group(3),
                    range=CodepointRange(start=start, end=end),
                )
            )

        logger.debug(
            "mention_extraction_complete",
            mentions_count=len(mentions),
            rejected_count=rejected,
        )

        return _notify(mentions, callback)

    def extract_reply_target(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> Optional[ExtractedReplyTarget]:
        """
        Find the mention the message replies to.

        Args:
            text: Message text
            callback: Called with the ExtractedReplyTarget when there is one

        Returns:
            ExtractedReplyTarget for the mention opening the text (leading
            whitespace allowed), or None when the text is not a reply
        """
        if not text:
            return None

        match = self.grammar.reply(text)
        if match is None:
            return None

        target = ExtractedReplyTarget(screen_name=match.group(1))
        _notify([target], callback)
        return target

    def extract_reply_screen_name(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> Optional[str]:
        """Screen name the message replies to, or None."""
        target = self.extract_reply_target(text)
        if target is None:
            return None
        return _notify([target.screen_name], callback)[0]

    def extract_urls(self, text: Optional[str], callback: Optional[Callback] = None) -> List[str]:
        """URLs with an explicit scheme, in order."""
        return _notify([url.url for url in self.extract_urls_with_indices(text)], callback)

    def extract_urls_with_indices(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> List[ExtractedUrl]:
        """
        Extract URLs with their ranges.

        Only matches carrying a scheme become entities. The range covers the
        URL itself, not the boundary character the grammar consumed before it.

        Args:
            text: Message text
            callback: Called with each ExtractedUrl

        Returns:
            ExtractedUrl list ordered by position
        """
        if not text:
            return []

        index = self._index(text)
        urls = []

        for match in self.grammar.urls(text):
            if not match.group(4):
                continue

            start, end = index.span(match.start(3), match.end(3))
            urls.append(ExtractedUrl(url=match.group(3), range=CodepointRange(start=start, end=end)))

        logger.debug("url_extraction_complete", urls_count=len(urls))

        return _notify(urls, callback)

    def extract_hashtags(self, text: Optional[str], callback: Optional[Callback] = None) -> List[str]:
        """Hashtag texts in order, without the ``#`` marker."""
        tags = [hashtag.text for hashtag in self.extract_hashtags_with_indices(text)]
        return _notify(tags, callback)

    def extract_hashtags_with_indices(
        self, text: Optional[str], callback: Optional[Callback] = None
    ) -> List[ExtractedHashtag]:
        """
        Extract hashtags with their ranges.

        Args:
            text: Message text
            callback: Called with each ExtractedHashtag

        Returns:
            ExtractedHashtag list ordered by position; each range starts at the
            marker and ends at the end of the trailing boundary capture
        """
        if not text:
            return []

        index = self._index(text)
        tags = []

        for match in self.grammar.hashtags(text):
            start, end = index.span(match.start(2), match.end(4))
            tags.append(
                ExtractedHashtag(text=match.group(3), range=CodepointRange(start=start, end=end))
            )

        logger.debug("hashtag_extraction_complete", hashtags_count=len(tags))

        return _notify(tags, callback)


# Shared extractor over the default grammar
DEFAULT_EXTRACTOR = Extractor()

extract_mentioned_screen_names = DEFAULT_EXTRACTOR.extract_mentioned_screen_names
extract_mentioned_screen_names_with_indices = (
    DEFAULT_EXTRACTOR.extract_mentioned_screen_names_with_indices
)
extract_reply_target = DEFAULT_EXTRACTOR.extract_reply_target
extract_reply_screen_name = DEFAULT_EXTRACTOR.extract_reply_screen_name
extract_urls = DEFAULT_EXTRACTOR.extract_urls
extract_urls_with_indices = DEFAULT_EXTRACTOR.extract_urls_with_indices
extract_hashtags = DEFAULT_EXTRACTOR.extract_hashtags
extract_hashtags_with_indices = DEFAULT_EXTRACTOR.extract_hashtags_with_indices
