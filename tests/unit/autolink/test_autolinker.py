"""
Unit tests for the autolinker (autolinker.py).

Tests cover:
- Hashtag, URL and username passes
- Options resolution (classes, target, nofollow, lists)
- Validator and transform hooks
- Markup safety and pass ordering
- Idempotence and round-trip of non-entity text
"""

import re

import pytest

from tweet_entities.autolink import (
    Autolinker,
    accept_all,
    auto_link,
    auto_link_hashtags,
    auto_link_urls_custom,
    auto_link_usernames,
)
from tweet_entities.grammar import Grammar, GrammarMatch, OffsetUnit, RegexGrammar
from tweet_entities.models import AutolinkOptions


HASHTAG_FUN = (
    '<a href="http://twitter.com/search?q=fun" title="fun" '
    'class="tweet-url hashtag" rel="nofollow">#fun</a>'
)
USERNAME_JOE = (
    '@<a title="joe" class="tweet-url username" '
    'href="http://twitter.com/joe" rel="nofollow">joe</a>'
)
URL_EXAMPLE = '<a href="http://example.com" rel="nofollow">http://example.com</a>'

ANCHOR_PATTERN = re.compile(r"</?a\b[^>]*>")


def strip_anchors(html):
    return ANCHOR_PATTERN.sub("", html)


class Utf16Grammar(Grammar):
    """RegexGrammar reporting offsets as UTF-16 code units."""

    offset_unit = OffsetUnit.UTF16

    def __init__(self):
        self.inner = RegexGrammar()

    @staticmethod
    def _convert(text, match):
        def to_units(offset):
            return -1 if offset < 0 else len(text[:offset].encode("utf-16-le")) // 2

        return GrammarMatch(
            groups=match.groups,
            spans=tuple((to_units(start), to_units(end)) for start, end in match.spans),
        )

    def mentions(self, text):
        return (self._convert(text, m) for m in self.inner.mentions(text))

    def reply(self, text):
        match = self.inner.reply(text)
        return self._convert(text, match) if match else None

    def hashtags(self, text):
        return (self._convert(text, m) for m in self.inner.hashtags(text))

    def urls(self, text):
        return (self._convert(text, m) for m in self.inner.urls(text))

    def is_trailing_identifier(self, trailing):
        return self.inner.is_trailing_identifier(trailing)


class TestAutoLinkHashtags:
    """Tests for auto_link_hashtags()."""

    @pytest.mark.unit
    def test_default_options(self):
        """Test the default hashtag anchor."""
        assert auto_link_hashtags("#fun", {}) == HASHTAG_FUN

    @pytest.mark.unit
    def test_href_classes_and_nofollow(self):
        """Test href, both default classes and rel=nofollow."""
        html = auto_link_hashtags("#fun")

        assert re.search(r'href="[^"]*fun"', html)
        assert 'class="tweet-url hashtag"' in html
        assert 'rel="nofollow"' in html

    @pytest.mark.unit
    def test_suppress_no_follow(self):
        """Test suppress_no_follow removes the rel attribute."""
        html = auto_link_hashtags("#fun", {"suppress_no_follow": True})

        assert "nofollow" not in html
        assert html == HASHTAG_FUN.replace(' rel="nofollow"', "")

    @pytest.mark.unit
    def test_target(self):
        """Test a target attribute is added only when set."""
        html = auto_link_hashtags("#fun", {"target": "_blank"})

        assert 'title="fun" target="_blank" class="tweet-url hashtag"' in html
        assert "target=" not in auto_link_hashtags("#fun")

    @pytest.mark.unit
    def test_custom_classes_and_base(self):
        """Test custom classes and URL base."""
        options = AutolinkOptions(
            url_class="link", hashtag_class="tag", hashtag_url_base="/tags?q="
        )
        html = auto_link_hashtags("x #fun", options)

        assert html == (
            'x <a href="/tags?q=fun" title="fun" class="link tag" rel="nofollow">#fun</a>'
        )

    @pytest.mark.unit
    def test_tag_text_is_percent_encoded(self):
        """Test non-ASCII tag text is encoded in the href only."""
        html = auto_link_hashtags("#café")

        assert 'href="http://twitter.com/search?q=caf%C3%A9"' in html
        assert 'title="café"' in html
        assert ">#café</a>" in html

    @pytest.mark.unit
    def test_full_width_marker_preserved(self):
        """Test the visible text reproduces the original marker."""
        assert ">＃fun</a>" in auto_link_hashtags("＃fun")

    @pytest.mark.unit
    def test_transform_hook(self):
        """Test the transform hook rewrites the tag before linking."""
        html = auto_link_hashtags("#fun", transform=str.upper)

        assert 'href="http://twitter.com/search?q=FUN"' in html
        assert ">#FUN</a>" in html

    @pytest.mark.unit
    def test_skips_tag_interiors(self):
        """Test hashtags inside tag markup are not linked."""
        text = '<img alt="#fun"> #games'
        html = auto_link_hashtags(text)

        assert html.startswith('<img alt="#fun"> <a href="http://twitter.com/search?q=games"')

    @pytest.mark.unit
    def test_caller_options_not_mutated(self):
        """Test the options mapping is left untouched."""
        options = {"target": "_blank"}
        auto_link_hashtags("#fun", options)

        assert options == {"target": "_blank"}

    @pytest.mark.unit
    def test_empty_and_none(self):
        """Test empty and None text."""
        assert auto_link_hashtags("") == ""
        assert auto_link_hashtags(None) == ""


class TestAutoLinkUrlsCustom:
    """Tests for auto_link_urls_custom()."""

    @pytest.mark.unit
    def test_default(self):
        """Test a URL is linked with rel=nofollow."""
        assert auto_link_urls_custom("visit http://example.com now") == (
            f"visit {URL_EXAMPLE} now"
        )

    @pytest.mark.unit
    def test_href_options_rendered(self):
        """Test href options become sorted attributes."""
        html = auto_link_urls_custom("http://example.com", {"class": "ext", "target": "_blank"})

        assert html == (
            '<a href="http://example.com" class="ext" rel="nofollow" target="_blank">'
            "http://example.com</a>"
        )

    @pytest.mark.unit
    def test_suppress_no_follow(self):
        """Test suppress_no_follow drops rel and is not rendered itself."""
        html = auto_link_urls_custom("http://example.com", {"suppress_no_follow": True})

        assert html == '<a href="http://example.com">http://example.com</a>'

    @pytest.mark.unit
    def test_href_options_not_mutated(self):
        """Test the caller's href options are left untouched."""
        href_options = {"suppress_no_follow": True, "class": "ext"}
        auto_link_urls_custom("http://example.com", href_options)

        assert href_options == {"suppress_no_follow": True, "class": "ext"}

    @pytest.mark.unit
    def test_schemeless_left_alone(self):
        """Test URLs without a scheme are re-emitted as written."""
        assert auto_link_urls_custom("visit example.com now") == "visit example.com now"

    @pytest.mark.unit
    def test_url_escaped(self):
        """Test ampersands are escaped in the href and the link text."""
        html = auto_link_urls_custom("http://example.com/?a=1&b=2")

        assert 'href="http://example.com/?a=1&amp;b=2"' in html
        assert ">http://example.com/?a=1&amp;b=2</a>" in html

    @pytest.mark.unit
    def test_existing_anchor_untouched(self):
        """Test URLs in existing anchors are not linked again."""
        text = '<a href="http://example.com">http://example.com</a>'

        assert auto_link_urls_custom(text) == text


class TestAutoLinkUsernames:
    """Tests for auto_link_usernames()."""

    @pytest.mark.unit
    def test_default(self):
        """Test a mention is linked after its sigil."""
        assert auto_link_usernames("hi @joe") == f"hi {USERNAME_JOE}"

    @pytest.mark.unit
    def test_multiple(self):
        """Test several mentions are linked."""
        html = auto_link_usernames("cc @joe and @jane")

        assert html.count('class="tweet-url username"') == 2
        assert 'href="http://twitter.com/jane"' in html

    @pytest.mark.unit
    def test_email_not_linked(self):
        """Test email addresses and guarded mentions stay text."""
        for text in ["mail user@example.com", "@joe@example.com", "hola @josé"]:
            assert auto_link_usernames(text) == text

    @pytest.mark.unit
    def test_validator_rejects(self):
        """Test an invalid screen name is left as written."""
        html = auto_link_usernames("hi @joe and @jane", validator=lambda name: (name == "jane", name))

        assert html.startswith("hi @joe and @<a ")
        assert 'href="http://twitter.com/jane"' in html

    @pytest.mark.unit
    def test_validator_title(self):
        """Test the validator title is escaped into the title attribute."""
        html = auto_link_usernames("@joe", validator=lambda name: (True, 'Joe "J" Smith'))

        assert 'title="Joe &quot;J&quot; Smith"' in html
        assert ">joe</a>" in html

    @pytest.mark.unit
    def test_validator_called_per_candidate(self):
        """Test the validator sees each candidate screen name."""
        seen = []

        def validator(name):
            seen.append(name)
            return accept_all(name)

        auto_link_usernames("@a @b user@c.com @d", validator=validator)

        assert seen == ["a", "b", "d"]

    @pytest.mark.unit
    def test_validator_errors_propagate(self):
        """Test validator exceptions are not swallowed."""

        def validator(name):
            raise LookupError(name)

        with pytest.raises(LookupError):
            auto_link_usernames("@joe", validator=validator)

    @pytest.mark.unit
    def test_options(self):
        """Test classes, base URL, target and nofollow options."""
        html = auto_link_usernames(
            "@joe",
            {
                "url_class": "u",
                "username_class": "name",
                "username_url_base": "https://example.com/users/",
                "target": "_top",
                "suppress_no_follow": True,
            },
        )

        assert html == (
            '@<a title="joe" class="u name" target="_top" '
            'href="https://example.com/users/joe">joe</a>'
        )

    @pytest.mark.unit
    def test_list_linking(self):
        """Test @user/list becomes a list link when a list base is set."""
        html = auto_link_usernames("see @joe/friends now", {"list_url_base": "http://twitter.com/"})

        assert html == (
            'see @<a class="tweet-url list-slug" href="http://twitter.com/joe/friends" '
            'rel="nofollow">joe/friends</a> now'
        )

    @pytest.mark.unit
    def test_lists_off_by_default(self):
        """Test lists are not linked without a list base."""
        assert auto_link_usernames("@joe/friends") == f"{USERNAME_JOE}/friends"

    @pytest.mark.unit
    def test_suppress_lists(self):
        """Test suppress_lists links only the screen name."""
        html = auto_link_usernames(
            "@joe/friends", {"list_url_base": "http://twitter.com/", "suppress_lists": True}
        )

        assert html == f"{USERNAME_JOE}/friends"

    @pytest.mark.unit
    def test_mention_inside_markup(self):
        """Test mentions in text nodes are linked but not in tags or anchors."""
        text = '<b>@joe</b> <a href="/x" title="@jane">@jane</a>'
        html = auto_link_usernames(text)

        assert html == f'<b>{USERNAME_JOE}</b> <a href="/x" title="@jane">@jane</a>'

    @pytest.mark.unit
    def test_utf16_grammar(self):
        """Test a grammar reporting UTF-16 offsets links the same spans."""
        text = "😀 @bob and 😀😀 @joe"

        assert Autolinker(grammar=Utf16Grammar()).auto_link_usernames(text) == (
            auto_link_usernames(text)
        )

    @pytest.mark.unit
    def test_empty_and_none(self):
        """Test empty and None text."""
        assert auto_link_usernames("") == ""
        assert auto_link_usernames(None) == ""


class TestAutoLink:
    """Tests for auto_link() pass composition."""

    @pytest.mark.unit
    def test_all_entities(self, sample_message):
        """Test hashtags, mentions and URLs are all linked."""
        assert auto_link(sample_message) == f"{HASHTAG_FUN} with {USERNAME_JOE} at {URL_EXAMPLE}"

    @pytest.mark.unit
    def test_mention_in_url_not_relinked(self):
        """Test a mention-shaped URL path is not linked by the mention pass."""
        html = auto_link("see http://example.com/@joe/ now")

        assert 'href="http://example.com/@joe/"' in html
        assert "twitter.com/joe" not in html
        assert html.count("<a ") == 1

    @pytest.mark.unit
    def test_href_options_apply_to_urls_only(self):
        """Test href options only reach URL anchors."""
        html = auto_link("#fun http://example.com", href_options={"class": "ext"})

        assert 'class="ext"' in html
        assert html.count('class="ext"') == 1

    @pytest.mark.unit
    def test_validator_passed_to_mentions(self):
        """Test the validator reaches the mention pass."""
        html = auto_link("@joe #fun", validator=lambda name: (False, name))

        assert html.startswith("@joe <a ")

    @pytest.mark.unit
    def test_idempotent(self, sample_messages):
        """Test a second run leaves existing anchors unchanged."""
        for text in sample_messages:
            once = auto_link(text)

            assert auto_link(once) == once
            assert auto_link_hashtags(once) == once
            assert auto_link_urls_custom(once) == once
            assert auto_link_usernames(once) == once

    @pytest.mark.unit
    def test_round_trip(self, sample_message):
        """Test stripping generated anchors restores the input."""
        texts = [
            sample_message,
            "cc @joe and @jane #python",
            "😀 @bob #emoji https://example.com/path?q=1 and example.org",
            "plain text only",
            "mail user@example.com or @joe@example.com",
        ]
        for text in texts:
            assert strip_anchors(auto_link(text)) == text

    @pytest.mark.unit
    def test_custom_defaults(self):
        """Test an autolinker built with its own defaults record."""
        linker = Autolinker(defaults=AutolinkOptions(url_class="x", username_url_base="/u/"))
        html = linker.auto_link_usernames("@joe")

        assert 'class="x username"' in html
        assert 'href="/u/joe"' in html

    @pytest.mark.unit
    def test_none(self):
        """Test None text gives an empty string."""
        assert auto_link(None) == ""
