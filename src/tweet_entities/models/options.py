"""
Autolink options and their defaults record.

The defaults are built once at import time from the library settings. Each
autolink call resolves the caller's overrides onto them, producing a new frozen
object and leaving both inputs untouched.
"""

from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, Field

from ..config import Settings, settings


DEFAULT_URL_CLASS = "tweet-url"
DEFAULT_LIST_CLASS = "list-slug"
DEFAULT_USERNAME_CLASS = "username"
DEFAULT_HASHTAG_CLASS = "hashtag"


class AutolinkOptions(BaseModel):
    """
    Options controlling the anchors generated by the autolinker.

    Attributes:
        url_class: CSS class added to every generated anchor
        list_class: CSS class added to list anchors
        username_class: CSS class added to username anchors
        hashtag_class: CSS class added to hashtag anchors
        username_url_base: href prefix for username links (screen name appended)
        list_url_base: href prefix for list links; list linking is off when unset
        hashtag_url_base: href prefix for hashtag links (encoded tag appended)
        suppress_lists: Never link ``@user/list`` as a list
        suppress_no_follow: Omit ``rel="nofollow"`` from generated anchors
        target: Value for the ``target`` attribute; omitted when unset
    """

    url_class: str = DEFAULT_URL_CLASS
    list_class: str = DEFAULT_LIST_CLASS
    username_class: str = DEFAULT_USERNAME_CLASS
    hashtag_class: str = DEFAULT_HASHTAG_CLASS
    username_url_base: str = "http://twitter.com/"
    list_url_base: Optional[str] = None
    hashtag_url_base: str = "http://twitter.com/search?q="
    suppress_lists: bool = False
    suppress_no_follow: bool = False
    target: Optional[str] = Field(default=None, description="Link target window name")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def links_lists(self) -> bool:
        """True when ``@user/list`` mentions should become list links."""
        return bool(self.list_url_base) and not self.suppress_lists


def build_default_options(config: Settings) -> AutolinkOptions:
    """
    Build the defaults record from settings.

    Args:
        config: Settings supplying the link bases

    Returns:
        Frozen AutolinkOptions holding the documented defaults
    """
    return AutolinkOptions(
        username_url_base=config.username_url_base,
        hashtag_url_base=config.hashtag_url_base,
        list_url_base=config.list_url_base,
    )


# Global defaults record
DEFAULT_AUTOLINK_OPTIONS = build_default_options(settings)


def resolve_autolink_options(
    options: Union[AutolinkOptions, Mapping[str, Any], None] = None,
    defaults: AutolinkOptions = DEFAULT_AUTOLINK_OPTIONS,
) -> AutolinkOptions:
    """
    Merge caller overrides onto the defaults record.

    Missing fields and fields explicitly set to ``None`` take the default value.
    Unknown keys are ignored.

    Args:
        options: Overrides as an AutolinkOptions, a mapping, or None
        defaults: Record supplying the absent fields

    Returns:
        New AutolinkOptions instance

    Raises:
        pydantic.ValidationError: If an override has the wrong type

    Examples:
        >>> resolve_autolink_options({"target": "_blank"}).url_class
        'tweet-url'
    """
    if options is None:
        return defaults

    if isinstance(options, AutolinkOptions):
        overrides = options.model_dump(exclude_unset=True)
    else:
        overrides = dict(options)

    merged = defaults.model_dump()
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return AutolinkOptions.model_validate(merged)
