"""
Version constants for the entity extraction and autolinking library.

Component versions change whenever the matching grammar or the generated markup
changes, so stored output can be traced back to the code that produced it.
"""

__version__ = "1.0.0"

# Component versions (update these when implementations change)
GRAMMAR_VERSION = "regex-grammar-1.0.0"
AUTOLINK_VERSION = "autolink-1.0.0"


def get_version_info() -> dict:
    """
    Get current component versions.

    Returns:
        Dict with package, grammar and autolink versions
    """
    return {
        "version": __version__,
        "grammar_version": GRAMMAR_VERSION,
        "autolink_version": AUTOLINK_VERSION,
    }
