"""
Command-line interface for entity extraction and auto-linking.

Usage:
    # Extract entities from a file, one JSON record per line
    python -m tweet_entities.cli.autolink messages.txt

    # Inline text, whole text as one pretty-printed record
    python -m tweet_entities.cli.autolink --text "cc @joe #fun" --format json

    # Auto-link text read from stdin
    echo "visit http://example.com @joe" | python -m tweet_entities.cli.autolink - --mode autolink
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from tweet_entities.autolink import auto_link
from tweet_entities.config import Settings, settings
from tweet_entities.extraction import (
    extract_hashtags_with_indices,
    extract_mentioned_screen_names_with_indices,
    extract_reply_screen_name,
    extract_urls_with_indices,
)
from tweet_entities.logging_config import get_logger, setup_logging
from tweet_entities.version import GRAMMAR_VERSION, get_version_info


logger = get_logger(__name__)


# ============================================================================
# CLI FUNCTIONS
# ============================================================================

def extract_entities(text: str) -> dict:
    """
    Extract every entity kind from one text.

    Args:
        text: Message text

    Returns:
        JSON-serializable record with mentions, reply target, hashtags and URLs
    """
    return {
        "text": text,
        "reply_to": extract_reply_screen_name(text),
        "mentions": [mention.model_dump() for mention in extract_mentioned_screen_names_with_indices(text)],
        "hashtags": [hashtag.model_dump() for hashtag in extract_hashtags_with_indices(text)],
        "urls": [url.model_dump() for url in extract_urls_with_indices(text)],
        "grammar_version": GRAMMAR_VERSION,
    }


def read_input(source: Optional[str], inline_text: Optional[str]) -> str:
    """
    Read the text to process.

    Args:
        source: File path, ``-`` for stdin, or None
        inline_text: Text given with ``--text``; wins over ``source``

    Returns:
        Input text

    Raises:
        FileNotFoundError: If ``source`` is not an existing file
        ValueError: If no input was given
    """
    if inline_text is not None:
        return inline_text

    if source is None:
        raise ValueError("no input given (pass a file, '-' for stdin, or --text)")

    if source == "-":
        return sys.stdin.read()

    path = Path(source)
    if not path.is_file():
        raise FileNotFoundError(f"Path not found: {path}")

    return path.read_text(encoding="utf-8")


def process_text(text: str, mode: str, format: str, options: dict, href_options: dict) -> List[str]:
    """
    Run extraction or auto-linking and format the output lines.

    Args:
        text: Input text
        mode: "extract" or "autolink"
        format: "json" (whole text) or "jsonl" (one record per input line)
        options: Autolink options for the hashtag and mention passes
        href_options: Anchor attributes for the URL pass

    Returns:
        Output lines to print
    """
    if format == "jsonl":
        chunks = [line for line in text.splitlines() if line.strip()]
    else:
        chunks = [text]

    if mode == "autolink":
        linked = [auto_link(chunk, options, href_options) for chunk in chunks]
        if format == "jsonl":
            return [json.dumps({"text": chunk, "html": html}, ensure_ascii=False) for chunk, html in zip(chunks, linked)]
        return linked

    records = [extract_entities(chunk) for chunk in chunks]
    logger.info("entities_extracted", records=len(records))

    if format == "jsonl":
        return [json.dumps(record, ensure_ascii=False) for record in records]
    return [json.dumps(records[0], ensure_ascii=False, indent=2)]


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Extract mentions, hashtags and URLs from messages, or auto-link them as HTML",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Extract entities, one JSON record per line
  %(prog)s messages.txt

  # Auto-link inline text, opening links in a new window
  %(prog)s --text "#fun with @joe" --mode autolink --target _blank

  # Read from stdin
  cat messages.txt | %(prog)s - --format jsonl
        """
    )

    parser.add_argument(
        "input",
        nargs="?",
        type=str,
        default=None,
        help="Path to a text file, or '-' to read stdin"
    )

    parser.add_argument(
        "--text",
        "-t",
        type=str,
        default=None,
        help="Inline text to process instead of a file"
    )

    parser.add_argument(
        "--mode",
        "-m",
        type=str,
        choices=["extract", "autolink"],
        default="extract",
        help="Extract entities as JSON or output auto-linked HTML (default: extract)"
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Whole text as one record (json) or one record per line (jsonl, default)"
    )

    parser.add_argument(
        "--target",
        type=str,
        default=None,
        help="Value for the target attribute of generated links"
    )

    parser.add_argument(
        "--suppress-no-follow",
        action="store_true",
        help='Do not add rel="nofollow" to generated links'
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=json.dumps(get_version_info())
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    log_settings = Settings(log_level="DEBUG") if args.verbose else settings
    setup_logging(log_settings)

    options = {"target": args.target, "suppress_no_follow": args.suppress_no_follow}
    href_options = {"target": args.target, "suppress_no_follow": args.suppress_no_follow}

    try:
        text = read_input(args.input, args.text)
        for line in process_text(text, args.mode, args.format, options, href_options):
            print(line)

    except (OSError, ValueError) as e:
        logger.error("cli_failed", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
