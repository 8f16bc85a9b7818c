"""
CLI module for entity extraction and auto-linking.
"""

from tweet_entities.cli.autolink import main as autolink_main

__all__ = ["autolink_main"]
