# Pluggable matching grammar

from .base import Grammar, GrammarMatch, OffsetUnit
from .regex_grammar import DEFAULT_GRAMMAR, RegexGrammar

__all__ = [
    "Grammar",
    "GrammarMatch",
    "OffsetUnit",
    "RegexGrammar",
    "DEFAULT_GRAMMAR",
]
