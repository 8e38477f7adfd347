"""Rule-based translation of free-text queries into a FilterSpec.

Examples:
- "all single word palindromic strings" -> {word_count: 1, is_palindrome: true}
- "strings longer than 10 characters" -> {min_length: 11}
- "strings containing the letter z" -> {contains_character: "z"}
- "strings that contain the first vowel" -> {contains_character: "a"}
"""
import logging
import re
from typing import Any, Callable, Dict, NamedTuple, Pattern

from app.exceptions import ConflictError, ParseError
from app.schemas.string import FilterSpec

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 5


class Rule(NamedTuple):
    field: str
    pattern: Pattern
    extract: Callable[[re.Match], Any]


def _rule(field: str, pattern: str, extract: Callable[[re.Match], Any]) -> Rule:
    return Rule(field, re.compile(pattern), extract)


def _group(m: re.Match) -> str:
    return m.group(1)


# Evaluated top to bottom; the first rule that matches a field sets it and
# later rules for that field are skipped.
RULES = [
    _rule("is_palindrome", r"\bpalindrom(?:e|es|ic)\b", lambda m: True),
    _rule("word_count", r"\b(?:single|one) words?\b", lambda m: 1),
    _rule("word_count", r"(?<!than )\b(\d+)\s*words?\b", lambda m: int(m.group(1))),
    _rule("min_length", r"\b(?:longer|more) than (\d+) characters?\b", lambda m: int(m.group(1)) + 1),
    _rule("max_length", r"\b(?:shorter|less|fewer) than (\d+) characters?\b", lambda m: int(m.group(1)) - 1),
    _rule("contains_character", r"\bfirst vowel\b", lambda m: "a"),
    _rule(
        "contains_character",
        r"\b(?:contain(?:s|ing)?|with)\s+(?:the\s+)?(?:letter|character)\s+([^\W_])\b",
        _group,
    ),
    # A bare "a" followed by another word is the article ("with a single word").
    _rule(
        "contains_character",
        r"\b(?:contain(?:s|ing)?|with)\s+(?:the\s+)?(?!a\s+\w)([^\W\d_])\b",
        _group,
    ),
]


def _check_conflicts(filters: Dict[str, Any]) -> None:
    min_length = filters.get("min_length")
    max_length = filters.get("max_length")

    if max_length is not None and max_length < 0:
        raise ConflictError()

    if min_length is not None and max_length is not None and min_length > max_length:
        raise ConflictError()

    # Heuristic, not a logical necessity: "a b a" is a three-word palindrome,
    # but multi-word palindrome queries are treated as contradictory.
    if filters.get("is_palindrome") and filters.get("word_count", 0) > 1:
        raise ConflictError()


def parse_natural_language_query(query: str) -> FilterSpec:
    """Translate a natural-language query into filters.

    Raises ParseError when the query is blank, too short or yields no filter,
    and ConflictError when the inferred filters contradict each other.
    Text outside the recognized phrases is ignored.
    """
    text = query.strip().lower()
    if len(text) < MIN_QUERY_LENGTH:
        raise ParseError()

    filters: Dict[str, Any] = {}
    for rule in RULES:
        if rule.field in filters:
            continue
        match = rule.pattern.search(text)
        if match:
            filters[rule.field] = rule.extract(match)

    if not filters:
        raise ParseError()

    _check_conflicts(filters)

    logger.debug(f"Parsed {query!r} into {filters}")
    return FilterSpec(**filters)
