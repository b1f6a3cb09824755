"""Whole-word text matching helpers used by the normalizer and the scorer."""

import re
from functools import lru_cache
from typing import Iterable, Set


@lru_cache(maxsize=512)
def word_pattern(term: str) -> "re.Pattern[str]":
    """Compile a case-insensitive pattern matching `term` as a whole word.

    Lookarounds are used instead of \\b so that terms starting or ending with
    punctuation (e.g. "ux/ui") still match on word edges.
    """
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


def contains_term(text: str, term: str) -> bool:
    return bool(word_pattern(term).search(text or ""))


def contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(contains_term(text, term) for term in terms)


def count_present(text: str, terms: Iterable[str]) -> int:
    """Number of distinct terms found in text."""
    return sum(1 for term in set(terms) if contains_term(text, term))


def tokenize(text: str) -> Set[str]:
    """Lowercase word tokens of a text."""
    return set(re.findall(r"\w+", (text or "").lower()))


def collapse_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
