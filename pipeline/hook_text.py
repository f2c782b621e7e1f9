"""Shared text helpers for hook normalization, heuristics, and dedupe."""

from __future__ import annotations

import re


_APOSTROPHE_RE = re.compile(r"['‘’`]")
_NON_WORD_RE = re.compile(r"[^\w\s]|_")
_WORD_RE = re.compile(r"\b\w+\b")


def clean_text(text: str | None) -> str:
    """Trim surrounding whitespace; ``None`` becomes empty."""
    return str(text or "").strip()


def clean_optional_text(text: str | None) -> str | None:
    value = clean_text(text)
    return value or None


def comparison_text(text: str | None) -> str:
    """Lowercase, strip punctuation, collapse whitespace.

    Apostrophes are removed outright so "don't" and "dont" compare equal;
    every other punctuation mark splits words.
    """
    lowered = _APOSTROPHE_RE.sub("", str(text or "").lower())
    return " ".join(_NON_WORD_RE.sub(" ", lowered).split())


def token_set(text: str | None) -> set[str]:
    return set(comparison_text(text).split())


def jaccard_similarity(a: str, b: str) -> float:
    ta = token_set(a)
    tb = token_set(b)
    if not ta and not tb:
        return 1.0
    if not ta or not tb:
        return 0.0
    return len(ta.intersection(tb)) / len(ta.union(tb))


def contains_phrase(a: str, b: str) -> bool:
    """True when either comparison text is a substring of the other."""
    ca = comparison_text(a)
    cb = comparison_text(b)
    if not ca or not cb:
        return False
    return ca in cb or cb in ca


def word_count(text: str | None) -> int:
    return len(_WORD_RE.findall(str(text or "")))
