"""Deterministic text heuristics for sub-scores the producer did not supply.

Used as a fallback only: producer sub-scores always win when they parse as
numbers. Every estimate lands inside the field's cap.
"""

from __future__ import annotations

import math
import re

import config
from pipeline.hook_text import word_count

_CURIOSITY_CUES = (
    "?",
    "secret",
    "what happens",
    "until",
    "before you",
    "the one thing",
    "no one told you",
    "you're doing it wrong",
    "surprising",
    "never",
    "watch",
)
_CURIOSITY_CUE_POINTS = 0.35
_LEADING_DIGIT_POINTS = 0.4
_QUESTION_WORD_POINTS = 0.3
_QUESTION_WORD_RE = re.compile(r"\b(how|what|why)\b")

_GENERAL_FIT_CUES = ("you", "watch", "save", "share", "tap", "swipe")
_GENERAL_FIT_POINTS = 0.15
_PLATFORM_FIT_CUES: dict[str, tuple[str, ...]] = {
    "tiktok": ("scroll", "trend"),
    "instagram": ("save", "aesthetic"),
    "youtube": ("subscribe", "channel"),
}
_PLATFORM_CUE_POINTS = 0.25

_FRAMEWORK_BONUSES: tuple[tuple[re.Pattern[str], float], ...] = (
    (re.compile(r"open[\s_-]*loop"), 1.0),
    (re.compile(r"\bpas\b|problem[\s_-]*agitate[\s_-]*solve"), 0.8),
    (re.compile(r"\baida\b"), 0.7),
    (re.compile(r"\b4\s*u'?s?\b"), 0.6),
)
_FRAMEWORK_BASE_BONUS = 0.3


def _lowered(text: str) -> str:
    return str(text or "").lower().replace("’", "'")


def _cap(field: str) -> float:
    return float(config.HOOK_SUB_SCORE_CAPS[field])


def estimate_brevity(text: str, platform: str) -> float:
    """Gaussian curve on word count centred on the platform's ideal range."""
    ranges = config.HOOK_PLATFORM_IDEAL_WORD_RANGE
    low, high = ranges.get(platform, ranges[config.HOOK_DEFAULT_PLATFORM])
    mu = (low + high) / 2
    sigma = (high - low) / 2.5
    words = word_count(text)
    g = math.exp(-((words - mu) ** 2) / (2 * sigma * sigma))
    return round(max(0.0, min(_cap("brevity"), g)), 4)


def estimate_curiosity(text: str) -> float:
    t = _lowered(text).strip()
    pts = sum(_CURIOSITY_CUE_POINTS for cue in _CURIOSITY_CUES if cue in t)
    if t[:1].isdigit():
        pts += _LEADING_DIGIT_POINTS
    if _QUESTION_WORD_RE.search(t):
        pts += _QUESTION_WORD_POINTS
    return round(min(_cap("curiosity"), pts), 4)


def estimate_platform_fit(text: str, platform: str) -> float:
    t = _lowered(text)
    pts = sum(_GENERAL_FIT_POINTS for cue in _GENERAL_FIT_CUES if cue in t)
    if any(cue in t for cue in _PLATFORM_FIT_CUES.get(platform, ())):
        pts += _PLATFORM_CUE_POINTS
    return round(min(_cap("platform_fit"), pts), 4)


def estimate_framework(framework: str) -> float:
    f = _lowered(framework)
    for pattern, bonus in _FRAMEWORK_BONUSES:
        if pattern.search(f):
            return min(_cap("framework"), bonus)
    return min(_cap("framework"), _FRAMEWORK_BASE_BONUS)


def estimate_sub_score(field: str, *, text: str, framework: str, platform: str) -> float:
    if field == "curiosity":
        return estimate_curiosity(text)
    if field == "brevity":
        return estimate_brevity(text, platform)
    if field == "platform_fit":
        return estimate_platform_fit(text, platform)
    if field == "framework":
        return estimate_framework(framework)
    raise KeyError(f"Unknown sub-score field: {field}")
