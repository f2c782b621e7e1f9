"""Candidate normalizer — repair raw producer hooks into canonical shape.

Never raises on out-of-range or mis-typed fields: sub-scores are clamped,
unknown enum labels fall back to their defaults, and every repair is recorded
on the candidate's ``corrections`` list. Candidates whose text is empty after
trimming are the only ones removed.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
import logging
import math
import numbers
from typing import Any

import config
from pipeline.hook_heuristics import estimate_sub_score
from pipeline.hook_platform import resolve_platform
from pipeline.hook_text import clean_optional_text, clean_text
from pydantic import ValidationError
from schemas.hook_ranking import (
    HookPlatform,
    HookSubScoresV1,
    NormalizedHookCandidateV1,
    PsychologicalDriver,
    RawHookCandidateV1,
    RiskFactor,
)

logger = logging.getLogger(__name__)

SUB_SCORE_FIELDS: tuple[str, ...] = ("curiosity", "brevity", "platform_fit", "framework")


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (numbers.Real, Decimal)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def clamp_sub_score(value: float, cap: float) -> float:
    """Clamp into [0, cap]. NaN counts as no signal."""
    if math.isnan(value):
        return 0.0
    return max(0.0, min(float(cap), float(value)))


def coerce_raw_candidate(item: Any) -> RawHookCandidateV1 | None:
    """Accept a raw model or a mapping; anything unparseable returns None."""
    if isinstance(item, RawHookCandidateV1):
        return item
    if isinstance(item, Mapping):
        try:
            return RawHookCandidateV1.model_validate(dict(item))
        except ValidationError as exc:
            logger.warning("Hook candidate unparseable: errors=%d", exc.error_count())
            return None
    logger.warning("Hook candidate has unsupported type: type=%s", type(item).__name__)
    return None


def _normalize_sub_scores(
    raw: RawHookCandidateV1,
    *,
    text: str,
    platform: HookPlatform,
    corrections: list[str],
) -> HookSubScoresV1:
    values: dict[str, float] = {}
    for field in SUB_SCORE_FIELDS:
        cap = float(config.HOOK_SUB_SCORE_CAPS[field])
        raw_value = getattr(raw.sub_scores, field)
        parsed = _to_float(raw_value)
        if parsed is None:
            parsed = estimate_sub_score(
                field,
                text=text,
                framework=raw.framework,
                platform=platform.value,
            )
            corrections.append(f"sub_scores.{field}: estimated {parsed}")
        clamped = clamp_sub_score(parsed, cap)
        if clamped != parsed:
            corrections.append(f"sub_scores.{field}: clamped {parsed} -> {clamped}")
        values[field] = clamped
    return HookSubScoresV1(**values)


def _normalize_enum(enum_cls, raw_value: str, field: str, corrections: list[str]):
    member, exact = enum_cls.coerce(raw_value)
    if not exact:
        corrections.append(f"{field}: {raw_value!r} -> {member.value!r}")
    return member


def normalize_candidate(
    raw: RawHookCandidateV1,
    *,
    source_index: int,
    platform: HookPlatform | str | None = None,
) -> NormalizedHookCandidateV1 | None:
    """Return the canonical candidate, or None when its text is empty."""
    text = clean_text(raw.text)
    if not text:
        return None

    corrections: list[str] = []
    resolved_platform = resolve_platform(platform)
    sub_scores = _normalize_sub_scores(raw, text=text, platform=resolved_platform, corrections=corrections)
    driver = _normalize_enum(PsychologicalDriver, raw.psychological_driver, "psychological_driver", corrections)
    risk = _normalize_enum(RiskFactor, raw.risk_factor, "risk_factor", corrections)

    if corrections:
        logger.debug(
            "Hook candidate corrected: source_index=%d corrections=%s",
            source_index,
            corrections,
        )

    return NormalizedHookCandidateV1(
        source_index=source_index,
        text=text,
        visual_cue=clean_optional_text(raw.visual_cue),
        overlay_text=clean_optional_text(raw.overlay_text),
        framework=clean_text(raw.framework),
        sub_scores=sub_scores,
        psychological_driver=driver,
        risk_factor=risk,
        corrections=corrections,
    )


def normalize_candidates(
    candidates: Iterable[Any],
    *,
    platform: HookPlatform | str | None = None,
) -> tuple[list[NormalizedHookCandidateV1], int]:
    """Normalize a batch in input order.

    Returns ``(normalized, dropped_count)``. Dropped covers empty text and
    items that could not be read as a candidate at all.
    """
    normalized: list[NormalizedHookCandidateV1] = []
    dropped = 0
    for idx, item in enumerate(candidates):
        raw = coerce_raw_candidate(item)
        row = normalize_candidate(raw, source_index=idx, platform=platform) if raw is not None else None
        if row is None:
            dropped += 1
            continue
        normalized.append(row)
    if dropped:
        logger.warning("Hook candidates dropped: dropped=%d kept=%d", dropped, len(normalized))
    return normalized, dropped
