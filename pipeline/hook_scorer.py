"""Composite scorer — weighted sum of normalized sub-scores.

composite = clamp(0.9*curiosity + 0.9*brevity + 1.6*platform_fit + 1.6*framework, 0, 5)
rounded to one decimal, half-up. Weights live in ``config``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

import config
from schemas.hook_ranking import (
    HookScoreBreakdownV1,
    HookSubScoresV1,
    NormalizedHookCandidateV1,
    ScoredHookCandidateV1,
)

# Float sums such as 2.4499999999999997 are squashed to 2.45 before rounding.
_FLOAT_NOISE_QUANTUM = Decimal("1e-9")


def round_half_up(value: float, decimals: int | None = None) -> float:
    places = config.HOOK_COMPOSITE_DECIMALS if decimals is None else decimals
    exact = Decimal(repr(float(value))).quantize(_FLOAT_NOISE_QUANTUM, rounding=ROUND_HALF_UP)
    return float(exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def clamp_composite(value: float) -> float:
    return max(float(config.HOOK_COMPOSITE_MIN), min(float(config.HOOK_COMPOSITE_MAX), value))


def compute_score_breakdown(sub_scores: HookSubScoresV1) -> HookScoreBreakdownV1:
    weights = config.HOOK_SCORE_WEIGHTS
    return HookScoreBreakdownV1(
        curiosity=sub_scores.curiosity * weights["curiosity"],
        brevity=sub_scores.brevity * weights["brevity"],
        platform_fit=sub_scores.platform_fit * weights["platform_fit"],
        framework=sub_scores.framework * weights["framework"],
    )


def composite_from_breakdown(breakdown: HookScoreBreakdownV1, platform_fit_multiplier: float = 1.0) -> float:
    raw = (
        breakdown.curiosity
        + breakdown.brevity
        + breakdown.platform_fit * platform_fit_multiplier
        + breakdown.framework
    )
    return round_half_up(clamp_composite(raw))


def score_candidate(candidate: NormalizedHookCandidateV1) -> ScoredHookCandidateV1:
    breakdown = compute_score_breakdown(candidate.sub_scores)
    return ScoredHookCandidateV1(
        **candidate.model_dump(),
        composite_score=composite_from_breakdown(breakdown),
        score_breakdown=breakdown,
    )


def score_candidates(candidates: list[NormalizedHookCandidateV1]) -> list[ScoredHookCandidateV1]:
    return [score_candidate(candidate) for candidate in candidates]
