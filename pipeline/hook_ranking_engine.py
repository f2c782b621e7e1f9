"""Hook ranking engine.

Implements the fixed pipeline:
Normalize -> Score -> Dedupe -> Platform adjust -> Rank

Pure and synchronous: no I/O, no shared state, inputs are never mutated.
Malformed candidates are repaired or dropped rather than raised, so callers
always get a list back; an empty list means the batch had nothing usable.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
import logging
from typing import Any

from pipeline.hook_dedupe import dedupe_candidates
from pipeline.hook_normalizer import normalize_candidates
from pipeline.hook_platform import adjust_for_platform, resolve_platform
from pipeline.hook_ranker import best_candidate, rank_candidates
from pipeline.hook_scorer import score_candidates
from schemas.hook_ranking import (
    HookRankingResultV1,
    PsychologicalDriver,
    RankedHookCandidateV1,
    RiskFactor,
)

logger = logging.getLogger(__name__)


def _driver_distribution(ranked: list[RankedHookCandidateV1]) -> dict[str, int]:
    counts = Counter(row.psychological_driver.value for row in ranked)
    return {driver.value: counts.get(driver.value, 0) for driver in PsychologicalDriver}


def _risk_counts(ranked: list[RankedHookCandidateV1]) -> dict[str, int]:
    counts = Counter(row.risk_factor.value for row in ranked)
    return {risk.value: counts.get(risk.value, 0) for risk in RiskFactor}


def _dominant_risk(risk_counts: dict[str, int]) -> RiskFactor | None:
    if not any(risk_counts.values()):
        return None
    dominant = RiskFactor.LOW
    for risk in RiskFactor:
        # Ties go to the riskier tier.
        if risk_counts.get(risk.value, 0) >= risk_counts.get(dominant.value, 0):
            dominant = risk
    return dominant


def rank_hooks(candidates: Iterable[Any], platform: Any = None) -> HookRankingResultV1:
    """Run the full pipeline and return the ranked list with batch soft signals."""
    batch = list(candidates)
    resolved = resolve_platform(platform)

    normalized, dropped = normalize_candidates(batch, platform=resolved)
    scored = score_candidates(normalized)
    deduped = dedupe_candidates(scored)
    adjusted = adjust_for_platform(deduped, resolved)
    ranked = rank_candidates(adjusted)

    risk_counts = _risk_counts(ranked)
    result = HookRankingResultV1(
        platform=resolved,
        ranked=ranked,
        input_count=len(batch),
        dropped_count=dropped,
        corrected_count=sum(1 for row in normalized if row.corrections),
        merged_count=len(scored) - len(deduped),
        driver_distribution=_driver_distribution(ranked),
        risk_counts=risk_counts,
        dominant_risk=_dominant_risk(risk_counts),
        top_candidate=best_candidate(ranked),
        status="ok" if ranked else "empty",
    )

    logger.info(
        "Hook ranking complete: platform=%s input=%d ranked=%d dropped=%d corrected=%d merged=%d top_score=%s",
        resolved.value,
        result.input_count,
        len(ranked),
        result.dropped_count,
        result.corrected_count,
        result.merged_count,
        result.top_candidate.composite_score if result.top_candidate else "none",
    )
    return result


def rank(candidates: Iterable[Any], platform: Any = None) -> list[RankedHookCandidateV1]:
    """Rank raw hook candidates for a platform. Never raises on malformed candidates."""
    return rank_hooks(candidates, platform).ranked
