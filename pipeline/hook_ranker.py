"""Ranker — total, deterministic ordering of adjusted hook candidates."""

from __future__ import annotations

from schemas.hook_ranking import RankedHookCandidateV1, ScoredHookCandidateV1


def rank_sort_key(candidate: ScoredHookCandidateV1) -> tuple[float, float, int, int]:
    """Composite desc, weighted platform_fit desc, shorter text, earlier input."""
    return (
        -candidate.composite_score,
        -candidate.score_breakdown.platform_fit,
        len(candidate.text),
        candidate.source_index,
    )


def rank_candidates(candidates: list[ScoredHookCandidateV1]) -> list[RankedHookCandidateV1]:
    ordered = sorted(candidates, key=rank_sort_key)
    return [
        RankedHookCandidateV1(
            **candidate.model_dump(),
            rank=idx,
            is_top=idx == 1,
        )
        for idx, candidate in enumerate(ordered, start=1)
    ]


def select_top_k(ranked: list[RankedHookCandidateV1], k: int) -> list[RankedHookCandidateV1]:
    if k <= 0:
        return []
    return sorted(ranked, key=lambda row: row.rank)[:k]


def best_candidate(ranked: list[RankedHookCandidateV1]) -> RankedHookCandidateV1 | None:
    for row in ranked:
        if row.is_top:
            return row
    return None
