"""Similarity deduplicator — collapse near-duplicate hooks to one representative.

Two hooks are duplicates when their comparison texts have Jaccard word-set
similarity at or above ``config.HOOK_DEDUPE_JACCARD_THRESHOLD``, or when one
comparison text contains the other on word boundaries. Clusters are the
connected components of that relation, so representatives of different
clusters are never duplicates of each other and a second pass merges nothing.

Pairwise comparison is O(n^2); fine for generation batches of tens of hooks.
"""

from __future__ import annotations

import logging

import config
from pipeline.hook_text import contains_phrase, jaccard_similarity
from schemas.hook_ranking import ScoredHookCandidateV1

logger = logging.getLogger(__name__)


def is_near_duplicate(a: str, b: str, threshold: float | None = None) -> bool:
    limit = float(config.HOOK_DEDUPE_JACCARD_THRESHOLD if threshold is None else threshold)
    return jaccard_similarity(a, b) >= limit or contains_phrase(a, b)


def _find(parents: list[int], idx: int) -> int:
    while parents[idx] != idx:
        parents[idx] = parents[parents[idx]]
        idx = parents[idx]
    return idx


def _clusters(candidates: list[ScoredHookCandidateV1], threshold: float | None) -> list[list[int]]:
    parents = list(range(len(candidates)))
    for i in range(len(candidates)):
        for j in range(i + 1, len(candidates)):
            if is_near_duplicate(candidates[i].text, candidates[j].text, threshold):
                ri, rj = _find(parents, i), _find(parents, j)
                if ri != rj:
                    parents[max(ri, rj)] = min(ri, rj)
    grouped: dict[int, list[int]] = {}
    for idx in range(len(candidates)):
        grouped.setdefault(_find(parents, idx), []).append(idx)
    return list(grouped.values())


def _representative(candidates: list[ScoredHookCandidateV1], members: list[int]) -> int:
    # Highest composite, then shorter text, then first seen.
    return min(
        members,
        key=lambda idx: (-candidates[idx].composite_score, len(candidates[idx].text), idx),
    )


def dedupe_candidates(
    candidates: list[ScoredHookCandidateV1],
    *,
    threshold: float | None = None,
) -> list[ScoredHookCandidateV1]:
    """Return one candidate per duplicate cluster, in first-seen order of the kept rows.

    ``deduped_from`` on each kept row counts every hook it absorbed, including
    hooks its cluster members had already absorbed in an earlier pass.
    """
    if not candidates:
        return []

    kept: list[tuple[int, ScoredHookCandidateV1]] = []
    for members in _clusters(candidates, threshold):
        rep_idx = _representative(candidates, members)
        if len(members) == 1:
            kept.append((rep_idx, candidates[rep_idx]))
            continue
        absorbed = sum(candidates[idx].deduped_from + 1 for idx in members) - 1
        logger.debug(
            "Hook duplicates merged: kept_source_index=%d merged_source_indexes=%s",
            candidates[rep_idx].source_index,
            [candidates[idx].source_index for idx in members if idx != rep_idx],
        )
        kept.append((rep_idx, candidates[rep_idx].model_copy(update={"deduped_from": absorbed})))

    kept.sort(key=lambda row: row[0])
    return [row for _, row in kept]
