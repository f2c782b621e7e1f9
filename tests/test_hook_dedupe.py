from __future__ import annotations

import unittest
from unittest.mock import patch

from pipeline import hook_dedupe
from pipeline.hook_scorer import score_candidate
from schemas.hook_ranking import (
    HookSubScoresV1,
    NormalizedHookCandidateV1,
    PsychologicalDriver,
    RiskFactor,
    ScoredHookCandidateV1,
)


def _scored(
    text: str,
    source_index: int,
    *,
    curiosity: float = 1.0,
    brevity: float = 0.9,
    platform_fit: float = 0.9,
    framework: float = 0.9,
) -> ScoredHookCandidateV1:
    return score_candidate(
        NormalizedHookCandidateV1(
            source_index=source_index,
            text=text,
            sub_scores=HookSubScoresV1(
                curiosity=curiosity,
                brevity=brevity,
                platform_fit=platform_fit,
                framework=framework,
            ),
            psychological_driver=PsychologicalDriver.PAIN_POINT,
            risk_factor=RiskFactor.LOW,
        )
    )


class HookDedupeTests(unittest.TestCase):
    def test_case_and_punctuation_variants_keep_higher_composite(self):
        rows = [
            _scored("Stop scrolling! This changes everything.", 0, curiosity=1.8),
            _scored("stop scrolling, this changes EVERYTHING", 1, curiosity=1.0),
        ]

        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual(len(deduped), 1)
        self.assertEqual(deduped[0].source_index, 0)
        self.assertEqual(deduped[0].deduped_from, 1)

    def test_representative_is_highest_composite_regardless_of_order(self):
        rows = [
            _scored("stop scrolling this changes everything", 0, curiosity=0.2),
            _scored("Stop scrolling. This changes everything!", 1, curiosity=2.0),
        ]

        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual([row.source_index for row in deduped], [1])
        self.assertEqual(deduped[0].deduped_from, 1)

    def test_composite_tie_prefers_shorter_text(self):
        rows = [
            _scored("You need this trick today right now", 0),
            _scored("You need this trick today", 1),
        ]

        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual(deduped[0].text, "You need this trick today")

    def test_full_tie_prefers_first_seen(self):
        rows = [
            _scored("Same words here!", 0),
            _scored("same words here?", 1),
        ]

        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual(deduped[0].source_index, 0)

    def test_jaccard_threshold_boundary(self):
        distinct = [
            _scored("red fox jumps over fences", 0),
            _scored("red fox jumps over walls", 1),
        ]
        similar = [
            _scored("one two three four five six seven eight nine ten", 0),
            _scored("one two three four five six seven eight nine eleven", 1),
        ]

        self.assertEqual(len(hook_dedupe.dedupe_candidates(distinct)), 2)
        self.assertEqual(len(hook_dedupe.dedupe_candidates(similar)), 1)

    def test_threshold_reads_config(self):
        similar = [
            _scored("one two three four five six seven eight nine ten", 0),
            _scored("one two three four five six seven eight nine eleven", 1),
        ]

        with patch("pipeline.hook_dedupe.config.HOOK_DEDUPE_JACCARD_THRESHOLD", 0.9):
            self.assertEqual(len(hook_dedupe.dedupe_candidates(similar)), 2)

    def test_substring_of_normalized_text_is_duplicate(self):
        self.assertTrue(hook_dedupe.is_near_duplicate("Stop scrolling", "Stop scrolling and read this slowly"))
        self.assertTrue(hook_dedupe.is_near_duplicate("stop scroll", "Stop scrolling now"))

        deduped = hook_dedupe.dedupe_candidates(
            [_scored("stop scroll", 0), _scored("Stop scrolling now", 1, curiosity=1.5)]
        )

        self.assertEqual([row.source_index for row in deduped], [1])
        self.assertEqual(deduped[0].deduped_from, 1)

    def test_clusters_are_transitive(self):
        rows = [
            _scored("stop scrolling", 0, curiosity=0.5),
            _scored("Stop scrolling right now", 1, curiosity=1.5),
            _scored("right now", 2, curiosity=0.1),
            _scored("Completely different hook about sleep", 3),
        ]

        self.assertFalse(hook_dedupe.is_near_duplicate(rows[0].text, rows[2].text))
        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual([row.source_index for row in deduped], [1, 3])
        self.assertEqual(deduped[0].deduped_from, 2)
        self.assertEqual(deduped[1].deduped_from, 0)

    def test_dedupe_is_idempotent(self):
        rows = [
            _scored("Stop scrolling! This changes everything.", 0, curiosity=1.8),
            _scored("stop scrolling, this changes EVERYTHING", 1),
            _scored("Your posture is the real problem", 2),
            _scored("your posture is the REAL problem!!", 3, curiosity=0.3),
            _scored("Three stretches before bed", 4),
        ]

        once = hook_dedupe.dedupe_candidates(rows)
        twice = hook_dedupe.dedupe_candidates(once)

        self.assertEqual(once, twice)
        self.assertEqual([row.deduped_from for row in once], [1, 1, 0])

    def test_prior_absorbed_counts_carry_into_new_cluster(self):
        first = _scored("stop scrolling right now", 0).model_copy(update={"deduped_from": 2})
        second = _scored("Stop scrolling right now!", 1, curiosity=2.0)

        deduped = hook_dedupe.dedupe_candidates([first, second])

        self.assertEqual(deduped[0].source_index, 1)
        self.assertEqual(deduped[0].deduped_from, 3)

    def test_does_not_assume_sorted_input_and_does_not_mutate(self):
        rows = [
            _scored("Three stretches before bed", 0, curiosity=0.1),
            _scored("Stop scrolling! This changes everything.", 1, curiosity=0.2),
            _scored("stop scrolling, this changes EVERYTHING", 2, curiosity=1.9),
        ]
        before = [row.model_dump() for row in rows]

        deduped = hook_dedupe.dedupe_candidates(rows)

        self.assertEqual([row.source_index for row in deduped], [0, 2])
        self.assertEqual([row.model_dump() for row in rows], before)

    def test_empty_input(self):
        self.assertEqual(hook_dedupe.dedupe_candidates([]), [])


if __name__ == "__main__":
    unittest.main()
