from __future__ import annotations

import unittest

import config
from pipeline.hook_platform import adjust_for_platform, platform_fit_multiplier, resolve_platform
from pipeline.hook_scorer import round_half_up, score_candidate
from schemas.hook_ranking import (
    HookPlatform,
    HookSubScoresV1,
    NormalizedHookCandidateV1,
    PsychologicalDriver,
    RiskFactor,
    ScoredHookCandidateV1,
)


def _scored(
    text: str = "Authority hook",
    *,
    curiosity: float = 1.0,
    brevity: float = 0.5,
    platform_fit: float = 1.0,
    framework: float = 0.5,
) -> ScoredHookCandidateV1:
    return score_candidate(
        NormalizedHookCandidateV1(
            source_index=0,
            text=text,
            sub_scores=HookSubScoresV1(
                curiosity=curiosity,
                brevity=brevity,
                platform_fit=platform_fit,
                framework=framework,
            ),
            psychological_driver=PsychologicalDriver.AUTHORITY_CREDIBILITY,
            risk_factor=RiskFactor.LOW,
        )
    )


class HookPlatformTests(unittest.TestCase):
    def test_resolve_platform_known_aliases_and_unknown(self):
        self.assertEqual(resolve_platform("tiktok"), HookPlatform.TIKTOK)
        self.assertEqual(resolve_platform(" YouTube "), HookPlatform.YOUTUBE)
        self.assertEqual(resolve_platform("reels"), HookPlatform.INSTAGRAM)
        self.assertEqual(resolve_platform("Shorts"), HookPlatform.YOUTUBE)
        self.assertEqual(resolve_platform(HookPlatform.INSTAGRAM), HookPlatform.INSTAGRAM)
        self.assertEqual(resolve_platform(None), HookPlatform.TIKTOK)
        with self.assertLogs("pipeline.hook_platform", level="INFO"):
            self.assertEqual(resolve_platform("snapchat"), HookPlatform.TIKTOK)

    def test_multiplier_table(self):
        self.assertEqual(config.HOOK_PLATFORM_FIT_MULTIPLIERS["tiktok"], 1.0)
        self.assertEqual(config.HOOK_PLATFORM_FIT_MULTIPLIERS["instagram"], 0.95)
        self.assertEqual(config.HOOK_PLATFORM_FIT_MULTIPLIERS["youtube"], 1.05)
        self.assertEqual(platform_fit_multiplier("myspace"), 1.0)
        self.assertEqual(platform_fit_multiplier("shorts"), 1.05)

    def test_tiktok_leaves_composite_unchanged(self):
        row = _scored()

        adjusted = adjust_for_platform([row], "tiktok")[0]

        self.assertEqual(adjusted.composite_score, row.composite_score)
        self.assertEqual(adjusted.platform_adjustment, 0.0)
        self.assertEqual(adjusted.platform, HookPlatform.TIKTOK)

    def test_youtube_and_instagram_differ_only_on_platform_fit_term(self):
        row = _scored()
        breakdown = row.score_breakdown

        youtube = adjust_for_platform([row], "youtube")[0]
        instagram = adjust_for_platform([row], "instagram")[0]

        self.assertEqual(youtube.score_breakdown, instagram.score_breakdown)
        self.assertAlmostEqual(
            youtube.platform_adjustment - instagram.platform_adjustment,
            breakdown.platform_fit * (1.05 - 0.95),
        )
        self.assertAlmostEqual(
            (breakdown.platform_fit + youtube.platform_adjustment)
            / (breakdown.platform_fit + instagram.platform_adjustment),
            1.05 / 0.95,
        )
        others = breakdown.curiosity + breakdown.brevity + breakdown.framework
        self.assertEqual(youtube.composite_score, round_half_up(others + breakdown.platform_fit * 1.05))
        self.assertEqual(instagram.composite_score, round_half_up(others + breakdown.platform_fit * 0.95))
        # 0.9 + 0.45 + 0.8 = 2.15 plus 1.68 / 1.52
        self.assertEqual(youtube.composite_score, 3.8)
        self.assertEqual(instagram.composite_score, 3.7)

    def test_adjusted_score_is_reclamped(self):
        row = _scored(curiosity=2.0, brevity=1.0, platform_fit=1.0, framework=1.0)

        adjusted = adjust_for_platform([row], "youtube")[0]

        self.assertEqual(adjusted.composite_score, 5.0)

    def test_adjustment_is_not_cumulative(self):
        row = _scored()

        once = adjust_for_platform([row], "youtube")
        twice = adjust_for_platform(once, "youtube")

        self.assertEqual(once, twice)

    def test_unknown_platform_behaves_like_tiktok(self):
        row = _scored()

        self.assertEqual(
            adjust_for_platform([row], "friendster")[0],
            adjust_for_platform([row], "tiktok")[0],
        )

    def test_input_rows_are_not_mutated(self):
        row = _scored()
        before = row.model_dump()

        adjust_for_platform([row], "instagram")

        self.assertEqual(row.model_dump(), before)


if __name__ == "__main__":
    unittest.main()
