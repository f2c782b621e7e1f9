"""Platform adjuster — per-platform nudge on the weighted platform_fit term."""

from __future__ import annotations

import logging
from typing import Any

import config
from pipeline.hook_scorer import composite_from_breakdown
from schemas.hook_ranking import HookPlatform, ScoredHookCandidateV1

logger = logging.getLogger(__name__)


def resolve_platform(value: Any) -> HookPlatform:
    """Map a platform selection to a known platform; unknown selections use the default."""
    if isinstance(value, HookPlatform):
        return value
    key = str(value or "").strip().lower().replace(" ", "_").replace("-", "_")
    key = config.HOOK_PLATFORM_ALIASES.get(key, key)
    platform = HookPlatform.match(key)
    if platform is None:
        platform = HookPlatform(config.HOOK_DEFAULT_PLATFORM)
        if key:
            logger.info("Unknown hook platform, using default: platform=%r default=%s", value, platform.value)
    return platform


def platform_fit_multiplier(platform: Any) -> float:
    resolved = resolve_platform(platform)
    return float(config.HOOK_PLATFORM_FIT_MULTIPLIERS.get(resolved.value, 1.0))


def adjust_for_platform(
    candidates: list[ScoredHookCandidateV1],
    platform: Any,
) -> list[ScoredHookCandidateV1]:
    """Recompute composites with the platform multiplier applied to platform_fit only.

    The composite is rebuilt from the unrounded breakdown, so applying the
    adjustment more than once gives the same result.
    """
    resolved = resolve_platform(platform)
    multiplier = platform_fit_multiplier(resolved)
    adjusted: list[ScoredHookCandidateV1] = []
    for candidate in candidates:
        breakdown = candidate.score_breakdown
        adjusted.append(
            candidate.model_copy(
                update={
                    "composite_score": composite_from_breakdown(breakdown, multiplier),
                    "platform": resolved,
                    "platform_adjustment": breakdown.platform_fit * multiplier - breakdown.platform_fit,
                }
            )
        )
    return adjusted
