"""Hook ranking schemas — raw producer candidates through ranked output.

Stage shapes:
  RawHookCandidateV1 -> NormalizedHookCandidateV1 -> ScoredHookCandidateV1
  -> RankedHookCandidateV1, summarized in HookRankingResultV1.

Raw candidates come from an LLM-backed generator and are untrusted, so the raw
model is deliberately permissive. Everything downstream is canonical.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class _LenientStrEnum(str, Enum):
    """Base for string enums that tolerate LLM output quirks.

    Handles: wrong case, spaces or underscores instead of hyphens, etc.
    If no match, falls back to the enum's declared fallback member.
    """

    @classmethod
    def fallback(cls):
        raise NotImplementedError

    @classmethod
    def match(cls, value):
        if isinstance(value, str):
            normalised = value.strip().lower().replace(" ", "_").replace("-", "_")
            for member in cls:
                if member.value.replace("-", "_") == normalised or member.name.lower() == normalised:
                    return member
        return None

    @classmethod
    def coerce(cls, value):
        """Return ``(member, exact)``; ``exact`` is False when the value was repaired."""
        if isinstance(value, cls):
            return value, True
        member = cls.match(value)
        if member is None:
            return cls.fallback(), False
        return member, value == member.value

    @classmethod
    def _missing_(cls, value):
        member = cls.match(value)
        return member if member is not None else cls.fallback()


class PsychologicalDriver(_LenientStrEnum):
    CURIOSITY_GAP = "curiosity-gap"
    PAIN_POINT = "pain-point"
    VALUE_HIT = "value-hit"
    SURPRISE_SHOCK = "surprise-shock"
    SOCIAL_PROOF = "social-proof"
    URGENCY_FOMO = "urgency-fomo"
    AUTHORITY_CREDIBILITY = "authority-credibility"
    EMOTIONAL_CONNECTION = "emotional-connection"

    @classmethod
    def fallback(cls):
        return cls.EMOTIONAL_CONNECTION


class RiskFactor(_LenientStrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def fallback(cls):
        return cls.MEDIUM


class HookPlatform(_LenientStrEnum):
    TIKTOK = "tiktok"
    INSTAGRAM = "instagram"
    YOUTUBE = "youtube"

    @classmethod
    def fallback(cls):
        return cls.TIKTOK


# ---------------------------------------------------------------------------
# Raw producer input
# ---------------------------------------------------------------------------

def _plain_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class RawSubScoresV1(BaseModel):
    """Producer-supplied sub-scores. Values are unvalidated until normalization."""

    model_config = ConfigDict(populate_by_name=True)

    curiosity: Any = None
    brevity: Any = None
    platform_fit: Any = Field(
        default=None,
        validation_alias=AliasChoices("platform_fit", "platformFit"),
    )
    framework: Any = None


class RawHookCandidateV1(BaseModel):
    """One hook candidate as returned by the generation service."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(
        default="",
        validation_alias=AliasChoices("text", "spokenHook", "verbalHook"),
        description="Spoken/verbal hook content",
    )
    visual_cue: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("visual_cue", "visualCue", "visualHook"),
    )
    overlay_text: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("overlay_text", "overlayText", "textualHook"),
    )
    framework: str = Field(default="", description="Free-text persuasion technique label")
    sub_scores: RawSubScoresV1 = Field(
        default_factory=RawSubScoresV1,
        validation_alias=AliasChoices("sub_scores", "subScores"),
    )
    psychological_driver: str = Field(
        default="",
        validation_alias=AliasChoices("psychological_driver", "psychologicalDriver"),
    )
    risk_factor: str = Field(
        default="",
        validation_alias=AliasChoices("risk_factor", "riskFactor"),
    )

    @field_validator("text", "framework", "psychological_driver", "risk_factor", mode="before")
    @classmethod
    def _coerce_required_str(cls, value: Any) -> str:
        return _plain_str(value)

    @field_validator("visual_cue", "overlay_text", mode="before")
    @classmethod
    def _coerce_optional_str(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return _plain_str(value)

    @field_validator("sub_scores", mode="before")
    @classmethod
    def _coerce_sub_scores(cls, value: Any) -> Any:
        if value is None or not isinstance(value, (dict, RawSubScoresV1)):
            return {}
        return value


# ---------------------------------------------------------------------------
# Canonical stages
# ---------------------------------------------------------------------------

class HookSubScoresV1(BaseModel):
    """Sub-scores clamped into their documented [0, cap] ranges."""
    curiosity: float = 0.0
    brevity: float = 0.0
    platform_fit: float = 0.0
    framework: float = 0.0


class HookScoreBreakdownV1(BaseModel):
    """Weighted sub-score contributions (post-weight, pre-clamp)."""
    curiosity: float = 0.0
    brevity: float = 0.0
    platform_fit: float = 0.0
    framework: float = 0.0

    def total(self) -> float:
        return self.curiosity + self.brevity + self.platform_fit + self.framework

    def reasons(self) -> list[str]:
        """Signed contribution per term, e.g. ``["+0.90 curiosity", ...]``."""
        return [
            f"+{self.curiosity:.2f} curiosity",
            f"+{self.brevity:.2f} brevity",
            f"+{self.platform_fit:.2f} platform fit",
            f"+{self.framework:.2f} framework",
        ]


class NormalizedHookCandidateV1(BaseModel):
    source_index: int = Field(..., ge=0, description="Position in the raw input batch")
    text: str
    visual_cue: Optional[str] = None
    overlay_text: Optional[str] = None
    framework: str = ""
    sub_scores: HookSubScoresV1
    psychological_driver: PsychologicalDriver
    risk_factor: RiskFactor
    corrections: list[str] = Field(
        default_factory=list,
        description="Repairs applied while normalizing, e.g. clamped or defaulted fields",
    )


class ScoredHookCandidateV1(NormalizedHookCandidateV1):
    composite_score: float = Field(..., description="Weighted quality score in [0, 5], one decimal")
    score_breakdown: HookScoreBreakdownV1
    deduped_from: int = Field(default=0, ge=0, description="Near-duplicates absorbed by this candidate")
    platform: Optional[HookPlatform] = None
    platform_adjustment: float = Field(
        default=0.0,
        description="Delta applied to the weighted platform_fit term by the platform multiplier",
    )


class RankedHookCandidateV1(ScoredHookCandidateV1):
    rank: int = Field(..., ge=1)
    is_top: bool = False


class HookRankingResultV1(BaseModel):
    platform: HookPlatform
    ranked: list[RankedHookCandidateV1] = Field(default_factory=list)
    input_count: int = 0
    dropped_count: int = 0
    corrected_count: int = 0
    merged_count: int = 0
    driver_distribution: dict[str, int] = Field(default_factory=dict)
    risk_counts: dict[str, int] = Field(default_factory=dict)
    dominant_risk: Optional[RiskFactor] = None
    top_candidate: Optional[RankedHookCandidateV1] = None
    status: Literal["ok", "empty"] = "ok"
