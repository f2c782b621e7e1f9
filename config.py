"""Hook ranking configuration — scoring tables, dedupe threshold, platform policy.

The pipeline never installs log handlers; ``LOG_LEVEL`` is read by the host
when it calls ``logging.basicConfig``.
"""

import os
from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Sub-score caps
#
# Producer sub-scores are clamped into [0, cap] per field before scoring.
# Curiosity carries double headroom because it stacks several cues.
# ---------------------------------------------------------------------------
HOOK_SUB_SCORE_CAPS: dict[str, float] = {
    "curiosity": 2.0,
    "brevity": 1.0,
    "platform_fit": 1.0,
    "framework": 1.0,
}

# ---------------------------------------------------------------------------
# Composite weights
#
# platform_fit and framework encode platform and persuasion-technique
# correctness, which are harder to fake than raw curiosity/brevity heuristics.
# ---------------------------------------------------------------------------
HOOK_WEIGHT_CURIOSITY = 0.9
HOOK_WEIGHT_BREVITY = 0.9
HOOK_WEIGHT_PLATFORM_FIT = 1.6
HOOK_WEIGHT_FRAMEWORK = 1.6

HOOK_SCORE_WEIGHTS: dict[str, float] = {
    "curiosity": HOOK_WEIGHT_CURIOSITY,
    "brevity": HOOK_WEIGHT_BREVITY,
    "platform_fit": HOOK_WEIGHT_PLATFORM_FIT,
    "framework": HOOK_WEIGHT_FRAMEWORK,
}

HOOK_COMPOSITE_MIN = 0.0
HOOK_COMPOSITE_MAX = 5.0
HOOK_COMPOSITE_DECIMALS = 1

# ---------------------------------------------------------------------------
# Deduplication
# ---------------------------------------------------------------------------
HOOK_DEDUPE_JACCARD_THRESHOLD = float(os.getenv("HOOK_DEDUPE_JACCARD_THRESHOLD", "0.8"))

# ---------------------------------------------------------------------------
# Platforms
#
# Multipliers apply to the weighted platform_fit term only.
# youtube favors proof/authority framing; instagram discounts self-assessed
# platform fit because overlay-heavy formats are harder to self-score.
# ---------------------------------------------------------------------------
HOOK_DEFAULT_PLATFORM = "tiktok"

HOOK_PLATFORM_FIT_MULTIPLIERS: dict[str, float] = {
    "tiktok": 1.0,
    "instagram": 0.95,
    "youtube": 1.05,
}

# Format names the client UI uses for the same surfaces.
HOOK_PLATFORM_ALIASES: dict[str, str] = {
    "reels": "instagram",
    "instagram_reels": "instagram",
    "ig": "instagram",
    "shorts": "youtube",
    "youtube_shorts": "youtube",
    "yt": "youtube",
    "tik_tok": "tiktok",
}

# Ideal spoken word counts, used only when brevity has to be estimated.
HOOK_PLATFORM_IDEAL_WORD_RANGE: dict[str, tuple[int, int]] = {
    "tiktok": (7, 11),
    "instagram": (7, 10),
    "youtube": (6, 10),
}

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
