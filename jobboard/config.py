# jobboard/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

# --- Scoring weights (must cover every key, sum is not enforced) ---

DEFAULT_WEIGHTS: Dict[str, float] = {
    "skills": 0.40,
    "experience": 0.25,
    "location": 0.20,
    "job_type": 0.15,
}

# --- Recommendation thresholds ---

MIN_RECOMMENDATION_SCORE = 30
JOB_MATCH_NOTIFY_SCORE = 85
NOTIFICATION_DEDUP_WINDOW_HOURS = 24
DEFAULT_RECOMMENDATION_LIMIT = 6

# --- Reason generator thresholds ---

REASON_SKILL_THRESHOLD = 70
REASON_FIT_THRESHOLD = 80
REASON_PARTIAL_SKILL_THRESHOLD = 50


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _parse_weights(raw: str | None) -> Dict[str, float]:
    """
    Parses: "skills=0.5,experience=0.2"
    -> {"skills": 0.5, "experience": 0.2}

    Unknown keys and malformed pairs are ignored; missing keys keep their
    defaults.
    """
    if not raw:
        return {}
    weights: Dict[str, float] = {}
    for part in raw.split(","):
        part = part.strip()
        if not part or "=" not in part:
            continue
        key, value = part.split("=", 1)
        key = key.strip().lower().replace("-", "_")
        if key not in DEFAULT_WEIGHTS:
            continue
        try:
            weights[key] = float(value.strip())
        except ValueError:
            continue
    return weights


@dataclass(frozen=True)
class ScoringConfig:
    """
    Every heuristic constant of the recommendation engine in one place.
    Passed explicitly to the aggregator, the reason generator and the
    orchestrator so tests can override thresholds without patching modules.
    """
    weights: Dict[str, float] = field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    min_score: int = MIN_RECOMMENDATION_SCORE
    notify_score: int = JOB_MATCH_NOTIFY_SCORE
    dedup_window_hours: float = NOTIFICATION_DEDUP_WINDOW_HOURS
    default_limit: int = DEFAULT_RECOMMENDATION_LIMIT
    reason_skill_threshold: int = REASON_SKILL_THRESHOLD
    reason_fit_threshold: int = REASON_FIT_THRESHOLD
    reason_partial_skill_threshold: int = REASON_PARTIAL_SKILL_THRESHOLD

    def __post_init__(self) -> None:
        missing = sorted(set(DEFAULT_WEIGHTS) - set(self.weights))
        if missing:
            raise ValueError(f"ScoringConfig.weights is missing: {', '.join(missing)}")
        negative = sorted(k for k, v in self.weights.items() if v < 0)
        if negative:
            raise ValueError(f"ScoringConfig.weights must be non-negative: {', '.join(negative)}")
        if self.default_limit < 0:
            raise ValueError("ScoringConfig.default_limit must be >= 0")


def load_scoring_config() -> ScoringConfig:
    weights = dict(DEFAULT_WEIGHTS)
    weights.update(_parse_weights(os.getenv("JOBBOARD_WEIGHTS")))
    return ScoringConfig(
        weights=weights,
        min_score=_env_int("JOBBOARD_MIN_SCORE", MIN_RECOMMENDATION_SCORE),
        notify_score=_env_int("JOBBOARD_NOTIFY_SCORE", JOB_MATCH_NOTIFY_SCORE),
        dedup_window_hours=_env_float("JOBBOARD_DEDUP_WINDOW_HOURS", NOTIFICATION_DEDUP_WINDOW_HOURS),
        default_limit=_env_int("JOBBOARD_RECOMMENDATION_LIMIT", DEFAULT_RECOMMENDATION_LIMIT),
    )


# --- Local data directory (file-backed reference data layer) ---

JOBBOARD_DATA_DIR: str = os.environ.get("JOBBOARD_DATA_DIR", "").strip() or ".jobboard"

# --- Logging ---

JOBBOARD_LOG_LEVEL: str = os.environ.get("JOBBOARD_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"


def default_data_dir() -> Path:
    return Path(JOBBOARD_DATA_DIR)
