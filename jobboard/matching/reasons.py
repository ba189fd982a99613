from __future__ import annotations

from typing import List, Optional

from jobboard.config import ScoringConfig
from .types import MatchBreakdown


def generate_recommendation_reason(breakdown: MatchBreakdown, config: Optional[ScoringConfig] = None) -> str:
    """
    Human-readable summary of why a job was recommended.

    Every qualifying clause is included, always in this order:
    skills, experience, location, job type. Never returns an empty string.
    """
    cfg = config or ScoringConfig()
    reasons: List[str] = []

    if breakdown.skill_match >= cfg.reason_skill_threshold:
        reasons.append(f"{breakdown.skill_match}% skill match")
    if breakdown.experience_match >= cfg.reason_fit_threshold:
        reasons.append("experience level fit")
    if breakdown.location_match >= cfg.reason_fit_threshold:
        reasons.append("location preference match")
    if breakdown.job_type_match >= cfg.reason_fit_threshold:
        reasons.append("job type preference")

    if not reasons:
        if breakdown.skill_match >= cfg.reason_partial_skill_threshold:
            reasons.append("partial skill match")
        else:
            reasons.append("career growth opportunity")

    return ", ".join(reasons)
