from __future__ import annotations

import math
from typing import Any, List, Optional, Sequence

from jobboard.core.fields import parse_experience
from jobboard.models import ExperienceLevel


def clamp(x: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return lo if x < lo else (hi if x > hi else x)


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; 72.5 must become 73 here.
    return int(math.floor(x + 0.5))


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _strings(values: Any) -> List[str]:
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        return []
    return [v for v in values if isinstance(v, str)]


def skill_match_score(skills: Sequence[str], requirements: Sequence[str]) -> float:
    """
    Substring heuristic, scored in [0, 100].

    A (requirement, skill) pair matches when the requirement contains the
    skill ("3+ years of React" / "react") or the skill contains the first
    word of the requirement ("react native" / "React or Vue").

    One requirement may match several skills, so the raw ratio can exceed
    1.0; it is clamped, not normalized. Non-string items are ignored.
    """
    skills = _strings(skills)
    requirements = _strings(requirements)
    if not skills or not requirements:
        return 0.0

    skills_lower = [s.lower() for s in skills]
    matches = 0

    for requirement in requirements:
        req_lower = requirement.lower()
        words = req_lower.split()
        first_word = words[0] if words else ""
        for skill in skills_lower:
            if skill in req_lower or first_word in skill:
                matches += 1

    return min(100.0, (matches / len(requirements)) * 100.0)


def experience_level_score(experience: Any, experience_level: Optional[str]) -> float:
    """
    The number of experience entries stands in for years of experience.
    Returns 0.5 (neutral) when there is nothing to count.
    """
    years = len(parse_experience(experience))
    if years == 0:
        return 0.5

    level = _text(experience_level).strip().lower()
    if level == ExperienceLevel.ENTRY.value:
        return 1.0 if years <= 2 else 0.7
    if level == ExperienceLevel.MID.value:
        return 1.0 if 2 <= years <= 5 else 0.6
    if level == ExperienceLevel.SENIOR.value:
        return 1.0 if years >= 4 else 0.4
    return 0.8


def location_match_score(
        candidate_location: Optional[str],
        preferred_job_types: Sequence[str],
        job_location: Optional[str],
) -> float:
    """
    Preferred job types double as the remote signal: a candidate listing
    "remote" matches any job whose location mentions remote.
    - nothing to compare => 0.5
    - remote on both sides or same city => 1.0
    - otherwise => 0.3
    """
    location = _text(candidate_location).strip()
    preferences = [p.strip().lower() for p in _strings(preferred_job_types)]

    if not location and not preferences:
        return 0.5

    job_loc = _text(job_location).lower()

    if "remote" in preferences and "remote" in job_loc:
        return 1.0

    if location:
        city = location.lower().split(",")[0].strip()
        if city in job_loc:
            return 1.0

    return 0.3


def job_type_match_score(preferred_job_types: Sequence[str], job_type: Optional[str]) -> float:
    preferences = {p.strip().lower() for p in _strings(preferred_job_types)}
    if not preferences:
        return 0.7

    wanted = _text(job_type).strip().lower()
    return 1.0 if wanted and wanted in preferences else 0.5
