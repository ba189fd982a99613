from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from jobboard.models import JobPosting


@dataclass(frozen=True)
class MatchBreakdown:
    # All four are display integers in [0, 100]
    skill_match: int
    experience_match: int
    location_match: int
    job_type_match: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "skill_match": self.skill_match,
            "experience_match": self.experience_match,
            "location_match": self.location_match,
            "job_type_match": self.job_type_match,
        }


@dataclass(frozen=True)
class ScoredJob:
    job: JobPosting
    total_score: int
    breakdown: MatchBreakdown
    recommendation_reason: str

    def to_dict(self) -> Dict[str, Any]:
        d = self.job.to_dict()
        d["match_score"] = self.total_score
        d["match_breakdown"] = self.breakdown.to_dict()
        d["recommendation_reason"] = self.recommendation_reason
        return d
