from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from jobboard.config import ScoringConfig
from jobboard.models import CandidateProfile, JobPosting
from .reasons import generate_recommendation_reason
from .scoring import (
    clamp,
    experience_level_score,
    job_type_match_score,
    location_match_score,
    round_half_up,
    skill_match_score,
)
from .types import MatchBreakdown, ScoredJob


def _raw_scores(candidate: CandidateProfile, job: JobPosting) -> Tuple[float, float, float, float]:
    # skill is on [0, 100], the other three on [0, 1]
    return (
        skill_match_score(candidate.skills, job.requirements),
        experience_level_score(candidate.experience, job.experience_level),
        location_match_score(candidate.location, candidate.preferred_job_types, job.location),
        job_type_match_score(candidate.preferred_job_types, job.job_type),
    )


def compute_breakdown(candidate: CandidateProfile, job: JobPosting) -> MatchBreakdown:
    skill, experience, location, job_type = _raw_scores(candidate, job)
    return _to_breakdown(skill, experience, location, job_type)


def _to_breakdown(skill: float, experience: float, location: float, job_type: float) -> MatchBreakdown:
    return MatchBreakdown(
        skill_match=int(clamp(round_half_up(skill), 0, 100)),
        experience_match=int(clamp(round_half_up(experience * 100), 0, 100)),
        location_match=int(clamp(round_half_up(location * 100), 0, 100)),
        job_type_match=int(clamp(round_half_up(job_type * 100), 0, 100)),
    )


def score_job(candidate: CandidateProfile, job: JobPosting, config: Optional[ScoringConfig] = None) -> ScoredJob:
    """
    Pure function of (candidate, job, config): identical inputs always give
    an identical ScoredJob.
    """
    cfg = config or ScoringConfig()
    w = cfg.weights

    skill, experience, location, job_type = _raw_scores(candidate, job)

    # The total uses the unrounded sub-scores; only the breakdown is rounded.
    total = (
            (skill / 100) * w["skills"]
            + experience * w["experience"]
            + location * w["location"]
            + job_type * w["job_type"]
    ) * 100
    total_score = int(clamp(round_half_up(total), 0, 100))

    breakdown = _to_breakdown(skill, experience, location, job_type)

    return ScoredJob(
        job=job,
        total_score=total_score,
        breakdown=breakdown,
        recommendation_reason=generate_recommendation_reason(breakdown, cfg),
    )


def rank_jobs(
        candidate: CandidateProfile,
        jobs: Sequence[JobPosting],
        limit: Optional[int] = None,
        config: Optional[ScoringConfig] = None,
) -> List[ScoredJob]:
    """
    Score every job, drop those under cfg.min_score, sort best first and
    keep the top `limit`. Ties keep their input order (stable sort).
    """
    cfg = config or ScoringConfig()
    top_n = cfg.default_limit if limit is None else max(0, limit)

    scored = [score_job(candidate, j, cfg) for j in jobs]
    scored = [s for s in scored if s.total_score >= cfg.min_score]
    scored.sort(key=lambda x: x.total_score, reverse=True)
    return scored[:top_n]
