from .engine import compute_breakdown, rank_jobs, score_job
from .reasons import generate_recommendation_reason
from .types import ScoredJob, MatchBreakdown

__all__ = [
    "compute_breakdown",
    "rank_jobs",
    "score_job",
    "generate_recommendation_reason",
    "ScoredJob",
    "MatchBreakdown",
]
