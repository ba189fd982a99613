from __future__ import annotations

import argparse
import asyncio
import inspect
import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from jobboard import config
from jobboard.config import ScoringConfig
from jobboard.matching.engine import rank_jobs
from jobboard.matching.types import ScoredJob
from jobboard.models import CandidateProfile, JobPosting, NotificationType, utc_now
from jobboard.notifications import JsonNotificationRepository, NotificationSink, was_recently_notified
from jobboard.sources import CandidateSource, DataSourceError, JobSource, JsonCandidateSource, JsonJobSource
from jobboard.tracking import JsonSavedJobRepository


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def is_profile_complete(profile: Optional[CandidateProfile]) -> bool:
    """
    Skills plus at least one other signal (experience, preferred job types
    or a location) are needed for useful recommendations.
    """
    if profile is None:
        return False
    has_skills = len(profile.skills) > 0
    has_experience = len(profile.experience) > 0
    has_preferences = len(profile.preferred_job_types) > 0
    has_location = bool((profile.location or "").strip())
    return has_skills and (has_experience or has_preferences or has_location)


class RecommendationService:
    """
    Ranks the job pool against the current candidate and raises job-match
    notifications for the strongest results.

    Collaborators may be sync or async; every call is awaited when needed.

    Notifications are at-least-once: the 24h dedup check and the create are
    not atomic, so two concurrent calls can both notify for the same job.
    """

    def __init__(
            self,
            candidates: CandidateSource,
            jobs: JobSource,
            notifications: Optional[NotificationSink] = None,
            scoring: Optional[ScoringConfig] = None,
            clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.candidates = candidates
        self.jobs = jobs
        self.notifications = notifications
        self.scoring = scoring or ScoringConfig()
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__name__)

    async def fetch_inputs(self) -> Tuple[Optional[CandidateProfile], List[JobPosting]]:
        """
        Read the candidate and the job pool concurrently and normalize them.
        Read errors propagate; get_recommendations() is the guarded entry.
        """
        raw_candidate, raw_jobs = await asyncio.gather(
            _resolve(self.candidates.get_profile()),
            _resolve(self.jobs.get_all_jobs()),
        )
        return self._as_candidate(raw_candidate), self._as_jobs(raw_jobs)

    def _as_candidate(self, raw: Any) -> Optional[CandidateProfile]:
        if raw is None or isinstance(raw, CandidateProfile):
            return raw
        if isinstance(raw, Mapping):
            return CandidateProfile.from_record(raw)
        self.logger.warning("Ignoring candidate profile of type %s", type(raw).__name__)
        return None

    def _as_jobs(self, raw: Any) -> List[JobPosting]:
        if raw is None:
            return []
        if isinstance(raw, (str, bytes, Mapping)) or not isinstance(raw, Iterable):
            self.logger.warning("Ignoring job pool of type %s", type(raw).__name__)
            return []

        jobs: List[JobPosting] = []
        for idx, item in enumerate(raw):
            if isinstance(item, JobPosting):
                jobs.append(item)
            elif isinstance(item, Mapping):
                jobs.append(JobPosting.from_record(item))
            else:
                self.logger.warning("Skipping job #%d: unexpected type %s", idx, type(item).__name__)
        return jobs

    async def get_recommendations(self, limit: Optional[int] = None) -> List[ScoredJob]:
        try:
            candidate, jobs = await self.fetch_inputs()
        except Exception:
            self.logger.exception("Error generating recommendations: data read failed")
            return []

        return await self.recommend(candidate, jobs, limit=limit)

    async def recommend(
            self,
            candidate: Optional[CandidateProfile],
            jobs: List[JobPosting],
            limit: Optional[int] = None,
    ) -> List[ScoredJob]:
        """Score already-fetched inputs, then run the notification step."""
        if candidate is None:
            return []

        try:
            recommendations = rank_jobs(candidate, jobs, limit=limit, config=self.scoring)
        except Exception:
            self.logger.exception("Error generating recommendations: scoring failed")
            return []

        if self.notifications is not None:
            await self._notify_high_matches(recommendations)

        return recommendations

    async def _notify_high_matches(self, recommendations: List[ScoredJob]) -> None:
        high = [r for r in recommendations if r.total_score >= self.scoring.notify_score]
        if not high:
            return

        try:
            existing = await _resolve(
                self.notifications.get_notifications_by_type(NotificationType.JOB_MATCH.value)
            )
        except Exception:
            self.logger.exception("Could not load job match notifications, skipping notify step")
            return

        existing = list(existing or [])
        now = self.clock()
        window = timedelta(hours=self.scoring.dedup_window_hours)

        for rec in high:
            job = rec.job
            try:
                if was_recently_notified(existing, job.job_id, now=now, window=window):
                    self.logger.debug("Job %s already notified within %sh", job.job_id, self.scoring.dedup_window_hours)
                    continue
                await _resolve(
                    self.notifications.create_job_match_notification(
                        job.job_id, job.title, job.company, rec.total_score
                    )
                )
                self.logger.info("Job match notification for job %s (score %d)", job.job_id, rec.total_score)
            except Exception:
                self.logger.exception("Failed to create job match notification for job %s", job.job_id)

    async def is_profile_complete_for_recommendations(self) -> bool:
        try:
            candidate = self._as_candidate(await _resolve(self.candidates.get_profile()))
        except Exception:
            self.logger.exception("Could not load candidate profile")
            return False
        return is_profile_complete(candidate)


# --- Command line ---

def print_human_summary(recommendations: List[ScoredJob]) -> None:
    print("\n=== Recommended Jobs ===")
    if not recommendations:
        print("No matching jobs right now.")
        return

    for idx, rec in enumerate(recommendations, start=1):
        j = rec.job
        loc = f" — {j.location}" if j.location else ""
        kind = f" [{j.job_type}]" if j.job_type else ""
        print(f"\n{idx}) {j.title} @ {j.company}{loc}{kind}")
        print(f"   match: {rec.total_score}%")
        b = rec.breakdown
        print(
            f"   skills {b.skill_match} | experience {b.experience_match}"
            f" | location {b.location_match} | job type {b.job_type_match}"
        )
        print(f"   why: {rec.recommendation_reason}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="jobboard", description="Job recommendations for the current candidate")
    parser.add_argument("--data-dir", type=str, default="", help="Directory holding candidates.json, jobs.json and local state")
    parser.add_argument("--candidates", type=str, default="", help="Path to candidates.json (default: <data-dir>/candidates.json)")
    parser.add_argument("--jobs", type=str, default="", help="Path to jobs.json (default: <data-dir>/jobs.json)")
    parser.add_argument("--log-level", type=str, default=config.JOBBOARD_LOG_LEVEL, help="Logging level (DEBUG, INFO, WARNING, ...)")

    sub = parser.add_subparsers(dest="command")
    # Bare `jobboard` behaves like `jobboard recommend`
    parser.set_defaults(command="recommend", limit=None, json=False, no_notify=False)

    rec = sub.add_parser("recommend", help="Rank jobs against the candidate profile")
    rec.add_argument("--limit", type=int, default=None, help="How many recommendations to return")
    rec.add_argument("--json", action="store_true", help="Print JSON only (machine-readable)")
    rec.add_argument("--no-notify", action="store_true", help="Do not create job match notifications")

    sub.add_parser("check-profile", help="Is the profile complete enough for recommendations?")
    sub.add_parser("saved", help="List saved job ids")

    save = sub.add_parser("save", help="Save a job")
    save.add_argument("job_id")
    unsave = sub.add_parser("unsave", help="Remove a saved job")
    unsave.add_argument("job_id")

    notes = sub.add_parser("notifications", help="List notifications, newest first")
    notes.add_argument("--type", type=str, default="", help="Only this notification type (e.g. job_match)")
    notes.add_argument("--json", action="store_true", help="Print JSON only")

    return parser


def _parse_job_id(raw: str) -> Any:
    return int(raw) if raw.isdigit() else raw


async def _recommend_once(service: RecommendationService, limit: Optional[int]) -> List[ScoredJob]:
    candidate, jobs = await service.fetch_inputs()
    return await service.recommend(candidate, jobs, limit=limit)


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    data_dir = Path(args.data_dir) if args.data_dir else config.default_data_dir()
    candidates_path = Path(args.candidates) if args.candidates else data_dir / "candidates.json"
    jobs_path = Path(args.jobs) if args.jobs else data_dir / "jobs.json"
    command = args.command

    if command in ("saved", "save", "unsave"):
        saved = JsonSavedJobRepository(data_dir)
        ok = True
        if command == "save":
            ok = saved.save(_parse_job_id(args.job_id))
        elif command == "unsave":
            ok = saved.unsave(_parse_job_id(args.job_id))
        if not ok:
            print(f"\n[jobboard] Could not update {saved.path}\n", file=sys.stderr)
            raise SystemExit(1)
        for job_id in saved.get_all():
            print(job_id)
        return

    if command == "notifications":
        inbox = JsonNotificationRepository(data_dir)
        items = inbox.get_notifications_by_type(args.type) if args.type else inbox.get_all()
        if args.json:
            print(json.dumps([n.to_dict() for n in items], indent=2))
            return
        for n in items:
            flag = " " if n.is_read else "*"
            when = f"{n.created_at:%Y-%m-%d %H:%M}" if n.created_at else "unknown date"
            print(f"{flag} [{when}] ({n.priority}) {n.title}: {n.message}")
        return

    candidate_source = JsonCandidateSource(candidates_path)

    if command == "check-profile":
        try:
            profile = candidate_source.get_profile()
        except DataSourceError as exc:
            print(f"\n[jobboard] {exc}\n", file=sys.stderr)
            raise SystemExit(2)
        if is_profile_complete(profile):
            print("Profile is complete enough for recommendations.")
        else:
            print("Add skills plus experience, preferred job types or a location to get recommendations.")
            raise SystemExit(1)
        return

    service = RecommendationService(
        candidates=candidate_source,
        jobs=JsonJobSource(jobs_path),
        notifications=None if args.no_notify else JsonNotificationRepository(data_dir),
        scoring=config.load_scoring_config(),
    )

    # One read of each file; broken input files exit with 2 instead of an empty list.
    try:
        recommendations = asyncio.run(_recommend_once(service, args.limit))
    except DataSourceError as exc:
        print(f"\n[jobboard] {exc}\n", file=sys.stderr)
        raise SystemExit(2)

    if args.json:
        print(json.dumps([r.to_dict() for r in recommendations], indent=2))
    else:
        print_human_summary(recommendations)


if __name__ == "__main__":
    main()
