from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Protocol

from jobboard.io.json_store import read_json
from jobboard.models import CandidateProfile, JobPosting


logger = logging.getLogger(__name__)


class DataSourceError(RuntimeError):
    pass


class CandidateSource(Protocol):
    """Implementations may return the value directly or a coroutine."""

    def get_profile(self) -> Any:
        ...


class JobSource(Protocol):
    def get_all_jobs(self) -> Any:
        ...


def _read_records(path: Path, default: Any) -> Any:
    try:
        return read_json(path, default=default)
    except json.JSONDecodeError as exc:
        raise DataSourceError(f"{path}: invalid JSON ({exc})") from exc
    except OSError as exc:
        raise DataSourceError(f"{path}: {exc}") from exc


class JsonCandidateSource:
    """
    Candidate records from a JSON file (one object or a list of them).
    The first record is the signed-in user.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_profile(self) -> Optional[CandidateProfile]:
        data = _read_records(self.path, default=None)
        if isinstance(data, list):
            data = data[0] if data else None
        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataSourceError(f"{self.path}: expected an object or a list of objects")
        return CandidateProfile.from_record(data)


class JsonJobSource:
    """Job postings from a JSON list."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def get_all_jobs(self) -> List[JobPosting]:
        data = _read_records(self.path, default=[])
        if not isinstance(data, list):
            raise DataSourceError(f"{self.path}: expected a list of job objects")

        jobs: List[JobPosting] = []
        for idx, record in enumerate(data):
            if not isinstance(record, dict):
                logger.warning("Skipping job #%d in %s: not an object", idx, self.path)
                continue
            jobs.append(JobPosting.from_record(record))
        return jobs
