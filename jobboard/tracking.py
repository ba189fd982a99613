from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Protocol

from jobboard.io.json_store import ensure_dir, read_json, write_json
from jobboard.models import JobId


class SavedJobRepository(Protocol):
    def get_all(self) -> List[JobId]:
        ...

    def save(self, job_id: JobId) -> bool:
        ...

    def unsave(self, job_id: JobId) -> bool:
        ...

    def is_saved(self, job_id: JobId) -> bool:
        ...


class JsonSavedJobRepository:
    """
    The candidate's bookmarked jobs, as a JSON list of job ids.

    Layout:
      <base_dir>/
        saved_jobs.json -> [<job_id>, ...]  in save order

    Unreadable storage is logged and treated as an empty list.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir
        self.path = base_dir / "saved_jobs.json"
        self.logger = logging.getLogger(self.__class__.__name__)
        ensure_dir(self.base_dir)

    def _load(self) -> List[JobId]:
        try:
            data = read_json(self.path, default=[])
        except (OSError, json.JSONDecodeError) as exc:
            self.logger.error("Error loading saved jobs from %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            self.logger.error("Saved jobs file %s is not a list, ignoring it", self.path)
            return []
        return [job_id for job_id in data if isinstance(job_id, (int, str)) and not isinstance(job_id, bool)]

    def _write(self, job_ids: List[JobId]) -> bool:
        try:
            write_json(self.path, job_ids)
        except OSError as exc:
            self.logger.error("Error saving jobs to %s: %s", self.path, exc)
            return False
        return True

    def get_all(self) -> List[JobId]:
        return self._load()

    def save(self, job_id: JobId) -> bool:
        job_ids = self._load()
        if job_id not in job_ids:
            job_ids.append(job_id)
            return self._write(job_ids)
        return True

    def unsave(self, job_id: JobId) -> bool:
        job_ids = [j for j in self._load() if j != job_id]
        return self._write(job_ids)

    def is_saved(self, job_id: JobId) -> bool:
        return job_id in self._load()
