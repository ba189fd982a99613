from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from jobboard.io.json_store import ensure_dir, read_json, write_json
from jobboard.models import (
    JobId,
    Notification,
    NotificationPriority,
    NotificationType,
    utc_now,
)


class NotificationNotFoundError(KeyError):
    pass


class NotificationSink(Protocol):
    """
    What the recommendation orchestrator needs from a notification backend.
    Implementations may be sync or async.
    """

    def create_job_match_notification(
            self, job_id: JobId, job_title: str, company_name: str, match_score: int
    ) -> Any:
        ...

    def get_notifications_by_type(self, notification_type: str) -> Any:
        ...


# --- Job match content ---

def job_match_level(match_score: int) -> str:
    if match_score >= 90:
        return "Perfect"
    if match_score >= 80:
        return "Great"
    return "Good"


def job_match_priority(match_score: int) -> str:
    return NotificationPriority.HIGH.value if match_score >= 90 else NotificationPriority.MEDIUM.value


def job_match_message(job_title: str, company_name: str, match_score: int) -> str:
    return f"New opportunity: {job_title} at {company_name} matches {match_score}% of your criteria."


# --- Application status content ---

STATUS_MESSAGES: Dict[str, str] = {
    "applied": "Your application for {title} at {company} has been submitted successfully.",
    "under-review": "Great news! Your application for {title} at {company} is now under review by the hiring team.",
    "interview": "Your application for {title} at {company} has been moved to Interview stage.",
    "accepted": "Congratulations! Your application for {title} at {company} has been accepted. The team will contact you soon.",
    "rejected": "Unfortunately, your application for {title} at {company} was not selected. Keep exploring other opportunities!",
}

STATUS_PRIORITIES: Dict[str, str] = {
    "accepted": NotificationPriority.HIGH.value,
    "interview": NotificationPriority.HIGH.value,
    "under-review": NotificationPriority.MEDIUM.value,
    "applied": NotificationPriority.MEDIUM.value,
    "rejected": NotificationPriority.LOW.value,
}


def status_change_message(status: str, job_title: str, company_name: str) -> str:
    template = STATUS_MESSAGES.get(status)
    if template is None:
        return f"Your application status has been updated to {status}."
    return template.format(title=job_title, company=company_name)


# --- Dedup window ---

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

NotificationLike = Union[Notification, Mapping[str, Any]]


def _as_notification(item: NotificationLike) -> Notification:
    if isinstance(item, Notification):
        return item
    return Notification.from_record(item)


def was_recently_notified(
        notifications: Iterable[NotificationLike],
        job_id: JobId,
        *,
        now: datetime,
        window: timedelta,
) -> bool:
    """
    True when any of `notifications` concerns `job_id` and was created less
    than `window` before `now`. Ids compare as strings (1 == "1").
    Notifications without a timestamp never count as recent.
    """
    target = str(job_id)
    for item in notifications:
        n = _as_notification(item)
        if n.job_id is None or str(n.job_id) != target:
            continue
        if n.created_at is None:
            continue
        if now - n.created_at < window:
            return True
    return False


class JsonNotificationRepository:
    """
    Local notification inbox backed by a single JSON file.

    Layout:
      <base_dir>/
        notifications.json -> [ {Notification.to_dict()...}, ... ]  newest first
    """

    def __init__(self, base_dir: Path, clock: Callable[[], datetime] = utc_now) -> None:
        self.base_dir = base_dir
        self.path = base_dir / "notifications.json"
        self.clock = clock
        self.logger = logging.getLogger(self.__class__.__name__)
        ensure_dir(self.base_dir)

    def _load(self) -> List[Notification]:
        data = read_json(self.path, default=[])
        return [Notification.from_record(record) for record in data]

    def _write(self, notifications: List[Notification]) -> None:
        write_json(self.path, [n.to_dict() for n in notifications])

    @staticmethod
    def _newest_first(notifications: List[Notification]) -> List[Notification]:
        return sorted(notifications, key=lambda n: n.created_at or _EPOCH, reverse=True)

    def get_all(self) -> List[Notification]:
        return self._newest_first(self._load())

    def get_notifications_by_type(self, notification_type: str) -> List[Notification]:
        return [n for n in self.get_all() if n.type == notification_type]

    def get_unread_count(self) -> int:
        return sum(1 for n in self._load() if not n.is_read)

    def get_recent(self, limit: int = 5) -> List[Notification]:
        return self.get_all()[:limit]

    def create(
            self,
            *,
            title: str,
            message: str,
            type: str = NotificationType.GENERAL.value,
            job_id: Optional[JobId] = None,
            application_id: Optional[JobId] = None,
            action_url: str = "/",
            priority: str = NotificationPriority.MEDIUM.value,
    ) -> Notification:
        notifications = self._load()
        next_id = max((n.notification_id for n in notifications), default=0) + 1
        created = Notification(
            notification_id=next_id,
            type=type,
            title=title,
            message=message,
            created_at=self.clock(),
            job_id=job_id,
            application_id=application_id,
            action_url=action_url,
            priority=priority,
        )
        notifications.insert(0, created)
        self._write(notifications)
        self.logger.debug("Created %s notification #%s", type, next_id)
        return created

    def create_job_match_notification(
            self, job_id: JobId, job_title: str, company_name: str, match_score: int
    ) -> Notification:
        return self.create(
            type=NotificationType.JOB_MATCH.value,
            title=f"{job_match_level(match_score)} Match Available",
            message=job_match_message(job_title, company_name, match_score),
            job_id=job_id,
            action_url=f"/job/{job_id}",
            priority=job_match_priority(match_score),
        )

    def create_status_change_notification(
            self,
            application_id: JobId,
            job_id: JobId,
            status: str,
            job_title: str,
            company_name: str,
    ) -> Notification:
        return self.create(
            type=NotificationType.STATUS_CHANGE.value,
            title="Application Status Updated",
            message=status_change_message(status, job_title, company_name),
            application_id=application_id,
            job_id=job_id,
            action_url="/applications",
            priority=STATUS_PRIORITIES.get(status, NotificationPriority.MEDIUM.value),
        )

    def _index_of(self, notifications: List[Notification], notification_id: int) -> int:
        for idx, n in enumerate(notifications):
            if n.notification_id == int(notification_id):
                return idx
        raise NotificationNotFoundError(f"Notification not found: {notification_id}")

    def mark_as_read(self, notification_id: int) -> Notification:
        notifications = self._load()
        idx = self._index_of(notifications, notification_id)
        notifications[idx] = replace(notifications[idx], is_read=True)
        self._write(notifications)
        return notifications[idx]

    def mark_all_as_read(self) -> int:
        notifications = [replace(n, is_read=True) for n in self._load()]
        self._write(notifications)
        return len(notifications)

    def delete(self, notification_id: int) -> Notification:
        notifications = self._load()
        idx = self._index_of(notifications, notification_id)
        deleted = notifications.pop(idx)
        self._write(notifications)
        return deleted

    def clear_all(self) -> int:
        count = len(self._load())
        self._write([])
        return count
