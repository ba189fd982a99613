from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

from jobboard.core.fields import (
    get_field,
    parse_experience,
    parse_job_types,
    parse_optional_text,
    parse_requirements,
    parse_skills,
    parse_text,
)

JobId = Union[int, str]


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    FREELANCE = "freelance"
    INTERNSHIP = "internship"


class NotificationType(str, Enum):
    JOB_MATCH = "job_match"
    STATUS_CHANGE = "status_change"
    GENERAL = "general"


class NotificationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    ISO-8601 string or datetime -> aware UTC datetime. Naive values are
    assumed to be UTC. Anything unparseable -> None.
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def _coerce_id(value: Any) -> Optional[JobId]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, str)):
        return value
    return None


def _coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class CandidateProfile:
    """
    Read-only snapshot of the current job seeker.
    Build it with from_record() so list fields are normalized once.
    """
    candidate_id: Optional[JobId] = None
    skills: List[str] = field(default_factory=list)
    experience: List[Any] = field(default_factory=list)
    location: str = ""
    preferred_job_types: List[str] = field(default_factory=list)

    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "CandidateProfile":
        return cls(
            candidate_id=_coerce_id(get_field(record, "id")),
            skills=parse_skills(get_field(record, "skills")),
            experience=parse_experience(get_field(record, "experience")),
            location=parse_text(get_field(record, "location")),
            preferred_job_types=parse_job_types(get_field(record, "preferred_job_types")),
            name=parse_optional_text(get_field(record, "name")),
            email=parse_optional_text(get_field(record, "email")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JobPosting:
    """
    An open position as the scoring engine sees it.
    experience_level / job_type stay plain strings: values outside the enums
    are legal and score with the "other" defaults.
    """
    job_id: Optional[JobId]
    title: str = ""
    company: str = ""
    requirements: List[str] = field(default_factory=list)
    experience_level: str = ""
    location: str = ""
    job_type: str = ""

    # Display-only fields
    description: str = ""
    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    posted_date: Optional[str] = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "JobPosting":
        return cls(
            job_id=_coerce_id(get_field(record, "id")),
            title=parse_text(get_field(record, "title")),
            company=parse_text(get_field(record, "company")),
            requirements=parse_requirements(get_field(record, "requirements")),
            experience_level=parse_text(get_field(record, "experience_level")).lower(),
            location=parse_text(get_field(record, "location")),
            job_type=parse_text(get_field(record, "job_type")).lower(),
            description=parse_text(get_field(record, "description")),
            salary_min=_coerce_number(get_field(record, "salary_min")),
            salary_max=_coerce_number(get_field(record, "salary_max")),
            posted_date=parse_optional_text(get_field(record, "posted_date")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Notification:
    notification_id: int
    type: str
    title: str
    message: str
    # None when the stored record has no usable timestamp
    created_at: Optional[datetime] = field(default_factory=utc_now)

    job_id: Optional[JobId] = None
    application_id: Optional[JobId] = None
    is_read: bool = False
    action_url: str = "/"
    priority: str = NotificationPriority.MEDIUM.value

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Notification":
        raw_id = get_field(record, "id")
        return cls(
            notification_id=int(raw_id) if isinstance(raw_id, (int, str)) and str(raw_id).isdigit() else 0,
            type=parse_text(get_field(record, "type")) or NotificationType.GENERAL.value,
            title=parse_text(get_field(record, "title")),
            message=parse_text(get_field(record, "message")),
            created_at=parse_timestamp(get_field(record, "created_at")),
            job_id=_coerce_id(get_field(record, "job_id")),
            application_id=_coerce_id(get_field(record, "application_id")),
            is_read=bool(get_field(record, "is_read", False)),
            action_url=parse_text(get_field(record, "action_url")) or "/",
            priority=parse_text(get_field(record, "priority")) or NotificationPriority.MEDIUM.value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Id": self.notification_id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "jobId": self.job_id,
            "applicationId": self.application_id,
            "isRead": self.is_read,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "actionUrl": self.action_url,
            "priority": self.priority,
        }
