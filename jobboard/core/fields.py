from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

# NOTE: Records reach us from more than one storage shape. Older rows use
# camelCase names, the hosted backend appends "_c" to custom fields.
# Everything that reads a raw record goes through get_field() so the
# fallback order lives in exactly one table.

StringOrList = Union[str, Sequence[Any], None]

# Canonical name -> aliases in priority order.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "id": ("Id", "id"),
    "name": ("name", "name_c", "Name"),
    "email": ("email", "email_c"),
    "title": ("title", "title_c"),
    "company": ("company", "company_c"),
    "description": ("description", "description_c"),
    "skills": ("skills", "skills_c"),
    "experience": ("experience", "experience_c"),
    "location": ("location", "location_c"),
    "preferred_job_types": ("preferredJobTypes", "preferred_job_types_c", "preferred_job_types"),
    "requirements": ("requirements", "requirements_c"),
    "experience_level": ("experienceLevel", "experience_level_c", "experience_level"),
    "job_type": ("jobType", "job_type_c", "job_type"),
    "salary_min": ("salaryMin", "salary_min_c", "salary_min"),
    "salary_max": ("salaryMax", "salary_max_c", "salary_max"),
    "posted_date": ("postedDate", "posted_date_c", "posted_date"),
    "type": ("type", "type_c"),
    "message": ("message", "message_c"),
    "job_id": ("jobId", "job_id_c", "job_id"),
    "application_id": ("applicationId", "application_id_c", "application_id"),
    "is_read": ("isRead", "is_read_c", "is_read"),
    "created_at": ("createdAt", "created_at_c", "created_at", "CreatedOn"),
    "action_url": ("actionUrl", "action_url_c", "action_url"),
    "priority": ("priority", "priority_c"),
}


def get_field(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """
    Return the first non-None value among the aliases of `name`.

    Raises KeyError for names missing from FIELD_ALIASES (a typo in code,
    not bad data).
    """
    aliases = FIELD_ALIASES[name]
    if not isinstance(record, Mapping):
        return default
    for alias in aliases:
        value = record.get(alias)
        if value is not None:
            return value
    return default


def _split(raw: str, sep: str) -> List[str]:
    out: List[str] = []
    for token in raw.split(sep):
        token = token.strip()
        if token:
            out.append(token)
    return out


def _string_items(raw: Sequence[Any]) -> List[str]:
    return [item for item in raw if isinstance(item, str)]


def parse_skills(raw: StringOrList) -> List[str]:
    """
    "React, TypeScript,, AWS" -> ["React", "TypeScript", "AWS"]
    Lists pass through (order and duplicates preserved).
    """
    if isinstance(raw, str):
        return _split(raw, ",")
    if isinstance(raw, (list, tuple)):
        return _string_items(raw)
    return []


def parse_job_types(raw: StringOrList) -> List[str]:
    return parse_skills(raw)


def parse_requirements(raw: StringOrList) -> List[str]:
    """One requirement per line when stored as text."""
    if isinstance(raw, str):
        return _split(raw, "\n")
    if isinstance(raw, (list, tuple)):
        return _string_items(raw)
    return []


def parse_experience(raw: StringOrList) -> List[Any]:
    """
    Position records are kept as-is (only their count is scored).
    Free text counts one entry per non-empty line.
    """
    if isinstance(raw, str):
        return _split(raw, "\n")
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return []


def parse_text(raw: Any) -> str:
    if isinstance(raw, str):
        return raw.strip()
    return ""


def parse_optional_text(raw: Any) -> Optional[str]:
    text = parse_text(raw)
    return text or None
