from datetime import datetime, timezone

from jobboard.models import CandidateProfile, JobPosting, Notification, parse_timestamp


def test_candidate_from_camel_case_record(load_json):
    profile = CandidateProfile.from_record(load_json("candidates.json")[0])
    assert profile.candidate_id == 1
    assert profile.skills == ["JavaScript", "React", "Node.js", "Python", "AWS"]
    assert len(profile.experience) == 3
    assert profile.location == "San Francisco, CA"
    assert profile.preferred_job_types == ["full-time", "remote"]


def test_candidate_from_suffixed_record(load_json):
    profile = CandidateProfile.from_record(load_json("candidates.json")[1])
    assert profile.name == "Second Candidate"
    assert profile.skills == ["Python", "SQL"]
    assert profile.location == "Austin, TX"
    assert profile.experience == []
    assert profile.preferred_job_types == []


def test_job_from_suffixed_record_normalizes_requirements(load_json):
    job = JobPosting.from_record(load_json("jobs.json")[1])
    assert job.job_id == 2
    assert job.title == "Data Engineer"
    assert job.requirements == ["Python pipelines", "AWS Glue", "Spark"]
    assert job.experience_level == "senior"
    assert job.job_type == "contract"
    assert job.location == "Remote - US"


def test_job_from_empty_record_is_total():
    job = JobPosting.from_record({})
    assert job.job_id is None
    assert job.requirements == []
    assert job.experience_level == ""
    assert job.salary_min is None


def test_job_salary_coercion():
    job = JobPosting.from_record({"Id": "x", "salaryMin": "90000", "salaryMax": 120000})
    assert job.salary_min == 90000.0
    assert job.salary_max == 120000.0


def test_parse_timestamp_handles_z_suffix_and_naive_values():
    assert parse_timestamp("2026-01-05T10:00:00Z") == datetime(2026, 1, 5, 10, tzinfo=timezone.utc)
    assert parse_timestamp("2026-01-05T10:00:00") == datetime(2026, 1, 5, 10, tzinfo=timezone.utc)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None


def test_notification_dict_round_trip_keeps_wire_names():
    n = Notification(
        notification_id=7,
        type="job_match",
        title="Great Match Available",
        message="m",
        created_at=datetime(2026, 1, 5, tzinfo=timezone.utc),
        job_id=3,
    )
    d = n.to_dict()
    assert d["Id"] == 7
    assert d["jobId"] == 3
    assert d["isRead"] is False
    assert Notification.from_record(d) == n


def test_notification_without_timestamp_reads_as_none():
    n = Notification.from_record({"Id": 2, "type": "job_match", "jobId": 1, "createdAt": "not a date"})
    assert n.created_at is None
    assert n.to_dict()["createdAt"] is None
