from pathlib import Path

import pytest

from jobboard.sources import DataSourceError, JsonCandidateSource, JsonJobSource


def test_candidate_source_returns_first_record(fixtures_dir: Path):
    profile = JsonCandidateSource(fixtures_dir / "candidates.json").get_profile()
    assert profile is not None
    assert profile.candidate_id == 1


def test_candidate_source_accepts_single_object(tmp_path: Path):
    path = tmp_path / "candidate.json"
    path.write_text('{"Id": 9, "skills": "Go, Rust"}', encoding="utf-8")
    profile = JsonCandidateSource(path).get_profile()
    assert profile.skills == ["Go", "Rust"]


def test_candidate_source_missing_or_empty_is_no_profile(tmp_path: Path):
    assert JsonCandidateSource(tmp_path / "nope.json").get_profile() is None
    (tmp_path / "empty.json").write_text("[]", encoding="utf-8")
    assert JsonCandidateSource(tmp_path / "empty.json").get_profile() is None


def test_job_source_skips_non_objects(fixtures_dir: Path, caplog):
    jobs = JsonJobSource(fixtures_dir / "jobs.json").get_all_jobs()
    assert [j.job_id for j in jobs] == [1, 2, 3]
    assert "Skipping job #3" in caplog.text


def test_job_source_missing_file_is_empty(tmp_path: Path):
    assert JsonJobSource(tmp_path / "jobs.json").get_all_jobs() == []


def test_malformed_files_raise_data_source_error(tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text("[{", encoding="utf-8")
    with pytest.raises(DataSourceError):
        JsonJobSource(bad).get_all_jobs()
    with pytest.raises(DataSourceError):
        JsonCandidateSource(bad).get_profile()


def test_wrong_shapes_raise_data_source_error(tmp_path: Path):
    path = tmp_path / "shape.json"
    path.write_text('{"jobs": []}', encoding="utf-8")
    with pytest.raises(DataSourceError):
        JsonJobSource(path).get_all_jobs()
    path.write_text('"just a string"', encoding="utf-8")
    with pytest.raises(DataSourceError):
        JsonCandidateSource(path).get_profile()
