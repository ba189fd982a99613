import pytest

from jobboard.core.fields import (
    FIELD_ALIASES,
    get_field,
    parse_experience,
    parse_job_types,
    parse_requirements,
    parse_skills,
    parse_text,
)


def test_parse_skills_splits_trims_and_drops_empty_tokens():
    assert parse_skills(" React, TypeScript,, AWS ,") == ["React", "TypeScript", "AWS"]


def test_parse_skills_keeps_order_and_duplicates():
    assert parse_skills("Go, go, Go") == ["Go", "go", "Go"]
    assert parse_skills(["b", "a", "b"]) == ["b", "a", "b"]


@pytest.mark.parametrize("raw", [None, 42, 3.5, {"skills": "x"}, True])
def test_parsers_degrade_to_empty_list(raw):
    assert parse_skills(raw) == []
    assert parse_job_types(raw) == []
    assert parse_requirements(raw) == []
    assert parse_experience(raw) == []


def test_parse_skills_drops_non_string_items_from_lists():
    assert parse_skills(["Python", None, 3, "SQL"]) == ["Python", "SQL"]


def test_parse_job_types_uses_comma_rule():
    assert parse_job_types("full-time, remote") == ["full-time", "remote"]


def test_parse_requirements_splits_on_newlines_not_commas():
    raw = "Python, SQL\n\n  AWS Glue  \nSpark\n"
    assert parse_requirements(raw) == ["Python, SQL", "AWS Glue", "Spark"]


def test_parse_experience_keeps_records_and_counts_text_lines():
    records = [{"title": "Dev"}, {"title": "Lead"}]
    assert parse_experience(records) == records
    assert parse_experience("Dev at A\n\nLead at B\n") == ["Dev at A", "Lead at B"]


def test_parse_text():
    assert parse_text("  Austin, TX ") == "Austin, TX"
    assert parse_text(None) == ""
    assert parse_text(12) == ""


def test_get_field_prefers_first_alias():
    record = {"preferredJobTypes": ["remote"], "preferred_job_types_c": "contract"}
    assert get_field(record, "preferred_job_types") == ["remote"]


def test_get_field_falls_back_past_none_values():
    record = {"skills": None, "skills_c": "Python"}
    assert get_field(record, "skills") == "Python"


def test_get_field_default_when_nothing_defined():
    assert get_field({}, "location", default="") == ""
    assert get_field("not a mapping", "location") is None


def test_get_field_unknown_name_is_a_key_error():
    with pytest.raises(KeyError):
        get_field({}, "does_not_exist")


def test_every_alias_tuple_is_non_empty():
    assert all(aliases for aliases in FIELD_ALIASES.values())
