"""
tests/unit/test_config.py

Environment overrides for the scoring configuration.
"""
import importlib

import pytest

from jobboard.config import DEFAULT_WEIGHTS, ScoringConfig, _parse_weights, load_scoring_config

_ENV_VARS = (
    "JOBBOARD_MIN_SCORE",
    "JOBBOARD_NOTIFY_SCORE",
    "JOBBOARD_DEDUP_WINDOW_HOURS",
    "JOBBOARD_RECOMMENDATION_LIMIT",
    "JOBBOARD_WEIGHTS",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    cfg = load_scoring_config()
    assert cfg.weights == {"skills": 0.40, "experience": 0.25, "location": 0.20, "job_type": 0.15}
    assert cfg.min_score == 30
    assert cfg.notify_score == 85
    assert cfg.dedup_window_hours == 24
    assert cfg.default_limit == 6


def test_env_overrides(clean_env):
    clean_env.setenv("JOBBOARD_MIN_SCORE", "45")
    clean_env.setenv("JOBBOARD_NOTIFY_SCORE", "90")
    clean_env.setenv("JOBBOARD_DEDUP_WINDOW_HOURS", "12.5")
    clean_env.setenv("JOBBOARD_RECOMMENDATION_LIMIT", "10")
    clean_env.setenv("JOBBOARD_WEIGHTS", "skills=0.5, job-type=0.05")

    cfg = load_scoring_config()
    assert cfg.min_score == 45
    assert cfg.notify_score == 90
    assert cfg.dedup_window_hours == 12.5
    assert cfg.default_limit == 10
    assert cfg.weights["skills"] == 0.5
    assert cfg.weights["job_type"] == 0.05
    assert cfg.weights["experience"] == DEFAULT_WEIGHTS["experience"]


@pytest.mark.parametrize("raw", ["", "   ", "abc"])
def test_malformed_numbers_fall_back_to_defaults(clean_env, raw):
    clean_env.setenv("JOBBOARD_MIN_SCORE", raw)
    assert load_scoring_config().min_score == 30


def test_parse_weights_ignores_junk():
    assert _parse_weights(None) == {}
    assert _parse_weights("skills=abc,bogus=1,location,experience = 0.3") == {"experience": 0.3}


def test_scoring_config_rejects_missing_or_negative_weights():
    with pytest.raises(ValueError):
        ScoringConfig(weights={"skills": 1.0})
    with pytest.raises(ValueError):
        ScoringConfig(weights={"skills": -0.1, "experience": 0.5, "location": 0.3, "job_type": 0.3})
    with pytest.raises(ValueError):
        ScoringConfig(default_limit=-1)


def test_data_dir_and_log_level_read_from_env(monkeypatch):
    monkeypatch.setenv("JOBBOARD_DATA_DIR", "/tmp/jobboard-data")
    monkeypatch.setenv("JOBBOARD_LOG_LEVEL", "debug")
    import jobboard.config as cfg
    importlib.reload(cfg)
    try:
        assert str(cfg.default_data_dir()) == "/tmp/jobboard-data"
        assert cfg.JOBBOARD_LOG_LEVEL == "DEBUG"
    finally:
        monkeypatch.delenv("JOBBOARD_DATA_DIR")
        monkeypatch.delenv("JOBBOARD_LOG_LEVEL")
        importlib.reload(cfg)


def test_data_dir_default(monkeypatch):
    monkeypatch.delenv("JOBBOARD_DATA_DIR", raising=False)
    import jobboard.config as cfg
    importlib.reload(cfg)
    assert str(cfg.default_data_dir()) == ".jobboard"
