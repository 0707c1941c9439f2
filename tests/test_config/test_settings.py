"""Tests for environment-driven settings."""

from config.settings import Settings


def test_defaults(monkeypatch):
    for var in ("REDIS_URL", "CREDIT_KEY_PREFIX", "LOG_LEVEL", "JSON_LOGS"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.redis_url == "redis://localhost:6379/0"
    assert s.credit_key_prefix == "credit:balance"
    assert s.json_logs is False


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://cache:6380/2")
    monkeypatch.setenv("CREDIT_KEY_PREFIX", "svc:credits")
    monkeypatch.setenv("JSON_LOGS", "true")
    s = Settings(_env_file=None)
    assert s.redis_url == "redis://cache:6380/2"
    assert s.credit_key_prefix == "svc:credits"
    assert s.json_logs is True
