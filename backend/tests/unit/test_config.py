import pytest

from restoreviews.core.config import (
    ConfigurationError,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("testing", TestingConfig),
        ("PRODUCTION", ProductionConfig),
        ("development", DevelopmentConfig),
        ("staging", DevelopmentConfig),
    ],
)
def test_get_config_by_name(name, expected):
    assert get_config(name) is expected


def test_get_config_reads_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    assert get_config() is TestingConfig


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("ON", True), ("0", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("SOME_FLAG", raw)

    assert env_bool("SOME_FLAG") is expected


def test_env_int_rejects_garbage(monkeypatch):
    monkeypatch.setenv("SOME_NUMBER", "twenty")

    with pytest.raises(ConfigurationError):
        env_int("SOME_NUMBER", 5)


def test_env_int_blank_uses_default(monkeypatch):
    monkeypatch.setenv("SOME_NUMBER", " ")

    assert env_int("SOME_NUMBER", 5) == 5
