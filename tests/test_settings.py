"""Configuration settings behaviour tests."""

from __future__ import annotations

import pytest

from streamcatalog.config import Settings


def test_default_limits() -> None:
    """Defaults should mirror the documented recommendation caps."""

    settings = Settings(_env_file=None)

    assert settings.recommendation_limit == 5
    assert settings.genre_recommendation_limit == 5
    assert settings.filtered_recommendation_limit == 10
    assert settings.top_watched_limit == 10
    assert settings.log_level == "INFO"


def test_limits_read_from_aliases() -> None:
    """Limits can be overridden through their environment names."""

    settings = Settings(_env_file=None, RECOMMENDATION_LIMIT=3, TOP_WATCHED_LIMIT=2)

    assert settings.recommendation_limit == 3
    assert settings.top_watched_limit == 2


def test_limits_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FILTERED_RECOMMENDATION_LIMIT", "7")

    settings = Settings(_env_file=None)

    assert settings.filtered_recommendation_limit == 7


def test_log_level_is_case_insensitive() -> None:
    settings = Settings(_env_file=None, LOG_LEVEL="debug")

    assert settings.log_level == "DEBUG"


def test_invalid_log_level_raises() -> None:
    with pytest.raises(ValueError, match="LOG_LEVEL must be a standard logging level"):
        Settings(_env_file=None, LOG_LEVEL="chatty")


def test_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, RECOMMENDATION_LIMIT=0)


def test_configure_logging_applies_level(monkeypatch: pytest.MonkeyPatch) -> None:
    import logging

    from streamcatalog.config import configure_logging

    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(Settings(_env_file=None, LOG_LEVEL="warning"))

    assert calls == [{"level": logging.WARNING}]
