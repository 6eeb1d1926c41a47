from __future__ import annotations

import pytest

from capsync.infra.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_TICK_INTERVAL,
    build_app_config,
    normalize_log_level,
)


def test_build_app_config_defaults(monkeypatch) -> None:
    monkeypatch.delenv("CAPSYNC_TICK_INTERVAL", raising=False)
    monkeypatch.delenv("CAPSYNC_LOG_LEVEL", raising=False)
    config = build_app_config()
    assert config.tick_interval == pytest.approx(DEFAULT_TICK_INTERVAL)
    assert config.duration == 0.0
    assert config.log_level == DEFAULT_LOG_LEVEL


def test_environment_is_used_when_no_explicit_value(monkeypatch) -> None:
    monkeypatch.setenv("CAPSYNC_TICK_INTERVAL", "0.25")
    monkeypatch.setenv("CAPSYNC_LOG_LEVEL", "debug")
    config = build_app_config()
    assert config.tick_interval == pytest.approx(0.25)
    assert config.log_level == "DEBUG"


def test_explicit_value_wins_over_environment(monkeypatch) -> None:
    monkeypatch.setenv("CAPSYNC_TICK_INTERVAL", "0.25")
    config = build_app_config(tick_interval=1.0)
    assert config.tick_interval == pytest.approx(1.0)


@pytest.mark.parametrize("interval", [0, -1, "soon"])
def test_rejects_invalid_tick_interval(interval: object) -> None:
    with pytest.raises(ValueError, match="Tick interval"):
        build_app_config(tick_interval=interval)  # type: ignore[arg-type]


def test_rejects_negative_duration() -> None:
    with pytest.raises(ValueError, match="Duration"):
        build_app_config(duration=-5)


def test_log_level_validation() -> None:
    assert normalize_log_level(" info ") == "INFO"
    with pytest.raises(ValueError, match="Unsupported log level"):
        normalize_log_level("loud")


def test_configure_logging_sets_package_level(monkeypatch) -> None:
    import logging

    from capsync.infra.logging_setup import configure_logging

    monkeypatch.delenv("CAPSYNC_LOG_LEVEL", raising=False)
    logger = logging.getLogger("capsync")
    previous = logger.level
    try:
        configure_logging(build_app_config(log_level="info"))
        assert logger.level == logging.INFO
        configure_logging(build_app_config(), verbose=True)
        assert logger.level == logging.DEBUG
    finally:
        logger.setLevel(previous)
