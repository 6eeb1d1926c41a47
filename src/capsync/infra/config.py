from __future__ import annotations

import math
import os
from dataclasses import dataclass

DEFAULT_TICK_INTERVAL = 0.5
DEFAULT_LOG_LEVEL = "WARNING"
SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
TICK_INTERVAL_ENV = "CAPSYNC_TICK_INTERVAL"
LOG_LEVEL_ENV = "CAPSYNC_LOG_LEVEL"


@dataclass(frozen=True)
class AppConfig:
    tick_interval: float
    duration: float
    log_level: str


def normalize_tick_interval(value: float | str) -> float:
    try:
        interval = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Tick interval must be a number, got '{value}'.") from exc
    if not math.isfinite(interval) or interval <= 0:
        raise ValueError(f"Tick interval must be > 0 seconds, got {value}.")
    return interval


def resolve_tick_interval(custom_value: float | None = None) -> float:
    if custom_value is not None:
        return normalize_tick_interval(custom_value)
    env_value = os.getenv(TICK_INTERVAL_ENV)
    if env_value:
        return normalize_tick_interval(env_value)
    return DEFAULT_TICK_INTERVAL


def normalize_duration(value: float | None) -> float:
    if value is None:
        return 0.0
    duration = float(value)
    if not math.isfinite(duration) or duration < 0:
        raise ValueError(f"Duration must be a non-negative number of seconds, got {value}.")
    return duration


def normalize_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in SUPPORTED_LOG_LEVELS:
        raise ValueError(
            f"Unsupported log level '{value}'. Allowed: {', '.join(sorted(SUPPORTED_LOG_LEVELS))}"
        )
    return level


def resolve_log_level(custom_value: str | None = None) -> str:
    if custom_value is not None:
        return normalize_log_level(custom_value)
    env_value = os.getenv(LOG_LEVEL_ENV)
    if env_value:
        return normalize_log_level(env_value)
    return DEFAULT_LOG_LEVEL


def build_app_config(
    *,
    tick_interval: float | None = None,
    duration: float | None = None,
    log_level: str | None = None,
) -> AppConfig:
    return AppConfig(
        tick_interval=resolve_tick_interval(tick_interval),
        duration=normalize_duration(duration),
        log_level=resolve_log_level(log_level),
    )
