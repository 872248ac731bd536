from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_DATA_PATH_ENV = "SENSOR_DATA_PATH"
_TIMEZONE_ENV = "DASHBOARD_TIMEZONE"
_REFRESH_ENV = "DASHBOARD_REFRESH_SECONDS"
_DECIMAL_SEPARATOR_ENV = "DASHBOARD_DECIMAL_SEPARATOR"
_HOST_ENV = "DASHBOARD_HOST"
_PORT_ENV = "DASHBOARD_PORT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    sensor_data_path: Optional[str]
    timezone: str
    refresh_seconds: int
    decimal_separator: str
    host: str
    port: int
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_decimal_separator(default: str) -> str:
    value = os.getenv(_DECIMAL_SEPARATOR_ENV)
    if value is None:
        return default
    candidate = value.strip()
    return candidate if candidate in {",", "."} else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        sensor_data_path=_read_optional_env(_DATA_PATH_ENV, "./data/sensors.json"),
        timezone=_read_str_env(_TIMEZONE_ENV, "Europe/Berlin"),
        refresh_seconds=_read_positive_int(_REFRESH_ENV, 30),
        decimal_separator=_read_decimal_separator(","),
        host=_read_str_env(_HOST_ENV, "0.0.0.0"),
        port=_read_positive_int(_PORT_ENV, 8000),
        log_level=_read_log_level("INFO"),
    )
