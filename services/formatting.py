"""Locale-aware rendering of timestamps and sensor values."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from functools import lru_cache
from typing import Union

from datastore.sensor_source import resolve_timezone
from models.sensors import SensorValue
from settings import get_settings

WEEKDAYS = (
    "Montag",
    "Dienstag",
    "Mittwoch",
    "Donnerstag",
    "Freitag",
    "Samstag",
    "Sonntag",
)


@dataclass(frozen=True)
class LocaleSettings:
    timezone: tzinfo
    decimal_separator: str = ","


@lru_cache
def set_loc_settings() -> LocaleSettings:
    """Build the locale used for every rendered page from the settings."""
    settings = get_settings()
    return LocaleSettings(
        timezone=resolve_timezone(settings.timezone),
        decimal_separator=settings.decimal_separator,
    )


def format_timestamp(
    epoch: Union[int, float, datetime],
    with_time: bool,
    locale: LocaleSettings | None = None,
) -> str:
    """Format ``epoch`` as ``Montag, 15.01.2024`` with an optional ``, HH:MM:SS``."""
    locale = locale or set_loc_settings()
    if isinstance(epoch, datetime):
        moment = epoch.astimezone(locale.timezone)
    else:
        moment = datetime.fromtimestamp(epoch, tz=locale.timezone)

    text = f"{WEEKDAYS[moment.weekday()]}, {moment:%d.%m.%Y}"
    if with_time:
        text += f", {moment:%H:%M:%S}"
    return text


def format_value(value: SensorValue, decimal_separator: str = ",") -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        # false leaves the cell empty
        return "1" if value else ""
    if isinstance(value, float):
        return format(value, ".14g").replace(".", decimal_separator)
    return str(value)
