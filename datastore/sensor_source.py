"""Read-only access to the sensor snapshot written by the EMS collector."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from models.sensors import COUNTER_SENSORS, CounterSample, SensorValue
from settings import get_settings

logger = logging.getLogger(__name__)

_SCALAR_TYPES = (bool, int, float, str, type(None))


class SensorDataError(RuntimeError):
    """Raised when the sensor snapshot cannot be read or is malformed."""


class JsonSensorSource:
    """Serves current values and daily counter changes from a JSON document.

    The collector rewrites the document in place; it is parsed again whenever
    the file's modification time changes.
    """

    def __init__(self, path: Path, timezone: tzinfo) -> None:
        self.path = path
        self.timezone = timezone
        self._lock = Lock()
        self._mtime_ns: Optional[int] = None
        self._current: Dict[str, SensorValue] = {}
        self._history: List[CounterSample] = []
        self._captured_at: Optional[datetime] = None

    @property
    def captured_at(self) -> Optional[datetime]:
        with self._lock:
            self._refresh()
            return self._captured_at

    def get_current_sensor_values(self) -> Dict[str, SensorValue]:
        with self._lock:
            self._refresh()
            return dict(self._current)

    def snapshot(self) -> Tuple[Dict[str, SensorValue], Optional[datetime]]:
        """Current values together with the time the collector wrote them."""
        with self._lock:
            self._refresh()
            return dict(self._current), self._captured_at

    def get_sensor_changes_for_day(
        self, day_offset: int, now: Optional[datetime] = None
    ) -> Dict[str, float]:
        """Return how much each counter sensor increased on the selected day.

        ``day_offset`` is relative to today: ``0`` is today, ``-1`` yesterday.
        """
        if day_offset > 0:
            raise ValueError("day_offset must not point into the future.")

        reference = now.astimezone(self.timezone) if now else datetime.now(self.timezone)
        day = reference.date() + timedelta(days=day_offset)

        with self._lock:
            self._refresh()
            samples = list(self._history)

        changes = compute_daily_changes(samples, day, self.timezone)
        logger.debug(
            "Computed daily counter changes",
            extra={"day_offset": day_offset, "sample_count": len(samples)},
        )
        return changes

    def _refresh(self) -> None:
        try:
            mtime_ns = self.path.stat().st_mtime_ns
        except OSError as exc:
            raise SensorDataError(f"Sensor data file {str(self.path)!r} is not readable.") from exc

        if mtime_ns == self._mtime_ns:
            return

        try:
            document = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(
                "Failed to parse sensor data", extra={"path": self.path, "reason": str(exc)}
            )
            raise SensorDataError(f"Sensor data file {str(self.path)!r} is not valid JSON.") from exc

        self._current = self._parse_current(document)
        self._history = self._parse_history(document)
        self._captured_at = self._parse_optional_timestamp(document.get("captured_at"))
        self._mtime_ns = mtime_ns
        logger.info(
            "Loaded sensor data",
            extra={"path": self.path, "sample_count": len(self._history)},
        )

    @staticmethod
    def _parse_current(document: Any) -> Dict[str, SensorValue]:
        if not isinstance(document, dict):
            raise SensorDataError("Sensor data must be a JSON object.")
        current = document.get("current", {})
        if not isinstance(current, dict):
            raise SensorDataError("'current' must map sensor names to values.")
        for name, value in current.items():
            if not isinstance(value, _SCALAR_TYPES):
                raise SensorDataError(f"Sensor {name!r} has a non-scalar value.")
        return dict(current)

    def _parse_history(self, document: Dict[str, Any]) -> List[CounterSample]:
        raw_history = document.get("history", [])
        if not isinstance(raw_history, list):
            raise SensorDataError("'history' must be a list of counter samples.")

        samples: List[CounterSample] = []
        for index, entry in enumerate(raw_history):
            if not isinstance(entry, dict) or not isinstance(entry.get("values"), dict):
                raise SensorDataError(f"History entry {index} is malformed.")
            try:
                timestamp = self._parse_timestamp(str(entry.get("timestamp", "")))
            except ValueError as exc:
                raise SensorDataError(f"History entry {index} has an invalid timestamp.") from exc
            values = {
                name: value
                for name, value in entry["values"].items()
                if isinstance(value, (int, float)) and not isinstance(value, bool)
            }
            samples.append(CounterSample(timestamp=timestamp, values=values))

        samples.sort(key=lambda sample: sample.timestamp.timestamp())
        return samples

    def _parse_optional_timestamp(self, value: Any) -> Optional[datetime]:
        if value is None:
            return None
        try:
            return self._parse_timestamp(str(value))
        except ValueError as exc:
            raise SensorDataError("'captured_at' is not a valid timestamp.") from exc

    def _parse_timestamp(self, value: str) -> datetime:
        candidate = value.strip()
        if not candidate:
            raise ValueError("Timestamp is empty.")

        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"

        parsed = datetime.fromisoformat(candidate)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=self.timezone)
        return parsed.astimezone(self.timezone)


def compute_daily_changes(
    samples: List[CounterSample], day: date, zone: tzinfo
) -> Dict[str, float]:
    """Sum the increase of every counter sensor within ``day``.

    The last sample before midnight is the baseline; without one the first
    sample of the day is used. A decreasing counter is treated as a reset to
    zero so the result never goes negative.
    """
    day_start = datetime.combine(day, time.min, tzinfo=zone).astimezone(timezone.utc)
    day_end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=zone).astimezone(timezone.utc)

    changes: Dict[str, float] = {}
    for sensor in sorted(COUNTER_SENSORS, key=lambda item: item.value):
        name = sensor.value
        baseline: Optional[float] = None
        total: float = 0
        previous: Optional[float] = None

        for sample in samples:
            value = sample.values.get(name)
            if value is None:
                continue
            moment = sample.timestamp.astimezone(timezone.utc)
            if moment < day_start:
                baseline = value
                continue
            if moment >= day_end:
                break
            if previous is None:
                previous = baseline if baseline is not None else value
            total += value - previous if value >= previous else value
            previous = value

        changes[name] = total
    return changes


def resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone, falling back to UTC", extra={"reason": name})
        return ZoneInfo("UTC")


@lru_cache
def build_default_source(path: Optional[str] = None) -> JsonSensorSource:
    settings = get_settings()
    data_path = settings.sensor_data_path if path is None else path
    if not data_path:
        raise SensorDataError("No sensor data path configured.")
    return JsonSensorSource(path=Path(data_path), timezone=resolve_timezone(settings.timezone))
