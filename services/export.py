"""``Name=value`` export polled by the home-automation integration."""

from __future__ import annotations

from typing import List, Tuple

from models.sensors import Sensor, SensorValues, read_sensor
from services.formatting import format_value

LINE_TERMINATOR = "<br>\n"

# (exported name, sensor, rendered as OPEN/CLOSED)
EXPORT_FIELDS: Tuple[Tuple[str, Sensor, bool], ...] = (
    ("RaumIstTemp", Sensor.RAUM_IST_TEMP, False),
    ("RaumSollTemp", Sensor.RAUM_SOLL_TEMP, False),
    ("AussenTemp", Sensor.AUSSEN_TEMP, False),
    ("SystemDruck", Sensor.SYSTEMDRUCK, False),
    ("ServiceCode", Sensor.SERVICE_CODE, False),
    ("FehlerCode", Sensor.FEHLER_CODE, False),
    ("WarmwasserIstTemp", Sensor.WARMWASSER_IST_TEMP, False),
    ("WarmwasserBereitung", Sensor.WARMWASSER_BEREITUNG, True),
    ("Flamme", Sensor.FLAMME, True),
)


def contact_state(value: object) -> str:
    return "OPEN" if value else "CLOSED"


def build_export_pairs(sensors: SensorValues) -> List[Tuple[str, str]]:
    pairs: List[Tuple[str, str]] = []
    for name, sensor, is_contact in EXPORT_FIELDS:
        value = read_sensor(sensors, sensor)
        rendered = contact_state(value) if is_contact else format_value(value, ".")
        pairs.append((name, rendered))
    return pairs


def render_export(sensors: SensorValues) -> str:
    """Render the export page body, one ``Name=value<br>`` line per field."""
    return "".join(f"{name}={value}{LINE_TERMINATOR}" for name, value in build_export_pairs(sensors))
