from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest


def build_sensor_values(**overrides: Any) -> Dict[str, Any]:
    values: Dict[str, Any] = {
        "kessel_ist_temp": 61.5,
        "kessel_soll_temp": 65.0,
        "kessel_pumpe": False,
        "drei_wege_ventil": False,
        "brenner": False,
        "flamme": False,
        "flammenstrom": 12.4,
        "mom_leistung": 0,
        "max_leistung": 100,
        "sommerbetrieb": False,
        "vorlauf_hk1_soll_temp": 42.0,
        "vorlauf_hk1_ist_temp": 41.2,
        "hk1_party": False,
        "hk1_ferien": False,
        "hk1_automatik": True,
        "hk1_tagbetrieb": True,
        "hk1_pumpe": False,
        "vorlauf_hk2_soll_temp": 35.0,
        "vorlauf_hk2_ist_temp": 33.8,
        "hk2_party": False,
        "hk2_ferien": False,
        "hk2_automatik": False,
        "hk2_tagbetrieb": False,
        "hk2_pumpe": False,
        "mischersteuerung": 20,
        "ruecklauf_temp": 38.5,
        "warmwasser_ist_temp": 52.0,
        "warmwasser_soll_temp": 55.0,
        "warmwasser_temp_ok": True,
        "warmwasser_bereitung": False,
        "ww_tagbetrieb": True,
        "zirkulation": False,
        "ww_vorrang": False,
        "aussen_temp": 3.5,
        "gedaempfte_aussen_temp": 4.1,
        "raum_ist_temp": 21.3,
        "raum_soll_temp": 21.0,
        "betriebszeit": 1234567,
        "brennerstarts": 34567,
        "heiz_zeit": 1000000,
        "warmwasserbereitungs_zeit": 234567,
        "warmwasser_bereitungen": 4567,
        "systemdruck": 1.6,
        "service_code": "-H",
        "fehler_code": 0,
    }
    values.update(overrides)
    return values


def write_sensor_file(path: Path, current: Dict[str, Any], history: list | None = None) -> Path:
    document = {
        "captured_at": "2024-01-15T08:00:00+01:00",
        "current": current,
        "history": history or [],
    }
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.fixture
def sensor_values() -> Dict[str, Any]:
    return build_sensor_values()


@pytest.fixture
def make_sensor_values():
    return build_sensor_values


@pytest.fixture
def sensor_file(tmp_path):
    def _write(current: Dict[str, Any] | None = None, history: list | None = None) -> Path:
        return write_sensor_file(
            tmp_path / "sensors.json",
            build_sensor_values() if current is None else current,
            history,
        )

    return _write
