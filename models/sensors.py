"""Sensor names and counter samples shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Union

SensorValue = Union[bool, int, float, str, None]
SensorValues = Mapping[str, SensorValue]


class Sensor(str, Enum):
    """Keys of the sensor mappings written by the EMS collector."""

    # Boiler
    KESSEL_IST_TEMP = "kessel_ist_temp"
    KESSEL_SOLL_TEMP = "kessel_soll_temp"
    KESSEL_PUMPE = "kessel_pumpe"
    DREI_WEGE_VENTIL = "drei_wege_ventil"
    BRENNER = "brenner"
    FLAMME = "flamme"
    FLAMMENSTROM = "flammenstrom"
    MOM_LEISTUNG = "mom_leistung"
    MAX_LEISTUNG = "max_leistung"
    SOMMERBETRIEB = "sommerbetrieb"

    # Heating circuits
    VORLAUF_HK1_SOLL_TEMP = "vorlauf_hk1_soll_temp"
    VORLAUF_HK1_IST_TEMP = "vorlauf_hk1_ist_temp"
    HK1_PARTY = "hk1_party"
    HK1_FERIEN = "hk1_ferien"
    HK1_AUTOMATIK = "hk1_automatik"
    HK1_TAGBETRIEB = "hk1_tagbetrieb"
    HK1_PUMPE = "hk1_pumpe"
    VORLAUF_HK2_SOLL_TEMP = "vorlauf_hk2_soll_temp"
    VORLAUF_HK2_IST_TEMP = "vorlauf_hk2_ist_temp"
    HK2_PARTY = "hk2_party"
    HK2_FERIEN = "hk2_ferien"
    HK2_AUTOMATIK = "hk2_automatik"
    HK2_TAGBETRIEB = "hk2_tagbetrieb"
    HK2_PUMPE = "hk2_pumpe"
    MISCHERSTEUERUNG = "mischersteuerung"
    RUECKLAUF_TEMP = "ruecklauf_temp"

    # Hot water
    WARMWASSER_IST_TEMP = "warmwasser_ist_temp"
    WARMWASSER_SOLL_TEMP = "warmwasser_soll_temp"
    WARMWASSER_TEMP_OK = "warmwasser_temp_ok"
    WARMWASSER_BEREITUNG = "warmwasser_bereitung"
    WW_TAGBETRIEB = "ww_tagbetrieb"
    ZIRKULATION = "zirkulation"
    WW_VORRANG = "ww_vorrang"

    # Other temperatures
    AUSSEN_TEMP = "aussen_temp"
    GEDAEMPFTE_AUSSEN_TEMP = "gedaempfte_aussen_temp"
    RAUM_IST_TEMP = "raum_ist_temp"
    RAUM_SOLL_TEMP = "raum_soll_temp"

    # Counters and status
    BETRIEBSZEIT = "betriebszeit"
    BRENNERSTARTS = "brennerstarts"
    HEIZ_ZEIT = "heiz_zeit"
    WARMWASSERBEREITUNGS_ZEIT = "warmwasserbereitungs_zeit"
    WARMWASSER_BEREITUNGEN = "warmwasser_bereitungen"
    SYSTEMDRUCK = "systemdruck"
    SERVICE_CODE = "service_code"
    FEHLER_CODE = "fehler_code"


COUNTER_SENSORS: FrozenSet[Sensor] = frozenset(
    {
        Sensor.BETRIEBSZEIT,
        Sensor.BRENNERSTARTS,
        Sensor.HEIZ_ZEIT,
        Sensor.WARMWASSERBEREITUNGS_ZEIT,
        Sensor.WARMWASSER_BEREITUNGEN,
    }
)


@dataclass(slots=True)
class CounterSample:
    """Cumulative counter readings captured at a single point in time."""

    timestamp: datetime
    values: Dict[str, float] = field(default_factory=dict)


class MissingSensorValue(KeyError):
    """A sensor the page needs is absent from the supplied mapping."""

    def __init__(self, sensor: Sensor) -> None:
        super().__init__(sensor.value)
        self.sensor = sensor

    def __str__(self) -> str:
        return f"Sensor value {self.sensor.value!r} is missing."


def read_sensor(values: SensorValues, sensor: Sensor) -> SensorValue:
    try:
        return values[sensor.value]
    except KeyError as exc:
        raise MissingSensorValue(sensor) from exc
