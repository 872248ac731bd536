"""Status page rules: which label and color every dashboard row shows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional, Tuple

from models.sensors import Sensor, SensorValues, read_sensor
from services.formatting import LocaleSettings, format_timestamp, format_value, set_loc_settings

ON = "- an -"
OFF = "- aus -"
ACTIVE = "- aktiv -"
INACTIVE = "- inaktiv -"


class CellColor(str, Enum):
    """Highlight colors of a value cell."""

    none = ""
    green = "green"
    red = "red"
    yellow = "yellow"

    @property
    def style(self) -> str:
        return _COLOR_STYLES[self]


_COLOR_STYLES = {
    CellColor.none: "",
    CellColor.green: "background-color: rgb(0,200,0); color: rgb(255,255,255);",
    CellColor.red: "background-color: rgb(200,0,0); color: rgb(255,255,255);",
    CellColor.yellow: "background-color: rgb(200,200,0); color: rgb(255,255,255);",
}

Label = Tuple[str, CellColor]


@dataclass(frozen=True)
class Cell:
    name: str
    value: str
    color: CellColor = CellColor.none


@dataclass(frozen=True)
class Section:
    title: str
    cells: Tuple[Cell, ...]


@dataclass(frozen=True)
class DashboardPage:
    """Everything the status template needs, already formatted."""

    heading: str
    refresh_seconds: int
    day_offset: int
    rows: List[Tuple[Section, Section]] = field(default_factory=list)

    @property
    def sections(self) -> List[Section]:
        return [section for row in self.rows for section in row]


def switch_label(active: bool, highlight: bool = True) -> Label:
    """Pump or valve state, green while running."""
    if active:
        return ON, CellColor.green if highlight else CellColor.none
    return OFF, CellColor.none


def activity_label(active: bool, highlight: bool = False) -> Label:
    if active:
        return ACTIVE, CellColor.green if highlight else CellColor.none
    return INACTIVE, CellColor.none


def burner_label(burner: bool, hot_water_preparation: bool) -> Label:
    if not burner:
        return OFF, CellColor.none
    return ("WW-Bereitung" if hot_water_preparation else "Heizen"), CellColor.red


def flame_label(flame: bool, flame_current: str) -> Label:
    if flame:
        return f" - an, {flame_current} -", CellColor.red
    return " - aus -", CellColor.none


def operating_mode(party: bool, vacation: bool, automatic: bool, day: bool) -> str:
    """Party wins over vacation, which wins over the automatic/manual mode."""
    if party:
        return "Party"
    if vacation:
        return "Ferien"
    return f"{'Auto' if automatic else 'Manuell'} ({'Tag' if day else 'Nacht'})"


class DashboardBuilder:
    """Turns the current and daily sensor mappings into dashboard sections."""

    def __init__(self, locale: Optional[LocaleSettings] = None, refresh_seconds: int = 30) -> None:
        self.locale = locale or set_loc_settings()
        self.refresh_seconds = refresh_seconds

    def build(
        self,
        sensors: SensorValues,
        changes: SensorValues,
        now: datetime,
        day_offset: int = 0,
    ) -> DashboardPage:
        heading = f"Momentaner Status ({format_timestamp(now, True, self.locale)})"
        rows = [
            (self.heating_section(sensors), self.circuits_section(sensors)),
            (self.hot_water_section(sensors), self.temperatures_section(sensors)),
            (
                self.activity_section(changes, self._activity_title(now, day_offset)),
                self.status_section(sensors),
            ),
        ]
        return DashboardPage(
            heading=heading,
            refresh_seconds=self.refresh_seconds,
            day_offset=day_offset,
            rows=rows,
        )

    def heating_section(self, sensors: SensorValues) -> Section:
        pump = bool(read_sensor(sensors, Sensor.KESSEL_PUMPE))
        valve_to_hot_water = bool(read_sensor(sensors, Sensor.DREI_WEGE_VENTIL))
        flame = bool(read_sensor(sensors, Sensor.FLAMME))
        flame_current = self._value(sensors, Sensor.FLAMMENSTROM) if flame else ""
        power = f"{self._value(sensors, Sensor.MOM_LEISTUNG)} / {self._value(sensors, Sensor.MAX_LEISTUNG)}"
        summer, _ = activity_label(bool(read_sensor(sensors, Sensor.SOMMERBETRIEB)))

        return Section(
            "Heizung",
            (
                Cell("Kessel IST", self._value(sensors, Sensor.KESSEL_IST_TEMP)),
                Cell("Kessel SOLL", self._value(sensors, Sensor.KESSEL_SOLL_TEMP)),
                Cell("Vorlaufpumpe", *switch_label(pump and not valve_to_hot_water)),
                Cell(
                    "Brenner",
                    *burner_label(
                        bool(read_sensor(sensors, Sensor.BRENNER)),
                        bool(read_sensor(sensors, Sensor.WARMWASSER_BEREITUNG)),
                    ),
                ),
                Cell("Flamme", *flame_label(flame, flame_current)),
                Cell("Momentane Leistung", power),
                Cell("Sommerbetrieb", summer),
            ),
        )

    def circuits_section(self, sensors: SensorValues) -> Section:
        cells: List[Cell] = []
        circuits = (
            ("1", Sensor.VORLAUF_HK1_SOLL_TEMP, Sensor.VORLAUF_HK1_IST_TEMP, Sensor.HK1_PARTY,
             Sensor.HK1_FERIEN, Sensor.HK1_AUTOMATIK, Sensor.HK1_TAGBETRIEB, Sensor.HK1_PUMPE),
            ("2", Sensor.VORLAUF_HK2_SOLL_TEMP, Sensor.VORLAUF_HK2_IST_TEMP, Sensor.HK2_PARTY,
             Sensor.HK2_FERIEN, Sensor.HK2_AUTOMATIK, Sensor.HK2_TAGBETRIEB, Sensor.HK2_PUMPE),
        )
        for number, soll, ist, party, vacation, automatic, day, pump in circuits:
            mode = operating_mode(
                bool(read_sensor(sensors, party)),
                bool(read_sensor(sensors, vacation)),
                bool(read_sensor(sensors, automatic)),
                bool(read_sensor(sensors, day)),
            )
            cells.append(
                Cell(f"Heizkreis {number} Soll/Ist", f"{self._value(sensors, soll)} / {self._value(sensors, ist)}")
            )
            cells.append(Cell(f"Betriebsart HK{number}", mode))
            cells.append(
                Cell(f"Pumpe HK{number}", *activity_label(bool(read_sensor(sensors, pump)), highlight=True))
            )

        cells.append(Cell("Mischersteuerung HK2", self._value(sensors, Sensor.MISCHERSTEUERUNG)))
        cells.append(Cell("Rücklauf IST", self._value(sensors, Sensor.RUECKLAUF_TEMP)))
        return Section("Heizkreise", tuple(cells))

    def hot_water_section(self, sensors: SensorValues) -> Section:
        temperature_ok = bool(read_sensor(sensors, Sensor.WARMWASSER_TEMP_OK))
        pump = bool(read_sensor(sensors, Sensor.KESSEL_PUMPE))
        valve_to_hot_water = bool(read_sensor(sensors, Sensor.DREI_WEGE_VENTIL))
        priority, _ = switch_label(bool(read_sensor(sensors, Sensor.WW_VORRANG)))

        return Section(
            "Warmwasser",
            (
                Cell(
                    "Warmwasser IST",
                    self._value(sensors, Sensor.WARMWASSER_IST_TEMP),
                    CellColor.none if temperature_ok else CellColor.yellow,
                ),
                Cell("Warmwasser SOLL", self._value(sensors, Sensor.WARMWASSER_SOLL_TEMP)),
                Cell("Betriebsart", "Tag" if read_sensor(sensors, Sensor.WW_TAGBETRIEB) else "Nacht"),
                Cell("WW-Pumpe", *switch_label(pump and valve_to_hot_water)),
                Cell("Zirkulationspumpe", *switch_label(bool(read_sensor(sensors, Sensor.ZIRKULATION)))),
                Cell("WW-Vorrang", priority),
            ),
        )

    def temperatures_section(self, sensors: SensorValues) -> Section:
        return Section(
            "Sonstige Temperaturen",
            (
                Cell("Außen", self._value(sensors, Sensor.AUSSEN_TEMP)),
                Cell("Außen gedämpft", self._value(sensors, Sensor.GEDAEMPFTE_AUSSEN_TEMP)),
                Cell("Raumtemp. IST", self._value(sensors, Sensor.RAUM_IST_TEMP)),
                Cell("Raumtemp. SOLL", self._value(sensors, Sensor.RAUM_SOLL_TEMP)),
            ),
        )

    def activity_section(self, changes: SensorValues, title: str = "Heutige Aktivität") -> Section:
        return Section(
            title,
            (
                Cell("Brennerlaufzeit", self._value(changes, Sensor.BETRIEBSZEIT)),
                Cell("Brennerstarts", self._value(changes, Sensor.BRENNERSTARTS)),
                Cell("Heizungs-Brennerlaufzeit", self._value(changes, Sensor.HEIZ_ZEIT)),
                Cell("Warmwasserbereitungszeit", self._value(changes, Sensor.WARMWASSERBEREITUNGS_ZEIT)),
                Cell("Warmwasserbereitungen", self._value(changes, Sensor.WARMWASSER_BEREITUNGEN)),
            ),
        )

    def status_section(self, sensors: SensorValues) -> Section:
        return Section(
            "Betriebsstatus",
            (
                Cell("Brennerlaufzeit", self._value(sensors, Sensor.BETRIEBSZEIT)),
                Cell("Brennerstarts", self._value(sensors, Sensor.BRENNERSTARTS)),
                Cell("Systemdruck", self._value(sensors, Sensor.SYSTEMDRUCK)),
                Cell("Servicecode", self._value(sensors, Sensor.SERVICE_CODE)),
                Cell("Fehlercode", self._value(sensors, Sensor.FEHLER_CODE)),
            ),
        )

    def _activity_title(self, now: datetime, day_offset: int) -> str:
        if day_offset == 0:
            return "Heutige Aktivität"
        day = now.astimezone(self.locale.timezone) + timedelta(days=day_offset)
        return f"Aktivität am {day:%d.%m.%Y}"

    def _value(self, values: SensorValues, sensor: Sensor) -> str:
        return format_value(read_sensor(values, sensor), self.locale.decimal_separator)
