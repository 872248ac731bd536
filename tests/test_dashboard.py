"""Unit tests for the dashboard label and color rules."""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from models.sensors import MissingSensorValue, Sensor
from services.dashboard import (
    CellColor,
    DashboardBuilder,
    burner_label,
    flame_label,
    operating_mode,
    switch_label,
)
from services.formatting import LocaleSettings

NOW = datetime(2024, 1, 15, 7, 0, tzinfo=timezone.utc)
CHANGES = {
    "betriebszeit": 4567,
    "brennerstarts": 17,
    "heiz_zeit": 4000,
    "warmwasserbereitungs_zeit": 567,
    "warmwasser_bereitungen": 2,
}


@pytest.fixture
def builder() -> DashboardBuilder:
    locale = LocaleSettings(timezone=ZoneInfo("Europe/Berlin"), decimal_separator=",")
    return DashboardBuilder(locale, refresh_seconds=30)


def _cell(section, name):
    matches = [cell for cell in section.cells if cell.name == name]
    assert matches, f"row {name!r} missing from {section.title!r}"
    return matches[0]


def test_switch_label() -> None:
    assert switch_label(True) == ("- an -", CellColor.green)
    assert switch_label(False) == ("- aus -", CellColor.none)
    assert switch_label(True, highlight=False) == ("- an -", CellColor.none)


def test_burner_label_distinguishes_hot_water() -> None:
    assert burner_label(True, True) == ("WW-Bereitung", CellColor.red)
    assert burner_label(True, False) == ("Heizen", CellColor.red)
    assert burner_label(False, True) == ("- aus -", CellColor.none)


def test_flame_label_includes_current() -> None:
    assert flame_label(True, "12,4") == (" - an, 12,4 -", CellColor.red)
    assert flame_label(False, "12,4") == (" - aus -", CellColor.none)


@pytest.mark.parametrize(
    ("party", "vacation", "automatic", "day", "expected"),
    [
        (True, True, True, True, "Party"),
        (True, False, False, False, "Party"),
        (False, True, True, True, "Ferien"),
        (False, False, True, True, "Auto (Tag)"),
        (False, False, True, False, "Auto (Nacht)"),
        (False, False, False, True, "Manuell (Tag)"),
        (False, False, False, False, "Manuell (Nacht)"),
    ],
)
def test_operating_mode_priority(party, vacation, automatic, day, expected) -> None:
    assert operating_mode(party, vacation, automatic, day) == expected


def test_page_has_sections_in_order(builder: DashboardBuilder, sensor_values) -> None:
    page = builder.build(sensor_values, CHANGES, now=NOW)

    assert [section.title for section in page.sections] == [
        "Heizung",
        "Heizkreise",
        "Warmwasser",
        "Sonstige Temperaturen",
        "Heutige Aktivität",
        "Betriebsstatus",
    ]
    assert page.heading == "Momentaner Status (Montag, 15.01.2024, 08:00:00)"
    assert page.refresh_seconds == 30


def test_heating_section_with_flame_on(builder: DashboardBuilder, make_sensor_values) -> None:
    sensors = make_sensor_values(brenner=True, flamme=True, warmwasser_bereitung=False)

    section = builder.heating_section(sensors)

    assert _cell(section, "Flamme").value == " - an, 12,4 -"
    assert _cell(section, "Flamme").color is CellColor.red
    assert _cell(section, "Brenner").value == "Heizen"
    assert _cell(section, "Kessel IST").value == "61,5"
    assert _cell(section, "Momentane Leistung").value == "0 / 100"


def test_heating_section_with_flame_off(builder: DashboardBuilder, sensor_values) -> None:
    section = builder.heating_section(sensor_values)

    assert _cell(section, "Flamme").value == " - aus -"
    assert _cell(section, "Flamme").color is CellColor.none
    assert _cell(section, "Brenner").value == "- aus -"
    assert _cell(section, "Sommerbetrieb").value == "- inaktiv -"


def test_three_way_valve_selects_pump(builder: DashboardBuilder, make_sensor_values) -> None:
    heating = make_sensor_values(kessel_pumpe=True, drei_wege_ventil=False)
    hot_water = make_sensor_values(kessel_pumpe=True, drei_wege_ventil=True)

    assert _cell(builder.heating_section(heating), "Vorlaufpumpe").color is CellColor.green
    assert _cell(builder.hot_water_section(heating), "WW-Pumpe").value == "- aus -"
    assert _cell(builder.heating_section(hot_water), "Vorlaufpumpe").value == "- aus -"
    assert _cell(builder.hot_water_section(hot_water), "WW-Pumpe").color is CellColor.green


def test_circuits_section(builder: DashboardBuilder, make_sensor_values) -> None:
    sensors = make_sensor_values(hk1_pumpe=True, hk2_ferien=True)

    section = builder.circuits_section(sensors)

    assert _cell(section, "Heizkreis 1 Soll/Ist").value == "42 / 41,2"
    assert _cell(section, "Betriebsart HK1").value == "Auto (Tag)"
    assert _cell(section, "Pumpe HK1").value == "- aktiv -"
    assert _cell(section, "Pumpe HK1").color is CellColor.green
    assert _cell(section, "Betriebsart HK2").value == "Ferien"
    assert _cell(section, "Pumpe HK2").value == "- inaktiv -"
    assert _cell(section, "Rücklauf IST").value == "38,5"


def test_hot_water_temperature_warning(builder: DashboardBuilder, make_sensor_values) -> None:
    ok = builder.hot_water_section(make_sensor_values(warmwasser_temp_ok=True))
    too_cold = builder.hot_water_section(make_sensor_values(warmwasser_temp_ok=False))

    assert _cell(ok, "Warmwasser IST").color is CellColor.none
    assert _cell(too_cold, "Warmwasser IST").color is CellColor.yellow
    assert _cell(ok, "WW-Vorrang").color is CellColor.none


def test_activity_section_uses_changes(builder: DashboardBuilder, sensor_values) -> None:
    page = builder.build(sensor_values, CHANGES, now=NOW)
    activity, status = page.rows[2]

    assert _cell(activity, "Brennerstarts").value == "17"
    assert _cell(status, "Brennerstarts").value == "34567"
    assert _cell(status, "Servicecode").value == "-H"


def test_past_day_activity_title(builder: DashboardBuilder, sensor_values) -> None:
    page = builder.build(sensor_values, CHANGES, now=NOW, day_offset=-1)

    assert page.rows[2][0].title == "Aktivität am 14.01.2024"


def test_missing_sensor_raises(builder: DashboardBuilder, sensor_values) -> None:
    del sensor_values[Sensor.SYSTEMDRUCK.value]

    with pytest.raises(MissingSensorValue) as excinfo:
        builder.build(sensor_values, CHANGES, now=NOW)

    assert excinfo.value.sensor is Sensor.SYSTEMDRUCK
    assert "systemdruck" in str(excinfo.value)


def test_build_is_deterministic(builder: DashboardBuilder, sensor_values) -> None:
    first = builder.build(sensor_values, CHANGES, now=NOW)
    second = builder.build(dict(sensor_values), dict(CHANGES), now=NOW)

    assert first == second
