from __future__ import annotations

from typing import Any, Dict, Iterable, List

import typer

from models.sensors import Sensor

SECTIONS = (
    (
        "Heizung",
        (Sensor.KESSEL_IST_TEMP, Sensor.KESSEL_SOLL_TEMP, Sensor.KESSEL_PUMPE, Sensor.DREI_WEGE_VENTIL,
         Sensor.BRENNER, Sensor.FLAMME, Sensor.FLAMMENSTROM, Sensor.MOM_LEISTUNG, Sensor.MAX_LEISTUNG,
         Sensor.SOMMERBETRIEB),
    ),
    (
        "Heizkreise",
        (Sensor.VORLAUF_HK1_SOLL_TEMP, Sensor.VORLAUF_HK1_IST_TEMP, Sensor.HK1_PARTY, Sensor.HK1_FERIEN,
         Sensor.HK1_AUTOMATIK, Sensor.HK1_TAGBETRIEB, Sensor.HK1_PUMPE, Sensor.VORLAUF_HK2_SOLL_TEMP,
         Sensor.VORLAUF_HK2_IST_TEMP, Sensor.HK2_PARTY, Sensor.HK2_FERIEN, Sensor.HK2_AUTOMATIK,
         Sensor.HK2_TAGBETRIEB, Sensor.HK2_PUMPE, Sensor.MISCHERSTEUERUNG, Sensor.RUECKLAUF_TEMP),
    ),
    (
        "Warmwasser",
        (Sensor.WARMWASSER_IST_TEMP, Sensor.WARMWASSER_SOLL_TEMP, Sensor.WARMWASSER_TEMP_OK,
         Sensor.WARMWASSER_BEREITUNG, Sensor.WW_TAGBETRIEB, Sensor.ZIRKULATION, Sensor.WW_VORRANG),
    ),
    (
        "Sonstige Temperaturen",
        (Sensor.AUSSEN_TEMP, Sensor.GEDAEMPFTE_AUSSEN_TEMP, Sensor.RAUM_IST_TEMP, Sensor.RAUM_SOLL_TEMP),
    ),
    (
        "Betriebsstatus",
        (Sensor.BETRIEBSZEIT, Sensor.BRENNERSTARTS, Sensor.HEIZ_ZEIT, Sensor.WARMWASSERBEREITUNGS_ZEIT,
         Sensor.WARMWASSER_BEREITUNGEN, Sensor.SYSTEMDRUCK, Sensor.SERVICE_CODE, Sensor.FEHLER_CODE),
    ),
)


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_current(payload: Dict[str, Any]) -> None:
    values: Dict[str, Any] = dict(payload.get("values") or {})
    echo_heading("Sensor Snapshot")
    echo_key_values([("captured_at", payload.get("captured_at"))])

    for title, sensors in SECTIONS:
        typer.echo()
        echo_heading(title)
        echo_key_values((sensor.value, values.pop(sensor.value, "-")) for sensor in sensors)

    if values:
        typer.echo()
        echo_heading("Weitere Sensoren")
        echo_key_values(sorted(values.items()))


def render_changes(payload: Dict[str, Any]) -> None:
    echo_heading(f"Aktivität am {payload.get('day')}")
    echo_key_values([("day_offset", payload.get("day_offset"))])
    values = payload.get("values") or {}
    if values:
        echo_key_values(sorted(values.items()))
    else:
        typer.echo("No counter changes recorded.")


def render_export_lines(lines: List[Dict[str, str]]) -> None:
    for line in lines:
        typer.echo(f"{line.get('name')}={line.get('value')}")
