from __future__ import annotations

import pytest

from models.sensors import MissingSensorValue
from services.export import build_export_pairs, render_export


def test_export_lines_in_fixed_order(make_sensor_values) -> None:
    sensors = make_sensor_values(warmwasser_bereitung=True, flamme=False)

    body = render_export(sensors)

    assert body.split("\n")[:-1] == [
        "RaumIstTemp=21.3<br>",
        "RaumSollTemp=21<br>",
        "AussenTemp=3.5<br>",
        "SystemDruck=1.6<br>",
        "ServiceCode=-H<br>",
        "FehlerCode=0<br>",
        "WarmwasserIstTemp=52<br>",
        "WarmwasserBereitung=OPEN<br>",
        "Flamme=CLOSED<br>",
    ]
    assert body.endswith("<br>\n")


@pytest.mark.parametrize(("flag", "expected"), [(True, "OPEN"), (False, "CLOSED"), (1, "OPEN"), (0, "CLOSED")])
def test_contact_fields(make_sensor_values, flag, expected) -> None:
    pairs = dict(build_export_pairs(make_sensor_values(flamme=flag, warmwasser_bereitung=flag)))

    assert pairs["Flamme"] == expected
    assert pairs["WarmwasserBereitung"] == expected


def test_export_ignores_unrelated_sensors(make_sensor_values) -> None:
    sensors = make_sensor_values()
    sensors["unknown_sensor"] = 42

    assert len(build_export_pairs(sensors)) == 9


def test_export_missing_sensor(make_sensor_values) -> None:
    sensors = make_sensor_values()
    del sensors["fehler_code"]

    with pytest.raises(MissingSensorValue):
        render_export(sensors)
