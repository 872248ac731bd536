"""JSON route definitions for the service."""

from __future__ import annotations

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, Query, status

from app.dependencies import as_http_error, get_now, get_source
from app.schemas import DailyChanges, ExportLine, ExportPayload, SensorSnapshot
from datastore.sensor_source import JsonSensorSource, SensorDataError
from models.sensors import MissingSensorValue
from services.export import build_export_pairs

router = APIRouter()


@router.get(
    "/api/sensors/current",
    response_model=SensorSnapshot,
    summary="Current value of every sensor.",
)
async def current_sensor_values(
    source: JsonSensorSource = Depends(get_source),
) -> SensorSnapshot:
    try:
        values, captured_at = source.snapshot()
    except SensorDataError as exc:
        raise as_http_error(exc) from exc
    return SensorSnapshot(captured_at=captured_at, values=values)


@router.get(
    "/api/sensors/changes",
    response_model=DailyChanges,
    summary="Counter increases for a single day.",
)
async def sensor_changes_for_day(
    day: int = Query(0, le=0, description="Day offset relative to today."),
    source: JsonSensorSource = Depends(get_source),
    now: datetime = Depends(get_now),
) -> DailyChanges:
    try:
        values = source.get_sensor_changes_for_day(day, now=now)
    except SensorDataError as exc:
        raise as_http_error(exc) from exc
    local_day = now.astimezone(source.timezone).date() + timedelta(days=day)
    return DailyChanges(day_offset=day, day=local_day, values=values)


@router.get(
    "/api/export",
    response_model=ExportPayload,
    summary="Export fields as structured pairs.",
)
async def export_values(
    source: JsonSensorSource = Depends(get_source),
) -> ExportPayload:
    try:
        pairs = build_export_pairs(source.get_current_sensor_values())
    except (SensorDataError, MissingSensorValue) as exc:
        raise as_http_error(exc) from exc
    return ExportPayload(lines=[ExportLine(name=name, value=value) for name, value in pairs])


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
