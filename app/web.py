from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.dependencies import as_http_error, get_builder, get_now, get_source
from datastore.sensor_source import JsonSensorSource, SensorDataError
from models.sensors import MissingSensorValue
from services.dashboard import DashboardBuilder
from services.export import render_export


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

logger = logging.getLogger(__name__)

router = APIRouter(include_in_schema=False)


@router.get("/", name="dashboard", response_class=HTMLResponse)
async def dashboard(
    request: Request,
    day: int = Query(0, le=0),
    source: JsonSensorSource = Depends(get_source),
    builder: DashboardBuilder = Depends(get_builder),
    now: datetime = Depends(get_now),
) -> HTMLResponse:
    try:
        sensors = source.get_current_sensor_values()
        changes = source.get_sensor_changes_for_day(day, now=now)
        page = builder.build(sensors, changes, now=now, day_offset=day)
    except (SensorDataError, MissingSensorValue) as exc:
        raise as_http_error(exc) from exc

    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"page": page},
    )


@router.get("/openhab", name="openhab_export", response_class=HTMLResponse)
async def openhab_export(
    source: JsonSensorSource = Depends(get_source),
) -> HTMLResponse:
    try:
        body = render_export(source.get_current_sensor_values())
    except (SensorDataError, MissingSensorValue) as exc:
        raise as_http_error(exc) from exc
    logger.debug("Rendered export", extra={"path": "/openhab"})
    return HTMLResponse(content=body)
