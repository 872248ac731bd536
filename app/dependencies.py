"""Request dependencies shared by the HTML and JSON routers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status

from datastore.sensor_source import JsonSensorSource, SensorDataError, build_default_source
from models.sensors import MissingSensorValue
from services.dashboard import DashboardBuilder
from services.formatting import set_loc_settings
from settings import get_settings

logger = logging.getLogger(__name__)


def get_source() -> JsonSensorSource:
    return build_default_source()


def get_now() -> datetime:
    return datetime.now(timezone.utc)


def get_builder() -> DashboardBuilder:
    return DashboardBuilder(set_loc_settings(), refresh_seconds=get_settings().refresh_seconds)


def as_http_error(exc: SensorDataError | MissingSensorValue) -> HTTPException:
    """Translate data-source and rendering failures into HTTP errors."""
    if isinstance(exc, MissingSensorValue):
        logger.error("Sensor data incomplete", extra={"sensor": exc.sensor.value})
        return HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(exc),
        )
    logger.error("Sensor data unavailable", extra={"reason": str(exc)})
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=str(exc),
    )
