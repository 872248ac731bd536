"""Pydantic schemas for the JSON API layer."""

from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

ScalarValue = Union[bool, int, float, str, None]


class SensorSnapshot(BaseModel):
    """Current readings of every sensor the collector reports."""

    captured_at: Optional[datetime] = Field(
        default=None, description="When the collector wrote the snapshot."
    )
    values: Dict[str, ScalarValue] = Field(default_factory=dict)


class DailyChanges(BaseModel):
    """Increase of the cumulative counters over one calendar day."""

    day_offset: int = Field(..., le=0, description="0 is today, -1 yesterday.")
    day: date
    values: Dict[str, Union[int, float]] = Field(default_factory=dict)


class ExportLine(BaseModel):
    name: str
    value: str


class ExportPayload(BaseModel):
    lines: List[ExportLine] = Field(default_factory=list)
