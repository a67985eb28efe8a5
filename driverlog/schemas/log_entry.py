"""Log Schemas: Pydantic response models for the ingestion and admin endpoints.

Invariants:
    - Request payloads are NOT modelled here: ingestion accepts any JSON shape
      and coerces it in core/log_coercion.py
    - LogEntryResponse reads straight from the ORM row (from_attributes)
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class LogCreatedResponse(BaseModel):
    """Success contract of POST /api/logs."""
    ok: Literal[True] = True
    id: int


class LogEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: str
    date: str
    driver_name: str
    driver_email: str
    cc_email: str
    truck_num: str
    start_miles: float
    end_miles: float
    start_time: str
    end_time: str
    rate_mile: float
    rate_hour: float
    total_miles: float
    total_time: str
    total_detention: str
    total_value_hours: float
    gross_pay: float


class StopRowResponse(BaseModel):
    """Stop joined with its parent log's date, driver and truck."""
    log_id: int
    date: str
    driver_name: str
    truck_num: str
    stop_no: int
    type: str
    location: str
    arrive: str
    depart: str
    duration: str
    detention: str
    value_hours: float | None
    grain_phase: str


class LogStatsResponse(BaseModel):
    days: int = 0
    miles: float = 0
    value: float = 0
    pay: float = 0


class FiltersEcho(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: str = Field("", alias="from")
    to_date: str = Field("", alias="to")
    driver: str = ""


class AdminLogsResponse(BaseModel):
    rows: list[LogEntryResponse]
    filters: FiltersEcho
    stats: LogStatsResponse


class AdminStopsResponse(BaseModel):
    rows: list[StopRowResponse]
    filters: FiltersEcho
