from datetime import datetime
from typing import Any

from pydantic import BaseModel


class OutageAnnotation(BaseModel):
    """One Radar outage annotation after the cleaning pass."""
    outage: bool = False
    locations: list[Any] | None = None  # None when upstream sent a non-list
    outage_type: str | None = None  # NATIONWIDE, REGIONAL, ...
    outage_cause: str | None = None
    start_date: str | None = None
    end_date: datetime | None = None


class CountryStatus(BaseModel):
    status: str = "NORMAL"  # NORMAL, OUTAGE, DEGRADED
    severity: str | None = None  # HIGH, MEDIUM
    scope: str | None = None
    cause: str | None = None
    since: str | None = None
    source: list[str] | None = None


class AggregateResult(BaseModel):
    generated_at: str
    as_of: str = "now"
    time_window: str = "last_24h"
    countries: dict[str, CountryStatus] = {}


class HealthResponse(BaseModel):
    status: str = "ok"
    last_fetch: str | None = None
    source: str = "cloudflare_radar"
