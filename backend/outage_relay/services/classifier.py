"""Per-country outage classification over Radar outage annotations.

Two passes: `parse_annotations` turns the raw upstream list into typed
annotations, dropping anything malformed, and `classify` resolves one status
per known country. Neither raises on bad upstream data.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from typing import Any

from outage_relay.countries.definitions import is_known_country
from outage_relay.schemas.outage import CountryStatus, OutageAnnotation

logger = logging.getLogger(__name__)

NATIONWIDE = "NATIONWIDE"
REGIONAL = "REGIONAL"

# Outage type → (status, severity), in priority order
_TYPE_STATUS: dict[str, tuple[str, str]] = {
    NATIONWIDE: ("OUTAGE", "HIGH"),
    REGIONAL: ("DEGRADED", "MEDIUM"),
}

SOURCE_TAG = "outages"


def parse_annotations(raw: Any) -> list[OutageAnnotation]:
    """Clean the upstream `annotations` list into OutageAnnotation models."""
    if not isinstance(raw, list):
        return []

    annotations = []
    skipped = 0
    for item in raw:
        if not isinstance(item, dict):
            skipped += 1
            continue

        outage = item.get("outage")
        details = outage if isinstance(outage, dict) else {}
        locations = item.get("locations")

        annotations.append(OutageAnnotation(
            outage=bool(outage),
            locations=locations if isinstance(locations, list) else None,
            outage_type=_as_str(details.get("outageType")),
            outage_cause=_as_str(details.get("outageCause")),
            start_date=_as_str(item.get("startDate")),
            end_date=_parse_datetime(item.get("endDate")),
        ))

    if skipped:
        logger.debug("Skipped %d malformed annotations", skipped)
    return annotations


def classify(
    annotations: Sequence[OutageAnnotation],
    known_countries: Iterable[str],
    now: datetime,
) -> dict[str, CountryStatus]:
    """Map every known country to its current status.

    NATIONWIDE beats REGIONAL; within a type the first annotation in input
    order wins. Countries with only other outage types stay NORMAL.
    """
    known = frozenset(known_countries)
    now = _as_utc(now)
    countries = {code: CountryStatus() for code in sorted(known)}

    candidates: dict[str, list[OutageAnnotation]] = {}
    for annotation in annotations:
        if not _is_active(annotation, now):
            continue
        for location in annotation.locations:
            if is_known_country(location, known):
                candidates.setdefault(location, []).append(annotation)

    for code, outages in candidates.items():
        selected = _select(outages)
        if selected is None:
            continue
        status, severity = _TYPE_STATUS[selected.outage_type]
        countries[code] = CountryStatus(
            status=status,
            severity=severity,
            scope=selected.outage_type,
            cause=selected.outage_cause,
            since=selected.start_date,
            source=[SOURCE_TAG],
        )

    return countries


def count_active(countries: dict[str, CountryStatus]) -> int:
    return sum(1 for c in countries.values() if c.status != "NORMAL")


def _is_active(annotation: OutageAnnotation, now: datetime) -> bool:
    if not annotation.outage or annotation.locations is None:
        return False
    if annotation.end_date is not None and _as_utc(annotation.end_date) < now:
        return False
    return True


def _select(outages: list[OutageAnnotation]) -> OutageAnnotation | None:
    for outage_type in (NATIONWIDE, REGIONAL):
        for outage in outages:
            if outage.outage_type == outage_type:
                return outage
    return None


def _as_str(val) -> str | None:
    return val if isinstance(val, str) else None


def _parse_datetime(val) -> datetime | None:
    if not isinstance(val, str) or not val:
        return None
    try:
        parsed = datetime.fromisoformat(val.replace("Z", "+00:00"))
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(dt: datetime) -> datetime:
    # Naive timestamps are UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt
