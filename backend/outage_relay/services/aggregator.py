"""Aggregate country outage status: cache check → Radar fetch → classify → cache."""

import logging
from collections.abc import Awaitable, Callable, Iterable
from datetime import datetime, timezone
from typing import Any

from outage_relay.countries.definitions import KNOWN_COUNTRIES
from outage_relay.errors import AuthError, UpstreamError
from outage_relay.schemas.outage import AggregateResult
from outage_relay.services import radar_client
from outage_relay.services.cache import AggregateCache
from outage_relay.services.classifier import classify, count_active, parse_annotations

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[dict[str, Any]]]


async def get_aggregate(
    token: str | None,
    cache: AggregateCache,
    known_countries: Iterable[str] = KNOWN_COUNTRIES,
    fetch: Fetcher | None = None,
) -> AggregateResult:
    """Return the cached aggregate while fresh, else fetch and rebuild it.

    A failed fetch raises and leaves the cache as it was; stale data is
    never served in its place.
    """
    if not token:
        raise AuthError()

    now = cache.clock()
    cached = cache.get_fresh(now)
    if cached is not None:
        logger.debug("Serving cached aggregate from %s", cached.generated_at)
        return cached

    fetch = fetch or radar_client.fetch_outage_annotations
    data = await fetch(token)

    if not data.get("success"):
        logger.warning("Fetch failed: Cloudflare API returned errors: %s", data.get("errors"))
        raise UpstreamError(
            "Cloudflare API returned errors",
            status_code=502,
            details=data.get("errors"),
        )

    result_body = data.get("result") or {}
    raw = result_body.get("annotations") if isinstance(result_body, dict) else None
    generated = datetime.now(timezone.utc)
    countries = classify(parse_annotations(raw or []), known_countries, generated)

    result = AggregateResult(
        generated_at=_iso(generated),
        as_of="now",
        time_window="last_24h",
        countries=countries,
    )
    cache.store(result, now)

    logger.info("Fetch successful. Active outages: %d", count_active(countries))
    return result


def _iso(dt: datetime) -> str:
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")
