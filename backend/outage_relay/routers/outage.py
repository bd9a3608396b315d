import logging

from fastapi import APIRouter, Depends

from outage_relay.errors import RelayError, UpstreamError
from outage_relay.routers.deps import bearer_token, get_cache, get_known_countries
from outage_relay.schemas.outage import AggregateResult
from outage_relay.services import aggregator
from outage_relay.services.cache import AggregateCache
from outage_relay.services.radar_client import FETCH_FAILED

logger = logging.getLogger(__name__)

router = APIRouter(tags=["outages"])


@router.get("/aggregate-data", response_model=AggregateResult, response_model_exclude_none=True)
async def aggregate_data(
    token: str | None = Depends(bearer_token),
    cache: AggregateCache = Depends(get_cache),
    known_countries: frozenset[str] = Depends(get_known_countries),
):
    """Current outage status for every known country, cached for the TTL."""
    try:
        return await aggregator.get_aggregate(token, cache, known_countries)
    except RelayError:
        raise
    except Exception as e:
        logger.exception("Fetch failed: %s", e)
        raise UpstreamError(FETCH_FAILED, details=str(e)) from e
