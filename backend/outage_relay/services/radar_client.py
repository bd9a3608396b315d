"""Cloudflare Radar API client.

Fetches outage annotations for the last day and verifies API tokens.
The caller's bearer token is forwarded as-is; nothing is stored.
"""

import logging
from typing import Any

import httpx

from outage_relay.config import settings
from outage_relay.errors import UpstreamError

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch and process outages data"
VERIFY_FAILED = "Failed to validate token"


async def fetch_outage_annotations(token: str) -> dict[str, Any]:
    """Query Radar outage annotations and return the decoded API envelope.

    Non-2xx responses, transport errors and 2xx bodies that are not an
    envelope raise UpstreamError. A 2xx envelope with `success` false is
    returned for the caller to report.
    """
    url = f"{settings.cloudflare_api_url}/radar/annotations/outages"
    params = {
        "limit": settings.annotations_limit,
        "dateRange": settings.annotations_date_range,
        "format": "json",
    }
    try:
        async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
            resp = await client.get(url, params=params, headers=_auth_headers(token))
            resp.raise_for_status()
            data = _json_or_none(resp)
            if isinstance(data, dict) and "success" in data:
                return data
    except httpx.HTTPError as e:
        logger.warning("Fetch failed: %s", e)
        raise UpstreamError(FETCH_FAILED, details=str(e)) from e

    logger.warning("Fetch failed: unexpected response body from %s", url)
    raise UpstreamError(FETCH_FAILED, details="Unexpected response from Cloudflare API")


async def verify_token(token: str) -> Any:
    """Forward a token to Cloudflare's verify endpoint and return its JSON body."""
    if settings.cloudflare_account_id:
        url = f"{settings.cloudflare_api_url}/accounts/{settings.cloudflare_account_id}/tokens/verify"
    else:
        url = f"{settings.cloudflare_api_url}/user/tokens/verify"
    try:
        async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
            resp = await client.get(url, headers=_auth_headers(token))
            resp.raise_for_status()
            return resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Token verification failed: %s", e)
        raise UpstreamError(VERIFY_FAILED, details=str(e)) from e


def _auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _json_or_none(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None
