from fastapi import Header, Request

from outage_relay.services.cache import AggregateCache

BEARER_PREFIX = "Bearer "


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    """Extract the token from an `Authorization: Bearer <token>` header."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):] or None


def get_cache(request: Request) -> AggregateCache:
    return request.app.state.aggregate_cache


def get_known_countries(request: Request) -> frozenset[str]:
    return request.app.state.known_countries
