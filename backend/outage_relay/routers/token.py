from fastapi import APIRouter, Depends

from outage_relay.errors import AuthError
from outage_relay.routers.deps import bearer_token
from outage_relay.services import radar_client

router = APIRouter(tags=["auth"])


@router.post("/validate-token")
async def validate_token(token: str | None = Depends(bearer_token)):
    """Relay Cloudflare's token verification response."""
    if not token:
        raise AuthError(status_code=400)
    return await radar_client.verify_token(token)
