"""Relay exceptions and the FastAPI handlers that render them as JSON."""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RelayError(Exception):
    """Base exception with HTTP status code and optional upstream detail."""

    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class AuthError(RelayError):
    """Missing or malformed bearer credential."""

    def __init__(self, message: str = "Authorization header with Bearer token is required",
                 status_code: int = 401):
        super().__init__(message, status_code=status_code)


class UpstreamError(RelayError):
    """Cloudflare call failed in transport or reported success=false."""


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(RelayError)
    async def handle_relay_error(_request: Request, exc: RelayError):
        body: dict[str, Any] = {"error": str(exc)}
        if exc.details is not None:
            body["details"] = exc.details
        return JSONResponse(body, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse({"error": "Internal server error"}, status_code=500)
