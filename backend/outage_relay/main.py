import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from outage_relay.config import settings
from outage_relay.countries.definitions import load_known_countries
from outage_relay.errors import register_error_handlers
from outage_relay.schemas.outage import HealthResponse
from outage_relay.services.cache import AggregateCache

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """JSON lines in production, human-readable locally."""
    if settings.is_production:
        logging.basicConfig(
            level=settings.log_level,
            format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
            stream=sys.stdout,
        )
    else:
        logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = settings.missing()
    if missing:
        logger.warning("Missing env vars (token validation uses /user/tokens/verify): %s", ", ".join(missing))
    logger.info("Serving %d known countries, cache TTL %ss",
                len(app.state.known_countries), settings.cache_ttl_seconds)
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="Radar Outage Relay",
        description="Per-country outage status from Cloudflare Radar annotations",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.aggregate_cache = AggregateCache(ttl_seconds=settings.cache_ttl_seconds)
    app.state.known_countries = load_known_countries(settings.countries_file or None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_error_handlers(app)

    from outage_relay.routers import outage, token

    app.include_router(outage.router)
    app.include_router(token.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello World"

    @app.get("/health", response_model=HealthResponse)
    async def health(request: Request):
        return HealthResponse(last_fetch=request.app.state.aggregate_cache.last_fetch)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    logger.info("Server running on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
