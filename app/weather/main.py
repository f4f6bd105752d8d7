from __future__ import annotations

import logging
from typing import List, Optional

import httpx
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider

from app.health import router as health_router
from app.lifespan import Closer, lifespan
from app.weather.api import router
from logging_config import configure_logging
from models.errors import ConfigurationError
from services.weather import build_weather_service
from settings import Settings, get_settings
from tracing import build_tracer_provider

logger = logging.getLogger(__name__)

SERVICE_NAME = "service-b"
TRACER_NAME = "service-b-tracer"


def create_app(
    settings: Optional[Settings] = None,
    tracer_provider: Optional[TracerProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the weather service.

    Raises:
        ConfigurationError: when no weather API key is configured.
    """
    configure_logging()
    settings = settings or get_settings()
    try:
        settings.require_weather_api_key()
    except ConfigurationError as exc:
        logger.critical("Refusing to start weather service", extra={"reason": str(exc)})
        raise

    closers: List[Closer] = []
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout)
        closers.append(http_client.aclose)
    if tracer_provider is None:
        tracer_provider = build_tracer_provider(SERVICE_NAME, settings.zipkin_endpoint)
        closers.append(tracer_provider.shutdown)
    tracer = tracer_provider.get_tracer(TRACER_NAME)

    app = FastAPI(
        title="CEP Weather Service",
        description="Resolves a postal code to its city and current temperature.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.tracer = tracer
    app.state.weather_service = build_weather_service(settings, http_client, tracer)
    app.state.closers = closers
    app.include_router(router)
    app.include_router(health_router)
    return app
