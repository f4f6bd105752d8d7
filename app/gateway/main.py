from __future__ import annotations

from typing import List, Optional

import httpx
from fastapi import FastAPI
from opentelemetry.sdk.trace import TracerProvider

from app.gateway.api import router
from app.health import router as health_router
from app.lifespan import Closer, lifespan
from logging_config import configure_logging
from services.relay import WeatherServiceClient
from settings import Settings, get_settings
from tracing import build_tracer_provider

SERVICE_NAME = "service-a"
TRACER_NAME = "service-a-tracer"


def create_app(
    settings: Optional[Settings] = None,
    tracer_provider: Optional[TracerProvider] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    configure_logging()
    settings = settings or get_settings()

    closers: List[Closer] = []
    if http_client is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout)
        closers.append(http_client.aclose)
    if tracer_provider is None:
        tracer_provider = build_tracer_provider(SERVICE_NAME, settings.zipkin_endpoint)
        closers.append(tracer_provider.shutdown)
    tracer = tracer_provider.get_tracer(TRACER_NAME)

    app = FastAPI(
        title="CEP Weather Gateway",
        description="Validates postal codes and relays them to the weather service.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.tracer = tracer
    app.state.relay = WeatherServiceClient(http_client, tracer, base_url=settings.service_b_url)
    app.state.closers = closers
    app.include_router(router)
    app.include_router(health_router)
    return app
