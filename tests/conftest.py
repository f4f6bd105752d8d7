from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.gateway.main import create_app as create_gateway_app
from app.weather.main import create_app as create_weather_app
from fakes import FakeUpstreams, VIACEP_HOST, WEATHER_SERVICE_HOST, WEATHERAPI_HOST
from settings import Settings


@pytest.fixture
def settings() -> Settings:
    return Settings(
        service_b_url=f"http://{WEATHER_SERVICE_HOST}",
        zipkin_endpoint=None,
        weather_api_key="test-key",
        viacep_base_url=f"https://{VIACEP_HOST}/ws",
        weather_api_base_url=f"https://{WEATHERAPI_HOST}/v1",
        http_timeout=5.0,
        log_level="INFO",
    )


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def tracer_provider(span_exporter: InMemorySpanExporter) -> Iterator[TracerProvider]:
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    yield provider
    provider.shutdown()


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def weather_client(
    settings: Settings,
    tracer_provider: TracerProvider,
    upstreams: FakeUpstreams,
) -> Iterator[TestClient]:
    app = create_weather_app(
        settings=settings,
        tracer_provider=tracer_provider,
        http_client=upstreams.client(),
    )
    with TestClient(app) as client:
        yield client


@pytest.fixture
def gateway_client(
    settings: Settings,
    tracer_provider: TracerProvider,
    upstreams: FakeUpstreams,
) -> Iterator[TestClient]:
    app = create_gateway_app(
        settings=settings,
        tracer_provider=tracer_provider,
        http_client=upstreams.client(),
    )
    with TestClient(app) as client:
        yield client
