"""End-to-end checks chaining the gateway into the weather service in process."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from app.gateway.main import create_app as create_gateway_app
from app.weather.main import create_app as create_weather_app
from fakes import WEATHER_SERVICE_HOST, FakeUpstreams, json_responder
from settings import Settings


@pytest.fixture
def pipeline(
    settings: Settings,
    tracer_provider: TracerProvider,
    upstreams: FakeUpstreams,
) -> Iterator[TestClient]:
    weather_app = create_weather_app(
        settings=settings,
        tracer_provider=tracer_provider,
        http_client=upstreams.client(),
    )
    weather_url = f"http://{WEATHER_SERVICE_HOST}"
    weather_client = httpx.AsyncClient(
        transport=httpx.ASGITransport(app=weather_app), base_url=weather_url
    )
    gateway_app = create_gateway_app(
        settings=replace(settings, service_b_url=weather_url),
        tracer_provider=tracer_provider,
        http_client=weather_client,
    )
    with TestClient(gateway_app) as client:
        yield client


def test_known_zipcode_returns_weather(pipeline: TestClient, upstreams: FakeUpstreams) -> None:
    upstreams.viacep = json_responder(200, {"localidade": "São Paulo", "erro": False})
    upstreams.weatherapi = json_responder(200, {"current": {"temp_c": 25.0}})

    response = pipeline.post("/cep", json={"cep": "01001000"})

    assert response.status_code == 200
    assert response.json() == {"city": "São Paulo", "temp_C": 25, "temp_F": 77, "temp_K": 298}


def test_unknown_zipcode_is_relayed_as_not_found(
    pipeline: TestClient, upstreams: FakeUpstreams
) -> None:
    upstreams.viacep = json_responder(200, {"erro": True})

    response = pipeline.post("/cep", json={"cep": "00000000"})

    assert response.status_code == 404
    assert response.json() == {"message": "can not find zipcode"}


def test_malformed_zipcode_never_leaves_the_gateway(
    pipeline: TestClient, upstreams: FakeUpstreams, span_exporter: InMemorySpanExporter
) -> None:
    response = pipeline.post("/cep", json={"cep": "123"})

    assert response.status_code == 422
    assert response.json() == {"message": "invalid zipcode"}
    assert upstreams.requests == []
    names = [span.name for span in span_exporter.get_finished_spans()]
    assert names == ["ServiceA /cep Handler"]


def test_downstream_failure_is_relayed(pipeline: TestClient, upstreams: FakeUpstreams) -> None:
    upstreams.weatherapi = json_responder(401, {"error": {"message": "API key is invalid."}})

    response = pipeline.post("/cep", json={"cep": "01001000"})

    assert response.status_code == 500
    assert response.json() == {"message": "WeatherAPI status: 401"}


def test_single_trace_spans_both_services(
    pipeline: TestClient, span_exporter: InMemorySpanExporter
) -> None:
    pipeline.post("/cep", json={"cep": "01001000"})

    spans = {span.name: span for span in span_exporter.get_finished_spans()}
    assert set(spans) == {
        "ServiceA /cep Handler",
        "ServiceA callServiceB",
        "ServiceB /weather Handler",
        "fetchCityFromCEP",
        "fetchTemperatureCelsius",
    }
    assert len({span.context.trace_id for span in spans.values()}) == 1

    weather_handler = spans["ServiceB /weather Handler"]
    assert weather_handler.parent is not None
    assert weather_handler.parent.span_id == spans["ServiceA callServiceB"].context.span_id
