"""CEP to temperature pipeline used by the weather service."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import Tracer

from models.errors import UpstreamError
from models.weather import Outcome, WeatherOutcome, WeatherResult
from services.viacep import ViaCepClient
from services.weatherapi import WeatherApiClient
from settings import Settings

logger = logging.getLogger(__name__)


class WeatherService:
    """Resolves the city for a CEP, then its current temperature.

    The two lookups run strictly in sequence since the second one needs the
    city produced by the first.
    """

    def __init__(self, cep_client: ViaCepClient, weather_client: WeatherApiClient) -> None:
        self.cep_client = cep_client
        self.weather_client = weather_client

    async def report(self, cep: str, context: Optional[Context] = None) -> WeatherOutcome:
        resolution = await self.cep_client.resolve_city(cep, context=context)
        if resolution.outcome is Outcome.not_found:
            return WeatherOutcome.not_found()
        if resolution.outcome is Outcome.failed:
            return WeatherOutcome.failed(resolution.detail or "city lookup failed")

        city = resolution.city or ""
        try:
            reading = await self.weather_client.current_temperature(city, context=context)
        except UpstreamError as exc:
            return WeatherOutcome.failed(str(exc))

        logger.info(
            "Weather resolved",
            extra={"cep": cep, "city": city},
        )
        return WeatherOutcome.ok(WeatherResult(city=city, reading=reading))


def build_weather_service(
    settings: Settings,
    http_client: httpx.AsyncClient,
    tracer: Tracer,
) -> WeatherService:
    """Factory that wires both upstream clients onto one HTTP client."""
    api_key = settings.require_weather_api_key()
    return WeatherService(
        cep_client=ViaCepClient(http_client, tracer, base_url=settings.viacep_base_url),
        weather_client=WeatherApiClient(
            http_client,
            tracer,
            api_key=api_key,
            base_url=settings.weather_api_base_url,
        ),
    )
