"""Client for the WeatherAPI current conditions endpoint."""

from __future__ import annotations

import logging
import math
from typing import Optional

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import Status, StatusCode, Tracer

from models.errors import UpstreamError
from models.weather import TemperatureReading
from settings import DEFAULT_WEATHER_API_BASE_URL

logger = logging.getLogger(__name__)


class WeatherApiClient:

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        tracer: Tracer,
        api_key: str,
        base_url: str = DEFAULT_WEATHER_API_BASE_URL,
    ) -> None:
        self._http = http_client
        self._tracer = tracer
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def current_temperature(self, city: str, context: Optional[Context] = None) -> TemperatureReading:
        """Fetch the current Celsius temperature for ``city``.

        Raises:
            UpstreamError: on transport failure, a non-200 answer or a payload
                without a finite ``current.temp_c``.
        """
        with self._tracer.start_as_current_span("fetchTemperatureCelsius", context=context) as span:
            span.set_attribute("city", city)
            try:
                try:
                    response = await self._http.get(
                        f"{self._base_url}/current.json",
                        params={"key": self._api_key, "q": city},
                    )
                except httpx.HTTPError as exc:
                    raise UpstreamError(str(exc) or type(exc).__name__) from exc

                if response.status_code != httpx.codes.OK:
                    raise UpstreamError(f"WeatherAPI status: {response.status_code}")

                celsius = self._parse_celsius(response)
            except UpstreamError as exc:
                span.set_status(Status(StatusCode.ERROR, str(exc)))
                logger.warning(
                    "Temperature lookup failed",
                    extra={"city": city, "upstream": "weatherapi", "reason": str(exc)},
                )
                raise

            span.set_attribute("temp_c", celsius)
            return TemperatureReading(celsius=celsius)

    @staticmethod
    def _parse_celsius(response: httpx.Response) -> float:
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(f"invalid WeatherAPI payload: {exc}") from exc

        current = payload.get("current") if isinstance(payload, dict) else None
        value = current.get("temp_c") if isinstance(current, dict) else None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise UpstreamError("invalid WeatherAPI payload: missing current.temp_c")
        if not math.isfinite(value):
            raise UpstreamError(f"invalid WeatherAPI payload: current.temp_c is {value}")
        return float(value)
