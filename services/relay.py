"""Gateway side of the gateway to weather service hop."""

from __future__ import annotations

import logging
import time
from typing import Optional

import httpx
from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.trace import Status, StatusCode, Tracer

from models.errors import UpstreamError
from models.weather import RelayedResponse
from settings import DEFAULT_SERVICE_B_URL
from tracing import inject_context

logger = logging.getLogger(__name__)


class WeatherServiceClient:
    """Forwards a validated CEP to the weather service.

    The answer is handed back as a :class:`RelayedResponse` so the gateway can
    pass status and body through without looking at them. Only transport
    failures are turned into :class:`UpstreamError`.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        tracer: Tracer,
        base_url: str = DEFAULT_SERVICE_B_URL,
    ) -> None:
        self._http = http_client
        self._tracer = tracer
        self._base_url = base_url.rstrip("/")

    async def forward(self, cep: str, context: Optional[Context] = None) -> RelayedResponse:
        with self._tracer.start_as_current_span("ServiceA callServiceB", context=context) as span:
            span.set_attribute("cep", cep)
            headers = inject_context(trace.set_span_in_context(span, context))
            start = time.perf_counter()
            try:
                response = await self._http.get(
                    f"{self._base_url}/weather",
                    params={"cep": cep},
                    headers=headers,
                )
            except httpx.HTTPError as exc:
                detail = str(exc) or type(exc).__name__
                span.set_status(Status(StatusCode.ERROR, detail))
                logger.warning(
                    "Weather service unreachable",
                    extra={"cep": cep, "upstream": "weather", "reason": detail},
                )
                raise UpstreamError(detail) from exc

            elapsed_ms = int((time.perf_counter() - start) * 1000)
            span.set_attribute("http.status_code", response.status_code)
            logger.info(
                "Weather service answered",
                extra={
                    "cep": cep,
                    "upstream": "weather",
                    "status": response.status_code,
                    "elapsed_ms": elapsed_ms,
                },
            )
            return RelayedResponse(
                status_code=response.status_code,
                body=response.content,
                content_type=response.headers.get("content-type", "application/json"),
            )
