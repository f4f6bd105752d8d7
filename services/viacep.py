"""Client for the ViaCEP postal code lookup API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import Span, Status, StatusCode, Tracer

from models.weather import CityResolution
from settings import DEFAULT_VIACEP_BASE_URL

logger = logging.getLogger(__name__)


def _signals_not_found(flag: Any) -> bool:
    # ViaCEP has answered both ``true`` and ``"true"`` over time.
    if isinstance(flag, str):
        return flag.strip().lower() == "true"
    return flag is True


class ViaCepClient:
    """Resolves a CEP to the name of its locality."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        tracer: Tracer,
        base_url: str = DEFAULT_VIACEP_BASE_URL,
    ) -> None:
        self._http = http_client
        self._tracer = tracer
        self._base_url = base_url.rstrip("/")

    async def resolve_city(self, cep: str, context: Optional[Context] = None) -> CityResolution:
        with self._tracer.start_as_current_span("fetchCityFromCEP", context=context) as span:
            span.set_attribute("cep", cep)
            try:
                response = await self._http.get(f"{self._base_url}/{cep}/json/")
            except httpx.HTTPError as exc:
                return self._failed(span, cep, str(exc) or type(exc).__name__)

            if response.status_code != httpx.codes.OK:
                return self._failed(span, cep, f"ViaCEP status: {response.status_code}")

            try:
                payload = response.json()
            except ValueError as exc:
                return self._failed(span, cep, f"invalid ViaCEP payload: {exc}")
            if not isinstance(payload, dict):
                return self._failed(span, cep, "invalid ViaCEP payload: expected an object")

            if _signals_not_found(payload.get("erro")):
                span.set_attribute("cep.found", False)
                logger.info("CEP not found", extra={"cep": cep, "upstream": "viacep"})
                return CityResolution.not_found()

            city = payload.get("localidade") or ""
            span.set_attribute("cep.found", True)
            span.set_attribute("city", city)
            return CityResolution.found(str(city))

    @staticmethod
    def _failed(span: Span, cep: str, detail: str) -> CityResolution:
        span.set_status(Status(StatusCode.ERROR, detail))
        logger.warning(
            "City lookup failed",
            extra={"cep": cep, "upstream": "viacep", "reason": detail},
        )
        return CityResolution.failed(detail)
