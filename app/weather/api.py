"""HTTP routes of the weather service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse
from opentelemetry import trace
from opentelemetry.trace import Tracer

from app.disconnect import CLIENT_CLOSED_REQUEST, cancel_on_disconnect
from app.responses import message_response
from app.schemas import MessageResponse, WeatherResponse
from models.cep import parse_cep
from models.errors import InvalidZipcodeError
from models.weather import Outcome
from services.weather import WeatherService
from tracing import extract_context

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "can not find zipcode"

router = APIRouter()


def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service


def get_tracer(request: Request) -> Tracer:
    return request.app.state.tracer


@router.get(
    "/weather",
    response_model=WeatherResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
        422: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
    summary="Current temperature for the city of a postal code.",
)
async def get_weather(
    request: Request,
    cep: str = Query("", description="Eight digit Brazilian postal code."),
    service: WeatherService = Depends(get_weather_service),
    tracer: Tracer = Depends(get_tracer),
) -> Response:
    parent = extract_context(request.headers)
    with tracer.start_as_current_span("ServiceB /weather Handler", context=parent) as span:
        try:
            parse_cep(cep)
        except InvalidZipcodeError as exc:
            logger.info("Rejected zipcode", extra={"cep": cep, "status": 422})
            return message_response(422, exc.message)

        outcome = await cancel_on_disconnect(
            request.receive,
            lambda: service.report(cep, context=trace.set_span_in_context(span, parent)),
        )
        if outcome is None:
            return message_response(CLIENT_CLOSED_REQUEST, "client disconnected")

        if outcome.outcome is Outcome.not_found:
            logger.info("Zipcode not found", extra={"cep": cep, "status": 404})
            return message_response(status.HTTP_404_NOT_FOUND, NOT_FOUND_MESSAGE)
        if outcome.outcome is Outcome.failed or outcome.result is None:
            detail = outcome.detail or "weather lookup failed"
            logger.error(
                "Weather lookup failed",
                extra={"cep": cep, "status": 500, "reason": detail},
            )
            return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)

        body = WeatherResponse.from_result(outcome.result)
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(by_alias=True))
