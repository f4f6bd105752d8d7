"""HTTP routes of the gateway service."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, Response, status
from opentelemetry import trace
from opentelemetry.trace import Tracer

from app.disconnect import CLIENT_CLOSED_REQUEST, cancel_on_disconnect
from app.responses import message_response
from app.schemas import MessageResponse
from models.cep import parse_cep
from models.errors import InvalidPayloadError, InvalidZipcodeError, UpstreamError
from services.relay import WeatherServiceClient
from tracing import extract_context

logger = logging.getLogger(__name__)

# Every method is routed here so non-POST requests get our own 405 body.
_ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

router = APIRouter()


def get_relay(request: Request) -> WeatherServiceClient:
    return request.app.state.relay


def get_tracer(request: Request) -> Tracer:
    return request.app.state.tracer


def read_cep(raw: bytes) -> str:
    """Extract and validate the CEP from a raw ``POST /cep`` body.

    Raises:
        InvalidPayloadError: the body is not JSON, or not an object with a
            string ``cep``. A bare ``null`` counts as an empty object.
        InvalidZipcodeError: ``cep`` is not exactly eight digits.
    """
    try:
        payload: Any = json.loads(raw)
    except ValueError as exc:
        raise InvalidPayloadError(InvalidPayloadError.message) from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidPayloadError(InvalidPayloadError.message)

    cep = payload.get("cep")
    if cep is not None and not isinstance(cep, str):
        raise InvalidPayloadError(InvalidPayloadError.message)
    return parse_cep(cep)


@router.api_route(
    "/cep",
    methods=_ROUTED_METHODS,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": MessageResponse},
        status.HTTP_405_METHOD_NOT_ALLOWED: {"model": MessageResponse},
        422: {"model": MessageResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
    summary="Look up the current temperature for a postal code.",
)
async def submit_cep(
    request: Request,
    relay: WeatherServiceClient = Depends(get_relay),
    tracer: Tracer = Depends(get_tracer),
) -> Response:
    parent = extract_context(request.headers)
    with tracer.start_as_current_span("ServiceA /cep Handler", context=parent) as span:
        if request.method != "POST":
            return message_response(status.HTTP_405_METHOD_NOT_ALLOWED, "use POST")

        try:
            cep = read_cep(await request.body())
        except InvalidPayloadError as exc:
            logger.info("Rejected body", extra={"status": 400})
            return message_response(status.HTTP_400_BAD_REQUEST, exc.message)
        except InvalidZipcodeError as exc:
            logger.info("Rejected zipcode", extra={"status": 422})
            return message_response(422, exc.message)

        try:
            relayed = await cancel_on_disconnect(
                request.receive,
                lambda: relay.forward(cep, context=trace.set_span_in_context(span, parent)),
            )
        except UpstreamError as exc:
            return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
        if relayed is None:
            return message_response(CLIENT_CLOSED_REQUEST, "client disconnected")

        return Response(
            content=relayed.body,
            status_code=relayed.status_code,
            media_type=relayed.content_type,
        )
