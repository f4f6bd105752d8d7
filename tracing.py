"""OpenTelemetry wiring shared by both services."""

from __future__ import annotations

import logging
from typing import Mapping, MutableMapping, Optional

from opentelemetry import propagate, trace
from opentelemetry.context import Context
from opentelemetry.exporter.zipkin.json import ZipkinExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

logger = logging.getLogger(__name__)


def build_tracer_provider(service_name: str, zipkin_endpoint: Optional[str]) -> TracerProvider:
    """Create a provider for ``service_name`` exporting to Zipkin.

    The provider is returned rather than installed globally; callers hand it
    to the application factory. A missing endpoint yields a provider that
    records spans without exporting them.
    """
    provider = TracerProvider(resource=Resource.create({SERVICE_NAME: service_name}))
    if zipkin_endpoint:
        provider.add_span_processor(BatchSpanProcessor(ZipkinExporter(endpoint=zipkin_endpoint)))
    else:
        logger.info("Span export disabled", extra={"reason": "no zipkin endpoint"})
    return provider


def extract_context(headers: Mapping[str, str]) -> Context:
    return propagate.extract(headers)


def inject_context(context: Optional[Context] = None) -> dict[str, str]:
    carrier: MutableMapping[str, str] = {}
    propagate.inject(carrier, context=context)
    return dict(carrier)


def trace_id_of(span: trace.Span) -> Optional[str]:
    span_context = span.get_span_context()
    if not span_context.is_valid:
        return None
    return format(span_context.trace_id, "032x")
