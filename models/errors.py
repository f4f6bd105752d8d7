"""Exception hierarchy shared by the gateway and the weather service."""

from __future__ import annotations


class CepWeatherError(Exception):
    """Base error for the CEP weather services."""


class ValidationError(CepWeatherError):
    """Raised when client input is rejected before any network call."""

    message = "invalid input"


class InvalidPayloadError(ValidationError):
    """The request body is not valid JSON."""

    message = "invalid json"


class InvalidZipcodeError(ValidationError):
    """The postal code is not exactly eight digits."""

    message = "invalid zipcode"


class UpstreamError(CepWeatherError):
    """An upstream HTTP dependency failed, answered non-200 or sent garbage."""


class ConfigurationError(CepWeatherError):
    """A required setting is missing; the service must not start."""
