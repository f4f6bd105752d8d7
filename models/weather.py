"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class TemperatureReading:
    """A Celsius reading; the other scales are derived on access."""

    celsius: float

    @property
    def fahrenheit(self) -> float:
        return self.celsius * 1.8 + 32

    @property
    def kelvin(self) -> float:
        return self.celsius + 273


@dataclass(frozen=True, slots=True)
class WeatherResult:
    city: str
    reading: TemperatureReading


class Outcome(str, Enum):
    """How a lookup step ended."""

    found = "found"
    not_found = "not_found"
    failed = "failed"


@dataclass(frozen=True, slots=True)
class CityResolution:
    """Result of resolving a CEP to a city name."""

    outcome: Outcome
    city: Optional[str] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, city: str) -> "CityResolution":
        return cls(Outcome.found, city=city)

    @classmethod
    def not_found(cls) -> "CityResolution":
        return cls(Outcome.not_found)

    @classmethod
    def failed(cls, detail: str) -> "CityResolution":
        return cls(Outcome.failed, detail=detail)


@dataclass(frozen=True, slots=True)
class WeatherOutcome:
    """Result of the full CEP to temperature pipeline."""

    outcome: Outcome
    result: Optional[WeatherResult] = None
    detail: Optional[str] = None

    @classmethod
    def ok(cls, result: WeatherResult) -> "WeatherOutcome":
        return cls(Outcome.found, result=result)

    @classmethod
    def not_found(cls) -> "WeatherOutcome":
        return cls(Outcome.not_found)

    @classmethod
    def failed(cls, detail: str) -> "WeatherOutcome":
        return cls(Outcome.failed, detail=detail)


@dataclass(frozen=True, slots=True)
class RelayedResponse:
    """Weather service response as seen by the gateway, passed through untouched."""

    status_code: int
    body: bytes
    content_type: str = "application/json"
