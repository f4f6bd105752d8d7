"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from pydantic import BaseModel, Field

from models.weather import WeatherResult


class MessageResponse(BaseModel):
    """Error payload returned by both services."""

    message: str


class CepSubmission(BaseModel):
    """Request body for ``POST /cep``."""

    cep: str = Field(..., description="Eight digit Brazilian postal code.", examples=["01001000"])


class WeatherResponse(BaseModel):
    """Successful weather lookup for a postal code."""

    city: str
    temp_c: float = Field(..., alias="temp_C")
    temp_f: float = Field(..., alias="temp_F")
    temp_k: float = Field(..., alias="temp_K")

    @classmethod
    def from_result(cls, result: WeatherResult) -> "WeatherResponse":
        reading = result.reading
        return cls.model_validate(
            {
                "city": result.city,
                "temp_C": reading.celsius,
                "temp_F": reading.fahrenheit,
                "temp_K": reading.kelvin,
            }
        )
