from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from models.errors import ConfigurationError


_SERVICE_B_URL_ENV = "SERVICE_B_URL"
_ZIPKIN_ENDPOINT_ENV = "ZIPKIN_ENDPOINT"
_WEATHER_API_KEY_ENV = "WEATHER_API_KEY"
_VIACEP_BASE_URL_ENV = "VIACEP_BASE_URL"
_WEATHER_API_BASE_URL_ENV = "WEATHER_API_BASE_URL"
_HTTP_TIMEOUT_ENV = "HTTP_TIMEOUT_SECONDS"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_SERVICE_B_URL = "http://service-b:8082"
DEFAULT_ZIPKIN_ENDPOINT = "http://zipkin:9411/api/v2/spans"
DEFAULT_VIACEP_BASE_URL = "https://viacep.com.br/ws"
DEFAULT_WEATHER_API_BASE_URL = "https://api.weatherapi.com/v1"
DEFAULT_HTTP_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:
    service_b_url: str
    zipkin_endpoint: Optional[str]
    weather_api_key: Optional[str]
    viacep_base_url: str
    weather_api_base_url: str
    http_timeout: float
    log_level: str

    def require_weather_api_key(self) -> str:
        if not self.weather_api_key:
            raise ConfigurationError(f"{_WEATHER_API_KEY_ENV} is not set")
        return self.weather_api_key


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_url_env(name: str, default: str) -> str:
    return _read_str_env(name, default).rstrip("/")


def _read_timeout(default: float) -> float:
    value = os.getenv(_HTTP_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        service_b_url=_read_url_env(_SERVICE_B_URL_ENV, DEFAULT_SERVICE_B_URL),
        zipkin_endpoint=_read_optional_env(_ZIPKIN_ENDPOINT_ENV, DEFAULT_ZIPKIN_ENDPOINT),
        weather_api_key=_read_optional_env(_WEATHER_API_KEY_ENV, None),
        viacep_base_url=_read_url_env(_VIACEP_BASE_URL_ENV, DEFAULT_VIACEP_BASE_URL),
        weather_api_base_url=_read_url_env(
            _WEATHER_API_BASE_URL_ENV, DEFAULT_WEATHER_API_BASE_URL
        ),
        http_timeout=_read_timeout(DEFAULT_HTTP_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )
