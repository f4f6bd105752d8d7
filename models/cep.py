"""Postal code (CEP) validation."""

from __future__ import annotations

import re
from typing import Any

from models.errors import InvalidZipcodeError

_CEP_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_cep(value: Any) -> bool:
    return isinstance(value, str) and _CEP_PATTERN.fullmatch(value) is not None


def parse_cep(value: Any) -> str:
    """Return ``value`` unchanged if it is an eight digit CEP."""
    if not is_valid_cep(value):
        raise InvalidZipcodeError(InvalidZipcodeError.message)
    return value
