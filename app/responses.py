from __future__ import annotations

from fastapi.responses import JSONResponse

from app.schemas import MessageResponse


def message_response(status_code: int, message: str) -> JSONResponse:
    """Build the ``{"message": ...}`` body both services answer errors with."""
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).model_dump(),
    )
