"""Tie upstream calls to the lifetime of the inbound request."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, TypeVar

import anyio
from starlette.types import Receive

logger = logging.getLogger(__name__)

T = TypeVar("T")

# nginx's status for a request the client abandoned.
CLIENT_CLOSED_REQUEST = 499


async def cancel_on_disconnect(receive: Receive, call: Callable[[], Awaitable[T]]) -> Optional[T]:
    """Await ``call()`` unless the client goes away first.

    ``receive`` is the raw ASGI channel of the inbound request. When it yields
    ``http.disconnect`` before ``call`` finishes, the call is cancelled and
    ``None`` is returned. Exceptions raised by ``call`` propagate unchanged.
    """
    outcome: dict[str, object] = {}

    async with anyio.create_task_group() as tg:

        async def watch() -> None:
            while True:
                message = await receive()
                if message["type"] == "http.disconnect":
                    break
            logger.info("Client disconnected, cancelling upstream call")
            tg.cancel_scope.cancel()

        tg.start_soon(watch)
        try:
            outcome["value"] = await call()
        except Exception as exc:
            outcome["error"] = exc
        tg.cancel_scope.cancel()

    error = outcome.get("error")
    if isinstance(error, Exception):
        raise error
    return outcome.get("value")  # type: ignore[return-value]

