from __future__ import annotations

import inspect
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, List, Union

from fastapi import FastAPI

Closer = Callable[[], Union[Awaitable[object], object]]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the resources an application factory registered in ``app.state.closers``."""
    try:
        yield
    finally:
        closers: List[Closer] = app.state.closers
        for close in closers:
            result = close()
            if inspect.isawaitable(result):
                await result
