# meme_post_editor/perf.py
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Request

logger = logging.getLogger(__name__)


class Stopwatch:
    def __init__(self) -> None:
        self.start: float = time.perf_counter()
        self.detail: str = ""  # appended to the completion log line

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.start


@asynccontextmanager
async def timed_call(operation: str, log: logging.Logger = logger) -> AsyncIterator[Stopwatch]:
    """Logs start, completion and failure of an awaited operation with its duration"""
    watch = Stopwatch()
    log.info(f"Starting: {operation}")
    try:
        yield watch
    except Exception as e:
        log.error(f"Failed: {operation} after {watch.elapsed:.3f}s - {e}")
        raise
    log.info(f"Completed: {operation} in {watch.elapsed:.3f}s{watch.detail}")


async def performance_middleware(request: Request, call_next):
    """Times every request and exposes the timing as X-Process-Time"""
    async with timed_call(f"{request.method} {request.url.path}") as watch:
        response = await call_next(request)
        watch.detail = f" status {response.status_code}"
        response.headers["X-Process-Time"] = f"{watch.elapsed:.3f}"
    return response
