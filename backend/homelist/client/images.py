# backend/homelist/client/images.py
"""Image fetching with bounded retries and a caller-supplied fallback."""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

import httpx

logger = logging.getLogger(__name__)

ImageFetch = Callable[[str], Awaitable[bytes]]
Sleep = Callable[[float], Awaitable[Any]]


def with_cache_buster(src: str, retry: int, now_ms: int) -> str:
    """Append retry=<n>&t=<ms> so caches treat the retry as a new request."""
    return str(httpx.URL(src).copy_merge_params({"retry": str(retry), "t": str(now_ms)}))


def httpx_image_fetch(client: httpx.AsyncClient) -> ImageFetch:
    async def fetch(url: str) -> bytes:
        response = await client.get(url)
        response.raise_for_status()
        return response.content

    return fetch


class ResilientImageLoader:
    """Load one image URL, retrying transient failures.

    Retry ``n`` (1-based) waits ``base_delay * n`` seconds and requests the
    source with a cache-busting query. Once ``retry_count`` retries are used
    up, :meth:`load` returns the fallback and calls ``on_error``. Switching the
    source with :meth:`set_source` starts over, and a load still sleeping for
    the old source gives up.
    """

    def __init__(
        self,
        fetch: ImageFetch,
        src: Optional[str] = None,
        *,
        retry_count: int = 2,
        base_delay: float = 1.0,
        on_error: Optional[Callable[[Exception], None]] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._fetch = fetch
        self.retry_count = max(0, retry_count)
        self.base_delay = base_delay
        self.on_error = on_error
        self._sleep = sleep
        self._clock = clock
        self._generation = 0
        self.set_source(src)

    def set_source(self, src: Optional[str]) -> None:
        self.src = src
        self.current_src = src
        self.retries = 0
        self.has_error = False
        self.is_loading = src is not None
        self._generation += 1

    async def load(self, fallback: Any = None) -> Any:
        if self.src is None:
            return fallback
        generation = self._generation

        while True:
            try:
                content = await self._fetch(self.current_src)
            except (httpx.HTTPError, OSError) as exc:
                if generation != self._generation:
                    return fallback
                if self.retries < self.retry_count:
                    delay = self.base_delay * (self.retries + 1)
                    logger.debug("image %s failed (%s), retry in %.1fs", self.current_src, exc, delay)
                    await self._sleep(delay)
                    if generation != self._generation:
                        return fallback
                    self.retries += 1
                    self.current_src = with_cache_buster(self.src, self.retries, int(self._clock() * 1000))
                    self.is_loading = True
                    continue

                self.has_error = True
                self.is_loading = False
                logger.info("image %s unavailable after %d retries", self.src, self.retries)
                if self.on_error is not None:
                    self.on_error(exc)
                return fallback

            if generation != self._generation:
                return fallback
            self.is_loading = False
            return content
