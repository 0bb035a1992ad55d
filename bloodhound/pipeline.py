"""Evaluation context and rate-limited resource retrieval."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace

import requests

from bloodhound.client import BloodhoundClient, ClientConfig
from bloodhound.htmldoc import Node, parse_html

logger = logging.getLogger(__name__)

WORKERS = 10


class RateLimitedError(Exception):
    """Raised when the target answers with HTTP 429 Too Many Requests."""


@dataclass
class Context:
    """A target URL travelling through the pipeline with its score and content."""

    url: str
    content: Node | None = None
    score: int = 0

    def add_score(self, score: int) -> None:
        """Add ``score`` to the accumulated score."""
        self.score += score


class _RateLimiter:
    """Token bucket filled at ``rate`` tokens a second, holding at most ``rate``."""

    def __init__(self, rate: int) -> None:
        if rate <= 0:
            raise ValueError(f"request rate must be positive, got {rate}")
        self._interval = 1.0 / rate
        self._capacity = float(rate)
        self._tokens = 0.0
        self._last = time.monotonic()
        self._lock = threading.Lock()

    def acquire(self) -> None:
        while True:
            with self._lock:
                now = time.monotonic()
                self._tokens = min(
                    self._capacity, self._tokens + (now - self._last) / self._interval
                )
                self._last = now
                if self._tokens >= 1.0:
                    self._tokens -= 1.0
                    return
                wait = (1.0 - self._tokens) * self._interval
            time.sleep(wait)


def _fetch(client: BloodhoundClient, limiter: _RateLimiter, context: Context) -> Context | None:
    limiter.acquire()
    logger.debug("Requesting resource %s", context.url)
    started = time.perf_counter()
    try:
        response = client.get(context.url)
    except requests.RequestException as exc:
        logger.error("Unable to process and request URL %s: %s. Skipping", context.url, exc)
        return None
    duration_ms = int((time.perf_counter() - started) * 1000)

    with response:
        if response.status_code == 429:
            raise RateLimitedError(
                "Requests are being limited by target, evaluation received HTTP status "
                "429 Too Many Requests. Try running the command again with adjusted "
                "request rate settings."
            )
        if response.status_code != 200:
            logger.warning(
                "Resource %s returned non-OK status %d after %d ms: "
                "content evaluation will not be available",
                context.url,
                response.status_code,
                duration_ms,
            )
            return None
        logger.debug("Finished requesting %s in %d ms", context.url, duration_ms)
        document = parse_html(response.text)
    return replace(context, content=document)


def retrieve_resource(client_config: ClientConfig, contexts: Iterable[Context]) -> Iterator[Context]:
    """Fetch every context's URL, rate limited, and yield those answered with 200 OK.

    Each yielded context carries the parsed document. Contexts whose request fails
    or returns another status are dropped; a 429 answer raises RateLimitedError.
    """
    limiter = _RateLimiter(client_config.rate)
    local = threading.local()
    clients: list[BloodhoundClient] = []
    clients_lock = threading.Lock()

    def client() -> BloodhoundClient:
        existing = getattr(local, "client", None)
        if existing is None:
            existing = BloodhoundClient(client_config)
            local.client = existing
            with clients_lock:
                clients.append(existing)
        return existing

    executor = ThreadPoolExecutor(max_workers=WORKERS)
    try:
        futures = [executor.submit(lambda c=c: _fetch(client(), limiter, c)) for c in contexts]
        for future in futures:
            result = future.result()
            if result is not None:
                yield result
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
        for opened in clients:
            opened.close()