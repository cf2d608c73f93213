"""Base HTTP client with retry, pacing and pagination."""

import asyncio
from dataclasses import dataclass
from typing import Any

import httpx
from loguru import logger
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, wait_exponential

from parliament_client.errors import ApiUnavailableError
from settings import (
    API_BASE_URL,
    API_TIMEOUT,
    MAX_CONCURRENT,
    MAX_RATE_LIMIT_RETRIES,
    MAX_TIMEOUT_RETRIES,
    PAGE_SIZE,
    REQUEST_DELAY,
    RETRY_BASE_DELAY,
    RETRY_MAX_DELAY,
    USER_AGENT,
)


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff for transient faults: delay doubles from base_delay up to max_delay."""

    max_rate_limit_retries: int = MAX_RATE_LIMIT_RETRIES
    max_timeout_retries: int = MAX_TIMEOUT_RETRIES
    base_delay: float = RETRY_BASE_DELAY
    max_delay: float = RETRY_MAX_DELAY


def is_rate_limited(exc: BaseException | None) -> bool:
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 429


def is_timeout(exc: BaseException | None) -> bool:
    return isinstance(exc, (httpx.TimeoutException, httpx.ConnectError, httpx.ReadError, httpx.RemoteProtocolError))


def _is_retryable_error(exc: BaseException) -> bool:
    """429 and timeouts are transient; other HTTP errors are reported to the caller."""
    return is_rate_limited(exc) or is_timeout(exc)


class _StopAfterFaultBound:
    """Stop condition with a separate retry bound per fault class.

    Failures are counted per class, so 429s do not use up the timeout
    retries of the same request. One instance per request.
    """

    def __init__(self, policy: RetryPolicy):
        self._policy = policy
        self._rate_limited = 0
        self._timeouts = 0

    def __call__(self, retry_state: RetryCallState) -> bool:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if is_rate_limited(exc):
            self._rate_limited += 1
            return self._rate_limited > self._policy.max_rate_limit_retries
        self._timeouts += 1
        return self._timeouts > self._policy.max_timeout_retries


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception()
    reason = "rate limited" if is_rate_limited(exc) else type(exc).__name__
    logger.warning(
        "Attempt {} {}, retrying in {:.1f}s",
        retry_state.attempt_number,
        reason,
        retry_state.next_action.sleep if retry_state.next_action else 0,
    )


class BaseClient:
    """Base async HTTP client with pacing, bounded backoff and pagination."""

    base_url = API_BASE_URL
    headers = {"Accept": "application/json", "User-Agent": USER_AGENT, "API-Version": "v1"}

    def __init__(
        self,
        max_concurrent: int = MAX_CONCURRENT,
        request_delay: float = REQUEST_DELAY,
        policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        base_url: str | None = None,
    ):
        self._client: httpx.AsyncClient | None = None
        self._sem = asyncio.Semaphore(max_concurrent)
        self._request_delay = request_delay
        self._policy = policy or RetryPolicy()
        self._transport = transport
        if base_url:
            self.base_url = base_url
        self._request_count = 0
        self._success_count = 0
        logger.debug("{}: max_concurrent={}, delay={}s", self.__class__.__name__, max_concurrent, request_delay)

    async def __aenter__(self):
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=self.headers,
            timeout=API_TIMEOUT,
            limits=httpx.Limits(max_connections=20, max_keepalive_connections=10),
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        logger.info("{}: {} API requests", self.__class__.__name__, self._request_count)
        if self._client:
            await self._client.aclose()

    @property
    def has_succeeded(self) -> bool:
        """True once any request got an answer (including 404)."""
        return self._success_count > 0

    async def _send(self, path: str, params: dict | None) -> httpx.Response:
        """Single attempt, paced by the fixed inter-request delay."""
        async with self._sem:
            await asyncio.sleep(self._request_delay)
            self._request_count += 1
            resp = await self._client.get(path, params=params)
        if resp.status_code != 404:
            resp.raise_for_status()
        return resp

    async def _request(self, path: str, params: dict | None = None) -> httpx.Response | None:
        """GET with bounded backoff; None when the resource does not exist."""
        retrying = AsyncRetrying(
            stop=_StopAfterFaultBound(self._policy),
            wait=wait_exponential(multiplier=self._policy.base_delay, max=self._policy.max_delay),
            retry=retry_if_exception(_is_retryable_error),
            before_sleep=_log_retry,
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    resp = await self._send(path, params)
        except httpx.HTTPError as e:
            if not self.has_succeeded:
                raise ApiUnavailableError(f"{self.base_url}: no answer to first request {path}: {e}") from e
            raise
        self._success_count += 1
        if resp.status_code == 404:
            logger.debug("Not found: {}", path)
            return None
        return resp

    async def _get(self, path: str, params: dict | None = None) -> Any | None:
        resp = await self._request(path, params)
        return resp.json() if resp is not None else None

    async def fetch_resource(self, path: str) -> dict | None:
        """Detail endpoint payload, or None (not found)."""
        return await self._get(path)

    async def fetch_page(
        self,
        endpoint: str,
        filters: dict | None = None,
        offset: int = 0,
        limit: int = PAGE_SIZE,
    ) -> tuple[list[dict], bool]:
        """One page of a listing: (items, has_more)."""
        url = httpx.URL(endpoint)
        params = {**dict(url.params), **(filters or {}), "offset": offset, "limit": limit}
        payload = await self._get(url.path, params)
        if not payload:
            return [], False
        items = payload.get("objects", [])
        has_more = bool((payload.get("pagination") or {}).get("next_url"))
        return items, has_more

    async def fetch_all(
        self,
        endpoint: str,
        filters: dict | None = None,
        max_items: int | None = None,
        page_size: int = PAGE_SIZE,
    ) -> list[dict]:
        """Page through a listing until it ends or max_items is reached.

        A failing first page is raised to the caller; a failure on a later
        page keeps what was fetched so far.
        """
        items: list[dict] = []
        offset = 0
        while max_items is None or len(items) < max_items:
            limit = page_size if max_items is None else min(page_size, max_items - len(items))
            try:
                page, has_more = await self.fetch_page(endpoint, filters, offset, limit)
            except (httpx.HTTPError, ValueError) as e:
                if offset == 0:
                    raise
                logger.warning("{}: paging stopped at offset {}: {}", endpoint, offset, e)
                break
            items.extend(page)
            offset += len(page)
            if not has_more or not page:
                break
        return items


async def safe_request(coro, default=None):
    """Execute coroutine, return default on failure."""
    try:
        return await coro
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Request failed: {}", e)
        return default
