"""Bounded HTTP fetcher: one GET raced against a deadline, failures as values."""

import asyncio
import logging

import httpx

from shoresquad.models.fetch import FailureReason, FetchFailure, FetchResult, FetchSuccess

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 5000
DEFAULT_USER_AGENT = "shoresquad-weather/0.1.0"


class BoundedFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        self.user_agent = user_agent
        self.timeout_ms = timeout_ms
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "BoundedFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def fetch(self, url: str, timeout_ms: int | None = None) -> FetchResult:
        """GET ``url`` and decode its JSON body.

        The whole request, body included, must finish within ``timeout_ms``;
        otherwise it is cancelled and a ``timeout`` failure is returned.
        """
        budget_ms = self.timeout_ms if timeout_ms is None else timeout_ms
        budget = budget_ms / 1000
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        client = self._get_client()

        try:
            async with asyncio.timeout(budget):
                resp = await client.get(url, headers=headers, timeout=budget)
        except (TimeoutError, httpx.TimeoutException):
            logger.warning("GET %s timed out after %dms", url, budget_ms)
            return FetchFailure(
                url=url,
                reason=FailureReason.TIMEOUT,
                detail=f"no response within {budget_ms}ms",
            )
        except httpx.RequestError as e:
            logger.warning("GET %s failed: %s", url, e)
            return FetchFailure(url=url, reason=FailureReason.NETWORK, detail=str(e))

        if not resp.is_success:
            logger.warning("GET %s returned HTTP %d", url, resp.status_code)
            return FetchFailure(
                url=url,
                reason=FailureReason.HTTP_STATUS,
                status_code=resp.status_code,
                detail=resp.reason_phrase,
            )

        try:
            payload = resp.json()
        except ValueError as e:
            logger.warning("GET %s returned an undecodable body: %s", url, e)
            return FetchFailure(
                url=url,
                reason=FailureReason.DECODE,
                status_code=resp.status_code,
                detail=str(e),
            )

        logger.debug("GET %s succeeded (HTTP %d)", url, resp.status_code)
        return FetchSuccess(url=url, payload=payload, status_code=resp.status_code)
