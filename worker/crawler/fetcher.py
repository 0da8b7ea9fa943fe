"""Markup retrieval through a cross-origin relay.

Direct fetches of arbitrary origins are blocked for browser callers, so every
request goes through a relay that returns the target's raw markup. Relays are
tried in order until one answers with a 2xx status.
"""

import asyncio
from dataclasses import dataclass

import httpx
import structlog

from api.config import get_settings
from api.exceptions import FetchError, FetchTimeoutError
from worker.crawler.url import build_relay_url, normalize_address

logger = structlog.get_logger(__name__)


@dataclass
class RelayAttempt:
    """Outcome of asking one relay for the target markup."""

    relay: str
    status_code: int | None = None
    error: str | None = None
    timed_out: bool = False

    def describe(self) -> str:
        """Human-readable summary used in aggregated failures."""
        if self.status_code is not None:
            return f"{self.relay}: HTTP {self.status_code}"
        return f"{self.relay}: {self.error}"


class Fetcher:
    """Fetches raw markup for a target address via retrieval relays."""

    def __init__(
        self,
        relay_urls: list[str] | None = None,
        user_agent: str | None = None,
        request_timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.relay_urls = list(relay_urls or settings.relay_urls)
        self.user_agent = user_agent or settings.fetch_user_agent
        self.request_timeout = request_timeout or settings.fetch_timeout_seconds
        self._transport = transport

        if not self.relay_urls:
            raise ValueError("At least one relay URL is required")

    async def fetch(self, address: str, timeout: float | None = None) -> str:
        """
        Fetch raw markup for an address.

        Args:
            address: Target address; ``https://`` is prepended if no scheme
            timeout: Optional deadline in seconds for the whole fetch

        Returns:
            Response body as text

        Raises:
            ValidationError: If the address is empty
            FetchError: If every relay failed
            FetchTimeoutError: If the deadline passed or every relay timed out
        """
        url = normalize_address(address)

        if timeout is None:
            return await self._fetch_via_relays(url)

        try:
            return await asyncio.wait_for(self._fetch_via_relays(url), timeout=timeout)
        except TimeoutError:
            logger.warning("relay_fetch_deadline_exceeded", url=url, timeout=timeout)
            raise FetchTimeoutError(url, timeout) from None

    async def _fetch_via_relays(self, url: str) -> str:
        """Try each relay in order, returning the first successful body."""
        attempts: list[RelayAttempt] = []

        async with httpx.AsyncClient(
            timeout=self.request_timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            for template in self.relay_urls:
                relay_url = build_relay_url(template, url)
                logger.info("relay_fetch_started", url=url, relay=template)

                attempt = RelayAttempt(relay=template)
                try:
                    response = await client.get(
                        relay_url,
                        headers={
                            "User-Agent": self.user_agent,
                            "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
                        },
                    )
                except httpx.TimeoutException:
                    attempt.error = "Request timed out"
                    attempt.timed_out = True
                except httpx.HTTPError as e:
                    attempt.error = str(e) or type(e).__name__
                else:
                    if response.is_success:
                        logger.info(
                            "relay_fetch_succeeded",
                            url=url,
                            relay=template,
                            status_code=response.status_code,
                            bytes=len(response.content),
                        )
                        return response.content.decode("utf-8", errors="replace")
                    attempt.status_code = response.status_code

                logger.warning(
                    "relay_fetch_failed",
                    url=url,
                    relay=template,
                    status_code=attempt.status_code,
                    error=attempt.error,
                )
                attempts.append(attempt)

        raise self._aggregate_failure(url, attempts)

    def _aggregate_failure(
        self, url: str, attempts: list[RelayAttempt]
    ) -> FetchError | FetchTimeoutError:
        """Collapse per-relay failures into the single error the caller sees."""
        if all(a.timed_out for a in attempts):
            return FetchTimeoutError(url, self.request_timeout)

        last = attempts[-1]
        last_status = next(
            (a.status_code for a in reversed(attempts) if a.status_code is not None),
            None,
        )
        last_cause = next((a.error for a in reversed(attempts) if a.error), None)

        return FetchError(
            url,
            status=last.status_code if last.status_code is not None else last_status,
            cause=last.error or last_cause,
            attempts=[a.describe() for a in attempts] if len(attempts) > 1 else None,
        )


async def fetch_markup(address: str, timeout: float | None = None) -> str:
    """
    Convenience function to fetch markup with the configured relays.

    Args:
        address: Target address
        timeout: Optional deadline in seconds

    Returns:
        Raw markup text
    """
    return await Fetcher().fetch(address, timeout=timeout)
