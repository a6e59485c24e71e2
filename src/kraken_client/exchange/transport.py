"""HTTP transport for Kraken REST calls.

Public calls are sent once. Private calls run under an exponential backoff
policy bounded by a maximum elapsed time; each attempt is re-signed with a
fresh nonce and one-time password.
"""

import asyncio
import json
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass

import httpx

from kraken_client.exceptions import (
    AuthenticationRejected,
    RetryBudgetExhausted,
    TransientTransportError,
    TransportError,
)
from kraken_client.exchange.signer import SignedRequest
from kraken_client.logging import get_logger

logger = get_logger(__name__)

# Envelope errors that no amount of retrying will fix.
AUTHENTICATION_ERRORS = (
    "EAPI:Invalid key",
    "EAPI:Invalid signature",
    "EGeneral:Permission denied",
)
AUTHENTICATION_STATUS_CODES = (401, 403)
SUCCESS_MARKER = "result"


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff schedule, all durations in seconds."""

    initial_interval: float
    multiplier: float
    max_elapsed_time: float

    def __post_init__(self) -> None:
        if self.initial_interval <= 0:
            raise ValueError(f"initial_interval must be positive, got {self.initial_interval}")
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be at least 1, got {self.multiplier}")
        if self.max_elapsed_time <= 0:
            raise ValueError(f"max_elapsed_time must be positive, got {self.max_elapsed_time}")

    def intervals(self) -> Iterator[float]:
        """Yield successive sleep intervals: initial, initial*m, initial*m^2, ..."""
        interval = self.initial_interval
        while True:
            yield interval
            interval *= self.multiplier


class KrakenTransport:
    """Sends requests to the Kraken REST API and returns raw response text.

    Owns the httpx.AsyncClient unless one is injected; call close() (or use
    ``async with``) to release connections.
    """

    def __init__(
        self,
        base_url: str,
        policy: RetryPolicy,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._policy = policy
        self._client = http_client or httpx.AsyncClient()

    async def __aenter__(self) -> "KrakenTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def get_public(self, path: str, params: dict | None = None) -> str:
        """GET a public endpoint once.

        Raises:
            TransportError: On connection failure or a non-2xx status.
        """
        url = f"{self._base_url}{path}"
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("public_request_failed", path=path, error=str(exc))
            raise TransportError(f"GET {path} failed: {exc}") from exc
        return response.text

    async def post_private(
        self, path: str, request_factory: Callable[[str], SignedRequest]
    ) -> str:
        """POST a signed request, retrying transient failures with backoff.

        ``request_factory`` is called once per attempt with the URI path being
        requested (the path the signature covers) and must return a freshly
        stamped request.

        Raises:
            RetryBudgetExhausted: When the next sleep would exceed the policy's
                maximum elapsed time. The last failure is the ``__cause__``.
            AuthenticationRejected: When the exchange rejects the credentials.
        """
        url = f"{self._base_url}{path}"
        uri_path = httpx.URL(url).path
        budget = self._policy.max_elapsed_time
        intervals = self._policy.intervals()
        start = time.monotonic()
        attempt = 0

        while True:
            attempt += 1
            remaining = budget - (time.monotonic() - start)
            request = request_factory(uri_path)
            try:
                return await asyncio.wait_for(
                    self._send_private(url, request), timeout=remaining
                )
            except asyncio.TimeoutError:
                last_error = TransientTransportError(
                    f"attempt {attempt} did not finish within the retry budget"
                )
            except TransientTransportError as exc:
                last_error = exc

            delay = next(intervals)
            elapsed = time.monotonic() - start
            if elapsed + delay >= budget:
                logger.error(
                    "private_request_failed_permanently",
                    path=path,
                    attempts=attempt,
                    elapsed_seconds=round(elapsed, 3),
                    error=str(last_error),
                )
                raise RetryBudgetExhausted(
                    f"POST {path} failed after {attempt} attempts "
                    f"in {elapsed:.1f}s: {last_error}"
                ) from last_error

            logger.warning(
                "private_request_retry",
                path=path,
                attempt=attempt,
                delay=delay,
                error=str(last_error),
            )
            await asyncio.sleep(delay)

    async def _send_private(self, url: str, request: SignedRequest) -> str:
        try:
            response = await self._client.post(
                url, headers=request.headers, content=request.body
            )
        except httpx.HTTPError as exc:
            raise TransientTransportError(f"request failed: {exc!r}") from exc

        if response.status_code in AUTHENTICATION_STATUS_CODES:
            raise AuthenticationRejected(
                f"exchange rejected credentials with status {response.status_code}"
            )
        if not response.is_success:
            raise TransientTransportError(f"unexpected status {response.status_code}")

        _check_envelope(response.text)
        return response.text


def _check_envelope(text: str) -> None:
    """Classify the envelope of a 2xx response.

    Authentication errors are permanent; any other error, or a missing
    ``result`` marker, is transient.
    """
    try:
        body = json.loads(text)
    except ValueError as exc:
        raise TransientTransportError(f"response is not valid json: {exc}") from exc
    if not isinstance(body, dict):
        raise TransientTransportError("response is not a json object")

    errors = body.get("error") or []
    if not isinstance(errors, list):
        raise TransientTransportError(f"error field is not a list: {errors!r}")
    rejected = [e for e in errors if str(e).startswith(AUTHENTICATION_ERRORS)]
    if rejected:
        raise AuthenticationRejected(", ".join(str(e) for e in rejected))
    if SUCCESS_MARKER not in body:
        detail = ", ".join(str(e) for e in errors) or "no result in response"
        raise TransientTransportError(f"error retrieving response: {detail}")
