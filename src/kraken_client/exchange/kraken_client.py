"""Kraken exchange client.

Wires the request pipeline together: payload -> nonce -> OTP -> signature ->
retrying transport -> response validation -> domain objects.
"""

from dataclasses import dataclass

import httpx

from kraken_client.clock import Clock, system_clock
from kraken_client.exchange.client import ExchangeClient
from kraken_client.exchange.payload import OpenOrdersPayload
from kraken_client.exchange.signer import build_signed_request
from kraken_client.exchange.transport import KrakenTransport, RetryPolicy
from kraken_client.exchange.wire import (
    parse_open_orders,
    parse_server_time,
    parse_xbtusd_pair,
)
from kraken_client.logging import get_logger
from kraken_client.models import Credentials, OpenOrder, ServerTime, XbtUsd

logger = get_logger(__name__)

SERVER_TIME_PATH = "/public/Time"
ASSET_PAIRS_PATH = "/public/AssetPairs"
XBTUSD_PAIR = "XXBTZUSD"


@dataclass(frozen=True)
class ClientConfiguration:
    """Connection and retry settings. Read-only for the life of the client.

    ``base_url`` includes the API version, e.g. ``https://api.kraken.com/0``.
    Retry durations are in seconds.
    """

    base_url: str
    retry_initial_interval: float
    retry_multiplier: float
    retry_max_elapsed_time: float

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            initial_interval=self.retry_initial_interval,
            multiplier=self.retry_multiplier,
            max_elapsed_time=self.retry_max_elapsed_time,
        )


class KrakenClient(ExchangeClient):
    """Concrete Kraken REST client."""

    def __init__(
        self,
        configuration: ClientConfiguration,
        clock: Clock = system_clock,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._configuration = configuration
        self._clock = clock
        self._transport = KrakenTransport(
            configuration.base_url, configuration.retry_policy, http_client
        )

    async def __aenter__(self) -> "KrakenClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    async def retrieve_server_time(self) -> ServerTime:
        text = await self._transport.get_public(SERVER_TIME_PATH)
        server_time = parse_server_time(text, self._clock)
        logger.info("server_time_retrieved", unixtime=server_time.unixtime)
        return server_time

    async def retrieve_xbtusd_pair(self) -> XbtUsd:
        text = await self._transport.get_public(
            ASSET_PAIRS_PATH, params={"pair": XBTUSD_PAIR}
        )
        pair = parse_xbtusd_pair(text)
        logger.info("xbtusd_pair_retrieved", altname=pair.altname)
        return pair

    async def retrieve_open_orders(self, credentials: Credentials) -> list[OpenOrder]:
        """Fetch open orders, signing each attempt with a fresh nonce and OTP."""
        payload = OpenOrdersPayload()
        text = await self._transport.post_private(
            payload.path,
            lambda uri_path: build_signed_request(payload, credentials, uri_path),
        )
        orders = parse_open_orders(text)
        logger.info("open_orders_retrieved", count=len(orders))
        return orders
