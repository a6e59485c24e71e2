"""Abstract exchange client interface.

Callers depend only on this contract, keeping Kraken wire details isolated in
the concrete implementation.
"""

from abc import ABC, abstractmethod

from kraken_client.models import Credentials, OpenOrder, ServerTime, XbtUsd


class ExchangeClient(ABC):
    """Abstract base class for exchange API clients."""

    @abstractmethod
    async def close(self) -> None:
        """Release network resources."""
        ...

    @abstractmethod
    async def retrieve_server_time(self) -> ServerTime:
        """Fetch the exchange clock, validated against the local clock."""
        ...

    @abstractmethod
    async def retrieve_xbtusd_pair(self) -> XbtUsd:
        """Fetch trading-pair metadata for XBT/USD."""
        ...

    @abstractmethod
    async def retrieve_open_orders(self, credentials: Credentials) -> list[OpenOrder]:
        """Fetch the account's open orders with a signed private request."""
        ...
