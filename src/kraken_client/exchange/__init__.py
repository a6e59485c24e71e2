"""Exchange client layer -- Kraken REST API integration via httpx."""

from kraken_client.exchange.client import ExchangeClient
from kraken_client.exchange.kraken_client import ClientConfiguration, KrakenClient
from kraken_client.exchange.transport import KrakenTransport, RetryPolicy

__all__ = [
    "ClientConfiguration",
    "ExchangeClient",
    "KrakenClient",
    "KrakenTransport",
    "RetryPolicy",
]
