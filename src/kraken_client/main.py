"""Entry point for the Kraken client.

Loads settings from the environment (and .env), then runs the requested
retrievals: the server time, the XBT/USD pair metadata and, when API
credentials are configured, the account's open orders. With no arguments all
three run. Exits non-zero if any retrieval fails.
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence

from kraken_client.config import AppSettings
from kraken_client.exceptions import KrakenClientError
from kraken_client.exchange.kraken_client import KrakenClient
from kraken_client.logging import get_logger, setup_logging

RETRIEVALS = ("time", "pair", "orders")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="kraken-client",
        description="Retrieve server time, XBT/USD pair metadata and open orders from Kraken.",
    )
    parser.add_argument(
        "retrievals",
        nargs="*",
        metavar="RETRIEVAL",
        help=f"what to retrieve, any of {', '.join(RETRIEVALS)} (default: all)",
    )
    args = parser.parse_args(argv)
    unknown = [name for name in args.retrievals if name not in RETRIEVALS]
    if unknown:
        parser.error(f"unknown retrieval: {', '.join(unknown)}")
    # Preserve the canonical order and drop repeats
    requested = set(args.retrievals) or set(RETRIEVALS)
    args.retrievals = [name for name in RETRIEVALS if name in requested]
    return args


async def run(settings: AppSettings, retrievals: Sequence[str] = RETRIEVALS) -> int:
    """Run the requested retrievals and return the process exit code.

    Each retrieval fails independently: one failing does not skip the rest.
    """
    logger = get_logger("kraken_client.main")
    failures = 0

    async with KrakenClient(settings.kraken.to_configuration()) as client:
        for name in retrievals:
            if name == "orders" and not settings.credentials.configured:
                logger.warning(
                    "no_api_keys_configured",
                    note="Public endpoints work. Open orders need KRAKEN_API_KEY.",
                )
                continue

            try:
                if name == "time":
                    print(await client.retrieve_server_time())
                elif name == "pair":
                    print(await client.retrieve_xbtusd_pair())
                else:
                    orders = await client.retrieve_open_orders(
                        settings.credentials.to_credentials()
                    )
                    for order in orders:
                        print(order)
            except KrakenClientError as exc:
                logger.error("retrieval_failed", retrieval=name, error=str(exc))
                failures += 1

    return 1 if failures else 0


def main(argv: Sequence[str] | None = None) -> None:
    """Synchronous entry point."""
    args = parse_args(argv)
    settings = AppSettings()
    setup_logging(settings.log_level)
    sys.exit(asyncio.run(run(settings, args.retrievals)))


if __name__ == "__main__":
    main()
