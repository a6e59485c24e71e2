"""Shared test fixtures for the Kraken client."""

import copy

import pytest

from kraken_client.exchange.kraken_client import ClientConfiguration
from kraken_client.models import Credentials

# Example private key from Kraken's REST authentication documentation.
DOC_PRIVATE_KEY = (
    "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="
)
# RFC 6238 test seed ("12345678901234567890") in base32.
RFC_OTP_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"

SERVER_UNIXTIME = 1616336594
SERVER_RFC1123 = "Sun, 21 Mar 21 14:23:14 +0000"

SERVER_TIME_RESPONSE = {
    "error": [],
    "result": {"unixtime": SERVER_UNIXTIME, "rfc1123": SERVER_RFC1123},
}

XBTUSD_RESPONSE = {
    "error": [],
    "result": {
        "XXBTZUSD": {
            "altname": "XBTUSD",
            "wsname": "XBT/USD",
            "aclass_base": "currency",
            "base": "XXBT",
            "aclass_quote": "currency",
            "quote": "ZUSD",
            "lot": "unit",
            "pair_decimals": 1,
            "lot_decimals": 8,
            "lot_multiplier": 1,
            "leverage_buy": [2, 3, 4, 5],
            "leverage_sell": [2, 3, 4, 5],
            "fees": [[0, 0.26], [50000, 0.24], [100000, 0.22]],
            "fees_maker": [[0, 0.16], [50000, 0.14], [100000, 0.12]],
            "fee_volume_currency": "ZUSD",
            "margin_call": 80,
            "margin_stop": 40,
            "ordermin": "0.0001",
        }
    },
}

OPEN_ORDERS_RESPONSE = {
    "error": [],
    "result": {
        "open": {
            "OQCLML-BW3P3-BUCMWZ": {
                "refid": None,
                "userref": 0,
                "status": "open",
                "opentm": 1616666559.8974,
                "starttm": 0,
                "expiretm": 0,
                "descr": {
                    "pair": "XBTUSD",
                    "type": "buy",
                    "ordertype": "limit",
                    "price": "30010.0",
                    "price2": "0",
                    "leverage": "none",
                    "order": "buy 1.25000000 XBTUSD @ limit 30010.0",
                    "close": "",
                },
                "vol": "1.25000000",
                "vol_exec": "0.37500000",
                "cost": "11253.7",
                "fee": "0.00000",
                "price": "30010.0",
                "stopprice": "0.00000",
                "limitprice": "0.00000",
                "misc": "",
                "oflags": "fciq",
                "trades": ["TCCCTY-WE2O6-P3NB37"],
            }
        }
    },
}


@pytest.fixture
def credentials() -> Credentials:
    """Credentials using the documented example key and the RFC OTP seed."""
    return Credentials(
        api_key="test-api-key",
        private_key=DOC_PRIVATE_KEY,
        otp_secret=RFC_OTP_SECRET,
    )


@pytest.fixture
def configuration() -> ClientConfiguration:
    """Client configuration with short retry intervals for fast tests."""
    return ClientConfiguration(
        base_url="https://api.kraken.test/0",
        retry_initial_interval=0.01,
        retry_multiplier=2.0,
        retry_max_elapsed_time=0.5,
    )


@pytest.fixture
def server_time_response() -> dict:
    return copy.deepcopy(SERVER_TIME_RESPONSE)


@pytest.fixture
def xbtusd_response() -> dict:
    return copy.deepcopy(XBTUSD_RESPONSE)


@pytest.fixture
def open_orders_response() -> dict:
    return copy.deepcopy(OPEN_ORDERS_RESPONSE)
