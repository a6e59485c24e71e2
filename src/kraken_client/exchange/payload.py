"""Request payloads for private commands and their canonical encoding.

The encoded payload is signed byte for byte, so field order and spelling
must match exactly what is sent as the request body.
"""

from dataclasses import dataclass

from kraken_client.exchange.nonce import Nonce


@dataclass(frozen=True)
class OpenOrdersPayload:
    """Payload for the OpenOrders command."""

    trades: bool = True

    path = "/private/OpenOrders"


# Closed set of private commands. Add a variant here and a branch in encode().
RequestPayload = OpenOrdersPayload


def encode(payload: RequestPayload, nonce: Nonce, otp: str | None = None) -> str:
    """Encode ``payload`` as a form body, appending ``otp`` when given."""
    if isinstance(payload, OpenOrdersPayload):
        encoded = _encode_open_orders(payload, nonce)
    else:
        raise TypeError(f"unsupported request payload: {type(payload).__name__}")

    if otp is not None:
        encoded = f"{encoded}&otp={otp}"
    return encoded


def _encode_open_orders(payload: OpenOrdersPayload, nonce: Nonce) -> str:
    trades = "true" if payload.trades else "false"
    return f"nonce={nonce}&trades={trades}"
