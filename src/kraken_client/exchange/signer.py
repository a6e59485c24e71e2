"""Kraken request signing.

API-Sign = base64(HMAC-SHA512(base64decode(private_key),
                              uri_path + SHA256(nonce + encoded_payload)))

The exchange answers a wrong signature with a generic "Invalid signature"
error, so the byte layout above must be reproduced exactly.
"""

import base64
import binascii
import hashlib
import hmac
from collections.abc import Callable
from dataclasses import dataclass, field

from kraken_client.exceptions import InvariantViolation
from kraken_client.exchange.nonce import Nonce, new_nonce
from kraken_client.exchange.otp import generate_otp
from kraken_client.exchange.payload import RequestPayload, encode
from kraken_client.models import Credentials

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def sign(uri_path: str, nonce: Nonce, encoded_payload: str, private_key: str) -> str:
    """Compute the base64 API-Sign value for one request.

    Raises:
        InvariantViolation: If ``private_key`` is not valid base64.
    """
    try:
        secret = base64.b64decode(private_key, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvariantViolation(f"private key is not valid base64: {exc}") from exc

    digest = hashlib.sha256(f"{nonce}{encoded_payload}".encode()).digest()
    message = uri_path.encode() + digest
    signature = hmac.new(secret, message, hashlib.sha512).digest()
    return base64.b64encode(signature).decode()


@dataclass(frozen=True)
class SignedRequest:
    """A private request stamped with its nonce and one-time password."""

    payload: RequestPayload
    uri_path: str
    nonce: Nonce
    otp: str
    credentials: Credentials = field(repr=False)

    @property
    def body(self) -> str:
        return encode(self.payload, self.nonce, self.otp)

    @property
    def api_sign(self) -> str:
        return sign(self.uri_path, self.nonce, self.body, self.credentials.private_key)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": FORM_CONTENT_TYPE,
            "API-Key": self.credentials.api_key,
            "API-Sign": self.api_sign,
        }


def build_signed_request(
    payload: RequestPayload,
    credentials: Credentials,
    uri_path: str,
    nonce_factory: Callable[[], Nonce] = new_nonce,
    otp_factory: Callable[[str], str] = generate_otp,
) -> SignedRequest:
    """Stamp ``payload`` with a fresh nonce and OTP.

    ``uri_path`` is the full path of the request URL, API version included
    (e.g. ``/0/private/OpenOrders``); it is part of the signed message.

    Call once per attempt: a retried request must carry a new nonce, otherwise
    the exchange rejects it as a replay.
    """
    return SignedRequest(
        payload=payload,
        uri_path=uri_path,
        nonce=nonce_factory(),
        otp=otp_factory(credentials.otp_secret),
        credentials=credentials,
    )
