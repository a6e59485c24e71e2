"""Time-based one-time passwords for private requests.

Accounts with 2FA enabled on the API key must send the current TOTP code with
every private call. The TOTP algorithm itself is pyotp's; this module only
normalizes the secret and translates its failures.
"""

import binascii
from datetime import datetime

import pyotp

from kraken_client.exceptions import InvariantViolation

OTP_DIGITS = 6
OTP_INTERVAL_SECONDS = 30


def generate_otp(secret: str, for_time: datetime | int | None = None) -> str:
    """Return the 6-digit TOTP code for ``secret`` at ``for_time`` (default: now).

    Raises:
        InvariantViolation: If the secret is empty or not valid base32.
    """
    normalized = secret.strip().upper()
    if not normalized:
        raise InvariantViolation("otp secret cannot be empty")

    try:
        totp = pyotp.TOTP(normalized, digits=OTP_DIGITS, interval=OTP_INTERVAL_SECONDS)
        if for_time is None:
            return totp.now()
        return totp.at(for_time)
    except (binascii.Error, ValueError) as exc:
        raise InvariantViolation(f"otp secret is not valid base32: {exc}") from exc
