"""Time-derived request nonce.

Kraken rejects any private request whose nonce is not larger than the last one
seen for the API key. Nonces here are milliseconds since the epoch, so strict
ordering holds as long as requests are at least a millisecond apart and the
system clock does not step backwards.
"""

import time
from dataclasses import dataclass

from kraken_client.exceptions import ClockError


@dataclass(frozen=True)
class Nonce:
    """Millisecond Unix timestamp identifying a single request."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


def new_nonce() -> Nonce:
    """Stamp a fresh nonce from the wall clock."""
    try:
        now_ns = time.time_ns()
    except OSError as exc:
        raise ClockError(f"system clock could not be read: {exc}") from exc
    if now_ns <= 0:
        raise ClockError(f"system clock is before the unix epoch: {now_ns}ns")
    return Nonce(now_ns // 1_000_000)
