"""Custom exceptions for the Kraken client.

Every failure a caller can observe is one of these, so callers can catch
KrakenClientError and still tell validation, transport and clock problems apart.
"""


class KrakenClientError(Exception):
    """Base exception for all client errors."""


class InvariantViolation(KrakenClientError):
    """Raised when a value breaks a domain invariant or wire data is malformed."""


class ClockError(KrakenClientError):
    """Raised when the system clock cannot be read."""


class TransientTransportError(KrakenClientError):
    """Raised for a single failed attempt that is worth retrying."""


class RetryBudgetExhausted(KrakenClientError):
    """Raised when the backoff policy runs out of time.

    The last transient error is attached as ``__cause__``.
    """


class TransportError(KrakenClientError):
    """Raised when a public (non-retried) request fails."""


class AuthenticationRejected(KrakenClientError):
    """Raised when the exchange rejects the request credentials."""


class ExchangeApiError(KrakenClientError):
    """Raised when the exchange returns a non-empty error list."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(", ".join(errors))
