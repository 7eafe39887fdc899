"""Error taxonomy for the CEX.IO client."""

from __future__ import annotations


class CexioError(Exception):
    """Base exception for all CEX.IO client errors."""


class InvalidArgument(CexioError, ValueError):
    """Malformed or missing call parameters, raised before any network I/O."""


class ConfigurationError(CexioError):
    """Signed call attempted without username, api_key and api_secret."""


class TransportFailure(CexioError):
    """Connection error or non-success HTTP status."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class DecodeFailure(CexioError):
    """Response body is not valid JSON."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class ExchangeError(CexioError):
    """Server-side logical failure reported as an ``{"error": ...}`` payload.

    The client never raises this on its own; see ``raise_for_exchange_error``.
    """

    def __init__(self, message: str, *, payload=None) -> None:
        super().__init__(message)
        self.message = message
        self.payload = payload


def exchange_error(payload) -> str | None:
    if isinstance(payload, dict) and "error" in payload:
        return str(payload["error"])
    return None


def raise_for_exchange_error(payload):
    message = exchange_error(payload)
    if message is not None:
        raise ExchangeError(message, payload=payload)
    return payload
