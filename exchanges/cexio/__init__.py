"""CEX.IO exchange integration: signed and public HTTP API calls."""

from .client import CexioClient, validate_pair
from .errors import (
    CexioError,
    ConfigurationError,
    DecodeFailure,
    ExchangeError,
    InvalidArgument,
    TransportFailure,
    exchange_error,
    raise_for_exchange_error,
)
from .http_client import ApiResult, CexioHttpClient
from .models import AccountBalance, CurrencyBalance, OpenOrder, OrderBook, PlacedOrder, Ticker
from .signer import NonceCounter, RequestSigner, Signature, compute_signature

__all__ = [
    "AccountBalance",
    "ApiResult",
    "CexioClient",
    "CexioError",
    "CexioHttpClient",
    "ConfigurationError",
    "CurrencyBalance",
    "DecodeFailure",
    "ExchangeError",
    "InvalidArgument",
    "NonceCounter",
    "OpenOrder",
    "OrderBook",
    "PlacedOrder",
    "RequestSigner",
    "Signature",
    "Ticker",
    "TransportFailure",
    "compute_signature",
    "exchange_error",
    "raise_for_exchange_error",
    "validate_pair",
]
