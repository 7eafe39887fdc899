from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from core.config_service import ClientConfig, ConfigService
from core.formatting import format_decimal
from core.logger import get_logger, mask_secret

from .errors import InvalidArgument
from .http_client import ApiResult, CexioHttpClient
from .signer import NonceCounter, RequestSigner

__version__ = "0.1.0"

# CEX.IO allows this many calls ...
RESTRICT_CALL_NUM = 600
# ... per this many seconds. Nothing enforces it yet.
RESTRICT_CALL_INTERVAL = 10 * 60

ORDER_SIDES = ("buy", "sell")


def validate_pair(pair: Any) -> str:
    if pair is None:
        raise InvalidArgument("Currency pair must be defined")
    if not isinstance(pair, str) or "/" not in pair:
        raise InvalidArgument(f"Currency pair must contain a slash: {pair!r}")
    return pair


class CexioClient:
    """Client for the CEX.IO HTTP API.

    Public calls (ticker, order book) work without credentials. Private calls
    need ``username``, ``api_key`` and ``api_secret`` and raise
    ``ConfigurationError`` when any of them is missing. Every call returns the
    decoded JSON exactly as the exchange sent it, or ``None`` when the request
    or the decoding failed; server-side failures come back as ``{"error": ...}``.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        session: requests.Session | None = None,
        logger=None,
        **overrides: Any,
    ) -> None:
        if config is None:
            config = ClientConfig(**overrides)
        elif overrides:
            config = ClientConfig(**{**config.model_dump(), **overrides})
        self.config = config
        self.logger = logger or get_logger()
        self.nonce = NonceCounter(config.nonce_start)
        self.signer = RequestSigner(
            username=config.username,
            api_key=config.api_key,
            api_secret=config.api_secret,
            nonce=self.nonce,
        )
        self.http_client = CexioHttpClient(
            base_url=config.base_url,
            timeout=config.timeout_seconds,
            user_agent=f"cexio-api-python/{__version__}",
            session=session,
            logger=self.logger,
        )

    @classmethod
    def from_config_file(cls, path: Path, **kwargs: Any) -> "CexioClient":
        return cls(ConfigService(Path(path)).load(), **kwargs)

    def __repr__(self) -> str:
        return (
            f"CexioClient(username={self.config.username!r}, "
            f"api_key={mask_secret(self.config.api_key)!r}, timeout={self.config.timeout_seconds})"
        )

    @property
    def force_restrict(self) -> bool:
        return self.config.force_restrict

    # Public API
    def get_ticker(self, pair: str) -> Optional[Dict]:
        validate_pair(pair)
        return self.http_client.get_json(f"ticker/{pair}")

    def get_order_book(self, pair: str) -> Optional[Dict]:
        validate_pair(pair)
        return self.http_client.get_json(f"order_book/{pair}")

    # Private API
    def get_account_balance(self) -> Optional[Dict]:
        return self._private("balance/")

    def get_open_orders(self, pair: str) -> Optional[List[Dict]]:
        validate_pair(pair)
        return self._private(f"open_orders/{pair}")

    def cancel_order(self, order_id: Any) -> Any:
        """Cancel ``order_id``; returns ``True`` on success or ``{"error": ...}``."""
        if order_id is None:
            raise InvalidArgument("must provide order ID")
        return self._private("cancel_order/", id=order_id)

    def place_order(self, pair: str, side: str, amount: Any, price: Any) -> Optional[Dict]:
        validate_pair(pair)
        if side is None:
            raise InvalidArgument("must provide order type")
        if side not in ORDER_SIDES:
            raise InvalidArgument("type must be 'buy' or 'sell'")
        if amount is None:
            raise InvalidArgument("must specify amount")
        if price is None:
            raise InvalidArgument("must specify price")
        try:
            form = {"type": side, "amount": format_decimal(amount), "price": format_decimal(price)}
        except ValueError as exc:
            raise InvalidArgument(str(exc)) from exc
        return self._private(f"place_order/{pair}", **form)

    def private_request(self, action: str, **fields: Any) -> ApiResult:
        """Signed POST returning the explicit result instead of the absence value."""
        self.http_client.url_for(action)
        form = self.signer.signed_form(fields)
        return self.http_client.request(action, form)

    def public_request(self, action: str) -> ApiResult:
        return self.http_client.request(action)

    def _private(self, action: str, **fields: Any) -> Any:
        return self.private_request(action, **fields).value
