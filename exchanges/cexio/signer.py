from __future__ import annotations

import hashlib
import hmac
import threading
import time
from dataclasses import dataclass
from typing import Dict, Optional

from .errors import ConfigurationError


class NonceCounter:
    """Per-instance nonce source.

    Values are unique and increasing for one counter only; two clients started
    in the same second will hand out the same nonces.
    """

    def __init__(self, start: Optional[int] = None) -> None:
        self._value = int(time.time()) if start is None else int(start)
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._value
            self._value += 1
        return value

    def peek(self) -> int:
        return self._value


@dataclass(frozen=True)
class Signature:
    signature: str
    nonce: int


def compute_signature(nonce: int, username: str, api_key: str, api_secret: str) -> str:
    message = f"{nonce}{username}{api_key}"
    digest = hmac.new(api_secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256)
    return digest.hexdigest().upper()


class RequestSigner:
    def __init__(
        self,
        *,
        username: str | None,
        api_key: str | None,
        api_secret: str | None,
        nonce: NonceCounter,
    ) -> None:
        self.username = username
        self.api_key = api_key
        self._api_secret = api_secret
        self.nonce = nonce

    def _require_credentials(self) -> None:
        # username first, then key, then secret
        for name, value in (("username", self.username), ("api_key", self.api_key), ("api_secret", self._api_secret)):
            if not value:
                raise ConfigurationError(f"must provide {name} for private API calls")

    def sign(self) -> Signature:
        self._require_credentials()
        nonce = self.nonce.next()
        return Signature(
            signature=compute_signature(nonce, self.username, self.api_key, self._api_secret),
            nonce=nonce,
        )

    def signed_form(self, extra: Optional[Dict[str, object]] = None) -> Dict[str, object]:
        sig = self.sign()
        form: Dict[str, object] = {
            "key": self.api_key,
            "signature": sig.signature,
            "nonce": sig.nonce,
        }
        if extra:
            form.update(extra)
        return form
