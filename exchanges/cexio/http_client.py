from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .errors import CexioError, DecodeFailure, InvalidArgument, TransportFailure

API_BASE = "https://cex.io/api/"
DEFAULT_TIMEOUT = 10


@dataclass
class ApiResult:
    """Outcome of one dispatch: the decoded JSON, or the failure that prevented it."""

    value: Any = None
    error: CexioError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class CexioHttpClient:
    def __init__(
        self,
        *,
        base_url: str = API_BASE,
        timeout: int = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        session: requests.Session | None = None,
        logger=None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.session = session or requests.Session()
        if user_agent:
            self.session.headers["User-Agent"] = user_agent
        self.timeout = timeout
        self.logger = logger

    def _log(self, level: str, message: str, *args: Any) -> None:
        if self.logger:
            getattr(self.logger, level)(message, *args)

    def url_for(self, action: str) -> str:
        if not action:
            raise InvalidArgument("Action must be defined")
        return f"{self.base_url}{action}"

    def request(self, action: str, form: Optional[Dict[str, Any]] = None) -> ApiResult:
        """GET ``action``, or POST ``form`` to it when a form is given."""
        url = self.url_for(action)
        method = "POST" if form is not None else "GET"
        self._log("debug", "CEX.IO %s %s", method, url)
        try:
            if form is not None:
                response = self.session.post(url, data=form, timeout=self.timeout)
            else:
                response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            self._log("warning", "Unable to retrieve URL '%s': %s", url, exc)
            return ApiResult(error=TransportFailure(str(exc), url=url))

        if not 200 <= response.status_code < 300:
            status_line = f"{response.status_code} {response.reason or ''}".strip()
            self._log("warning", "Unable to retrieve URL '%s': %s", url, status_line)
            return ApiResult(error=TransportFailure(status_line, url=url, status_code=response.status_code))

        try:
            payload = response.json()
        except ValueError as exc:
            self._log("warning", "Unable to parse JSON from '%s': %s", url, exc)
            return ApiResult(error=DecodeFailure(str(exc), url=url))
        return ApiResult(value=payload)

    def get_json(self, action: str) -> Any:
        return self.request(action).value
