from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import Response


class UpstreamError(RuntimeError):
    """Raised when an external source cannot deliver a usable response."""


@dataclass
class RequestConfig:
    """Transport settings shared by the HTTP clients.

    There is deliberately no retry setting: a failed call is reported to the
    caller straight away.
    """

    timeout: float = 10.0


class HttpSource:
    """Base class that adds timeouts and error mapping for HTTP sources."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def _handle_response(self, response: Response) -> Response:
        if not 200 <= response.status_code < 300:
            self._log.error("Source returned %s for %s: %s", response.status_code, response.url, response.text[:200])
            raise UpstreamError(f"HTTP {response.status_code}")
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", url, exc_info=exc)
            raise UpstreamError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise UpstreamError("request failed") from exc
        return self._handle_response(response)

    def _get_json(self, url: str, **kwargs) -> Dict[str, Any]:
        response = self._request("GET", url, **kwargs)
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON from %s", url, exc_info=exc)
            raise UpstreamError("invalid json") from exc
        if not isinstance(data, dict):
            raise UpstreamError("unexpected payload")
        return data


__all__ = ["HttpSource", "RequestConfig", "UpstreamError"]
