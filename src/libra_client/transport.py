"""
HTTP transport for the JSON-RPC client.

The client only needs ``post(url, payload) -> HttpResult``; tests pass a fake
transport, production uses RequestsTransport over a keep-alive session.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from .runtime.errors import RemoteCallError


@dataclass(frozen=True)
class HttpResult:
    """Status code and raw body of an HTTP response."""
    status_code: int
    body: str


class Transport(Protocol):
    """Anything able to POST a JSON payload and hand back the raw response."""

    def post(self, url: str, payload: Dict[str, Any]) -> HttpResult:
        ...


class RequestsTransport:
    """Transport built on ``requests.Session``."""

    def __init__(
        self,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        user_agent: str = "libra-client-python/1.0.0",
        verify_ssl: bool = True
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests.Session for connection pooling
            user_agent: User-Agent header value
            verify_ssl: Verify TLS certificates
        """
        self._timeout = timeout
        self._session = session or requests.Session()
        self._owns_session = session is None
        self._verify_ssl = verify_ssl
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": user_agent,
        }

    def post(self, url: str, payload: Dict[str, Any]) -> HttpResult:
        try:
            response = self._session.post(
                url,
                json=payload,
                headers=self._headers,
                timeout=self._timeout,
                verify=self._verify_ssl,
            )
        except requests.exceptions.RequestException as e:
            raise RemoteCallError(f"HTTP request failed: {e}", cause=e)
        return HttpResult(response.status_code, response.text)

    def close(self) -> None:
        """Close the HTTP session if owned by this transport."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
