"""HTTP API backend talking to the E-POST service."""

import logging
from typing import Any

import httpx

from epost.errors import Error, ErrorException

DEFAULT_ENDPOINT = "https://api.epost.docuguide.com"

log = logging.getLogger("epost.http")


class HttpBackend:
    """Backend that sends JSON requests to the E-POST API via httpx."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    def _client(self, token: str) -> httpx.Client:
        return httpx.Client(
            base_url=self.endpoint,
            headers={"Authorization": f"Bearer {token}"},
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        )

    def request(
        self,
        method: str,
        path: str,
        token: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        with self._client(token) as client:
            resp = client.request(method, path, json=json, params=params)
            log.debug("%s %s -> %d", method, path, resp.status_code)
            if resp.is_error:
                raise ErrorException(Error(resp.json(), status_code=resp.status_code))
            return resp.json()
