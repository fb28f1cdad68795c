"""Blocking JSON-over-HTTP transport to the inference server."""
from __future__ import annotations
import json
import logging
from typing import Any

import httpx

from shsuggest.common.errors import TransportError

LOGGER = logging.getLogger("shsuggest.ollama.transport")


class Transport:
    """
    Issue GET/POST requests and return the decoded top-level JSON object.

    No retries are attempted; every failure surfaces as `TransportError`.
    """

    def __init__(
        self,
        endpoint: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def get(self, path: str) -> dict[str, Any]:
        return self._request("GET", path)

    def post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        body = json.dumps(payload, separators=(",", ":"))
        return self._request("POST", path, content=body)

    def _request(self, method: str, path: str, content: str | None = None) -> dict[str, Any]:
        url = f"{self.endpoint}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                r = client.request(method, url, headers=headers, content=content)
        except httpx.HTTPError as e:
            LOGGER.error("%s %s failed: %s", method, url, e)
            raise TransportError(f"Network error while contacting Ollama: {e}") from e

        if not r.is_success:
            LOGGER.error("%s %s returned HTTP %s", method, url, r.status_code)
            raise TransportError(
                f"Ollama returned HTTP {r.status_code}: {r.text}",
                status_code=r.status_code,
                body=r.text,
            )

        try:
            data = r.json()
        except ValueError as e:
            raise TransportError(
                f"Failed to decode Ollama response: {r.text}",
                status_code=r.status_code,
                body=r.text,
            ) from e
        if not isinstance(data, dict):
            raise TransportError(
                f"Failed to decode Ollama response: {r.text}",
                status_code=r.status_code,
                body=r.text,
            )
        return data
