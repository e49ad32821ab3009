"""REST transport: rate-limited GET with envelope decoding.

Every REST response is wrapped in ``{"success": bool, "message": str,
"data": ...}``. ``RESTTransport.get`` waits on the limiter, renders query
parameters, maps failure statuses to typed errors and returns ``data``.
Endpoint-specific methods are left to callers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ...config import BASE_URL, REST_API_KEY_HEADER, REST_CHAIN_HEADER, chain_segment
from ...core import Chain, ProviderError, ValidationError, error_for_status
from .http import HTTPClient
from .limiter import RateLimiter

logger = logging.getLogger(__name__)


def render_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Render query values as the API expects them.

    Lists are comma-joined, booleans lower-cased, ``None`` values dropped.
    """
    out: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            out[key] = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            out[key] = ",".join(str(v) for v in value)
        elif hasattr(value, "value"):
            out[key] = str(value.value)
        else:
            out[key] = str(value)
    return out


class RESTTransport:
    """Parameterized GET requests against the Birdeye REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        limiter: RateLimiter | None = None,
        base_url: str = BASE_URL,
        timeout: float = 30.0,
        http: HTTPClient | None = None,
    ) -> None:
        if not api_key:
            raise ValidationError("api key is required")
        self._api_key = api_key
        self.limiter = limiter or RateLimiter.for_plan("standard")
        self._http = http or HTTPClient(base_url=base_url, timeout=timeout)

    def headers(self, *chains: Chain | str) -> dict[str, str]:
        headers = {"accept": "application/json", REST_API_KEY_HEADER: self._api_key}
        if chains:
            headers[REST_CHAIN_HEADER] = ",".join(chain_segment(c) for c in chains)
        return headers

    async def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *chains: Chain | str,
    ) -> Any:
        """GET ``path`` and return the envelope's ``data``.

        Raises:
            ProviderError: Non-200 response; a typed subclass for known statuses.
        """
        await self.limiter.acquire()
        status, body = await self._http.get(
            path, params=render_params(params), headers=self.headers(*chains)
        )
        message = body.get("message") if isinstance(body, dict) else None

        error = error_for_status(status, message)
        if error is not None:
            logger.warning(f"GET {path} failed with status {status}: {error}")
            raise error
        if status != 200:
            raise ProviderError(f"status code: {status}, message: {message}", status_code=status)
        if not isinstance(body, dict):
            raise ProviderError(f"GET {path}: response is not a JSON envelope", status_code=status)
        if body.get("success") is False:
            raise ProviderError(message or f"GET {path}: request unsuccessful", status_code=status)
        return body.get("data")

    async def supported_networks(self) -> list[str]:
        """Networks the API serves."""
        return await self.get("/defi/networks")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
