from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from .errors import ProviderRequestError, ProviderResponseError


Json = dict[str, Any]


@dataclass
class BaseHttpClient:
    """
    Provider-agnostic HTTP client wrapper.

    - Uses a single underlying httpx.Client for connection pooling.
    - Provides consistent error handling.
    - Provider-specific clients wrap it and add retries / request shaping.
    """

    base_url: str
    timeout_s: float = 10.0
    connect_timeout_s: float | None = None
    headers: Mapping[str, str] = field(default_factory=dict)

    transport: httpx.BaseTransport | None = None

    def __post_init__(self) -> None:
        connect = self.connect_timeout_s if self.connect_timeout_s is not None else self.timeout_s
        self._client = httpx.Client(
            base_url=self.base_url.rstrip("/") + "/",
            timeout=httpx.Timeout(self.timeout_s, connect=connect),
            headers=dict(self.headers),
            transport=self.transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> BaseHttpClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def request_json(
        self,
        method: str,
        path: str = "",
        *,
        params: Mapping[str, Any] | None = None,
        data: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        """
        Perform an HTTP request and return parsed JSON (dict).
        Raises ProviderRequestError on transport issues / non-2xx and
        ProviderResponseError when a 2xx body is not a JSON object.
        """
        try:
            resp = self._client.request(
                method=method,
                url=path.lstrip("/"),
                params=params,
                data=data,
                headers=headers,
            )
        except httpx.TransportError as e:
            raise ProviderRequestError(str(e) or type(e).__name__) from e

        # Body is already read; close explicitly so a pooled connection is always returned.
        resp.close()

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ProviderRequestError(
                f"HTTP {resp.status_code} for {method} {resp.request.url}"
            ) from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise ProviderResponseError("Response was not valid JSON.") from e

        if not isinstance(payload, dict):
            raise ProviderResponseError(f"Expected JSON object, got {type(payload)}")

        return payload

    def post_form(
        self,
        path: str = "",
        *,
        data: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> Json:
        return self.request_json("POST", path, data=data, headers=headers)
