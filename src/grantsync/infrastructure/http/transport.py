"""httpx implementation of the Transport port."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from grantsync.domain.exceptions import RemoteError

logger = logging.getLogger(__name__)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class HttpxTransport:
    """Transport over an ``httpx.AsyncClient``.

    Non-2xx responses and network failures are raised as ``RemoteError``
    carrying the status code and decoded body.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @classmethod
    def create(
        cls,
        base_url: str,
        timeout: float = 30.0,
        auth: httpx.Auth | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxTransport":
        client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            auth=auth,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )
        return cls(client)

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        return await self._request("POST", path, json=json, params=params)

    async def delete(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any:
        return await self._request("DELETE", path, params=params)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        try:
            response = await self._client.request(
                method,
                path,
                json=json,
                params=dict(params) if params else None,
            )
        except httpx.TimeoutException as e:
            raise RemoteError(f"{method} {path} timed out") from e
        except httpx.HTTPError as e:
            raise RemoteError(f"{method} {path} failed: {e}") from e

        body = _decode_body(response)
        if response.is_error:
            logger.debug("%s %s -> %s", method, path, response.status_code)
            raise RemoteError(
                f"{method} {path} returned {response.status_code}",
                status_code=response.status_code,
                payload=body,
            )
        return body

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.aclose()
