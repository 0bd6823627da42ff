"""Transport port - HTTP access to the authorization API."""

from collections.abc import Mapping
from typing import Any, Protocol


class Transport(Protocol):
    """Port for issuing requests against the authorization API.

    Paths are relative to the API base URL. Implementations return the
    decoded JSON body (``None`` for an empty body) and raise
    ``RemoteError`` on non-2xx responses or network failures.
    """

    async def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any: ...

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any: ...

    async def delete(self, path: str, *, params: Mapping[str, Any] | None = None) -> Any: ...
