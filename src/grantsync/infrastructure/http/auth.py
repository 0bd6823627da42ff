"""Bearer token authentication for the authorization API."""

from collections.abc import Callable, Generator

import httpx


class BearerTokenAuth(httpx.Auth):
    """Adds ``Authorization: Bearer`` and reports 401 responses.

    ``token_provider`` is called per request so a refreshed token is picked
    up without rebuilding the client. ``on_unauthorized`` lets the caller
    react to an expired session (e.g. drop the stored token).
    """

    def __init__(
        self,
        token_provider: Callable[[], str | None],
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self._token_provider()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        response = yield request
        if response.status_code == 401 and self._on_unauthorized is not None:
            self._on_unauthorized()
