"""Domain exceptions."""


class GrantSyncError(Exception):
    """Base exception for grantsync."""

    pass


class ValidationError(GrantSyncError):
    """Validation failed for input data, detected before any remote call."""

    pass


class ReadOnlyScopeError(ValidationError):
    """Attempt to mutate a grant collection that is read-only in the active scope."""

    pass


class NotFound(GrantSyncError):
    """Requested resource was not found."""

    def __init__(self, resource: str, identifier: str) -> None:
        super().__init__(f"{resource} not found: {identifier}")
        self.resource = resource
        self.identifier = identifier


class RemoteError(GrantSyncError):
    """Authorization API call failed (non-2xx response or network failure)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: object | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class MalformedResponseError(GrantSyncError):
    """Authorization API returned a payload that does not match the expected shape."""

    pass


class PersistenceError(GrantSyncError):
    """A save step failed; remaining steps were not executed."""

    def __init__(self, stage: str, message: str) -> None:
        super().__init__(f"Error during {stage}: {message}")
        self.stage = stage
        self.message = message


def error_message(error: BaseException, default: str = "Unknown error") -> str:
    """Best human-readable message for a failure.

    Prefers the server's JSON ``message``, then a plain-text body, then the
    exception text, then ``default``.
    """
    if isinstance(error, RemoteError):
        payload = error.payload
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        if isinstance(payload, str) and payload.strip():
            return payload.strip()
        return error.message or default
    return str(error) or default
