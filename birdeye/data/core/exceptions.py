"""Custom exception hierarchy."""

from __future__ import annotations


class BirdeyeError(Exception):
    """Base exception for all library errors."""

    pass


class ProviderError(BirdeyeError):
    """Error reported by the remote API or its transport."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class StreamConnectionError(ProviderError):
    """WebSocket handshake failed.

    ``status_code`` holds the HTTP status of the rejected upgrade response
    when the server answered at all.
    """

    pass


class BadRequestError(ProviderError):
    """Invalid request parameters or payload."""

    def __init__(self, message: str = "invalid request parameters or payload") -> None:
        super().__init__(message, status_code=400)


class UnauthorizedError(ProviderError):
    """Authentication required."""

    def __init__(self, message: str = "authentication required") -> None:
        super().__init__(message, status_code=401)


class ForbiddenError(ProviderError):
    """Credential lacks permission for the resource."""

    def __init__(self, message: str = "you don't have permission to access this resource") -> None:
        super().__init__(message, status_code=403)


class UnprocessableEntityError(ProviderError):
    """Request was well-formed but rejected."""

    def __init__(self, message: str = "please check the provided data and try again") -> None:
        super().__init__(message, status_code=422)


class RateLimitError(ProviderError):
    """Provider rate limit exceeded."""

    def __init__(self, message: str = "too many requests", retry_after: int = 60) -> None:
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class InternalServerError(ProviderError):
    """Server-side failure."""

    def __init__(self, message: str = "something went wrong on the server") -> None:
        super().__init__(message, status_code=500)


_STATUS_ERRORS: dict[int, type[ProviderError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    422: UnprocessableEntityError,
    429: RateLimitError,
    500: InternalServerError,
}


def error_for_status(status: int, message: str | None = None) -> ProviderError | None:
    """Return the typed error for a known failure status, else None."""
    error_cls = _STATUS_ERRORS.get(status)
    if error_cls is None:
        return None
    if message:
        return error_cls(message)
    return error_cls()


class NotConnectedError(BirdeyeError):
    """Operation requires a live stream connection."""

    pass


class MessageDecodeError(BirdeyeError):
    """Inbound frame could not be decoded."""

    def __init__(self, message: str, raw: str | None = None) -> None:
        super().__init__(message)
        self.raw = raw


class ChannelClosed(BirdeyeError):
    """Value offered to a channel that has been closed."""

    pass


class ValidationError(BirdeyeError):
    """Client-side argument validation failure."""

    pass
