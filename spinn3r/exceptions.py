class Spinn3rError(Exception):
    """Base exception for spinn3r."""

    pass


class ConfigurationError(Spinn3rError):
    """Raised when the client is built without an api name or vendor key."""

    pass


class FetchError(Spinn3rError):
    """Raised when a page cannot be fetched from the API."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        attempts: int = 0,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.attempts = attempts


class FetchCancelled(FetchError):
    """Raised when a fetch is interrupted through the cancellation event."""

    pass


class ParseError(Spinn3rError):
    """Raised when a response body is not a readable feed."""

    pass


class StreamExhausted(Spinn3rError):
    """Raised when there is no continuation URL left to follow."""

    pass
