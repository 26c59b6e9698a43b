"""Custom exceptions for the spread monitor."""


class MonitorError(Exception):
    """Base exception for all monitor errors."""
    pass


class SourceError(MonitorError):
    """A price source failed to produce a usable answer."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


class SourceTimeoutError(SourceError):
    """The source did not answer within the configured timeout."""

    def __init__(self, source: str, timeout: float | None = None):
        self.timeout = timeout
        msg = "request timed out"
        if timeout:
            msg += f" after {timeout}s"
        super().__init__(source, msg)


class SourceResponseError(SourceError):
    """The source answered with a payload that could not be parsed."""
    pass


class RateLimitError(SourceError):
    """Rate limit exceeded."""

    def __init__(self, source: str, retry_after: float | None = None):
        self.retry_after = retry_after
        msg = "Rate limit exceeded"
        if retry_after:
            msg += f", retry after {retry_after}s"
        super().__init__(source, msg)


class NotConnectedError(SourceError):
    """Operation attempted before calling connect()."""

    def __init__(self, source: str):
        super().__init__(source, "source not connected. Call connect() first.")
