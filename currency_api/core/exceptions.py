"""
Feed pipeline exceptions.

All of them abort a single refresh cycle; none of them escape the scheduler.
"""


class FeedError(Exception):
    """Base class for failures while refreshing from the upstream feed."""
    pass


class TransportError(FeedError):
    """Raised when the feed cannot be reached (DNS, connect, timeout...)."""
    pass


class RemoteError(FeedError):
    """Raised when the feed answers with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        message = f"Feed request returned HTTP {status_code}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class DecodeError(FeedError):
    """Raised when the feed payload is not a well-formed rate envelope."""
    pass
