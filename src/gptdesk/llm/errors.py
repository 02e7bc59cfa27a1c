"""Per-request failures of the chat client.

Each failure mode has its own type so the UI can tell a rejected request
from an unreadable answer. None of these should ever end the process.
"""


class ChatError(Exception):
    """Base class for every failure of a single chat request."""


class TransportError(ChatError):
    """The request never produced an HTTP response (DNS, refused connection, TLS)."""


class RequestTimeoutError(TransportError, TimeoutError):
    """The endpoint did not answer within the configured timeout."""


class UpstreamStatusError(ChatError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class MalformedResponseError(ChatError):
    """The body was not JSON or did not have the expected shape."""


class EmptyChoicesError(ChatError):
    """The body parsed but contained no choices."""
