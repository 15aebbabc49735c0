"""Failure types raised along the fetch path.

Adapters raise TransportError or DecodeError. Fetch services collapse both
into a single FetchError carrying a human-readable message, which is what
domain stores catch and expose through their ``error`` field.
"""


class TransportError(Exception):
    """The endpoint was unreachable, timed out, or answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(Exception):
    """The response body could not be decoded into the expected record array."""


class FetchError(Exception):
    """A domain fetch failed.

    The message is suitable for showing to a user as-is; the underlying
    TransportError or DecodeError is available as ``__cause__``.
    """

    def __init__(
        self, domain: str, cause: BaseException, subject: str | None = None
    ):
        detail = str(cause) or type(cause).__name__
        super().__init__(f"Failed to fetch {subject or domain}: {detail}")
        self.domain = domain
        self.subject = subject
