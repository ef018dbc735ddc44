"""atmo exception hierarchy.

All data-model exceptions inherit from :class:`AtmoError`.  Grammar
failures additionally inherit from :class:`ValueError` so that pydantic
reports them as ordinary validation errors.
"""

from __future__ import annotations

from enum import Enum

# Offending input is echoed in messages, clipped to this many characters
_MAX_ECHO_LEN = 80


class ErrorKind(str, Enum):
    """Which grammar rejected an input.

    Using ``str, Enum`` so that ``ErrorKind.HANDLE == "handle"`` is True.
    """

    HANDLE = "handle"
    DID = "did"
    NSID = "nsid"
    AT_IDENTIFIER = "at-identifier"
    AT_URI = "at-uri"
    TID = "tid"
    RECORD_KEY = "record-key"
    CID = "cid"
    DATETIME = "datetime"
    BYTES = "bytes"
    BLOB = "blob"
    UNKNOWN = "unknown"


class AtmoError(Exception):
    """Base exception for all atmo errors."""


class ParseError(AtmoError, ValueError):
    """Raised when text fails one of the data-model grammars.

    Attributes:
        kind: The grammar that rejected the input.
        reason: Short description of the first violated rule.
        input: The rejected input, unmodified.
    """

    kind: ErrorKind

    def __init__(self, reason: str, input: object = None) -> None:
        self.reason = reason
        self.input = input
        super().__init__(self._format())

    def _format(self) -> str:
        kind = getattr(self, "kind", None)
        label = kind.value if kind is not None else "value"
        message = f"invalid {label}: {self.reason}"
        if self.input is None:
            return message
        echo = repr(self.input)
        if len(echo) > _MAX_ECHO_LEN:
            echo = echo[: _MAX_ECHO_LEN - 3] + "..."
        return f"{message} (input: {echo})"


class InvalidHandleError(ParseError):
    """Raised when a handle fails validation."""

    kind = ErrorKind.HANDLE


class InvalidDidError(ParseError):
    """Raised when a DID fails validation."""

    kind = ErrorKind.DID


class InvalidNsidError(ParseError):
    """Raised when an NSID fails validation."""

    kind = ErrorKind.NSID


class InvalidAtIdentifierError(ParseError):
    """Raised when text is neither a DID nor a handle.

    The individual DID and handle failures are kept in :attr:`causes`.
    """

    kind = ErrorKind.AT_IDENTIFIER

    def __init__(
        self,
        reason: str,
        input: object = None,
        causes: tuple[ParseError, ...] = (),
    ) -> None:
        self.causes = causes
        super().__init__(reason, input)


class InvalidAtUriError(ParseError):
    """Raised when an AT-URI fails validation."""

    kind = ErrorKind.AT_URI


class InvalidTidError(ParseError):
    """Raised when a TID fails validation."""

    kind = ErrorKind.TID


class InvalidRecordKeyError(ParseError):
    """Raised when a record key fails validation."""

    kind = ErrorKind.RECORD_KEY


class InvalidCidError(ParseError):
    """Raised when a CID string or link fails validation."""

    kind = ErrorKind.CID


class InvalidDateTimeError(ParseError):
    """Raised when a datetime string fails validation."""

    kind = ErrorKind.DATETIME


class InvalidBytesError(ParseError):
    """Raised when a ``$bytes`` value fails validation."""

    kind = ErrorKind.BYTES


class InvalidBlobError(ParseError):
    """Raised when a blob reference fails validation."""

    kind = ErrorKind.BLOB


class InvalidUnknownError(ParseError):
    """Raised when an unknown value is not structurally valid data."""

    kind = ErrorKind.UNKNOWN
