"""Record key validation."""

from __future__ import annotations

from atmo.core.constants import RKEY_MAX_LEN, RKEY_MIN_LEN, RKEY_RESERVED
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidRecordKeyError

_RKEY_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._:~-"
)


class RecordKey(StringFormat):
    """The key of a record within a collection (the last AT-URI path segment)."""

    __slots__ = ("_text",)

    error = InvalidRecordKeyError

    @classmethod
    def parse(cls, text: str) -> RecordKey:
        """Parse and validate a record key.

        Raises:
            InvalidRecordKeyError: If *text* is out of bounds, uses a
                disallowed character, or is ``.`` / ``..``.
        """
        require_str(text)
        if not RKEY_MIN_LEN <= len(text) <= RKEY_MAX_LEN:
            raise InvalidRecordKeyError(
                f"length must be {RKEY_MIN_LEN}-{RKEY_MAX_LEN} characters", text
            )
        if text in RKEY_RESERVED:
            raise InvalidRecordKeyError("reserved value", text)
        for char in text:
            if char not in _RKEY_CHARS:
                raise InvalidRecordKeyError(f"disallowed character {char!r}", text)
        return cls._new(_text=text)

    def __str__(self) -> str:
        return self._text
