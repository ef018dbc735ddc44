"""Timestamp identifiers (TIDs).

A TID is a 64-bit integer -- a microsecond UNIX timestamp shifted left
by 10 bits, OR'd with a 10-bit clock id -- written as 13 characters of
the sort-preserving base32 alphabet ``234567a-z``.  Lexicographic order
of TIDs is therefore numeric (and chronological) order.
"""

from __future__ import annotations

import secrets
import time
from datetime import datetime, timedelta, timezone
from functools import total_ordering
from typing import Optional

from atmo.core.constants import (
    TID_ALPHABET,
    TID_CLOCK_ID_BITS,
    TID_FIRST_CHARS,
    TID_LEN,
    TID_MAX_CLOCK_ID,
    TID_MAX_TIMESTAMP,
)
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidTidError

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DIGITS = {char: value for value, char in enumerate(TID_ALPHABET)}


def _encode(value: int) -> str:
    chars = []
    for _ in range(TID_LEN):
        chars.append(TID_ALPHABET[value & 0x1F])
        value >>= 5
    return "".join(reversed(chars))


@total_ordering
class Tid(StringFormat):
    """A validated TID."""

    __slots__ = ("_text",)

    error = InvalidTidError

    @classmethod
    def parse(cls, text: str) -> Tid:
        """Parse and validate a TID.

        Raises:
            InvalidTidError: If *text* is not 13 characters of the TID alphabet.
        """
        require_str(text)
        if len(text) != TID_LEN:
            raise InvalidTidError(f"must be exactly {TID_LEN} characters", text)
        if text[0] not in TID_FIRST_CHARS:
            raise InvalidTidError("high bit of the first character must be zero", text)
        for char in text:
            if char not in _DIGITS:
                raise InvalidTidError(f"disallowed character {char!r}", text)
        return cls._new(_text=text)

    @classmethod
    def from_parts(cls, timestamp_us: int, clock_id: int) -> Tid:
        """Encode a microsecond timestamp and a clock id."""
        if not 0 <= timestamp_us <= TID_MAX_TIMESTAMP:
            raise InvalidTidError(f"timestamp out of range: {timestamp_us}")
        if not 0 <= clock_id <= TID_MAX_CLOCK_ID:
            raise InvalidTidError(f"clock id out of range: {clock_id}")
        return cls._new(_text=_encode(timestamp_us << TID_CLOCK_ID_BITS | clock_id))

    @classmethod
    def now(cls, clock_id: Optional[int] = None) -> Tid:
        """Return a TID for the current time.

        A random clock id is drawn when *clock_id* is not given.  Calls are
        not monotonic: two calls in the same microsecond (or across a
        backwards clock step) can return equal or decreasing TIDs, so
        callers needing strict ordering must track the last value issued.
        """
        if clock_id is None:
            clock_id = secrets.randbelow(TID_MAX_CLOCK_ID + 1)
        return cls.from_parts(time.time_ns() // 1000, clock_id)

    def __str__(self) -> str:
        return self._text

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Tid):
            return NotImplemented
        return self._text < other._text

    def __int__(self) -> int:
        value = 0
        for char in self._text:
            value = value << 5 | _DIGITS[char]
        return value

    @property
    def timestamp_us(self) -> int:
        return int(self) >> TID_CLOCK_ID_BITS

    @property
    def clock_id(self) -> int:
        return int(self) & TID_MAX_CLOCK_ID

    def as_datetime(self) -> datetime:
        """The embedded timestamp as an aware UTC datetime."""
        return _EPOCH + timedelta(microseconds=self.timestamp_us)
