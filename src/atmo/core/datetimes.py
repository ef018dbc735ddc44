"""Data-model datetimes.

Accepted input is the RFC 3339 / ISO 8601 intersection the protocol
allows: full date, ``T``, full time with optional fractional seconds, and
an explicit ``Z`` or ``+HH:MM`` / ``-HH:MM`` offset.  Values are held in
UTC and always render as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` (six fractional
digits when there is sub-millisecond precision), so re-rendering may
change the text while preserving the instant.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from functools import total_ordering

from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidDateTimeError

logger = logging.getLogger(__name__)

_DATETIME_RE = re.compile(
    r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})"
    r"T(?P<hour>[0-9]{2}):(?P<minute>[0-9]{2}):(?P<second>[0-9]{2})"
    r"(?:\.(?P<fraction>[0-9]+))?"
    r"(?P<offset>Z|[+-][0-9]{2}:[0-9]{2})\Z"
)

_MAX_LEN = 64


def _parse_offset(offset: str, text: str) -> timezone:
    if offset == "Z":
        return timezone.utc
    if offset == "-00:00":
        raise InvalidDateTimeError("unknown-offset '-00:00' is not allowed", text)
    hours, minutes = int(offset[1:3]), int(offset[4:6])
    if hours > 23 or minutes > 59:
        raise InvalidDateTimeError("offset out of range", text)
    delta = timedelta(hours=hours, minutes=minutes)
    return timezone(-delta if offset[0] == "-" else delta)


def _render(value: datetime) -> str:
    timespec = "milliseconds" if value.microsecond % 1000 == 0 else "microseconds"
    # isoformat gives "+00:00" suffix; replace with "Z" for canonical form
    return value.isoformat(timespec=timespec).replace("+00:00", "Z")


@total_ordering
class DateTime(StringFormat):
    """A validated, timezone-aware instant."""

    __slots__ = ("_value",)

    error = InvalidDateTimeError

    @classmethod
    def parse(cls, text: str) -> DateTime:
        """Parse and validate a datetime string.

        Fraction digits beyond microseconds are accepted only when zero.

        Raises:
            InvalidDateTimeError: If *text* lacks any required component or
                an explicit offset, carries sub-microsecond precision, or
                names a nonexistent date or time.
        """
        require_str(text)
        if len(text) > _MAX_LEN:
            raise InvalidDateTimeError(f"longer than {_MAX_LEN} characters", text)
        m = _DATETIME_RE.match(text)
        if not m:
            raise InvalidDateTimeError(
                "expected YYYY-MM-DDTHH:MM:SS[.fff](Z|+HH:MM)", text
            )
        tzinfo = _parse_offset(m.group("offset"), text)
        digits = m.group("fraction") or ""
        if digits[6:].strip("0"):
            raise InvalidDateTimeError("precision finer than microseconds", text)
        fraction = digits[:6].ljust(6, "0")
        try:
            local = datetime(
                int(m.group("year")),
                int(m.group("month")),
                int(m.group("day")),
                int(m.group("hour")),
                int(m.group("minute")),
                int(m.group("second")),
                int(fraction),
                tzinfo=tzinfo,
            )
            value = local.astimezone(timezone.utc)
        except (ValueError, OverflowError) as exc:
            raise InvalidDateTimeError(str(exc), text) from exc

        instance = cls._new(_value=value)
        if logger.isEnabledFor(logging.DEBUG) and str(instance) != text:
            logger.debug("Normalized datetime %r to %r", text, str(instance))
        return instance

    @classmethod
    def from_datetime(cls, value: datetime) -> DateTime:
        """Wrap an aware :class:`datetime.datetime`."""
        if value.tzinfo is None or value.utcoffset() is None:
            raise InvalidDateTimeError("naive datetimes have no offset", value.isoformat())
        return cls._new(_value=value.astimezone(timezone.utc))

    @classmethod
    def now(cls) -> DateTime:
        return cls._new(_value=datetime.now(timezone.utc))

    def __str__(self) -> str:
        return _render(self._value)

    def _key(self) -> datetime:
        return self._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._value < other._value

    @property
    def value(self) -> datetime:
        """The instant as an aware UTC :class:`datetime.datetime`."""
        return self._value
