"""NSID parsing and validation.

An NSID names a lexicon schema: a reversed domain authority followed by a
name, e.g. ``com.example.fooBar`` (authority ``example.com``, name
``fooBar``).
"""

from __future__ import annotations

from atmo.core.constants import NSID_AUTHORITY_MAX_LEN, NSID_MAX_LEN, NSID_MIN_SEGMENTS
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidNsidError
from atmo.core.segments import (
    encode_ascii,
    is_valid_domain_segment,
    is_valid_nsid_name,
    is_valid_tld,
    split_all,
)

_DOT = ord(".")


class Nsid(StringFormat):
    """A validated namespaced identifier.

    The authority is case-insensitive and compares lower-cased; the name
    is case-sensitive.
    """

    __slots__ = ("_text", "_name_len")

    error = InvalidNsidError

    @classmethod
    def parse(cls, text: str) -> Nsid:
        """Parse and validate an NSID.

        Raises:
            InvalidNsidError: If *text* is not a valid NSID.
        """
        require_str(text)
        if len(text) > NSID_MAX_LEN:
            raise InvalidNsidError(f"longer than {NSID_MAX_LEN} characters", text)
        data = encode_ascii(text)
        if data is None:
            raise InvalidNsidError("contains non-ASCII characters", text)

        segments = split_all(data, _DOT)
        if len(segments) < NSID_MIN_SEGMENTS:
            raise InvalidNsidError(
                f"needs at least {NSID_MIN_SEGMENTS} segments", text
            )
        *authority, name = segments
        # Reversed domain: the first segment is the TLD
        if not is_valid_tld(authority[0]):
            raise InvalidNsidError(
                f"invalid top-level segment {authority[0].decode()!r}", text
            )
        for segment in authority[1:]:
            if not is_valid_domain_segment(segment):
                raise InvalidNsidError(f"invalid segment {segment.decode()!r}", text)
        if len(data) - len(name) - 1 > NSID_AUTHORITY_MAX_LEN:
            raise InvalidNsidError(
                f"authority longer than {NSID_AUTHORITY_MAX_LEN} characters", text
            )
        if not is_valid_nsid_name(name):
            raise InvalidNsidError(f"invalid name segment {name.decode()!r}", text)
        return cls._new(_text=text, _name_len=len(name))

    def __str__(self) -> str:
        return self._text

    def _key(self) -> tuple[str, str]:
        return self._prefix.lower(), self.name

    @property
    def _prefix(self) -> str:
        return self._text[: -self._name_len - 1]

    @property
    def name(self) -> str:
        return self._text[-self._name_len :]

    @property
    def authority(self) -> str:
        """The authority in domain order, e.g. ``feed.bsky.app`` for ``app.bsky.feed.post``."""
        return ".".join(reversed(self._prefix.lower().split(".")))

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._text.split("."))
