"""Handle parsing and validation.

A handle is a DNS-style name such as ``alice.example.com``: at least two
dot-separated segments, each a valid domain label, the last of which (the
TLD) starts with a letter.
"""

from __future__ import annotations

from atmo.core.constants import DISALLOWED_TLDS, HANDLE_MAX_LEN
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidHandleError
from atmo.core.segments import (
    encode_ascii,
    is_valid_domain_segment,
    is_valid_tld,
    split_all,
)

_DOT = ord(".")


def validate_domain(
    text: str, error: type[InvalidHandleError] = InvalidHandleError
) -> list[bytes]:
    """Validate a handle-shaped domain name and return its segments.

    Raises:
        InvalidHandleError: (or *error*) on the first violated rule.
    """
    if len(text) > HANDLE_MAX_LEN:
        raise error(f"longer than {HANDLE_MAX_LEN} characters", text)
    data = encode_ascii(text)
    if data is None:
        raise error("contains non-ASCII characters", text)
    segments = split_all(data, _DOT)
    if len(segments) < 2:
        raise error("needs at least two segments", text)
    *labels, tld = segments
    for label in labels:
        if not is_valid_domain_segment(label):
            raise error(f"invalid segment {label.decode()!r}", text)
    if not is_valid_tld(tld):
        raise error(f"invalid top-level segment {tld.decode()!r}", text)
    return segments


class Handle(StringFormat):
    """A validated handle.

    The rendering preserves the case it was parsed with; comparison and
    hashing are case-insensitive, as DNS names are.
    """

    __slots__ = ("_text",)

    error = InvalidHandleError

    @classmethod
    def parse(cls, text: str) -> Handle:
        """Parse and validate a handle.

        Raises:
            InvalidHandleError: If *text* is not a syntactically valid handle.
        """
        require_str(text)
        validate_domain(text)
        return cls._new(_text=text)

    def __str__(self) -> str:
        return self._text

    def _key(self) -> str:
        return self._text.lower()

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._text.split("."))

    @property
    def tld(self) -> str:
        return self._text.rsplit(".", 1)[1].lower()

    @property
    def is_disallowed_tld(self) -> bool:
        """True for TLDs that are syntactically fine but refused for registration."""
        return self.tld in DISALLOWED_TLDS

    def normalized(self) -> Handle:
        """Return the canonical, lower-cased handle."""
        if self._text.islower():
            return self
        return type(self)._new(_text=self._text.lower())
