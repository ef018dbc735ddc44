"""AT-URI parsing and validation.

Accepted shape::

    at://<authority>[/<collection>[/<rkey>]][#<fragment>]

where the authority is a DID or handle, the collection an NSID and the
record key a :class:`~atmo.core.rkey.RecordKey`.  Queries, trailing
slashes and deeper paths are rejected.
"""

from __future__ import annotations

from typing import Optional, Union

from atmo.core.at_identifier import AtIdentifier
from atmo.core.constants import AT_URI_MAX_LEN, AT_URI_PREFIX
from atmo.core.contract import StringFormat, require_str
from atmo.core.did import Did
from atmo.core.errors import InvalidAtUriError, ParseError
from atmo.core.handle import Handle
from atmo.core.nsid import Nsid
from atmo.core.rkey import RecordKey
from atmo.core.segments import encode_ascii, split_all, split_once

_SLASH = ord("/")
_HASH = ord("#")
_QUESTION = ord("?")
_PERCENT = ord("%")

_FRAGMENT_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    b"-._~!$&'()*+,;=:@/?%"
)
_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")


def _check_fragment(fragment: bytes, text: str) -> None:
    if not fragment:
        raise InvalidAtUriError("empty fragment", text)
    if fragment[0] != _SLASH:
        raise InvalidAtUriError("fragment must start with '/'", text)
    for index, byte in enumerate(fragment):
        if byte not in _FRAGMENT_BYTES:
            raise InvalidAtUriError(f"disallowed fragment character {chr(byte)!r}", text)
        if byte == _PERCENT:
            escape = fragment[index + 1 : index + 3]
            if len(escape) != 2 or not all(b in _HEX_BYTES for b in escape):
                raise InvalidAtUriError("malformed percent-encoding in fragment", text)


class AtUri(StringFormat):
    """A validated ``at://`` URI."""

    __slots__ = ("_authority", "_collection", "_rkey", "_fragment")

    error = InvalidAtUriError

    @classmethod
    def parse(cls, text: str) -> AtUri:
        """Parse and validate an AT-URI.

        Raises:
            InvalidAtUriError: If *text* is not a valid AT-URI.  When a
                component fails, its own error is chained as ``__cause__``.
        """
        require_str(text)
        if len(text) > AT_URI_MAX_LEN:
            raise InvalidAtUriError(f"longer than {AT_URI_MAX_LEN} characters", text)
        if not text.startswith(AT_URI_PREFIX):
            raise InvalidAtUriError(f"missing {AT_URI_PREFIX!r} prefix", text)
        data = encode_ascii(text[len(AT_URI_PREFIX) :])
        if data is None:
            raise InvalidAtUriError("contains non-ASCII characters", text)

        fragment = None
        parts = split_once(data, lambda b: b == _HASH)
        if parts is not None:
            data, raw_fragment = parts
            _check_fragment(raw_fragment, text)
            fragment = raw_fragment.decode("ascii")
        if _QUESTION in data:
            raise InvalidAtUriError("query components are not allowed", text)

        segments = split_all(data, _SLASH)
        if len(segments) > 3:
            raise InvalidAtUriError("too many path segments", text)
        if any(not segment for segment in segments[1:]):
            raise InvalidAtUriError("empty path segment or trailing slash", text)

        raw_authority, *path = (segment.decode("ascii") for segment in segments)
        try:
            authority = AtIdentifier.parse(raw_authority)
            collection = Nsid.parse(path[0]) if path else None
            rkey = RecordKey.parse(path[1]) if len(path) > 1 else None
        except ParseError as exc:
            raise InvalidAtUriError(f"bad {exc.kind.value} component", text) from exc

        return cls._new(
            _authority=authority,
            _collection=collection,
            _rkey=rkey,
            _fragment=fragment,
        )

    @classmethod
    def build(
        cls,
        authority: Union[AtIdentifier, Did, Handle, str],
        collection: Union[Nsid, str, None] = None,
        rkey: Union[RecordKey, str, None] = None,
    ) -> AtUri:
        """Assemble an AT-URI from its components, validating the result."""
        if rkey is not None and collection is None:
            raise InvalidAtUriError("a record key requires a collection")
        text = f"{AT_URI_PREFIX}{authority}"
        if collection is not None:
            text += f"/{collection}"
        if rkey is not None:
            text += f"/{rkey}"
        return cls.parse(text)

    def __str__(self) -> str:
        text = f"{AT_URI_PREFIX}{self._authority}"
        if self._collection is not None:
            text += f"/{self._collection}"
        if self._rkey is not None:
            text += f"/{self._rkey}"
        if self._fragment is not None:
            text += f"#{self._fragment}"
        return text

    def _key(self) -> tuple:
        return self._authority, self._collection, self._rkey, self._fragment

    @property
    def authority(self) -> AtIdentifier:
        return self._authority

    @property
    def collection(self) -> Optional[Nsid]:
        return self._collection

    @property
    def rkey(self) -> Optional[RecordKey]:
        return self._rkey

    @property
    def fragment(self) -> Optional[str]:
        """The fragment without its leading ``#``."""
        return self._fragment
