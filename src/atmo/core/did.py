"""DID parsing and validation.

A DID has the form ``did:<method>:<method-specific-id>``.  Any method is
accepted with the generic W3C charset; the two methods blessed by the
protocol are held to their tighter grammars:

* ``did:plc:`` -- exactly 24 characters of lowercase base32 (``a-z2-7``);
* ``did:web:`` -- a hostname, optionally followed by a percent-encoded
  port (``did:web:localhost%3A8080``).
"""

from __future__ import annotations

from atmo.core.constants import DID_MAX_LEN, DID_PLC_ID_LEN, DID_PREFIX
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidDidError, InvalidHandleError
from atmo.core.handle import validate_domain
from atmo.core.segments import encode_ascii, split_once

_COLON = ord(":")
_PERCENT = ord("%")

_METHOD_BYTES = frozenset(b"abcdefghijklmnopqrstuvwxyz0123456789")
_ID_BYTES = frozenset(
    b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._:%"
)
_HEX_BYTES = frozenset(b"0123456789abcdefABCDEF")
_PLC_BYTES = frozenset(b"abcdefghijklmnopqrstuvwxyz234567")

PLC = "plc"
WEB = "web"


def _check_identifier(ident: bytes, text: str) -> None:
    if not ident:
        raise InvalidDidError("empty method-specific identifier", text)
    if ident[-1] in (_COLON, _PERCENT):
        raise InvalidDidError("identifier cannot end with ':' or '%'", text)
    i = 0
    while i < len(ident):
        byte = ident[i]
        if byte not in _ID_BYTES:
            raise InvalidDidError(f"disallowed character {chr(byte)!r}", text)
        if byte == _PERCENT:
            escape = ident[i + 1 : i + 3]
            if len(escape) != 2 or not all(b in _HEX_BYTES for b in escape):
                raise InvalidDidError("malformed percent-encoding", text)
            i += 3
            continue
        i += 1


def _check_plc(ident: bytes, text: str) -> None:
    if len(ident) != DID_PLC_ID_LEN:
        raise InvalidDidError(
            f"did:plc identifier must be {DID_PLC_ID_LEN} characters", text
        )
    if not all(b in _PLC_BYTES for b in ident):
        raise InvalidDidError("did:plc identifier must be lowercase base32", text)


def _check_web(ident: bytes, text: str) -> None:
    host, sep, port = ident.decode("ascii").partition("%3A")
    if sep and not (port.isdigit() and port.isascii()):
        raise InvalidDidError("did:web port must be numeric", text)
    if ":" in host or "%" in host:
        raise InvalidDidError("did:web paths are not supported", text)
    if host == "localhost":
        return
    try:
        validate_domain(host)
    except InvalidHandleError as exc:
        raise InvalidDidError(f"did:web hostname: {exc.reason}", text) from exc


class Did(StringFormat):
    """A validated decentralized identifier."""

    __slots__ = ("_text", "_method_len")

    error = InvalidDidError

    @classmethod
    def parse(cls, text: str) -> Did:
        """Parse and validate a DID.

        Raises:
            InvalidDidError: If *text* is not a valid DID.
        """
        require_str(text)
        if len(text) > DID_MAX_LEN:
            raise InvalidDidError(f"longer than {DID_MAX_LEN} characters", text)
        if not text.startswith(DID_PREFIX):
            raise InvalidDidError(f"missing {DID_PREFIX!r} prefix", text)
        data = encode_ascii(text[len(DID_PREFIX) :])
        if data is None:
            raise InvalidDidError("contains non-ASCII characters", text)

        parts = split_once(data, lambda b: b == _COLON)
        if parts is None:
            raise InvalidDidError("missing method-specific identifier", text)
        method, ident = parts
        if not method:
            raise InvalidDidError("empty method", text)
        if not all(b in _METHOD_BYTES for b in method):
            raise InvalidDidError("method must be lowercase letters and digits", text)

        _check_identifier(ident, text)
        if method == b"plc":
            _check_plc(ident, text)
        elif method == b"web":
            _check_web(ident, text)
        return cls._new(_text=text, _method_len=len(method))

    def __str__(self) -> str:
        return self._text

    @property
    def method(self) -> str:
        start = len(DID_PREFIX)
        return self._text[start : start + self._method_len]

    @property
    def identifier(self) -> str:
        """The method-specific identifier (everything after the method)."""
        return self._text[len(DID_PREFIX) + self._method_len + 1 :]

    @property
    def is_plc(self) -> bool:
        return self.method == PLC

    @property
    def is_web(self) -> bool:
        return self.method == WEB
