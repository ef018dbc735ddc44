"""Raw bytes in the data model, written ``{"$bytes": "<base64>"}`` in JSON."""

from __future__ import annotations

import base64
import binascii

from pydantic_core import core_schema

from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidBytesError

BYTES_KEY = "$bytes"


def b64_encode(data: bytes) -> str:
    """Standard base64 encode *data*, stripping padding."""
    return base64.b64encode(data).rstrip(b"=").decode("ascii")


def b64_decode(s: str) -> bytes:
    """Standard base64 decode *s*, tolerating missing padding."""
    padding = 4 - len(s) % 4
    if padding != 4:
        s += "=" * padding
    return base64.b64decode(s, validate=True)


class Bytes(StringFormat):
    """An immutable byte string.

    Text form is unpadded standard base64; the structured form is the
    ``$bytes`` object.
    """

    __slots__ = ("_data",)

    error = InvalidBytesError

    @classmethod
    def parse(cls, text: str) -> Bytes:
        """Decode unpadded base64.

        Raises:
            InvalidBytesError: If *text* is padded, malformed or not canonical.
        """
        require_str(text)
        if "=" in text:
            raise InvalidBytesError("base64 must not be padded", text)
        try:
            data = b64_decode(text)
        except (binascii.Error, ValueError) as exc:
            raise InvalidBytesError("malformed base64", text) from exc
        if b64_encode(data) != text:
            raise InvalidBytesError("non-canonical base64", text)
        return cls._new(_data=data)

    @classmethod
    def of(cls, data: bytes) -> Bytes:
        return cls._new(_data=bytes(data))

    def __str__(self) -> str:
        return b64_encode(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    @classmethod
    def deserialize(cls, value: object) -> Bytes:
        if not isinstance(value, dict) or set(value) != {BYTES_KEY}:
            raise InvalidBytesError(f"expected an object with a single {BYTES_KEY!r} key")
        return super().deserialize(value[BYTES_KEY])

    def serialize(self) -> dict[str, str]:
        return {BYTES_KEY: str(self)}

    @classmethod
    def _wire_schema(cls) -> core_schema.CoreSchema:
        return core_schema.dict_schema(core_schema.str_schema(), core_schema.str_schema())
