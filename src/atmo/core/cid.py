"""CID strings and the data model's ``{"$link": ...}`` CID link."""

from __future__ import annotations

import hashlib

from pydantic_core import core_schema

from atmo.core.constants import CID_MAX_LEN
from atmo.core.contract import StringFormat, require_str
from atmo.core.errors import InvalidCidError
from atmo.core.multiformats import (
    RAW,
    SHA2_256,
    DecodedCid,
    Multihash,
    decode_cid,
    encode_cid,
)

LINK_KEY = "$link"


class CidString(StringFormat):
    """A validated CID in its text form (the Lexicon ``cid`` string format)."""

    __slots__ = ("_text", "_decoded")

    error = InvalidCidError

    @classmethod
    def parse(cls, text: str) -> CidString:
        """Parse and validate a CID string.

        Raises:
            InvalidCidError: If *text* is not a canonically encoded CID.
        """
        require_str(text)
        if len(text) > CID_MAX_LEN:
            raise InvalidCidError(f"longer than {CID_MAX_LEN} characters", text)
        if not text.isascii():
            raise InvalidCidError("contains non-ASCII characters", text)
        return cls._new(_text=text, _decoded=decode_cid(text))

    @classmethod
    def for_data(cls, data: bytes, codec: int = RAW) -> CidString:
        """Compute the sha2-256 CIDv1 of *data*."""
        digest = hashlib.sha256(data).digest()
        decoded = DecodedCid(
            version=1, codec=codec, multihash=Multihash(code=SHA2_256, digest=digest)
        )
        return cls.parse(encode_cid(decoded))

    def __str__(self) -> str:
        return self._text

    @property
    def version(self) -> int:
        return self._decoded.version

    @property
    def codec(self) -> int:
        return self._decoded.codec

    @property
    def multihash_code(self) -> int:
        return self._decoded.multihash.code

    @property
    def digest(self) -> bytes:
        return self._decoded.multihash.digest

    def to_bytes(self) -> bytes:
        """The binary CID."""
        return self._decoded.to_bytes()


class CidLink(StringFormat):
    """A link to content by CID, written ``{"$link": "<cid>"}`` in JSON.

    Parses from and renders to the bare CID text; only its structured
    form is the ``$link`` object.
    """

    __slots__ = ("_cid",)

    error = InvalidCidError

    @classmethod
    def parse(cls, text: str) -> CidLink:
        return cls._new(_cid=CidString.parse(text))

    @classmethod
    def of(cls, cid: CidString) -> CidLink:
        return cls._new(_cid=cid)

    def __str__(self) -> str:
        return str(self._cid)

    @property
    def cid(self) -> CidString:
        return self._cid

    @classmethod
    def deserialize(cls, value: object) -> CidLink:
        """Decode ``{"$link": "<cid>"}``.

        Raises:
            InvalidCidError: If *value* is not a single-key ``$link`` object
                holding a valid CID string.
        """
        if not isinstance(value, dict) or set(value) != {LINK_KEY}:
            raise InvalidCidError(f"expected an object with a single {LINK_KEY!r} key")
        return cls._new(_cid=CidString.deserialize(value[LINK_KEY]))

    def serialize(self) -> dict[str, str]:
        return {LINK_KEY: str(self._cid)}

    @classmethod
    def _wire_schema(cls) -> core_schema.CoreSchema:
        return core_schema.dict_schema(core_schema.str_schema(), core_schema.str_schema())
