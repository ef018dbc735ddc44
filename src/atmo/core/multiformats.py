"""Multibase, multihash and CID decoding.

Only what CID strings need: base32 (``b``) and base58btc (``z``) multibase,
bare base58btc CIDv0 (``Qm...``), unsigned varints, and the
``<version><codec><multihash>`` CID layout.  Decoding is strict: every
decoder here rejects input that would not re-encode to the same text.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass

from atmo.core.errors import InvalidCidError

BASE32_PREFIX = "b"
BASE58BTC_PREFIX = "z"

SHA2_256 = 0x12
DAG_PB = 0x70
DAG_CBOR = 0x71
RAW = 0x55

_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_BASE58_INDEX = {char: value for value, char in enumerate(_BASE58_ALPHABET)}

# Known digest sizes; other hash functions are accepted at their declared length
_DIGEST_SIZES = {SHA2_256: 32, 0x13: 64, 0x1E: 32}

_MAX_VARINT_BYTES = 9


# ---------------------------------------------------------------------------
# Base encodings
# ---------------------------------------------------------------------------


def b32_encode(data: bytes) -> str:
    """RFC 4648 base32, lowercase, without padding."""
    return base64.b32encode(data).decode("ascii").rstrip("=").lower()


def b32_decode(text: str) -> bytes:
    """Inverse of :func:`b32_encode`; rejects uppercase and padding."""
    if not text.islower() and any(c.isalpha() for c in text):
        raise InvalidCidError("base32 must be lowercase", text)
    if "=" in text:
        raise InvalidCidError("base32 must not be padded", text)
    padding = -len(text) % 8
    try:
        data = base64.b32decode(text.upper() + "=" * padding)
    except ValueError as exc:
        raise InvalidCidError("malformed base32", text) from exc
    if b32_encode(data) != text:
        raise InvalidCidError("non-canonical base32", text)
    return data


def b58_encode(data: bytes) -> str:
    """Bitcoin-alphabet base58."""
    zeros = len(data) - len(data.lstrip(b"\0"))
    value = int.from_bytes(data, "big")
    chars = []
    while value:
        value, rem = divmod(value, 58)
        chars.append(_BASE58_ALPHABET[rem])
    return "1" * zeros + "".join(reversed(chars))


def b58_decode(text: str) -> bytes:
    """Inverse of :func:`b58_encode`."""
    value = 0
    for char in text:
        digit = _BASE58_INDEX.get(char)
        if digit is None:
            raise InvalidCidError(f"disallowed base58 character {char!r}", text)
        value = value * 58 + digit
    zeros = len(text) - len(text.lstrip("1"))
    body = value.to_bytes((value.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


# ---------------------------------------------------------------------------
# Varints
# ---------------------------------------------------------------------------


def encode_varint(value: int) -> bytes:
    """Unsigned LEB128."""
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Read a minimally-encoded varint at *offset*; return ``(value, next_offset)``."""
    value = 0
    for i in range(_MAX_VARINT_BYTES):
        pos = offset + i
        if pos >= len(data):
            raise InvalidCidError("truncated varint")
        byte = data[pos]
        value |= (byte & 0x7F) << (7 * i)
        if not byte & 0x80:
            if i > 0 and byte == 0:
                raise InvalidCidError("non-minimal varint")
            return value, pos + 1
    raise InvalidCidError("varint too long")


# ---------------------------------------------------------------------------
# CIDs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Multihash:
    code: int
    digest: bytes

    def encode(self) -> bytes:
        return encode_varint(self.code) + encode_varint(len(self.digest)) + self.digest


@dataclass(frozen=True)
class DecodedCid:
    """The structural content of a CID."""

    version: int
    codec: int
    multihash: Multihash

    def to_bytes(self) -> bytes:
        if self.version == 0:
            return self.multihash.encode()
        return encode_varint(self.version) + encode_varint(self.codec) + self.multihash.encode()


def decode_multihash(data: bytes, offset: int = 0) -> Multihash:
    """Decode a multihash that must extend exactly to the end of *data*."""
    code, offset = decode_varint(data, offset)
    length, offset = decode_varint(data, offset)
    digest = data[offset:]
    if len(digest) != length:
        raise InvalidCidError(
            f"multihash declares {length} digest bytes, found {len(digest)}"
        )
    expected = _DIGEST_SIZES.get(code)
    if expected is not None and length != expected:
        raise InvalidCidError(f"digest length {length} invalid for hash 0x{code:x}")
    if length == 0:
        raise InvalidCidError("empty multihash digest")
    return Multihash(code=code, digest=digest)


def decode_cid_bytes(data: bytes) -> DecodedCid:
    """Decode a binary CIDv1."""
    version, offset = decode_varint(data)
    if version != 1:
        raise InvalidCidError(f"unsupported CID version {version}")
    codec, offset = decode_varint(data, offset)
    return DecodedCid(version=1, codec=codec, multihash=decode_multihash(data, offset))


def encode_cid(cid: DecodedCid) -> str:
    """Canonical text form: base58btc for CIDv0, base32 multibase for CIDv1."""
    if cid.version == 0:
        return b58_encode(cid.to_bytes())
    return BASE32_PREFIX + b32_encode(cid.to_bytes())


def decode_cid(text: str) -> DecodedCid:
    """Decode a CID string, requiring that it re-encodes to exactly *text*.

    Raises:
        InvalidCidError: On an unsupported multibase, malformed encoding or
            a structurally invalid CID.
    """
    if not text:
        raise InvalidCidError("empty CID")
    if text.startswith("Qm"):
        data = b58_decode(text)
        if len(data) != 34:
            raise InvalidCidError("CIDv0 must be a 34-byte sha2-256 multihash", text)
        cid = DecodedCid(version=0, codec=DAG_PB, multihash=decode_multihash(data))
        rendered = b58_encode(cid.to_bytes())
    elif text[0] == BASE32_PREFIX:
        cid = decode_cid_bytes(b32_decode(text[1:]))
        rendered = BASE32_PREFIX + b32_encode(cid.to_bytes())
    elif text[0] == BASE58BTC_PREFIX:
        cid = decode_cid_bytes(b58_decode(text[1:]))
        rendered = BASE58BTC_PREFIX + b58_encode(cid.to_bytes())
    else:
        raise InvalidCidError(f"unsupported multibase prefix {text[0]!r}", text)
    if rendered != text:
        raise InvalidCidError("non-canonical encoding", text)
    return cid
