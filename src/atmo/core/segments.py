"""Byte-segment primitives shared by every grammar.

Grammars encode their (ASCII) input once and validate slices of it with
the predicates below.  Nothing here allocates beyond slicing, and every
scan runs left to right without backtracking.
"""

from __future__ import annotations

from typing import Callable, Optional

from atmo.core.constants import SEGMENT_MAX_LEN, SEGMENT_MIN_LEN

_HYPHEN = ord("-")


def encode_ascii(text: str) -> Optional[bytes]:
    """Return *text* as ASCII bytes, or ``None`` if it holds any non-ASCII character."""
    if not text.isascii():
        return None
    return text.encode("ascii")


def split_once(
    data: bytes, pred: Callable[[int], bool]
) -> Optional[tuple[bytes, bytes]]:
    """Split *data* around the first byte matching *pred*.

    Returns ``(before, after)`` with the matching byte dropped, or ``None``
    when no byte matches.
    """
    for index, byte in enumerate(data):
        if pred(byte):
            return data[:index], data[index + 1 :]
    return None


def split_all(data: bytes, sep: int) -> list[bytes]:
    """Split *data* on every occurrence of the byte *sep*.

    Empty segments are kept, so ``b"a..b"`` yields three segments.
    """
    segments = []
    rest = data
    while True:
        parts = split_once(rest, lambda b: b == sep)
        if parts is None:
            segments.append(rest)
            return segments
        head, rest = parts
        segments.append(head)


def _has_valid_shape(segment: bytes) -> bool:
    return (
        SEGMENT_MIN_LEN <= len(segment) <= SEGMENT_MAX_LEN
        and segment[0] != _HYPHEN
        and segment[-1] != _HYPHEN
    )


def _is_segment_byte(byte: int) -> bool:
    return (
        0x30 <= byte <= 0x39  # 0-9
        or 0x41 <= byte <= 0x5A  # A-Z
        or 0x61 <= byte <= 0x7A  # a-z
        or byte == _HYPHEN
    )


def _is_alpha_byte(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def is_valid_domain_segment(segment: bytes) -> bool:
    """A DNS label: 1-63 bytes of ASCII alphanumerics or ``-``, not starting or ending with ``-``."""
    return _has_valid_shape(segment) and all(_is_segment_byte(b) for b in segment)


def is_valid_tld(segment: bytes) -> bool:
    """A domain segment that additionally starts with an ASCII letter."""
    return is_valid_domain_segment(segment) and _is_alpha_byte(segment[0])


def is_valid_nsid_name(segment: bytes) -> bool:
    """The final NSID segment: 1-63 ASCII letters."""
    return _has_valid_shape(segment) and all(_is_alpha_byte(b) for b in segment)
