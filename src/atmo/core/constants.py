"""Length bounds and alphabets shared by the data-model grammars."""

from __future__ import annotations

# Domain / NSID segment length (inclusive)
SEGMENT_MIN_LEN = 1
SEGMENT_MAX_LEN = 63

# Handles
HANDLE_MAX_LEN = 253

# DIDs
DID_PREFIX = "did:"
DID_MAX_LEN = 2048
DID_PLC_ID_LEN = 24

# NSIDs
NSID_MIN_SEGMENTS = 3
NSID_AUTHORITY_MAX_LEN = 253
NSID_MAX_LEN = 317

# AT-URIs
AT_URI_PREFIX = "at://"
AT_URI_MAX_LEN = 8192

# Record keys
RKEY_MIN_LEN = 1
RKEY_MAX_LEN = 512
RKEY_RESERVED = frozenset({".", ".."})

# CIDs: text form, generous for a 64-byte digest in any supported multibase
CID_MAX_LEN = 256

# TIDs: 53-bit microsecond timestamp + 10-bit clock id, base32-sortable
TID_LEN = 13
TID_ALPHABET = "234567abcdefghijklmnopqrstuvwxyz"
TID_FIRST_CHARS = "234567abcdefghij"
TID_CLOCK_ID_BITS = 10
TID_MAX_CLOCK_ID = (1 << TID_CLOCK_ID_BITS) - 1
TID_MAX_TIMESTAMP = (1 << 53) - 1

# Handle TLDs the protocol refuses for registration
DISALLOWED_TLDS = frozenset(
    ["alt", "arpa", "example", "internal", "invalid", "local", "localhost", "onion"]
)
