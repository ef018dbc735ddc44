"""atmo -- AT Protocol data-model identifier types.

Top-level convenience re-exports::

    from atmo import Handle, Did, AtUri
    from atmo.core import InvalidHandleError  # full error taxonomy
"""

__version__ = "0.1.0"

from atmo.core import (
    AtIdentifier,
    AtmoError,
    AtmoModel,
    AtUri,
    Blob,
    Bytes,
    CidLink,
    CidString,
    DateTime,
    Did,
    Handle,
    Nsid,
    Nullable,
    ParseError,
    RecordKey,
    Tid,
    Unknown,
)

__all__ = [
    "__version__",
    "AtIdentifier",
    "AtmoError",
    "AtmoModel",
    "AtUri",
    "Blob",
    "Bytes",
    "CidLink",
    "CidString",
    "DateTime",
    "Did",
    "Handle",
    "Nsid",
    "Nullable",
    "ParseError",
    "RecordKey",
    "Tid",
    "Unknown",
]
