"""atmo core -- AT Protocol data-model types.

Public API re-exports for ``atmo.core``.
"""

from atmo.core.errors import (
    ErrorKind,
    AtmoError,
    ParseError,
    InvalidHandleError,
    InvalidDidError,
    InvalidNsidError,
    InvalidAtIdentifierError,
    InvalidAtUriError,
    InvalidTidError,
    InvalidRecordKeyError,
    InvalidCidError,
    InvalidDateTimeError,
    InvalidBytesError,
    InvalidBlobError,
    InvalidUnknownError,
)

from atmo.core.segments import (
    split_once,
    split_all,
    is_valid_domain_segment,
    is_valid_tld,
    is_valid_nsid_name,
)

from atmo.core.contract import StringFormat
from atmo.core.handle import Handle
from atmo.core.did import Did
from atmo.core.nsid import Nsid
from atmo.core.at_identifier import AtIdentifier, IdentifierKind
from atmo.core.at_uri import AtUri
from atmo.core.tid import Tid
from atmo.core.rkey import RecordKey
from atmo.core.cid import CidLink, CidString
from atmo.core.datetimes import DateTime
from atmo.core.binary import Bytes
from atmo.core.blob import Blob
from atmo.core.unknown import Unknown
from atmo.core.nullable import Nullable, NullableState
from atmo.core.model import AtmoModel

__all__ = [
    # Errors
    "ErrorKind",
    "AtmoError",
    "ParseError",
    "InvalidHandleError",
    "InvalidDidError",
    "InvalidNsidError",
    "InvalidAtIdentifierError",
    "InvalidAtUriError",
    "InvalidTidError",
    "InvalidRecordKeyError",
    "InvalidCidError",
    "InvalidDateTimeError",
    "InvalidBytesError",
    "InvalidBlobError",
    "InvalidUnknownError",
    # Segments
    "split_once",
    "split_all",
    "is_valid_domain_segment",
    "is_valid_tld",
    "is_valid_nsid_name",
    # Types
    "StringFormat",
    "Handle",
    "Did",
    "Nsid",
    "AtIdentifier",
    "IdentifierKind",
    "AtUri",
    "Tid",
    "RecordKey",
    "CidLink",
    "CidString",
    "DateTime",
    "Bytes",
    "Blob",
    "Unknown",
    "Nullable",
    "NullableState",
    "AtmoModel",
]
