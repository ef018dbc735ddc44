"""Blob references.

On the wire a blob is::

    {"$type": "blob", "ref": {"$link": "<cid>"}, "mimeType": "image/png", "size": 1234}

Only the reference is validated; the content itself is never fetched.
"""

from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_serializer

from atmo.core.cid import CidLink
from atmo.core.errors import InvalidBlobError

BLOB_TYPE = "blob"

# RFC 9110 token characters on both sides of the slash
_MIME_RE = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+/[!#$%&'*+.^_`|~0-9A-Za-z-]+$")


class Blob(BaseModel):
    """A reference to stored binary content."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    type: Literal["blob"] = Field(default=BLOB_TYPE, alias="$type")
    ref: CidLink
    mime_type: str = Field(alias="mimeType", strict=True)
    size: int = Field(ge=0, strict=True)

    @field_validator("mime_type")
    @classmethod
    def _check_mime_type(cls, value: str) -> str:
        if not _MIME_RE.match(value):
            raise ValueError(f"invalid MIME type {value!r}")
        return value

    @model_serializer(mode="plain")
    def _to_wire(self) -> dict[str, Any]:
        return {
            "$type": BLOB_TYPE,
            "ref": self.ref.serialize(),
            "mimeType": self.mime_type,
            "size": self.size,
        }

    @classmethod
    def deserialize(cls, value: object) -> Blob:
        """Validate a structured blob.

        Raises:
            InvalidBlobError: If any field is missing or invalid.
        """
        if not isinstance(value, dict):
            raise InvalidBlobError(f"expected an object, got {type(value).__name__}")
        try:
            return cls.model_validate(value)
        except ValidationError as exc:
            first = exc.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "blob"
            raise InvalidBlobError(f"{location}: {first['msg']}") from exc

    def serialize(self) -> dict[str, Any]:
        return self.model_dump()
