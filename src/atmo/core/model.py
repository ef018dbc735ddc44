"""Base class for records built from data-model types."""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)

from atmo.core.nullable import Nullable


class AtmoModel(BaseModel):
    """Immutable pydantic model that drops absent :class:`Nullable` fields on dump.

    Declare tri-state fields with an absent default::

        class Profile(AtmoModel):
            handle: Handle
            pinned: Nullable[AtUri] = Nullable.absent()
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @model_serializer(mode="wrap")
    def _omit_absent(
        self, handler: SerializerFunctionWrapHandler, info: SerializationInfo
    ) -> Any:
        data = handler(self)
        if not isinstance(data, dict):
            return data
        for name, field in type(self).model_fields.items():
            value = getattr(self, name, None)
            if isinstance(value, Nullable) and value.is_absent:
                for key in (name, field.alias, field.serialization_alias):
                    if key is not None:
                        data.pop(key, None)
        return data

    @classmethod
    def deserialize(cls, value: object) -> AtmoModel:
        """Validate a structured (JSON-compatible) value."""
        return cls.model_validate(value)

    def serialize(self) -> dict[str, Any]:
        """Dump to JSON-compatible data using wire (alias) names."""
        return self.model_dump(mode="json", by_alias=True)
