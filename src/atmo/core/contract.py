"""The parse/render contract shared by every string-format type.

A subclass supplies two things:

* ``parse(text)`` -- classmethod validating *text* and returning a new
  instance (or raising the type's :class:`~atmo.core.errors.ParseError`);
* ``__str__`` -- the canonical rendering of a valid value.

:class:`StringFormat` derives the rest from those two: structured
``deserialize`` / ``serialize`` helpers that go through text, value
semantics (equality, hashing, repr), immutability, and the pydantic core
schema that lets the type appear as a field of any pydantic model.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from atmo.core.errors import ParseError

T = TypeVar("T", bound="StringFormat")


def require_str(text: object) -> str:
    """Guard the text boundary: grammars only ever see ``str``."""
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return text


class StringFormat:
    """Base class for immutable values that live on the wire as a single string."""

    __slots__ = ()

    error: ClassVar[type[ParseError]] = ParseError

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        name = type(self).__name__
        raise TypeError(f"{name} cannot be constructed directly; use {name}.parse()")

    @classmethod
    def _new(cls: type[T], **fields: Any) -> T:
        """Build an instance from already-validated fields (parsers only)."""
        obj = object.__new__(cls)
        for name, value in fields.items():
            object.__setattr__(obj, name, value)
        return obj

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -- the two operations subclasses provide ---------------------------------

    @classmethod
    def parse(cls: type[T], text: str) -> T:
        raise NotImplementedError

    def __str__(self) -> str:
        raise NotImplementedError

    # -- derived operations ------------------------------------------------------

    @classmethod
    def deserialize(cls: type[T], value: object) -> T:
        """Decode a structured value: it must be a string, which is then parsed.

        Raises:
            ParseError: The type's error if *value* is not a string or does
                not parse.
        """
        if not isinstance(value, str):
            raise cls.error(f"expected a string, got {type(value).__name__}")
        return cls.parse(value)

    def serialize(self) -> str:
        """Encode as a structured value: the canonical string."""
        return str(self)

    def _key(self) -> Any:
        return str(self)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"

    def __copy__(self: T) -> T:
        return self

    def __deepcopy__(self: T, memo: dict) -> T:
        return self

    def __reduce__(self) -> tuple:
        return (type(self).parse, (str(self),))

    @classmethod
    def _wire_schema(cls) -> core_schema.CoreSchema:
        """Shape of the structured value handed to :meth:`deserialize`."""
        return core_schema.str_schema()

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_wire = core_schema.no_info_after_validator_function(
            cls.deserialize, cls._wire_schema()
        )
        return core_schema.json_or_python_schema(
            json_schema=from_wire,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_wire]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.serialize
            ),
        )
