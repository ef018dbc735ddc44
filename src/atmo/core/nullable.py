"""Tri-state optional fields: absent, explicitly null, or present."""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

T = TypeVar("T")
U = TypeVar("U")


class NullableState(str, Enum):
    ABSENT = "absent"
    NULL = "null"
    PRESENT = "present"


class Nullable(Generic[T]):
    """A field value that distinguishes "omitted" from ``null``.

    Build one with :meth:`absent`, :meth:`null` or :meth:`present`.  As a
    pydantic field type, ``null`` validates to NULL and anything else is
    validated as ``T`` and wrapped as PRESENT.  Models derived from
    :class:`~atmo.core.model.AtmoModel` omit ABSENT fields when dumped.
    """

    __slots__ = ("_state", "_value")

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        raise TypeError("use Nullable.absent(), Nullable.null() or Nullable.present()")

    @classmethod
    def _new(cls, state: NullableState, value: Any = None) -> Nullable[Any]:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_state", state)
        object.__setattr__(obj, "_value", value)
        return obj

    @classmethod
    def absent(cls) -> Nullable[Any]:
        return cls._new(NullableState.ABSENT)

    @classmethod
    def null(cls) -> Nullable[Any]:
        return cls._new(NullableState.NULL)

    @classmethod
    def present(cls, value: T) -> Nullable[T]:
        return cls._new(NullableState.PRESENT, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Nullable is immutable")

    @property
    def state(self) -> NullableState:
        return self._state

    @property
    def is_absent(self) -> bool:
        return self._state is NullableState.ABSENT

    @property
    def is_null(self) -> bool:
        return self._state is NullableState.NULL

    @property
    def is_present(self) -> bool:
        return self._state is NullableState.PRESENT

    @property
    def value(self) -> T:
        """The held value.

        Raises:
            ValueError: If the field is absent or null.
        """
        if self._state is not NullableState.PRESENT:
            raise ValueError(f"Nullable is {self._state.value}")
        return self._value

    def get(self, default: Any = None) -> Any:
        """The held value, or *default* when absent or null."""
        return self._value if self._state is NullableState.PRESENT else default

    def map(self, func: Callable[[T], U]) -> Nullable[U]:
        if self._state is NullableState.PRESENT:
            return Nullable.present(func(self._value))
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Nullable):
            return NotImplemented
        return self._state is other._state and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._state, self._value))

    def __repr__(self) -> str:
        if self._state is NullableState.PRESENT:
            return f"Nullable.present({self._value!r})"
        return f"Nullable.{self._state.value}()"

    def __copy__(self) -> Nullable[T]:
        return self

    def __deepcopy__(self, memo: dict) -> Nullable[T]:
        return self

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        args = get_args(source_type)
        inner = handler.generate_schema(args[0] if args else Any)
        null = core_schema.no_info_after_validator_function(
            lambda _: cls.null(), core_schema.none_schema()
        )
        present = core_schema.no_info_after_validator_function(cls.present, inner)
        return core_schema.json_or_python_schema(
            json_schema=core_schema.union_schema([null, present], mode="left_to_right"),
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), null, present],
                mode="left_to_right",
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.get(),
                return_schema=core_schema.nullable_schema(inner),
            ),
        )
