"""Opaque structured values (the Lexicon ``unknown`` type)."""

from __future__ import annotations

import copy
import json
import math
from typing import Any, Optional

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from atmo.core.contract import require_str
from atmo.core.errors import InvalidUnknownError

TYPE_KEY = "$type"

# Containers may nest this deep; deeper input is rejected before recursing
MAX_DEPTH = 128


def _check(value: Any, path: str, depth: int = 0) -> None:
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidUnknownError(f"non-finite number at {path}")
        return
    if isinstance(value, (list, dict)) and depth >= MAX_DEPTH:
        raise InvalidUnknownError(f"nesting deeper than {MAX_DEPTH} at {path}")
    if isinstance(value, list):
        for index, item in enumerate(value):
            _check(item, f"{path}[{index}]", depth + 1)
        return
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise InvalidUnknownError(f"non-string key {key!r} at {path}")
            _check(item, f"{path}.{key}", depth + 1)
        return
    raise InvalidUnknownError(f"unsupported {type(value).__name__} at {path}")


class Unknown:
    """Any structurally valid data, carried through without interpretation.

    The value is copied on the way in and on the way out, so an
    :class:`Unknown` cannot be changed after construction.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any) -> None:
        _check(value, "$")
        object.__setattr__(self, "_value", copy.deepcopy(value))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Unknown is immutable")

    @classmethod
    def deserialize(cls, value: object) -> Unknown:
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> Unknown:
        """Parse JSON text."""
        require_str(text)
        try:
            value = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidUnknownError(f"malformed JSON: {exc.msg}", text) from exc
        except RecursionError as exc:
            raise InvalidUnknownError(f"nesting deeper than {MAX_DEPTH}", text) from exc
        return cls(value)

    def serialize(self) -> Any:
        return copy.deepcopy(self._value)

    @property
    def value(self) -> Any:
        return copy.deepcopy(self._value)

    @property
    def type(self) -> Optional[str]:
        """The ``$type`` discriminator, when the value is an object carrying one."""
        if isinstance(self._value, dict):
            kind = self._value.get(TYPE_KEY)
            if isinstance(kind, str):
                return kind
        return None

    def __str__(self) -> str:
        return json.dumps(self._value, separators=(",", ":"), ensure_ascii=False)

    def __repr__(self) -> str:
        return f"Unknown({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unknown):
            return NotImplemented
        return self._value == other._value

    __hash__ = None  # type: ignore[assignment]

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        from_wire = core_schema.no_info_after_validator_function(
            cls.deserialize, core_schema.any_schema()
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
