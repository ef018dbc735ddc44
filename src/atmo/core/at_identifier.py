"""The ``at-identifier`` union: a DID or a handle."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Optional, Union

from atmo.core.contract import StringFormat, require_str
from atmo.core.did import Did
from atmo.core.errors import InvalidAtIdentifierError, InvalidDidError, InvalidHandleError
from atmo.core.handle import Handle

logger = logging.getLogger(__name__)


class IdentifierKind(str, Enum):
    DID = "did"
    HANDLE = "handle"


class AtIdentifier(StringFormat):
    """Exactly one of a :class:`Did` or a :class:`Handle`.

    Parsing tries DID first, so anything that is a valid DID is never
    classified as a handle.  Renders as the held variant, untagged.
    """

    __slots__ = ("_value",)

    error = InvalidAtIdentifierError

    @classmethod
    def parse(cls, text: str) -> AtIdentifier:
        """Parse a DID or, failing that, a handle.

        Raises:
            InvalidAtIdentifierError: If *text* is neither.  Both underlying
                errors are available in ``causes``.
        """
        require_str(text)
        try:
            return cls._new(_value=Did.parse(text))
        except InvalidDidError as did_error:
            logger.debug("%r is not a DID (%s), trying handle", text, did_error.reason)
            try:
                return cls._new(_value=Handle.parse(text))
            except InvalidHandleError as handle_error:
                raise InvalidAtIdentifierError(
                    "neither a DID nor a handle",
                    text,
                    causes=(did_error, handle_error),
                ) from did_error

    @classmethod
    def of(cls, value: Union[Did, Handle]) -> AtIdentifier:
        """Wrap an already-parsed DID or handle."""
        if not isinstance(value, (Did, Handle)):
            raise TypeError(f"expected Did or Handle, got {type(value).__name__}")
        return cls._new(_value=value)

    def __str__(self) -> str:
        return str(self._value)

    def _key(self) -> tuple:
        return self.kind, self._value

    @property
    def value(self) -> Union[Did, Handle]:
        return self._value

    @property
    def kind(self) -> IdentifierKind:
        if isinstance(self._value, Did):
            return IdentifierKind.DID
        return IdentifierKind.HANDLE

    @property
    def did(self) -> Optional[Did]:
        return self._value if isinstance(self._value, Did) else None

    @property
    def handle(self) -> Optional[Handle]:
        return self._value if isinstance(self._value, Handle) else None
