"""Conformance runners for grammar test suites.

Each runner feeds every case to ``cls.parse`` and fails with an
``AssertionError`` naming the type and the offending input::

    check_valid(Handle, ["alice.example.com", "a.c"])
    check_invalid(Handle, ["-alice.example.com", "com"])
"""

from __future__ import annotations

from typing import Any, Iterable

from atmo.core.errors import ParseError


def check_valid(cls: Any, cases: Iterable[str]) -> None:
    """Every case must parse, and its rendering must parse back to an equal value."""
    typename = cls.__name__
    for case in cases:
        try:
            value = cls.parse(case)
        except ParseError as exc:
            raise AssertionError(
                f"valid {typename} rejected: {exc.reason} (input: {case!r})"
            ) from exc
        rendered = str(value)
        try:
            reparsed = cls.parse(rendered)
        except ParseError as exc:
            raise AssertionError(
                f"{typename} rendering {rendered!r} rejected (input: {case!r})"
            ) from exc
        if reparsed != value:
            raise AssertionError(
                f"{typename} round trip changed value (input: {case!r}, rendered: {rendered!r})"
            )


def check_invalid(cls: Any, cases: Iterable[str]) -> None:
    """Every case must be rejected with the type's own error."""
    typename = cls.__name__
    for case in cases:
        try:
            cls.parse(case)
        except cls.error:
            continue
        except ParseError as exc:
            raise AssertionError(
                f"invalid {typename} rejected with foreign {type(exc).__name__} (input: {case!r})"
            ) from exc
        raise AssertionError(f"invalid {typename} accepted: {case!r}")
