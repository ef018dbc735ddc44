"""Tests for atmo.core.did module."""

from __future__ import annotations

import pytest

from atmo.core.did import Did
from atmo.core.errors import InvalidDidError
from atmo.testing import check_invalid, check_valid

VALID = [
    "did:method:val",
    "did:method:VAL",
    "did:method:val123",
    "did:method:123",
    "did:method:val-two",
    "did:method:val_two",
    "did:method:val.two",
    "did:method:val:two",
    "did:method:val%BB",
    "did:m:v",
    "did:method::::val",
    "did:method:-",
    "did:method:-:_:.:%ab",
    "did:method:.",
    "did:method:_",
    "did:method::.",
    "did:onion:2gzyxa5ihm7nsggfxnu52rck2vv4rvmdlkiu3zzui5du4xyclen53wid",
    "did:example:123456789abcdefghi",
    "did:key:zQ3shZc2QzApp2oymGvQbzP8eKheVshBHbU4ZYjeXqwSKEn6N",
    "did:ethr:0xb9c5714089478a327f09197987f16f9e5d936e8a",
    "did:plc:7iza6de2dwap2sbkpav7c6c6",
    "did:web:example.com",
    "did:web:localhost%3A1234",
    "did:web:sub.example.com%3A8080",
]

INVALID = [
    "",
    "did",
    "didmethod:val",
    "did:method:",
    "did:method:val:",
    "did:method:val%",
    "did:method:val%a",
    "did:method:%zz",
    "DID:method:val",
    "did:METHOD:val",
    "did::val",
    "did:method:val/two",
    "did:method:val?two",
    "did:method:val#two",
    "did:method:val two",
    "did:method:vál",
    "did:plc:short",
    "did:plc:7IZA6DE2DWAP2SBKPAV7C6C6",
    "did:plc:7iza6de2dwap2sbkpav7c6c61",
    "did:plc:0iza6de2dwap2sbkpav7c6c6",
    "did:web:example.com:path",
    "did:web:-bad.com",
    "did:web:localhost%3Aabc",
    "did:web:com",
]


class TestValidDids:
    def test_conformance(self):
        check_valid(Did, VALID)

    def test_components(self):
        did = Did.parse("did:plc:7iza6de2dwap2sbkpav7c6c6")
        assert did.method == "plc"
        assert did.identifier == "7iza6de2dwap2sbkpav7c6c6"
        assert did.is_plc
        assert not did.is_web

    def test_identifier_with_colons(self):
        did = Did.parse("did:method::::val")
        assert did.method == "method"
        assert did.identifier == ":::val"

    def test_web(self):
        did = Did.parse("did:web:example.com")
        assert did.is_web
        assert did.identifier == "example.com"

    def test_method_digits(self):
        assert Did.parse("did:m2:val").method == "m2"

    def test_max_length(self):
        text = "did:method:" + "a" * (2048 - len("did:method:"))
        assert len(text) == 2048
        Did.parse(text)
        with pytest.raises(InvalidDidError, match="longer than"):
            Did.parse(text + "a")


class TestInvalidDids:
    def test_conformance(self):
        check_invalid(Did, INVALID)

    def test_missing_prefix(self):
        with pytest.raises(InvalidDidError, match="prefix"):
            Did.parse("method:val")

    def test_uppercase_method(self):
        with pytest.raises(InvalidDidError, match="lowercase"):
            Did.parse("did:METHOD:val")

    def test_plc_length(self):
        with pytest.raises(InvalidDidError, match="24 characters"):
            Did.parse("did:plc:abc")

    def test_error_includes_raw_input(self):
        with pytest.raises(InvalidDidError, match="bad-input"):
            Did.parse("bad-input")
