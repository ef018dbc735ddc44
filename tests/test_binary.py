"""Tests for atmo.core.binary module."""

from __future__ import annotations

import pytest

from atmo.core.binary import Bytes, b64_decode, b64_encode
from atmo.core.errors import InvalidBytesError
from atmo.testing import check_invalid, check_valid


class TestBase64:
    def test_encode_no_padding(self):
        assert b64_encode(b"a") == "YQ"

    def test_decode_without_padding(self):
        assert b64_decode("YQ") == b"a"

    def test_standard_alphabet(self):
        assert b64_encode(b"\xfb\xff") == "+/8"


class TestBytes:
    def test_valid(self):
        check_valid(Bytes, ["", "YQ", "aGVsbG8", "+/8", "AAECAwQ"])

    def test_invalid(self):
        check_invalid(Bytes, ["YQ==", "Y", "-_8", "aGVs bG8", "YR"])

    def test_value(self):
        value = Bytes.parse("aGVsbG8")
        assert bytes(value) == b"hello"
        assert len(value) == 5

    def test_of(self):
        assert str(Bytes.of(b"hello")) == "aGVsbG8"

    def test_structured_round_trip(self):
        value = Bytes.of(b"\x00\x01\x02")
        assert value.serialize() == {"$bytes": "AAEC"}
        assert Bytes.deserialize(value.serialize()) == value

    @pytest.mark.parametrize("value", ["AAEC", {}, {"$bytes": 1}, {"$bytes": "AAEC", "x": "y"}])
    def test_deserialize_rejects(self, value):
        with pytest.raises(InvalidBytesError):
            Bytes.deserialize(value)
