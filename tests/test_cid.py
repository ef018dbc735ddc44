"""Tests for atmo.core.cid and atmo.core.multiformats modules."""

from __future__ import annotations

import hashlib

import pytest

from atmo.core.cid import CidLink, CidString
from atmo.core.errors import InvalidCidError
from atmo.core.multiformats import (
    DAG_CBOR,
    DAG_PB,
    RAW,
    SHA2_256,
    b32_decode,
    b32_encode,
    b58_decode,
    b58_encode,
    decode_varint,
    encode_varint,
)
from atmo.testing import check_invalid, check_valid

CIDV0 = "QmY7Yh4UquoXHLPFo2XbhXkhBvFoPwmQUSa92pxnxjQuPU"


class TestCidString:
    def test_valid(self, sample_cid_str, sample_raw_cid_str):
        check_valid(CidString, [sample_cid_str, sample_raw_cid_str, CIDV0])

    def test_components(self, sample_cid):
        assert sample_cid.version == 1
        assert sample_cid.codec == DAG_CBOR
        assert sample_cid.multihash_code == SHA2_256
        assert len(sample_cid.digest) == 32

    def test_cidv0(self):
        cid = CidString.parse(CIDV0)
        assert cid.version == 0
        assert cid.codec == DAG_PB
        assert cid.to_bytes()[:2] == b"\x12\x20"

    def test_raw_codec(self, sample_raw_cid_str):
        assert CidString.parse(sample_raw_cid_str).codec == RAW

    def test_for_data(self):
        cid = CidString.for_data(b"hello world")
        assert str(cid).startswith("bafkrei")
        assert cid.digest == hashlib.sha256(b"hello world").digest()

    def test_for_data_dag_cbor(self):
        assert str(CidString.for_data(b"{}", codec=DAG_CBOR)).startswith("bafyrei")

    def test_base58_multibase(self, sample_cid):
        text = "z" + b58_encode(sample_cid.to_bytes())
        cid = CidString.parse(text)
        assert str(cid) == text
        assert cid.digest == sample_cid.digest

    def test_invalid(self, sample_cid_str):
        check_invalid(
            CidString,
            [
                "",
                "bafy",
                "not-a-cid",
                sample_cid_str.upper(),
                "B" + sample_cid_str[1:],
                sample_cid_str + "=",
                sample_cid_str[:-1],
                sample_cid_str + "a",
                "f" + sample_cid_str[1:],
                CIDV0[:-1],
                "Qm" + "0" * 44,
                sample_cid_str[:-1] + "é",
            ],
        )

    def test_non_canonical_trailing_bits(self, sample_cid_str):
        # The final character carries two padding bits that must be zero
        with pytest.raises(InvalidCidError):
            CidString.parse(sample_cid_str[:-1] + "b")

    def test_too_long(self):
        with pytest.raises(InvalidCidError, match="longer than 256"):
            CidString.parse("z" + "2" * 240_000)

    def test_sha2_512_digest_fits(self):
        data = encode_varint(1) + encode_varint(DAG_CBOR) + b"\x13\x40" + b"\x01" * 64
        for text in ("b" + b32_encode(data), "z" + b58_encode(data)):
            assert CidString.parse(text).multihash_code == 0x13

    def test_digest_length_mismatch(self):
        data = encode_varint(1) + encode_varint(DAG_CBOR) + b"\x12\x20" + b"\0" * 31
        with pytest.raises(InvalidCidError, match="digest"):
            CidString.parse("b" + b32_encode(data))

    def test_unsupported_version(self):
        data = encode_varint(2) + encode_varint(DAG_CBOR) + b"\x12\x20" + b"\0" * 32
        with pytest.raises(InvalidCidError, match="version"):
            CidString.parse("b" + b32_encode(data))

    def test_equality_and_hash(self, sample_cid_str):
        assert CidString.parse(sample_cid_str) == CidString.parse(sample_cid_str)
        assert len({CidString.parse(sample_cid_str), CidString.parse(sample_cid_str)}) == 1


class TestCidLink:
    def test_parse_renders_bare_cid(self, sample_cid_str):
        assert str(CidLink.parse(sample_cid_str)) == sample_cid_str

    def test_serialize(self, sample_cid_str):
        assert CidLink.parse(sample_cid_str).serialize() == {"$link": sample_cid_str}

    def test_deserialize(self, sample_cid, sample_cid_str):
        link = CidLink.deserialize({"$link": sample_cid_str})
        assert link.cid == sample_cid

    @pytest.mark.parametrize(
        "value",
        [
            "bafyreidfayvfuwqa7qlnopdjiqrxzs6blmoeu4rujcjtnci5beludirz2a",
            {},
            {"$link": 5},
            {"$link": "not-a-cid"},
            {"$link": "bafyreidfayvfuwqa7qlnopdjiqrxzs6blmoeu4rujcjtnci5beludirz2a", "x": 1},
        ],
    )
    def test_deserialize_rejects(self, value):
        with pytest.raises(InvalidCidError):
            CidLink.deserialize(value)

    def test_of(self, sample_cid):
        assert CidLink.of(sample_cid).cid is sample_cid


class TestVarint:
    @pytest.mark.parametrize("value", [0, 1, 127, 128, 300, 2**32, 2**63 - 1])
    def test_round_trip(self, value):
        encoded = encode_varint(value)
        assert decode_varint(encoded) == (value, len(encoded))

    def test_known_encoding(self):
        assert encode_varint(300) == b"\xac\x02"

    def test_non_minimal(self):
        with pytest.raises(InvalidCidError, match="non-minimal"):
            decode_varint(b"\x81\x00")

    def test_truncated(self):
        with pytest.raises(InvalidCidError, match="truncated"):
            decode_varint(b"\x81")


class TestBaseEncodings:
    def test_b32_known_vector(self):
        assert b32_encode(b"hello") == "nbswy3dp"
        assert b32_decode("nbswy3dp") == b"hello"

    def test_b32_rejects_uppercase(self):
        with pytest.raises(InvalidCidError):
            b32_decode("NBSWY3DP")

    def test_b58_leading_zeros(self):
        assert b58_encode(b"\0\0\x01") == "112"
        assert b58_decode("112") == b"\0\0\x01"

    def test_b58_rejects_ambiguous_characters(self):
        with pytest.raises(InvalidCidError):
            b58_decode("0OIl")
