"""Shared test fixtures for atmo data-model tests."""

from __future__ import annotations

import pytest

from atmo.core import CidString, Did, Handle


@pytest.fixture()
def sample_cid_str() -> str:
    """A dag-cbor, sha2-256 CIDv1 (base32)."""
    return "bafyreidfayvfuwqa7qlnopdjiqrxzs6blmoeu4rujcjtnci5beludirz2a"


@pytest.fixture()
def sample_raw_cid_str() -> str:
    """A raw-codec, sha2-256 CIDv1 (base32), as used by blobs."""
    return "bafkreibjfgx2gprinfvicegelk5kosd6y2frmqpqzwqkg7usac74l3t2v4"


@pytest.fixture()
def sample_cid(sample_cid_str: str) -> CidString:
    return CidString.parse(sample_cid_str)


@pytest.fixture()
def sample_did() -> Did:
    return Did.parse("did:plc:7iza6de2dwap2sbkpav7c6c6")


@pytest.fixture()
def sample_handle() -> Handle:
    return Handle.parse("alice.example.com")
