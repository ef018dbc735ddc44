"""Tests for atmo.core.blob module."""

from __future__ import annotations

import pytest

from atmo.core.blob import Blob
from atmo.core.cid import CidLink
from atmo.core.errors import InvalidBlobError


@pytest.fixture()
def blob_wire(sample_raw_cid_str) -> dict:
    return {
        "$type": "blob",
        "ref": {"$link": sample_raw_cid_str},
        "mimeType": "image/png",
        "size": 12345,
    }


class TestDeserialize:
    def test_valid(self, blob_wire, sample_raw_cid_str):
        blob = Blob.deserialize(blob_wire)
        assert blob.ref == CidLink.parse(sample_raw_cid_str)
        assert blob.mime_type == "image/png"
        assert blob.size == 12345

    def test_round_trip(self, blob_wire):
        assert Blob.deserialize(blob_wire).serialize() == blob_wire

    def test_zero_size(self, blob_wire):
        blob_wire["size"] = 0
        assert Blob.deserialize(blob_wire).size == 0

    def test_type_defaults(self, blob_wire):
        del blob_wire["$type"]
        assert Blob.deserialize(blob_wire).serialize()["$type"] == "blob"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("size", -1),
            ("size", "12"),
            ("size", 1.5),
            ("mimeType", ""),
            ("mimeType", "png"),
            ("mimeType", "image/"),
            ("mimeType", "image /png"),
            ("mimeType", 5),
            ("$type", "image"),
            ("ref", {"$link": "not-a-cid"}),
            ("ref", "bafkreibjfgx2gprinfvicegelk5kosd6y2frmqpqzwqkg7usac74l3t2v4"),
        ],
    )
    def test_invalid_fields(self, blob_wire, field, value):
        blob_wire[field] = value
        with pytest.raises(InvalidBlobError):
            Blob.deserialize(blob_wire)

    @pytest.mark.parametrize("field", ["ref", "mimeType", "size"])
    def test_missing_fields(self, blob_wire, field):
        del blob_wire[field]
        with pytest.raises(InvalidBlobError, match=field):
            Blob.deserialize(blob_wire)

    def test_extra_field(self, blob_wire):
        blob_wire["extra"] = True
        with pytest.raises(InvalidBlobError):
            Blob.deserialize(blob_wire)

    def test_not_an_object(self):
        with pytest.raises(InvalidBlobError, match="expected an object"):
            Blob.deserialize("bafkrei")


class TestConstruction:
    def test_python_names(self, sample_raw_cid_str):
        blob = Blob(ref=CidLink.parse(sample_raw_cid_str), mime_type="text/plain", size=3)
        assert blob.serialize()["mimeType"] == "text/plain"

    def test_frozen(self, blob_wire):
        blob = Blob.deserialize(blob_wire)
        with pytest.raises(Exception):
            blob.size = 1  # type: ignore[misc]

    def test_json_dump(self, blob_wire):
        blob = Blob.deserialize(blob_wire)
        assert Blob.model_validate_json(blob.model_dump_json()) == blob
