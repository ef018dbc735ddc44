"""Tests for atmo.core.segments module."""

from __future__ import annotations

import pytest

from atmo.core.segments import (
    encode_ascii,
    is_valid_domain_segment,
    is_valid_nsid_name,
    is_valid_tld,
    split_all,
    split_once,
)


class TestSplitOnce:
    def test_splits_on_first_match(self):
        assert split_once(b"a.b.c", lambda b: b == ord(".")) == (b"a", b"b.c")

    def test_no_match_returns_none(self):
        assert split_once(b"abc", lambda b: b == ord(".")) is None

    def test_empty_input(self):
        assert split_once(b"", lambda b: True) is None

    def test_match_at_edges(self):
        assert split_once(b".abc", lambda b: b == ord(".")) == (b"", b"abc")
        assert split_once(b"abc.", lambda b: b == ord(".")) == (b"abc", b"")


class TestSplitAll:
    def test_keeps_empty_segments(self):
        assert split_all(b"a..b", ord(".")) == [b"a", b"", b"b"]

    def test_single_segment(self):
        assert split_all(b"abc", ord(".")) == [b"abc"]

    def test_empty_input(self):
        assert split_all(b"", ord(".")) == [b""]


class TestEncodeAscii:
    def test_ascii(self):
        assert encode_ascii("abc") == b"abc"

    def test_non_ascii(self):
        assert encode_ascii("abç") is None


class TestDomainSegment:
    @pytest.mark.parametrize("seg", [b"a", b"A", b"0", b"a-b", b"xn--ls8h", b"a" * 63])
    def test_valid(self, seg):
        assert is_valid_domain_segment(seg)

    @pytest.mark.parametrize(
        "seg", [b"", b"-a", b"a-", b"-", b"a_b", b"a.b", b"a b", b"a" * 64]
    )
    def test_invalid(self, seg):
        assert not is_valid_domain_segment(seg)


class TestTld:
    def test_letter_start(self):
        assert is_valid_tld(b"c")
        assert is_valid_tld(b"com")
        assert is_valid_tld(b"c0m")

    def test_digit_start(self):
        assert not is_valid_tld(b"0")
        assert not is_valid_tld(b"1com")

    def test_inherits_domain_rules(self):
        assert not is_valid_tld(b"")
        assert not is_valid_tld(b"com-")
        assert not is_valid_tld(b"a" * 64)


class TestNsidName:
    def test_letters_only(self):
        assert is_valid_nsid_name(b"fooBar")
        assert is_valid_nsid_name(b"a" * 63)

    def test_rejects_digits_and_hyphens(self):
        assert not is_valid_nsid_name(b"foo1")
        assert not is_valid_nsid_name(b"foo-bar")
        assert not is_valid_nsid_name(b"-")

    def test_length_bounds(self):
        assert not is_valid_nsid_name(b"")
        assert not is_valid_nsid_name(b"a" * 64)
