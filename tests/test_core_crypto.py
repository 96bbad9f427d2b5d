"""
Unit tests for core crypto helpers.

Tests:
- SHA-256 against known vectors
- Digest-as-integer conversion
- Leading zero bit counting
"""

import hashlib

from powledger.core_crypto.digest import (
    DIGEST_SIZE, sha256, sha256_hex, digest_to_int, leading_zero_bits,
)


class TestSHA256:
    """Tests for SHA-256 helpers."""

    def test_empty_string(self):
        """SHA-256 of empty string."""
        expected = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        assert sha256_hex(b"") == expected

    def test_abc(self):
        """SHA-256 of 'abc'."""
        expected = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        assert sha256(b"abc").hex() == expected

    def test_digest_size(self):
        assert len(sha256(b"anything")) == DIGEST_SIZE == 32

    def test_matches_hashlib(self):
        data = b"The quick brown fox jumps over the lazy dog"
        assert sha256(data) == hashlib.sha256(data).digest()


class TestDigestInteger:
    """Tests for digest-as-integer helpers."""

    def test_big_endian(self):
        assert digest_to_int(b'\x01\x00') == 256
        assert digest_to_int(b'\x00' * 31 + b'\x05') == 5

    def test_max_value(self):
        assert digest_to_int(b'\xff' * 32) == 2 ** 256 - 1

    def test_leading_zero_bits(self):
        assert leading_zero_bits(b'\x00' * 32) == 256
        assert leading_zero_bits(b'\x00\x80' + b'\x00' * 30) == 8
        assert leading_zero_bits(b'\x0f' + b'\xff' * 31) == 4
        assert leading_zero_bits(b'\xff' * 32) == 0
