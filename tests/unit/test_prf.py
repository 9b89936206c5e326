"""
Pseudo-random number mapping tests.

Validates R(s, t) mod p against the worked-example vector and checks input
validation and determinism with hypothesis.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import pace_mapping.prf as prf
from pace_mapping import InputError, get_curve, pseudo_random_function
from pace_mapping.prf import (
    C0_128,
    C0_256,
    C1_128,
    C1_256,
    CIPHER_3DES,
    CIPHER_AES,
    mapping_constants,
    normalize_cipher,
)

BRAINPOOL_P256R1 = get_curve("brainpoolP256r1")
P = BRAINPOOL_P256R1.p

NONCE_S = bytes.fromhex("2923BE84E16CD6AE529049F1F1BBE9EB")
NONCE_T = bytes.fromhex("5DD4CBFC96F5453B130D890A1CDBAE32")


# =============================================================================
# Test Vector Validation
# =============================================================================


class TestPRFVectors:
    """Test R(s, t) against known-answer vectors."""

    def test_worked_example(self, im_vectors: dict) -> None:
        """brainpoolP256r1 / AES-128 worked example."""
        vector = next(v for v in im_vectors["prf_vectors"] if v["name"] == "brainpoolp256r1_aes128")

        curve = get_curve(vector["curve"])
        s = bytes.fromhex(vector["s"])
        t = bytes.fromhex(vector["t"])
        expected = int(vector["result"], 16)

        assert pseudo_random_function(s, t, curve.p, vector["cipher"]) == expected

    def test_worked_example_literal(self) -> None:
        result = pseudo_random_function(NONCE_S, NONCE_T, P, "AES")
        assert result == 0xA2F8FF2DF50E52C6599F386ADCB595D229F6A167ADE2BE5F2C3296ADD5B7430E

    def test_error_vectors(self, im_vectors: dict) -> None:
        for vector in im_vectors["error_vectors"]:
            if vector["operation"] != "prf":
                continue
            curve = get_curve(vector["curve"])
            with pytest.raises(InputError):
                pseudo_random_function(
                    bytes.fromhex(vector["s"]),
                    bytes.fromhex(vector["t"]),
                    curve.p,
                    vector["cipher"],
                )


# =============================================================================
# Construction details
# =============================================================================


class TestPRFConstruction:
    """Tests for the counter construction itself."""

    def test_constants_by_nonce_length(self) -> None:
        assert mapping_constants(128) == (C0_128, C1_128)
        assert mapping_constants(192) == (C0_256, C1_256)
        assert mapping_constants(256) == (C0_256, C1_256)
        assert len(C0_128) == len(C1_128) == 16
        assert len(C0_256) == len(C1_256) == 32

    def test_output_blocks_cover_p_plus_64_bits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A 256-bit p needs 320 bits: three 128-bit x_i blocks."""
        calls: list[bytes] = []
        original = prf.encrypt

        def spy(cipher: str, key: bytes, data: bytes) -> bytes:
            calls.append(data)
            return original(cipher, key, data)

        monkeypatch.setattr(prf, "encrypt", spy)
        pseudo_random_function(NONCE_S, NONCE_T, P, "AES")

        assert calls.count(C1_128) == 3
        assert calls.count(C0_128) == 3
        assert calls[0] == NONCE_S

    def test_small_prime_still_draws_64_extra_bits(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[bytes] = []
        original = prf.encrypt

        def spy(cipher: str, key: bytes, data: bytes) -> bytes:
            calls.append(data)
            return original(cipher, key, data)

        monkeypatch.setattr(prf, "encrypt", spy)
        result = pseudo_random_function(NONCE_S, NONCE_T, 23, "AES")

        assert 0 <= result < 23
        assert calls.count(C1_128) == 1

    def test_192_bit_nonce_counts_32_byte_blocks(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A 384-bit p needs 448 bits; each x_i from the 256-bit c1 is 256 bits."""
        calls: list[bytes] = []
        original = prf.encrypt

        def spy(cipher: str, key: bytes, data: bytes) -> bytes:
            calls.append(data)
            return original(cipher, key, data)

        monkeypatch.setattr(prf, "encrypt", spy)
        p = get_curve("brainpoolP384r1").p
        result = pseudo_random_function(bytes(range(24)), bytes(range(50, 74)), p, "AES")

        assert 0 <= result < p
        assert calls.count(C1_256) == 2
        assert calls.count(C0_256) == 2

    def test_cipher_aliases(self) -> None:
        assert normalize_cipher("AES") == CIPHER_AES
        assert normalize_cipher("aes") == CIPHER_AES
        assert normalize_cipher("DESede") == CIPHER_3DES
        assert normalize_cipher("3DES") == CIPHER_3DES
        assert normalize_cipher("tdes") == CIPHER_3DES

    def test_alias_gives_same_result(self) -> None:
        assert pseudo_random_function(NONCE_S, NONCE_T, P, "aes") == pseudo_random_function(
            NONCE_S, NONCE_T, P, "AES"
        )

    def test_3des_128(self) -> None:
        """Two-key 3DES with 128-bit nonces."""
        result = pseudo_random_function(NONCE_S, NONCE_T, P, "DESede")
        assert 0 <= result < P
        assert result == pseudo_random_function(NONCE_S, NONCE_T, P, "3DES")

    def test_3des_differs_from_aes(self) -> None:
        assert pseudo_random_function(NONCE_S, NONCE_T, P, "DESede") != pseudo_random_function(
            NONCE_S, NONCE_T, P, "AES"
        )

    @pytest.mark.parametrize("size", [16, 24, 32])
    def test_aes_nonce_lengths(self, size: int) -> None:
        s = bytes(range(size))
        t = bytes(range(100, 100 + size))
        result = pseudo_random_function(s, t, P, "AES")
        assert 0 <= result < P

    def test_3des_192(self) -> None:
        s = bytes(range(24))
        t = bytes(range(50, 74))
        assert 0 <= pseudo_random_function(s, t, P, "DESede") < P

    def test_accepts_bytearray(self) -> None:
        assert pseudo_random_function(bytearray(NONCE_S), bytearray(NONCE_T), P, "AES") == (
            pseudo_random_function(NONCE_S, NONCE_T, P, "AES")
        )


# =============================================================================
# Input validation
# =============================================================================


class TestPRFInputErrors:
    """Malformed inputs raise InputError."""

    @pytest.mark.parametrize("size", [0, 8, 12, 13, 20, 31, 33, 64])
    def test_unsupported_nonce_length(self, size: int) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(bytes(size), bytes(size), P, "AES")

    def test_unequal_nonce_lengths(self) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(NONCE_S, NONCE_T + bytes(16), P, "AES")

    @pytest.mark.parametrize("cipher", ["ChaCha20", "DES", "", "AES-GCM"])
    def test_unknown_cipher(self, cipher: str) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(NONCE_S, NONCE_T, P, cipher)

    def test_non_string_cipher(self) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(NONCE_S, NONCE_T, P, None)  # type: ignore[arg-type]

    def test_3des_rejects_256_bit_nonces(self) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(bytes(32), bytes(32), P, "DESede")

    @pytest.mark.parametrize("prime", [0, 2, 3, 4, 100, -7])
    def test_bad_prime(self, prime: int) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(NONCE_S, NONCE_T, prime, "AES")

    def test_nonce_must_be_bytes(self) -> None:
        with pytest.raises(InputError):
            pseudo_random_function(NONCE_S.hex(), NONCE_T, P, "AES")  # type: ignore[arg-type]

    def test_input_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            pseudo_random_function(bytes(13), bytes(13), P, "AES")


# =============================================================================
# Property-Based Tests
# =============================================================================


class TestPRFProperties:
    """Property-based tests using hypothesis."""

    @given(
        size=st.sampled_from([16, 24, 32]),
        data=st.data(),
    )
    @settings(max_examples=50, deadline=None)
    def test_deterministic_and_reduced(self, size: int, data: st.DataObject) -> None:
        """Same inputs give the same field element, always in [0, p)."""
        s = data.draw(st.binary(min_size=size, max_size=size))
        t = data.draw(st.binary(min_size=size, max_size=size))

        first = pseudo_random_function(s, t, P, "AES")
        second = pseudo_random_function(s, t, P, "AES")

        assert first == second
        assert 0 <= first < P

    @given(
        s=st.binary(min_size=16, max_size=16),
        t=st.binary(min_size=16, max_size=16),
    )
    @settings(max_examples=30, deadline=None)
    def test_different_pcd_nonce_changes_output(self, s: bytes, t: bytes) -> None:
        flipped = bytes([t[0] ^ 0x01]) + t[1:]
        assert pseudo_random_function(s, t, P, "AES") != pseudo_random_function(s, flipped, P, "AES")
