"""
Pseudo-random number mapping for PACE Integrated Mapping.

Derives a field element from the PICC nonce s and the PCD nonce t
(ICAO 9303 part 11, "Pseudo-random Number Mapping"):

    k_0     = E(t, s)
    x_i     = E(k_i, c1)
    k_{i+1} = E(k_i, c0)
    R(s, t) = (x_0 || x_1 || ...) mod p

E is AES or 3DES in CBC mode with an all-zero IV and no padding.
"""

from __future__ import annotations

import structlog
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

try:
    from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
except ImportError:  # cryptography < 43
    TripleDES = algorithms.TripleDES

from pace_mapping.errors import InputError

log = structlog.get_logger(__name__)

# =============================================================================
# Constants (ICAO 9303 part 11)
# =============================================================================

CIPHER_AES = "AES"
CIPHER_3DES = "DESede"

_CIPHER_NAMES = {
    "aes": CIPHER_AES,
    "desede": CIPHER_3DES,
    "3des": CIPHER_3DES,
    "tdes": CIPHER_3DES,
    "tripledes": CIPHER_3DES,
}

BLOCK_SIZES = {
    CIPHER_AES: 16,
    CIPHER_3DES: 8,
}

# Nonce bit lengths accepted per cipher
NONCE_BITS = {
    CIPHER_AES: (128, 192, 256),
    CIPHER_3DES: (128, 192),
}

# Extra bits drawn beyond bit_length(p) so that R mod p is close to uniform
EXTRA_BITS = 64

# c0 derives k_{i+1}, c1 derives x_i
C0_128 = bytes.fromhex("a668892a7c41e3ca739f40b057d85904")
C1_128 = bytes.fromhex("a4e136ac725f738b01c1f60217c188ad")
C0_256 = bytes.fromhex("d463d65234124ef7897054986dca0a174e28df758cbaa03f240616414d5a1676")
C1_256 = bytes.fromhex("54bd7255f0aaf831bec3423fcf39d69b6cbf066677d0faae5aadd99df8e53517")


# =============================================================================
# Block Cipher Helpers
# =============================================================================


def normalize_cipher(cipher: str) -> str:
    """Map a cipher selector to CIPHER_AES or CIPHER_3DES.

    Raises:
        InputError: If the selector is not a supported cipher
    """
    if not isinstance(cipher, str):
        raise InputError(f"Cipher selector must be a string, got {type(cipher).__name__}")
    try:
        return _CIPHER_NAMES[cipher.strip().lower()]
    except KeyError:
        raise InputError(f"Unsupported cipher: {cipher!r}") from None


def mapping_constants(nonce_bits: int) -> tuple[bytes, bytes]:
    """Return (c0, c1) for the given nonce bit length."""
    if nonce_bits == 128:
        return C0_128, C1_128
    if nonce_bits in (192, 256):
        return C0_256, C1_256
    raise InputError(f"Invalid nonce length: {nonce_bits} bits (expected 128, 192 or 256)")


def encrypt(cipher: str, key: bytes, data: bytes) -> bytes:
    """Encrypt data in CBC mode with a zero IV.

    Data is zero-filled up to a whole number of blocks; block-aligned input
    (every 128- and 256-bit nonce) is encrypted as is.

    Args:
        cipher: CIPHER_AES or CIPHER_3DES
        key: Cipher key (16/24/32 bytes AES, 16/24 bytes 3DES)
        data: Plaintext

    Returns:
        Ciphertext, same length as the block-aligned plaintext
    """
    block_size = BLOCK_SIZES[cipher]
    remainder = len(data) % block_size
    if remainder:
        data += bytes(block_size - remainder)

    try:
        algorithm = algorithms.AES(key) if cipher == CIPHER_AES else TripleDES(key)
    except ValueError as e:
        raise InputError(f"Invalid {cipher} key: {e}") from e

    encryptor = Cipher(algorithm, modes.CBC(bytes(block_size))).encryptor()
    return encryptor.update(data) + encryptor.finalize()


# =============================================================================
# Pseudo-random Function
# =============================================================================


def pseudo_random_function(s: bytes, t: bytes, p: int, cipher: str) -> int:
    """Derive a field element in [0, p) from the nonces s and t.

    Args:
        s: Nonce from the PICC
        t: Nonce from the PCD
        p: Field prime of the mapping curve
        cipher: "AES" or "DESede" (aliases "3DES", "TDES")

    Returns:
        R(s, t) mod p

    Raises:
        InputError: On malformed nonces, an unsupported cipher or a bad prime
    """
    cipher = normalize_cipher(cipher)

    if not isinstance(s, (bytes, bytearray)) or not isinstance(t, (bytes, bytearray)):
        raise InputError("Nonces must be bytes")
    if len(s) != len(t):
        raise InputError(f"Nonce lengths differ: s={len(s)} bytes, t={len(t)} bytes")
    if not isinstance(p, int) or p <= 3 or p % 2 == 0:
        raise InputError("Field prime must be an odd integer > 3")

    nonce_bits = len(s) * 8
    c0, c1 = mapping_constants(nonce_bits)
    if nonce_bits not in NONCE_BITS[cipher]:
        raise InputError(f"{cipher} does not support {nonce_bits}-bit nonces")

    key_size = len(t)
    target_bits = p.bit_length() + EXTRA_BITS

    key = encrypt(cipher, bytes(t), bytes(s))[:key_size]
    output = b""
    # Count the bits actually produced; 24-byte nonces yield 32-byte x_i
    while len(output) * 8 < target_bits:
        output += encrypt(cipher, key, c1)
        key = encrypt(cipher, key, c0)[:key_size]

    log.debug(
        "prf_derived",
        cipher=cipher,
        nonce_bits=nonce_bits,
        output_bits=len(output) * 8,
    )
    return int.from_bytes(output, "big") % p
