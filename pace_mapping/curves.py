"""
Elliptic curve parameters and affine point arithmetic.

Curves are short Weierstrass curves y^2 = x^3 + a*x + b over GF(p). Points are
affine (x, y) tuples of ints; the point at infinity is None. All values are
plain Python ints, so every intermediate is owned by the call that made it.

Field inversion uses exponentiation to p - 2, the same way the mapping itself
inverts.
"""

from __future__ import annotations

from dataclasses import dataclass

from pace_mapping.errors import ArithmeticPreconditionError, InputError

Point = tuple[int, int] | None

POINT_AT_INFINITY: Point = None

# SEC1 octet string prefixes
SEC1_INFINITY = b"\x00"
SEC1_UNCOMPRESSED = 0x04


# =============================================================================
# Curve Parameters
# =============================================================================


@dataclass(frozen=True)
class CurveParameters:
    """Immutable short Weierstrass curve domain (p, a, b, n, h, G).

    Instances are validated on construction and may be shared freely between
    concurrent sessions.
    """

    name: str
    p: int
    a: int
    b: int
    n: int
    h: int
    generator: tuple[int, int]

    def __post_init__(self) -> None:
        p, a, b = self.p, self.a, self.b

        if p <= 3 or p % 2 == 0:
            raise ArithmeticPreconditionError(f"{self.name}: field prime must be odd and > 3")
        if not (0 <= a < p and 0 <= b < p):
            raise ArithmeticPreconditionError(f"{self.name}: coefficients must lie in [0, p)")
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise ArithmeticPreconditionError(f"{self.name}: curve is singular")
        if self.n <= 1 or self.h < 1:
            raise ArithmeticPreconditionError(
                f"{self.name}: invalid order/cofactor (n={self.n}, h={self.h})"
            )

        gx, gy = self.generator
        if not (0 <= gx < p and 0 <= gy < p):
            raise ArithmeticPreconditionError(f"{self.name}: generator coordinates out of range")
        if not self.contains(self.generator):
            raise ArithmeticPreconditionError(f"{self.name}: generator is not on the curve")

    @property
    def field_size(self) -> int:
        """Length in bytes of an encoded field element."""
        return (self.p.bit_length() + 7) // 8

    def contains(self, point: Point) -> bool:
        """True if point is the point at infinity or satisfies the curve equation."""
        return is_on_curve(self, point)


# =============================================================================
# Point Arithmetic
# =============================================================================


def inverse(curve: CurveParameters, value: int) -> int:
    """Field inverse via value^(p-2); returns 0 for 0."""
    return pow(value, curve.p - 2, curve.p)


def is_on_curve(curve: CurveParameters, point: Point) -> bool:
    if point is POINT_AT_INFINITY:
        return True
    x, y = point
    p = curve.p
    if not (0 <= x < p and 0 <= y < p):
        return False
    lhs = (y * y) % p
    rhs = (x * x * x + curve.a * x + curve.b) % p
    return lhs == rhs


def point_neg(curve: CurveParameters, point: Point) -> Point:
    if point is POINT_AT_INFINITY:
        return POINT_AT_INFINITY
    x, y = point
    return x, (-y) % curve.p


def point_double(curve: CurveParameters, point: Point) -> Point:
    if point is POINT_AT_INFINITY:
        return POINT_AT_INFINITY
    x1, y1 = point
    p = curve.p
    if y1 == 0:
        # 2-torsion point
        return POINT_AT_INFINITY
    w = ((3 * x1 * x1 + curve.a) * inverse(curve, 2 * y1)) % p
    x3 = (w * w - 2 * x1) % p
    y3 = (w * (x1 - x3) - y1) % p
    return x3, y3


def point_add(curve: CurveParameters, p1: Point, p2: Point) -> Point:
    if p1 is POINT_AT_INFINITY:
        return p2
    if p2 is POINT_AT_INFINITY:
        return p1

    (x1, y1), (x2, y2) = p1, p2
    p = curve.p
    if x1 == x2:
        if y1 == y2:
            return point_double(curve, p1)
        return POINT_AT_INFINITY

    v = ((y2 - y1) * inverse(curve, x2 - x1)) % p
    x3 = (v * v - x1 - x2) % p
    y3 = (v * (x1 - x3) - y1) % p
    return x3, y3


def scalar_mult(curve: CurveParameters, k: int, point: Point) -> Point:
    """Compute k * point with a Montgomery ladder over affine coordinates.

    The scalar is not reduced modulo n, so this also serves cofactor clearing
    of points outside the order-n subgroup. Not constant time.
    """
    if k < 0:
        return scalar_mult(curve, -k, point_neg(curve, point))
    if k == 0 or point is POINT_AT_INFINITY:
        return POINT_AT_INFINITY

    r0: Point = POINT_AT_INFINITY
    r1: Point = point
    for bit in f"{k:b}":
        if bit == "1":
            r0 = point_add(curve, r0, r1)
            r1 = point_double(curve, r1)
        else:
            r1 = point_add(curve, r1, r0)
            r0 = point_double(curve, r0)
    return r0


# =============================================================================
# SEC1 Point Encoding
# =============================================================================


def point_to_octets(curve: CurveParameters, point: Point) -> bytes:
    """Encode a point as an uncompressed SEC1 octet string.

    Layout:
    - 0x04
    - X (field_size bytes, big-endian)
    - Y (field_size bytes, big-endian)

    The point at infinity encodes as a single zero byte.
    """
    if point is POINT_AT_INFINITY:
        return SEC1_INFINITY
    x, y = point
    size = curve.field_size
    return bytes([SEC1_UNCOMPRESSED]) + x.to_bytes(size, "big") + y.to_bytes(size, "big")


def point_from_octets(curve: CurveParameters, data: bytes) -> Point:
    """Decode an uncompressed SEC1 octet string.

    Raises:
        InputError: If the encoding is malformed or the point is off the curve
    """
    if data == SEC1_INFINITY:
        return POINT_AT_INFINITY

    size = curve.field_size
    if len(data) != 1 + 2 * size:
        raise InputError(f"Encoded point must be {1 + 2 * size} bytes, got {len(data)}")
    if data[0] != SEC1_UNCOMPRESSED:
        raise InputError(f"Unsupported point encoding prefix: 0x{data[0]:02x}")

    x = int.from_bytes(data[1 : 1 + size], "big")
    y = int.from_bytes(data[1 + size :], "big")
    if not is_on_curve(curve, (x, y)):
        raise InputError(f"Encoded point is not on {curve.name}")
    return x, y


# =============================================================================
# Named Curve Registry
# =============================================================================

# (name, a, b, p, Gx, Gy, n, h) as hex strings; SEC 2 and RFC 5639 values.
_RAW_CURVES = (
    ("P-192",
        "fffffffffffffffffffffffffffffffefffffffffffffffc",
        "64210519e59c80e70fa7e9ab72243049feb8deecc146b9b1",
        "fffffffffffffffffffffffffffffffeffffffffffffffff",
        "188da80eb03090f67cbf20eb43a18800f4ff0afd82ff1012",
        "07192b95ffc8da78631011ed6b24cdd573f977a11e794811",
        "ffffffffffffffffffffffff99def836146bc9b1b4d22831", 1),
    ("P-224",
        "fffffffffffffffffffffffffffffffefffffffffffffffffffffffe",
        "b4050a850c04b3abf54132565044b0b7d7bfd8ba270b39432355ffb4",
        "ffffffffffffffffffffffffffffffff000000000000000000000001",
        "b70e0cbd6bb4bf7f321390b94a03c1d356c21122343280d6115c1d21",
        "bd376388b5f723fb4c22dfe6cd4375a05a07476444d5819985007e34",
        "ffffffffffffffffffffffffffff16a2e0b8f03e13dd29455c5c2a3d", 1),
    ("P-256",
        "ffffffff00000001000000000000000000000000fffffffffffffffffffffffc",
        "5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b",
        "ffffffff00000001000000000000000000000000ffffffffffffffffffffffff",
        "6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296",
        "4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5",
        "ffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551",
            1),
    ("P-384",
        "fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffe"
            "ffffffff0000000000000000fffffffc",
        "b3312fa7e23ee7e4988e056be3f82d19181d9c6efe8141120314088f5013875a"
            "c656398d8a2ed19d2a85c8edd3ec2aef",
        "fffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffe"
            "ffffffff0000000000000000ffffffff",
        "aa87ca22be8b05378eb1c71ef320ad746e1d3b628ba79b9859f741e082542a38"
            "5502f25dbf55296c3a545e3872760ab7",
        "3617de4a96262c6f5d9e98bf9292dc29f8f41dbd289a147ce9da3113b5f0b8c0"
            "0a60b1ce1d7e819d7a431d7c90ea0e5f",
        "ffffffffffffffffffffffffffffffffffffffffffffffffc7634d81f4372ddf"
            "581a0db248b0a77aecec196accc52973", 1),
    ("P-521",
        "01ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
            "ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
            "fffffffc",
        "0051953eb9618e1c9a1f929a21a0b68540eea2da725b99b315f3b8b489918ef1"
            "09e156193951ec7e937b1652c0bd3bb1bf073573df883d2c34f1ef451fd4"
            "6b503f00",
        "01ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
            "ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
            "ffffffff",
        "00c6858e06b70404e9cd9e3ecb662395b4429c648139053fb521f828af606b4d"
            "3dbaa14b5e77efe75928fe1dc127a2ffa8de3348b3c1856a429bf97e7e31"
            "c2e5bd66",
        "011839296a789a3bc0045c8a5fb42c7d1bd998f54449579b446817afbd17273e"
            "662c97ee72995ef42640c550b9013fad0761353c7086a272c24088be9476"
            "9fd16650",
        "01ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff"
            "fffa51868783bf2f966b7fcc0148f709a5d03bb5c9b8899c47aebb6fb71e"
            "91386409", 1),
    ("brainpoolP192r1",
        "6a91174076b1e0e19c39c031fe8685c1cae040e5c69a28ef",
        "469a28ef7c28cca3dc721d044f4496bcca7ef4146fbf25c9",
        "c302f41d932a36cda7a3463093d18db78fce476de1a86297",
        "c0a0647eaab6a48753b033c56cb0f0900a2f5c4853375fd6",
        "14b690866abd5bb88b5f4828c1490002e6773fa2fa299b8f",
        "c302f41d932a36cda7a3462f9e9e916b5be8f1029ac4acc1", 1),
    ("brainpoolP224r1",
        "68a5e62ca9ce6c1c299803a6c1530b514e182ad8b0042a59cad29f43",
        "2580f63ccfe44138870713b1a92369e33e2135d266dbb372386c400b",
        "d7c134aa264366862a18302575d1d787b09f075797da89f57ec8c0ff",
        "0d9029ad2c7e5cf4340823b2a87dc68c9e4ce3174c1e6efdee12c07d",
        "58aa56f772c0726f24c6b89e4ecdac24354b9e99caa3f6d3761402cd",
        "d7c134aa264366862a18302575d0fb98d116bc4b6ddebca3a5a7939f",
            1),
    ("brainpoolP256r1",
        "7d5a0975fc2c3057eef67530417affe7fb8055c126dc5c6ce94a4b44f330b5d9",
        "26dc5c6ce94a4b44f330b5d9bbd77cbf958416295cf7e1ce6bccdc18ff8c07b6",
        "a9fb57dba1eea9bc3e660a909d838d726e3bf623d52620282013481d1f6e5377",
        "8bd2aeb9cb7e57cb2c4b482ffc81b7afb9de27e1e3bd23c23a4453bd9ace3262",
        "547ef835c3dac4fd97f8461a14611dc9c27745132ded8e545c1d54c72f046997",
        "a9fb57dba1eea9bc3e660a909d838d718c397aa3b561a6f7901e0e82974856a7",
            1),
    ("brainpoolP320r1",
        "3ee30b568fbab0f883ccebd46d3f3bb8a2a73513f5eb79da66190eb085ffa9f49"
            "2f375a97d860eb4",
        "520883949dfdbc42d3ad198640688a6fe13f41349554b49acc31dccd884539816"
            "f5eb4ac8fb1f1a6",
        "d35e472036bc4fb7e13c785ed201e065f98fcfa6f6f40def4f92b9ec7893ec28f"
            "cd412b1f1b32e27",
        "43bd7e9afb53d8b85289bcc48ee5bfe6f20137d10a087eb6e7871e2a10a599c71"
            "0af8d0d39e20611",
        "14fdd05545ec1cc8ab4093247f77275e0743ffed117182eaa9c77877aaac6ac7d"
            "35245d1692e8ee1",
        "d35e472036bc4fb7e13c785ed201e065f98fcfa5b68f12a32d482ec7ee8658e98"
            "691555b44c59311", 1),
    ("brainpoolP384r1",
        "7bc382c63d8c150c3c72080ace05afa0c2bea28e4fb22787139165efba91f90f8"
            "aa5814a503ad4eb04a8c7dd22ce2826",
        "04a8c7dd22ce28268b39b55416f0447c2fb77de107dcd2a62e880ea53eeb62d57"
            "cb4390295dbc9943ab78696fa504c11",
        "8cb91e82a3386d280f5d6f7e50e641df152f7109ed5456b412b1da197fb71123a"
            "cd3a729901d1a71874700133107ec53",
        "1d1c64f068cf45ffa2a63a81b7c13f6b8847a3e77ef14fe3db7fcafe0cbd10e8e"
            "826e03436d646aaef87b2e247d4af1e",
        "8abe1d7520f9c2a45cb1eb8e95cfd55262b70b29feec5864e19c054ff99129280"
            "e4646217791811142820341263c5315",
        "8cb91e82a3386d280f5d6f7e50e641df152f7109ed5456b31f166e6cac0425a7c"
            "f3ab6af6b7fc3103b883202e9046565", 1),
    ("brainpoolP512r1",
        "7830a3318b603b89e2327145ac234cc594cbdd8d3df91610a83441caea9863bc2"
            "ded5d5aa8253aa10a2ef1c98b9ac8b57f1117a72bf2c7b9e7c1ac4d77fc94"
            "ca",
        "3df91610a83441caea9863bc2ded5d5aa8253aa10a2ef1c98b9ac8b57f1117a72"
            "bf2c7b9e7c1ac4d77fc94cadc083e67984050b75ebae5dd2809bd638016f7"
            "23",
        "aadd9db8dbe9c48b3fd4e6ae33c9fc07cb308db3b3c9d20ed6639cca703308717"
            "d4d9b009bc66842aecda12ae6a380e62881ff2f2d82c68528aa6056583a48"
            "f3",
        "81aee4bdd82ed9645a21322e9c4c6a9385ed9f70b5d916c1b43b62eef4d0098ef"
            "f3b1f78e2d0d48d50d1687b93b97d5f7c6d5047406a5e688b352209bcb9f8"
            "22",
        "7dde385d566332ecc0eabfa9cf7822fdf209f70024a57b1aa000c55b881f8111b"
            "2dcde494a5f485e5bca4bd88a2763aed1ca2b2fa8f0540678cd1e0f3ad808"
            "92",
        "aadd9db8dbe9c48b3fd4e6ae33c9fc07cb308db3b3c9d20ed6639cca703308705"
            "53e5c414ca92619418661197fac10471db1d381085ddaddb58796829ca900"
            "69",
        1),
)

_ALIASES = {
    "secp192r1": "P-192",
    "prime192v1": "P-192",
    "nistp192": "P-192",
    "secp224r1": "P-224",
    "nistp224": "P-224",
    "secp256r1": "P-256",
    "prime256v1": "P-256",
    "nistp256": "P-256",
    "secp384r1": "P-384",
    "nistp384": "P-384",
    "secp521r1": "P-521",
    "nistp521": "P-521",
}

# Standardized domain parameter ids (ICAO 9303 part 11, BSI TR-03110 part 3).
# Ids 0-2 are MODP groups and are not handled here.
STANDARDIZED_DOMAIN_PARAMETERS = {
    8: "P-192",
    9: "brainpoolP192r1",
    10: "P-224",
    11: "brainpoolP224r1",
    12: "P-256",
    13: "brainpoolP256r1",
    14: "brainpoolP320r1",
    15: "P-384",
    16: "brainpoolP384r1",
    17: "brainpoolP512r1",
    18: "P-521",
}


def _load_registry() -> dict[str, CurveParameters]:
    registry = {}
    for name, a, b, p, gx, gy, n, h in _RAW_CURVES:
        registry[name.lower()] = CurveParameters(
            name=name,
            p=int(p, 16),
            a=int(a, 16),
            b=int(b, 16),
            n=int(n, 16),
            h=h,
            generator=(int(gx, 16), int(gy, 16)),
        )
    return registry


_REGISTRY = _load_registry()


def available_curves() -> list[str]:
    """Names of all registered curves."""
    return [curve.name for curve in _REGISTRY.values()]


def get_curve(name: str) -> CurveParameters:
    """Look up a named curve (case-insensitive, SEC/NIST aliases accepted).

    Raises:
        InputError: If the name is unknown
    """
    if not isinstance(name, str):
        raise InputError(f"Curve name must be a string, got {type(name).__name__}")
    key = name.strip().lower()
    key = _ALIASES.get(key, key).lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        raise InputError(f"Unknown curve: {name!r}") from None


def get_standardized_curve(parameter_id: int) -> CurveParameters:
    """Look up a curve by its PACE standardized domain parameter id.

    Raises:
        InputError: If the id is unknown or names a MODP group
    """
    if parameter_id not in STANDARDIZED_DOMAIN_PARAMETERS:
        raise InputError(f"No elliptic curve for standardized domain parameter id {parameter_id}")
    return get_curve(STANDARDIZED_DOMAIN_PARAMETERS[parameter_id])
