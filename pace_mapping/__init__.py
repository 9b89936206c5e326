"""
PACE Integrated Mapping.

Derives the ephemeral ECDH domain of the PACE Integrated Mapping
(ICAO 9303 part 11, BSI TR-03110):

    nonces (s, t) -> field element -> curve point -> ephemeral domain

Usage:
    >>> from pace_mapping import map_nonces
    >>> domain = map_nonces(s, t, "AES", "brainpoolP256r1")
    >>> domain.generator
"""

from pace_mapping.curves import (
    POINT_AT_INFINITY,
    CurveParameters,
    Point,
    available_curves,
    get_curve,
    get_standardized_curve,
    is_on_curve,
    point_add,
    point_from_octets,
    point_to_octets,
    scalar_mult,
)
from pace_mapping.domain import (
    EphemeralDomain,
    build_ephemeral_domain,
    map_nonces,
    validate_domain,
)
from pace_mapping.encoding import encode_point
from pace_mapping.errors import (
    ArithmeticPreconditionError,
    DomainValidationError,
    InputError,
    MappingFailure,
    PACEMappingError,
)
from pace_mapping.log import configure_logging
from pace_mapping.prf import CIPHER_3DES, CIPHER_AES, pseudo_random_function

__all__ = [
    # Pipeline
    "pseudo_random_function",
    "encode_point",
    "build_ephemeral_domain",
    "map_nonces",
    "validate_domain",
    "EphemeralDomain",
    "CIPHER_AES",
    "CIPHER_3DES",
    # Curves
    "CurveParameters",
    "Point",
    "POINT_AT_INFINITY",
    "available_curves",
    "get_curve",
    "get_standardized_curve",
    "is_on_curve",
    "point_add",
    "scalar_mult",
    "point_to_octets",
    "point_from_octets",
    # Errors
    "PACEMappingError",
    "InputError",
    "ArithmeticPreconditionError",
    "MappingFailure",
    "DomainValidationError",
    # Logging
    "configure_logging",
]

__version__ = "1.0.0"
