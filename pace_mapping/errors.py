"""
Error taxonomy for the PACE Integrated Mapping core.

Every failure is raised synchronously to the caller. Nothing here retries;
requesting fresh nonces after a failure is the protocol driver's decision.
"""

from __future__ import annotations


class PACEMappingError(Exception):
    """Base class for all Integrated Mapping errors."""


class InputError(PACEMappingError, ValueError):
    """Malformed nonce, unsupported cipher, or unknown curve."""


class ArithmeticPreconditionError(PACEMappingError):
    """Curve parameters unusable for the mapping.

    Raised when the field prime is not 3 mod 4, or when the parameters are
    internally inconsistent (singular curve, generator off the curve, ...).
    """


class MappingFailure(PACEMappingError):
    """The encoded point is degenerate (infinity or off the curve)."""


class DomainValidationError(PACEMappingError):
    """The ephemeral domain failed its order/cofactor consistency checks."""
