"""
Ephemeral domain construction for the Integrated Mapping.

The ephemeral domain keeps the static curve's field, coefficients, order and
cofactor and swaps in the encoded point as generator. Key pair generation on
the new domain belongs to the ECDH step of the handshake, not here.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from pace_mapping.curves import (
    POINT_AT_INFINITY,
    CurveParameters,
    Point,
    get_curve,
    get_standardized_curve,
    is_on_curve,
    scalar_mult,
)
from pace_mapping.encoding import encode_point
from pace_mapping.errors import DomainValidationError, InputError
from pace_mapping.prf import pseudo_random_function

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class EphemeralDomain:
    """Static curve parameters with the mapped generator G'."""

    source: CurveParameters
    generator: tuple[int, int]

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def p(self) -> int:
        return self.source.p

    @property
    def a(self) -> int:
        return self.source.a

    @property
    def b(self) -> int:
        return self.source.b

    @property
    def n(self) -> int:
        return self.source.n

    @property
    def h(self) -> int:
        return self.source.h

    def contains(self, point: Point) -> bool:
        return is_on_curve(self.source, point)

    def as_curve(self) -> CurveParameters:
        """The domain as plain CurveParameters, for the ECDH collaborator."""
        return CurveParameters(
            name=f"{self.source.name}/ephemeral",
            p=self.p,
            a=self.a,
            b=self.b,
            n=self.n,
            h=self.h,
            generator=self.generator,
        )


def validate_domain(domain: EphemeralDomain) -> None:
    """Check the generator and the order/cofactor relationship.

    Raises:
        DomainValidationError: If any check fails
    """
    generator = domain.generator
    if generator is POINT_AT_INFINITY:
        raise DomainValidationError("Ephemeral generator is the point at infinity")
    if not domain.contains(generator):
        raise DomainValidationError(f"Ephemeral generator is not on {domain.name}")
    if scalar_mult(domain.source, domain.n, generator) is not POINT_AT_INFINITY:
        raise DomainValidationError(f"Ephemeral generator does not have order n on {domain.name}")

    # Hasse: |h n - (p + 1)| <= 2 sqrt(p)
    trace = domain.h * domain.n - (domain.p + 1)
    if trace * trace > 4 * domain.p:
        raise DomainValidationError(f"{domain.name}: h * n violates the Hasse bound")


def build_ephemeral_domain(t: int, curve: CurveParameters) -> EphemeralDomain:
    """Encode t and build the validated ephemeral domain around it.

    Raises:
        ArithmeticPreconditionError: If p != 3 (mod 4) or a = 0
        MappingFailure: If t encodes to a degenerate point
        DomainValidationError: If the resulting domain is inconsistent
    """
    generator = encode_point(t, curve)
    domain = EphemeralDomain(source=curve, generator=generator)

    try:
        validate_domain(domain)
    except DomainValidationError as e:
        log.warning("ephemeral_domain_invalid", curve=curve.name, reason=str(e))
        raise

    log.debug("ephemeral_domain_built", curve=curve.name)
    return domain


def resolve_curve(curve: CurveParameters | str | int) -> CurveParameters:
    """Accept explicit parameters, a registry name, or a standardized id."""
    if isinstance(curve, CurveParameters):
        return curve
    if isinstance(curve, bool):
        raise InputError(f"Invalid curve selector: {curve!r}")
    if isinstance(curve, int):
        return get_standardized_curve(curve)
    if isinstance(curve, str):
        return get_curve(curve)
    raise InputError(f"Invalid curve selector: {curve!r}")


def map_nonces(
    s: bytes,
    t: bytes,
    cipher: str,
    curve: CurveParameters | str | int,
) -> EphemeralDomain:
    """Run the full Integrated Mapping: R(s, t), point encoding, domain.

    Args:
        s: Nonce from the PICC
        t: Nonce from the PCD
        cipher: "AES" or "DESede"
        curve: CurveParameters, curve name, or standardized domain parameter id

    Returns:
        Validated EphemeralDomain
    """
    params = resolve_curve(curve)
    field_element = pseudo_random_function(s, t, params.p, cipher)
    return build_ephemeral_domain(field_element, params)
