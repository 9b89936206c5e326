"""
Point encoding for the Integrated Mapping.

Maps a field element t onto the curve ("Supplemental Access Control for
MRTDs" v1.01, section 5). The map tries X2 first and falls back to its
quadratic twist counterpart X3 = alpha * X2. Exactly one of f(X2) and
f(X3) = -t^6 * f(X2) is a square when p = 3 (mod 4), so the square root is a
single exponentiation.
"""

from __future__ import annotations

import structlog

from pace_mapping.curves import (
    POINT_AT_INFINITY,
    CurveParameters,
    Point,
    is_on_curve,
    scalar_mult,
)
from pace_mapping.errors import ArithmeticPreconditionError, MappingFailure

log = structlog.get_logger(__name__)


def require_mappable(curve: CurveParameters) -> None:
    """Raise ArithmeticPreconditionError unless p = 3 (mod 4) and a != 0."""
    if curve.p % 4 != 3:
        raise ArithmeticPreconditionError(
            f"{curve.name}: point encoding requires p = 3 (mod 4), got p = {curve.p % 4} (mod 4)"
        )
    # a = 0 zeroes a (alpha + alpha^2), so X2 = 0 for every t
    if curve.a == 0:
        raise ArithmeticPreconditionError(f"{curve.name}: point encoding requires a != 0")


def encode_point(t: int, curve: CurveParameters) -> Point:
    """Map the field element t to a point in the order-n subgroup of curve.

    Args:
        t: Field element, reduced modulo p before use
        curve: Mapping curve, p = 3 (mod 4) and a != 0

    Returns:
        Affine (x, y) satisfying the curve equation

    Raises:
        ArithmeticPreconditionError: If p != 3 (mod 4) or a = 0
        MappingFailure: If the encoded point is degenerate
    """
    require_mappable(curve)

    p, a, b = curve.p, curve.a, curve.b
    t %= p

    # 1. alpha = -t^2
    alpha = (-t * t) % p

    # 2. X2 = -b (1 + alpha + alpha^2) (a (alpha + alpha^2))^(p-2)
    alpha_sum = (alpha + alpha * alpha) % p
    x2 = (-b * (1 + alpha_sum)) % p
    x2 = (x2 * pow(a * alpha_sum, p - 2, p)) % p

    # 3. X3 = alpha * X2
    x3 = (alpha * x2) % p

    # 4. h2 = X2^3 + a X2 + b
    h2 = (pow(x2, 3, p) + a * x2 + b) % p

    # 5. U = t^3 h2
    u = (pow(t, 3, p) * h2) % p

    # 6. A = h2^(p - 1 - (p+1)/4)
    big_a = pow(h2, p - 1 - (p + 1) // 4, p)

    # 7. A^2 h2 == 1 exactly when h2 is a non-zero square
    if (big_a * big_a * h2) % p == 1:
        branch = "direct"
        point: Point = (x2, (big_a * h2) % p)
    else:
        branch = "twist"
        point = (x3, (big_a * u) % p)

    # alpha in {0, -1} zeroes the inverted term; the twist branch is then off
    # the curve whenever b is a non-square
    if not is_on_curve(curve, point):
        log.warning("point_encoding_degenerate", curve=curve.name, branch=branch)
        raise MappingFailure(f"Encoded point is not on {curve.name} ({branch} branch)")

    # 8. Clear the cofactor
    if curve.h != 1:
        point = scalar_mult(curve, curve.h, point)
        log.debug("cofactor_cleared", curve=curve.name, cofactor=curve.h)

    if point is POINT_AT_INFINITY:
        log.warning("point_encoding_degenerate", curve=curve.name, branch=branch)
        raise MappingFailure(f"Encoded point on {curve.name} is the point at infinity")

    log.debug("point_encoded", curve=curve.name, branch=branch)
    return point
