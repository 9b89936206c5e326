"""
Pytest configuration and fixtures for the PACE Integrated Mapping tests.

This module provides:
- structlog configuration for test runs (PACE_LOG_LEVEL, default warning)
- Curve fixtures for the registry curves used by the known-answer vectors
- Small hand-checked curves over GF(23) with cofactor > 1
- Vector file loading
"""

from __future__ import annotations

from pathlib import Path

import json5
import pytest

from pace_mapping import CurveParameters, configure_logging, get_curve

# Configure structlog for tests
configure_logging()

VECTORS_DIR = Path(__file__).parent / "vectors"


# =============================================================================
# Vector fixtures
# =============================================================================


@pytest.fixture(scope="session")
def im_vectors() -> dict:
    """Load Integrated Mapping test vectors."""
    with open(VECTORS_DIR / "im_vectors.json5") as f:
        return json5.load(f)


# =============================================================================
# Curve fixtures
# =============================================================================


@pytest.fixture(scope="session")
def brainpool_p256r1() -> CurveParameters:
    return get_curve("brainpoolP256r1")


@pytest.fixture(scope="session")
def nist_p224() -> CurveParameters:
    """P-224: p = 1 (mod 4), unusable for point encoding."""
    return get_curve("P-224")


@pytest.fixture(scope="session")
def toy_curve() -> CurveParameters:
    """y^2 = x^3 + x + 1 over GF(23).

    28 points (cyclic), so n = 7 and h = 4. G = 4 * (0, 1) = (13, 16).
    b = 1 is a square, so t in {0, 1, 22} maps directly to (0, 1).
    """
    return CurveParameters(name="toy23-1", p=23, a=1, b=1, n=7, h=4, generator=(13, 16))


@pytest.fixture(scope="session")
def toy_curve_nonsquare_b() -> CurveParameters:
    """y^2 = x^3 + x + 5 over GF(23).

    22 points (cyclic), so n = 11 and h = 2. G = 2 * (3, 9) = (18, 6).
    b = 5 is not a square mod 23, so t = 0 has no valid encoding.
    """
    return CurveParameters(name="toy23-5", p=23, a=1, b=5, n=11, h=2, generator=(18, 6))
