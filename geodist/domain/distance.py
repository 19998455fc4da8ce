"""
Ellipsoidal distance using Vincenty's inverse formula on WGS-84.

Iteration
---------
Reduce both latitudes by the flattening, start with lambda equal to the
longitude difference and refine it until two successive values differ by
less than ``CONVERGENCE_THRESHOLD`` radians.  The distance then follows from
the series terms A, B and delta-sigma.

Failure mode
------------
Nearly antipodal pairs make lambda oscillate instead of converge.  After
``MAX_ITERATIONS`` steps ``ConvergenceFailure`` is raised; there is no
fallback algorithm.

Complexity: O(MAX_ITERATIONS) per call, typically fewer than 10 steps.
"""

from __future__ import annotations

import logging
import math

from .entities import ConvergenceFailure, Coordinate

logger = logging.getLogger(__name__)

RADIUS_AT_EQUATOR_M = 6_378_137.0
FLATTENING = 1 / 298.257_223_563
RADIUS_AT_POLES_M = (1 - FLATTENING) * RADIUS_AT_EQUATOR_M

MAX_ITERATIONS = 200
CONVERGENCE_THRESHOLD = 1e-12
PRECISION = 6


def round_distance(value: float, precision: int = PRECISION) -> float:
    """Round half away from zero to *precision* fractional digits."""
    p = 10.0**precision
    return math.copysign(math.floor(abs(value) * p + 0.5), value) / p


def vincenty_km(
    c1: Coordinate,
    c2: Coordinate,
    max_iterations: int = MAX_ITERATIONS,
    threshold: float = CONVERGENCE_THRESHOLD,
) -> float:
    """Return the geodesic distance in **km** between two coordinates."""
    u1 = math.atan((1 - FLATTENING) * math.tan(math.radians(c1.latitude)))
    u2 = math.atan((1 - FLATTENING) * math.tan(math.radians(c2.latitude)))
    sin_u1, cos_u1 = math.sin(u1), math.cos(u1)
    sin_u2, cos_u2 = math.sin(u2), math.cos(u2)

    init_lambda = math.radians(c2.longitude - c1.longitude)
    lam = init_lambda

    for _ in range(max_iterations):
        sin_lambda, cos_lambda = math.sin(lam), math.cos(lam)
        sin_sigma = math.sqrt(
            (cos_u2 * sin_lambda) ** 2
            + (cos_u1 * sin_u2 - sin_u1 * cos_u2 * cos_lambda) ** 2
        )
        if sin_sigma == 0.0:
            return 0.0  # coincident points

        cos_sigma = sin_u1 * sin_u2 + cos_u1 * cos_u2 * cos_lambda
        sigma = math.atan2(sin_sigma, cos_sigma)
        sin_alpha = cos_u1 * cos_u2 * sin_lambda / sin_sigma
        cos_sq_alpha = 1 - sin_alpha**2

        if cos_sq_alpha == 0.0:
            cos2_sigma_m = 0.0  # equatorial line
        else:
            cos2_sigma_m = cos_sigma - 2 * sin_u1 * sin_u2 / cos_sq_alpha

        c = (FLATTENING / 16) * cos_sq_alpha * (4 + FLATTENING - 3 * cos_sq_alpha)
        new_lambda = init_lambda + (1 - c) * FLATTENING * sin_alpha * (
            sigma
            + c * sin_sigma * (
                cos2_sigma_m + c * cos_sigma * (2 * cos2_sigma_m**2 - 1)
            )
        )

        if abs(new_lambda - lam) < threshold:
            return round_distance(
                _evaluate(cos_sq_alpha, sin_sigma, cos2_sigma_m, cos_sigma, sigma)
            )
        lam = new_lambda

    logger.warning(
        "Vincenty did not converge between (%s) and (%s) after %d iterations",
        c1, c2, max_iterations,
    )
    raise ConvergenceFailure(max_iterations)


def _evaluate(
    cos_sq_alpha: float,
    sin_sigma: float,
    cos2_sigma_m: float,
    cos_sigma: float,
    sigma: float,
) -> float:
    """Series expansion for the converged state.  Returns km, unrounded."""
    u_sq = (
        cos_sq_alpha
        * (RADIUS_AT_EQUATOR_M**2 - RADIUS_AT_POLES_M**2)
        / RADIUS_AT_POLES_M**2
    )
    a = 1 + u_sq / 16384 * (4096 + u_sq * (-768 + u_sq * (320 - 175 * u_sq)))
    b = u_sq / 1024 * (256 + u_sq * (-128 + u_sq * (74 - 47 * u_sq)))
    delta_sigma = b * sin_sigma * (
        cos2_sigma_m
        + b / 4 * (
            cos_sigma * (2 * cos2_sigma_m**2 - 1)
            - b / 6
            * cos2_sigma_m
            * (4 * sin_sigma**2 - 3)
            * (4 * cos2_sigma_m**2 - 3)
        )
    )
    return RADIUS_AT_POLES_M * a * (sigma - delta_sigma) / 1000
