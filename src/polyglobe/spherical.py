"""Weighted spherical averages on the unit sphere.

Implements the fixed-point iteration of Buss & Fillmore: start from the
normalised linear blend, map every input point into the tangent plane at
the current estimate, average there, and map the mean back onto the sphere.
The step shrinks quickly, so a handful of iterations reach ``1e-6``.

All functions broadcast over leading axes, so a whole lattice of weight
rows is placed in one call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import MalformedWeights, PlacementDidNotConverge

logger = logging.getLogger(__name__)

WEIGHT_SUM_TOLERANCE = 1e-6


@dataclass(frozen=True)
class PlacementConfig:
    """Stopping rule for :func:`spherical_average`."""

    tolerance: float = 1e-6
    max_iterations: int = 64

    def __post_init__(self) -> None:
        if self.tolerance <= 0:
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations}")


DEFAULT_CONFIG = PlacementConfig()


# ═══════════════════════════════════════════════════════════════════
# Tangent-space maps
# ═══════════════════════════════════════════════════════════════════

def sphere_ln(q: np.ndarray, p: np.ndarray) -> np.ndarray:
    """Log map: tangent vector at *q* pointing to *p*, length = arc angle.

    ``ln_q(p) = θ / sin θ · (p − q cos θ)`` with θ the angle between the
    two unit vectors; the limit at θ = 0 is the zero vector.
    """
    q = np.asarray(q, dtype=float)
    p = np.asarray(p, dtype=float)
    cos_theta = np.clip(np.sum(p * q, axis=-1, keepdims=True), -1.0, 1.0)
    theta = np.arccos(cos_theta)
    # np.sinc(x) = sin(πx) / (πx), finite at 0
    scale = 1.0 / np.sinc(theta / np.pi)
    return scale * (p - q * cos_theta)


def sphere_exp(q: np.ndarray, u: np.ndarray) -> np.ndarray:
    """Exp map: walk from *q* along tangent vector *u* for ``|u|`` radians."""
    q = np.asarray(q, dtype=float)
    u = np.asarray(u, dtype=float)
    length = np.linalg.norm(u, axis=-1, keepdims=True)
    return q * np.cos(length) + np.sinc(length / np.pi) * u


def _normalise(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v, axis=-1, keepdims=True)


def _check_weights(weights: np.ndarray, points: np.ndarray) -> None:
    if points.ndim != 2 or points.shape[1] != 3:
        raise MalformedWeights(f"points must have shape (k, 3), got {points.shape}")
    if weights.ndim not in (1, 2) or weights.shape[-1] != points.shape[0]:
        raise MalformedWeights(
            f"weights of shape {weights.shape} do not match {points.shape[0]} points"
        )
    if np.any(weights < 0):
        raise MalformedWeights("weights must be non-negative")
    sums = weights.sum(axis=-1)
    if np.any(np.abs(sums - 1.0) > WEIGHT_SUM_TOLERANCE):
        worst = float(sums.flat[np.argmax(np.abs(sums - 1.0))])
        raise MalformedWeights(f"weights must sum to 1, got {worst!r}")


# ═══════════════════════════════════════════════════════════════════
# Averaging
# ═══════════════════════════════════════════════════════════════════

def spherical_average(
    weights,
    points,
    config: Optional[PlacementConfig] = None,
) -> np.ndarray:
    """Weighted spherical average of unit *points*.

    Parameters
    ----------
    weights : array_like
        Shape ``(k,)`` for one average or ``(M, k)`` for *M* averages over
        the same points.  Non-negative, each row summing to 1.
    points : array_like
        Shape ``(k, 3)``, unit length.
    config : PlacementConfig, optional
        Convergence tolerance and iteration budget.

    Returns
    -------
    numpy.ndarray
        Unit vector(s) of shape ``(3,)`` or ``(M, 3)``.
    """
    config = config or DEFAULT_CONFIG
    weights = np.asarray(weights, dtype=float)
    points = np.asarray(points, dtype=float)
    if __debug__:
        _check_weights(weights, points)

    single = weights.ndim == 1
    w = np.atleast_2d(weights)

    q = _normalise(w @ points)
    for iteration in range(1, config.max_iterations + 1):
        tangents = sphere_ln(q[:, None, :], points[None, :, :])
        u = np.einsum("mk,mkd->md", w, tangents)
        q = _normalise(sphere_exp(q, u))
        step = float(np.max(np.linalg.norm(u, axis=-1)))
        if step < config.tolerance:
            logger.debug(
                "spherical average of %d point set(s) converged in %d iteration(s)",
                w.shape[0], iteration,
            )
            return q[0] if single else q

    raise PlacementDidNotConverge(
        f"spherical average did not converge in {config.max_iterations} "
        f"iterations (last step {step:.3e}, tolerance {config.tolerance:.1e})"
    )


def slerp_3(w1: float, p1, w2: float, p2, w3: float, p3) -> np.ndarray:
    """Spherical average of three points, the barycentric case."""
    return spherical_average(
        np.array([w1, w2, w3], dtype=float),
        np.stack([np.asarray(p1, float), np.asarray(p2, float), np.asarray(p3, float)]),
    )
