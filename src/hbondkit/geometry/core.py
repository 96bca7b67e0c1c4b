"""Geometry primitives for hydrogen bond detection.

Scalar helpers (distance, angle, centroid) are used by the per-pair evaluator;
``pairwise_within_cutoff`` is the vectorized candidate generator behind the
optional spatial index. It is NumPy-first with a SciPy KD-tree path for large
inputs. Coordinates stay float64 so that candidate pruning agrees with the
scalar distance checks at the cutoff boundary.
"""
from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence, Tuple

import numpy as _np
from scipy.spatial import cKDTree as _KDTree

Vec3 = Sequence[float]

# Above this many raw pairs the KD-tree beats dense broadcasting.
KDTREE_PAIR_THRESHOLD = 25_000


def is_finite_position(p: Vec3) -> bool:
    """True when ``p`` has exactly three finite components."""
    try:
        if len(p) != 3:
            return False
        return all(math.isfinite(float(c)) for c in p)
    except (TypeError, ValueError):
        return False


def distance(p1: Vec3, p2: Vec3) -> float:
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    dz = p2[2] - p1[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def angle(vertex: Vec3, arm1: Vec3, arm2: Vec3) -> float:
    """Angle at ``vertex`` between rays to ``arm1`` and ``arm2`` in degrees.

    Returns 0.0 when either ray has zero length.
    """
    v1 = (arm1[0] - vertex[0], arm1[1] - vertex[1], arm1[2] - vertex[2])
    v2 = (arm2[0] - vertex[0], arm2[1] - vertex[1], arm2[2] - vertex[2])
    mag1 = math.sqrt(v1[0] * v1[0] + v1[1] * v1[1] + v1[2] * v1[2])
    mag2 = math.sqrt(v2[0] * v2[0] + v2[1] * v2[1] + v2[2] * v2[2])
    if mag1 == 0.0 or mag2 == 0.0:
        return 0.0
    cos_angle = (v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2]) / (mag1 * mag2)
    cos_angle = max(-1.0, min(1.0, cos_angle))
    return math.degrees(math.acos(cos_angle))


def centroid(points: Iterable[Vec3]) -> Optional[Tuple[float, float, float]]:
    """Arithmetic mean of ``points``; None when there are none."""
    sx = sy = sz = 0.0
    count = 0
    for p in points:
        sx += p[0]
        sy += p[1]
        sz += p[2]
        count += 1
    if count == 0:
        return None
    return (sx / count, sy / count, sz / count)


def as_f64(a) -> _np.ndarray:
    return _np.asarray(a, dtype=_np.float64).reshape(-1, 3)


def uses_kdtree(na: int, nb: int, use_kdtree: bool = True,
                kdtree_threshold: int = KDTREE_PAIR_THRESHOLD) -> bool:
    return bool(use_kdtree) and na > 0 and nb > 0 and na * nb > kdtree_threshold


def pairwise_within_cutoff(coords_a, coords_b, cutoff: float, use_kdtree: bool = True,
                           kdtree_threshold: int = KDTREE_PAIR_THRESHOLD) -> Tuple[_np.ndarray, _np.ndarray]:
    """Return index arrays (ia, ib) of all pairs with distance <= cutoff.

    The KD-tree path runs when ``use_kdtree`` is set and the pair count
    exceeds ``kdtree_threshold``; see ``uses_kdtree``.

    Pairs are sorted by ``ia`` then ``ib`` regardless of the path taken, so the
    caller sees the same order a nested loop over A then B would give.
    """
    A = as_f64(coords_a)
    B = as_f64(coords_b)
    if A.shape[0] == 0 or B.shape[0] == 0:
        return _np.empty(0, dtype=_np.int64), _np.empty(0, dtype=_np.int64)
    na, nb = A.shape[0], B.shape[0]
    if uses_kdtree(na, nb, use_kdtree, kdtree_threshold):
        tree_a = _KDTree(A)
        tree_b = _KDTree(B)
        # structured array with fields i, j, v
        sparse = tree_a.sparse_distance_matrix(tree_b, cutoff, output_type='ndarray')
        if sparse.size == 0:
            return _np.empty(0, dtype=_np.int64), _np.empty(0, dtype=_np.int64)
        ia = sparse['i'].astype(_np.int64)
        ib = sparse['j'].astype(_np.int64)
    else:
        diff = A[:, None, :] - B[None, :, :]
        dist2 = _np.sum(diff * diff, axis=-1)
        ia, ib = _np.nonzero(dist2 <= cutoff * cutoff)
        ia = ia.astype(_np.int64)
        ib = ib.astype(_np.int64)
    order = _np.lexsort((ib, ia))
    return ia[order], ib[order]


__all__ = [
    'is_finite_position',
    'distance',
    'angle',
    'centroid',
    'pairwise_within_cutoff',
    'uses_kdtree',
    'KDTREE_PAIR_THRESHOLD',
]
