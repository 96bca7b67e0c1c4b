"""Hydrogen bond strength buckets.

Jeffrey-style donor-acceptor geometry thresholds (first matching rule wins):

    strong    distance < 2.8 Å and angle > 150°
    moderate  distance < 3.2 Å and angle > 135°
    weak      everything else
"""
from __future__ import annotations

from .models import Strength

STRONG_MAX_DISTANCE = 2.8
STRONG_MIN_ANGLE = 150.0
MODERATE_MAX_DISTANCE = 3.2
MODERATE_MIN_ANGLE = 135.0


def classify_strength(distance: float, angle: float) -> Strength:
    if distance < STRONG_MAX_DISTANCE and angle > STRONG_MIN_ANGLE:
        return Strength.STRONG
    if distance < MODERATE_MAX_DISTANCE and angle > MODERATE_MIN_ANGLE:
        return Strength.MODERATE
    return Strength.WEAK


__all__ = ['classify_strength']
