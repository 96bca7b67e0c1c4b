"""hbondkit: geometric hydrogen bond detection for 3D molecular structures."""

from .analysis.hydrogen_bonds import HydrogenBondDetector, detect
from .analysis.models import (
    Atom,
    BondEndpoint,
    DetectionOptions,
    HydrogenBond,
    HydrogenRef,
    ResidueRef,
    Strength,
)

__version__ = "1.0.0"

__all__ = [
    'Atom', 'BondEndpoint', 'DetectionOptions', 'HydrogenBond', 'HydrogenRef',
    'ResidueRef', 'Strength', 'HydrogenBondDetector', 'detect',
]
