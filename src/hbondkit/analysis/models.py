"""Value types shared by the hydrogen bond detection pipeline.

Atoms come in from the host application (already extracted from whatever
structure model it uses); hydrogen bonds go out as immutable records that
convert to plain dicts for JSON / CSV export. Nothing here holds state
between detection calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

Position = Tuple[float, float, float]


class Strength(str, Enum):
    """Coarse hydrogen bond strength bucket."""
    STRONG = 'strong'
    MODERATE = 'moderate'
    WEAK = 'weak'


@dataclass(frozen=True, slots=True)
class Atom:
    """Single atom record supplied by the host structure source."""
    chain_id: str
    residue_seq: int
    residue_name: str
    atom_name: str
    element: str  # heavy-atom symbol or 'H'
    position: Position

    def __post_init__(self):
        if not isinstance(self.position, tuple):
            object.__setattr__(self, 'position', tuple(float(c) for c in self.position))

    @property
    def residue_key(self) -> Tuple[str, int]:
        return (self.chain_id, self.residue_seq)


@dataclass(frozen=True, slots=True)
class ResidueRef:
    chain_id: str
    residue_seq: int

    @property
    def key(self) -> Tuple[str, int]:
        return (self.chain_id, self.residue_seq)

    @classmethod
    def coerce(cls, value: Any) -> 'ResidueRef':
        """Accept a ResidueRef, a (chain, seq) pair or a mapping with chain/seq keys."""
        if isinstance(value, ResidueRef):
            return value
        if isinstance(value, Mapping):
            chain = value.get('chain_id', value.get('chainId'))
            seq = value.get('residue_seq', value.get('residueSeq'))
            if chain is None or seq is None:
                raise ValueError(f"selected residue mapping needs chain and sequence: {dict(value)}")
            return cls(str(chain), int(seq))
        chain, seq = value
        return cls(str(chain), int(seq))


@dataclass(frozen=True)
class DetectionOptions:
    """Per-call detection parameters.

    Bonds shorter than 2.5 Å are never reported, so ``max_distance`` is
    expected to be at least that. The radius filter engages only when both
    ``radius_from_selection`` and ``selected_residue`` are given.
    ``infer_hydrogens`` places an amide H on backbone N donors that have no
    modeled hydrogen. ``include_water=False`` drops water residues from
    both the donor and acceptor side.
    """
    max_distance: float = 3.5
    min_angle: float = 120.0
    radius_from_selection: Optional[float] = None
    selected_residue: Optional[ResidueRef] = None
    infer_hydrogens: bool = False
    include_water: bool = True

    def __post_init__(self):
        if not self.max_distance > 0:
            raise ValueError(f"max_distance must be positive, got {self.max_distance}")
        if not 0.0 <= self.min_angle <= 180.0:
            raise ValueError(f"min_angle must lie within [0, 180], got {self.min_angle}")
        if self.radius_from_selection is not None and not self.radius_from_selection >= 0:
            raise ValueError(f"radius_from_selection must be non-negative, got {self.radius_from_selection}")
        if self.selected_residue is not None and not isinstance(self.selected_residue, ResidueRef):
            # frozen dataclass: bypass __setattr__ to normalize tuples / dicts
            object.__setattr__(self, 'selected_residue', ResidueRef.coerce(self.selected_residue))

    @property
    def uses_radius_filter(self) -> bool:
        return bool(self.radius_from_selection) and self.selected_residue is not None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> 'DetectionOptions':
        """Build options from a plain dict (snake_case or camelCase keys)."""
        def pick(*keys):
            for k in keys:
                if k in data and data[k] is not None:
                    return data[k]
            return None

        kwargs: Dict[str, Any] = {}
        max_distance = pick('max_distance', 'maxDistance')
        min_angle = pick('min_angle', 'minAngle')
        radius = pick('radius_from_selection', 'radiusFromSelection')
        selected = pick('selected_residue', 'selectedResidue')
        infer = pick('infer_hydrogens', 'inferHydrogens')
        include_water = pick('include_water', 'includeWater', 'includeWaterMediated')
        if max_distance is not None:
            kwargs['max_distance'] = float(max_distance)
        if min_angle is not None:
            kwargs['min_angle'] = float(min_angle)
        if radius is not None:
            kwargs['radius_from_selection'] = float(radius)
        if selected is not None:
            kwargs['selected_residue'] = ResidueRef.coerce(selected)
        if infer is not None:
            kwargs['infer_hydrogens'] = bool(infer)
        if include_water is not None:
            kwargs['include_water'] = bool(include_water)
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class BondEndpoint:
    chain_id: str
    residue_seq: int
    residue_name: str
    atom_name: str
    position: Position

    @classmethod
    def from_atom(cls, atom: Atom) -> 'BondEndpoint':
        return cls(atom.chain_id, atom.residue_seq, atom.residue_name, atom.atom_name, tuple(atom.position))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'chain_id': self.chain_id,
            'residue_seq': self.residue_seq,
            'residue_name': self.residue_name,
            'atom_name': self.atom_name,
            'position': list(self.position),
        }


@dataclass(frozen=True, slots=True)
class HydrogenRef:
    atom_name: str
    position: Position
    inferred: bool = False  # placed geometrically, not read from the structure

    def to_dict(self) -> Dict[str, Any]:
        return {'atom_name': self.atom_name, 'position': list(self.position), 'inferred': self.inferred}


@dataclass(frozen=True)
class HydrogenBond:
    """Represents a detected hydrogen bond."""
    id: str
    donor: BondEndpoint
    hydrogen: Optional[HydrogenRef]
    acceptor: BondEndpoint
    distance: float  # donor heavy atom to acceptor heavy atom, Å
    angle: float  # D-H...A in degrees; 180.0 when no explicit hydrogen was found
    strength: Strength

    @property
    def donor_residue(self) -> str:
        return f"{self.donor.residue_name}{self.donor.residue_seq}"

    @property
    def acceptor_residue(self) -> str:
        return f"{self.acceptor.residue_name}{self.acceptor.residue_seq}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'donor': self.donor.to_dict(),
            'hydrogen': self.hydrogen.to_dict() if self.hydrogen else None,
            'acceptor': self.acceptor.to_dict(),
            'distance': self.distance,
            'angle': self.angle,
            'strength': self.strength.value,
        }


__all__ = [
    'Atom', 'ResidueRef', 'DetectionOptions', 'BondEndpoint', 'HydrogenRef',
    'HydrogenBond', 'Strength', 'Position',
]
