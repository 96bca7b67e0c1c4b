"""Restrict candidate atoms to a sphere around a selected residue."""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..geometry.core import centroid, distance, is_finite_position
from .models import Atom, Position, ResidueRef


def residue_centroid(residue: ResidueRef, all_atoms: Iterable[Atom]) -> Optional[Position]:
    """Mean position of every atom in ``residue``; None if it has no atoms."""
    ref = ResidueRef.coerce(residue)
    return centroid(
        a.position for a in all_atoms
        if a.chain_id == ref.chain_id and a.residue_seq == ref.residue_seq and is_finite_position(a.position)
    )


def filter_by_radius(atoms: Sequence[Atom], center_residue: ResidueRef, radius: float,
                     all_atoms_for_centroid: Iterable[Atom]) -> List[Atom]:
    """Keep atoms within ``radius`` Å of the centroid of ``center_residue``.

    A residue absent from the structure leaves ``atoms`` untouched.
    """
    center = residue_centroid(center_residue, all_atoms_for_centroid)
    if center is None:
        return list(atoms)
    return [a for a in atoms if distance(a.position, center) <= radius]


__all__ = ['residue_centroid', 'filter_by_radius']
