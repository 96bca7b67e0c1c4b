"""Donor / acceptor classification of individual atoms."""
from __future__ import annotations

from .residue_tables import (
    ACCEPTOR_ELEMENTS,
    BACKBONE_ACCEPTOR,
    BACKBONE_DONOR,
    DONOR_ELEMENTS,
    RESIDUE_ACCEPTOR_ATOMS,
    RESIDUE_DONOR_ATOMS,
)

_EMPTY: frozenset = frozenset()


def is_donor(atom_name: str, element: str, residue_name: str) -> bool:
    """Return True if the atom can donate a hydrogen bond.

    The element must be N, O or S and the atom must be either the backbone
    nitrogen or listed as a side-chain donor for its residue.
    """
    if element not in DONOR_ELEMENTS:
        return False
    if atom_name == BACKBONE_DONOR:
        return True
    return atom_name in RESIDUE_DONOR_ATOMS.get(residue_name, _EMPTY)


def is_acceptor(atom_name: str, element: str, residue_name: str) -> bool:
    """Return True if the atom can accept a hydrogen bond (N, O, S, F)."""
    if element not in ACCEPTOR_ELEMENTS:
        return False
    if atom_name == BACKBONE_ACCEPTOR:
        return True
    return atom_name in RESIDUE_ACCEPTOR_ATOMS.get(residue_name, _EMPTY)


__all__ = ['is_donor', 'is_acceptor']
