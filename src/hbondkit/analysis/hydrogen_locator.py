"""Locate explicitly modeled hydrogens bonded to donor atoms.

Most experimental protein structures carry no hydrogens at all, so "not
found" is the common, non-error outcome. When several hydrogens of the donor
residue lie within bonding distance the first one in iteration order wins;
no bond-graph disambiguation is attempted.

On request, a backbone amide hydrogen can be inferred instead: it sits
``AMIDE_NH_LENGTH`` from N along the CA->N direction, pointing away from CA.
"""
from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from ..geometry.core import distance, is_finite_position
from .models import Atom, Position
from .residue_tables import BACKBONE_DONOR

# Typical X-H covalent bond length in Å
BOND_LENGTH = 1.2
AMIDE_NH_LENGTH = 1.01


def is_hydrogen(atom: Atom) -> bool:
    return atom.element == 'H'


def find_bonded_hydrogen(donor: Atom, all_atoms: Iterable[Atom]) -> Optional[Atom]:
    """Return the first hydrogen of the donor's residue within ``BOND_LENGTH``."""
    for atom in all_atoms:
        if not is_hydrogen(atom):
            continue
        if atom.chain_id != donor.chain_id or atom.residue_seq != donor.residue_seq:
            continue
        if not is_finite_position(atom.position):
            continue
        if distance(donor.position, atom.position) <= BOND_LENGTH:
            return atom
    return None


def _is_amide_nitrogen(atom: Atom) -> bool:
    return atom.atom_name == BACKBONE_DONOR and atom.element == 'N'


def _place_amide_hydrogen(nitrogen: Atom, ca_position: Position) -> Optional[Atom]:
    d = [n - c for n, c in zip(nitrogen.position, ca_position)]
    mag = distance(nitrogen.position, ca_position)
    if mag == 0.0:
        return None
    pos = tuple(n + (x / mag) * AMIDE_NH_LENGTH for n, x in zip(nitrogen.position, d))
    return Atom(nitrogen.chain_id, nitrogen.residue_seq, nitrogen.residue_name, 'H', 'H', pos)


def infer_amide_hydrogen(donor: Atom, all_atoms: Iterable[Atom]) -> Optional[Atom]:
    """Place the amide H of a backbone N donor; None for other donors or without a CA."""
    if not _is_amide_nitrogen(donor):
        return None
    for atom in all_atoms:
        if (atom.atom_name == 'CA' and atom.residue_key == donor.residue_key
                and is_finite_position(atom.position)):
            return _place_amide_hydrogen(donor, atom.position)
    return None


class HydrogenIndex:
    """Hydrogens grouped by (chain, residue) for repeated donor lookups.

    Built once per detection run; ``find`` gives the same answer as
    ``find_bonded_hydrogen`` over the full atom sequence because each
    group keeps the input order. ``infer`` mirrors ``infer_amide_hydrogen``.
    """

    def __init__(self, atoms: Iterable[Atom]):
        groups: Dict[Tuple[str, int], List[Atom]] = defaultdict(list)
        ca_positions: Dict[Tuple[str, int], Position] = {}
        for atom in atoms:
            if not is_finite_position(atom.position):
                continue
            if is_hydrogen(atom):
                groups[atom.residue_key].append(atom)
            elif atom.atom_name == 'CA':
                ca_positions.setdefault(atom.residue_key, atom.position)
        self._groups = dict(groups)
        self._ca_positions = ca_positions
        self._cache: Dict[Atom, Optional[Atom]] = {}
        self._inferred: Dict[Atom, Optional[Atom]] = {}

    def __len__(self) -> int:
        return sum(len(v) for v in self._groups.values())

    def find(self, donor: Atom) -> Optional[Atom]:
        if donor in self._cache:
            return self._cache[donor]
        found = None
        for h in self._groups.get(donor.residue_key, ()):
            if distance(donor.position, h.position) <= BOND_LENGTH:
                found = h
                break
        self._cache[donor] = found
        return found

    def infer(self, donor: Atom) -> Optional[Atom]:
        if donor not in self._inferred:
            ca = self._ca_positions.get(donor.residue_key)
            placed = None
            if ca is not None and _is_amide_nitrogen(donor):
                placed = _place_amide_hydrogen(donor, ca)
            self._inferred[donor] = placed
        return self._inferred[donor]


__all__ = [
    'AMIDE_NH_LENGTH', 'BOND_LENGTH', 'find_bonded_hydrogen', 'infer_amide_hydrogen',
    'HydrogenIndex', 'is_hydrogen',
]
