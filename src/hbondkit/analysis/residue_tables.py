"""Static donor / acceptor lookup tables.

Residue name -> atom names able to donate or accept a hydrogen bond in the side
chain. Backbone N / O are handled generically for every residue and are kept
in separate constants. Residues missing from these tables (ligands,
nucleotides, modified residues) contribute backbone atoms only.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import FrozenSet, Mapping

DONOR_ELEMENTS: FrozenSet[str] = frozenset({'N', 'O', 'S'})
ACCEPTOR_ELEMENTS: FrozenSet[str] = frozenset({'N', 'O', 'S', 'F'})

BACKBONE_DONOR = 'N'
BACKBONE_ACCEPTOR = 'O'

WATER_NAMES: FrozenSet[str] = frozenset({'HOH', 'WAT', 'H2O', 'DOD'})

RESIDUE_DONOR_ATOMS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    # Charged / polar side chains
    'ARG': frozenset({'NE', 'NH1', 'NH2'}),
    'ASN': frozenset({'ND2'}),
    'GLN': frozenset({'NE2'}),
    'HIS': frozenset({'ND1', 'NE2'}),
    'LYS': frozenset({'NZ'}),
    # Hydroxyl
    'SER': frozenset({'OG'}),
    'THR': frozenset({'OG1'}),
    'TYR': frozenset({'OH'}),
    'TRP': frozenset({'NE1'}),
    'CYS': frozenset({'SG'}),
})

RESIDUE_ACCEPTOR_ATOMS: Mapping[str, FrozenSet[str]] = MappingProxyType({
    'ASP': frozenset({'OD1', 'OD2'}),
    'GLU': frozenset({'OE1', 'OE2'}),
    'ASN': frozenset({'OD1'}),
    'GLN': frozenset({'OE1'}),
    'SER': frozenset({'OG'}),
    'THR': frozenset({'OG1'}),
    'TYR': frozenset({'OH'}),
    # Aromatic nitrogens
    'HIS': frozenset({'ND1', 'NE2'}),
    'TRP': frozenset({'NE1'}),
    # Sulfur
    'MET': frozenset({'SD'}),
    'CYS': frozenset({'SG'}),
})

__all__ = [
    'DONOR_ELEMENTS', 'ACCEPTOR_ELEMENTS', 'BACKBONE_DONOR', 'BACKBONE_ACCEPTOR',
    'RESIDUE_DONOR_ATOMS', 'RESIDUE_ACCEPTOR_ATOMS',
]
