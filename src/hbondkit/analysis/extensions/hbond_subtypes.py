"""Hydrogen bond subtype classification extension.

Reads already detected hydrogen bonds and classifies them into subtypes:
  - backbone_backbone (donor and acceptor are both main-chain N / O)
  - backbone_sidechain (one main-chain atom, one side-chain atom)
  - sidechain_sidechain (neither atom in the backbone)
  - ligand (either residue is not one of the 20 canonical amino acids)
  - water_mediated (either residue is a water: HOH, WAT, H2O, DOD)

The bond list is left untouched; the result is a summary dict plus an
annotated copy:
{
  'counts': {subtype: count, ...},
  'total_hbonds': int,
  'fractions': {subtype: fraction},
  'annotated': [ { bond fields + 'subtype': ... }, ... ]
}
"""
from typing import Any, Dict, Iterable, List

from ..models import HydrogenBond
from ..residue_tables import WATER_NAMES

CANONICAL_AA = {
    'ALA','ARG','ASN','ASP','CYS','GLN','GLU','GLY','HIS','ILE','LEU','LYS','MET','PHE','PRO','SER','THR','TRP','TYR','VAL'
}
BACKBONE_ATOMS = {'N', 'O', 'C', 'CA'}
SUBTYPES = ('backbone_backbone', 'backbone_sidechain', 'sidechain_sidechain', 'ligand', 'water_mediated')


def _endpoint(hb: Any, role: str) -> Dict[str, Any]:
    if isinstance(hb, HydrogenBond):
        return getattr(hb, role).to_dict()
    return hb.get(role) or {}


def classify_subtype(donor_residue: str, donor_atom: str, acceptor_residue: str, acceptor_atom: str) -> str:
    res1 = donor_residue.upper()
    res2 = acceptor_residue.upper()
    if res1 in WATER_NAMES or res2 in WATER_NAMES:
        return 'water_mediated'
    if res1 not in CANONICAL_AA or res2 not in CANONICAL_AA:
        return 'ligand'
    donor_backbone = donor_atom in BACKBONE_ATOMS
    acceptor_backbone = acceptor_atom in BACKBONE_ATOMS
    if donor_backbone and acceptor_backbone:
        return 'backbone_backbone'
    if donor_backbone != acceptor_backbone:
        return 'backbone_sidechain'
    return 'sidechain_sidechain'


def compute(hbonds: Iterable[Any]) -> Dict[str, Any]:
    """Classify HydrogenBond records (or their dict form) into subtypes."""
    counts = {k: 0 for k in SUBTYPES}
    annotated: List[Dict[str, Any]] = []
    for hb in hbonds:
        donor = _endpoint(hb, 'donor')
        acceptor = _endpoint(hb, 'acceptor')
        subtype = classify_subtype(
            donor.get('residue_name', ''), donor.get('atom_name', ''),
            acceptor.get('residue_name', ''), acceptor.get('atom_name', ''),
        )
        counts[subtype] += 1
        entry = hb.to_dict() if isinstance(hb, HydrogenBond) else dict(hb)
        entry['subtype'] = subtype
        annotated.append(entry)
    total = len(annotated)
    return {
        'counts': counts,
        'total_hbonds': total,
        'fractions': {k: (counts[k] / total if total else 0.0) for k in counts},
        'annotated': annotated,
    }
