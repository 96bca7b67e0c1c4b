"""Geometric evaluation of a single donor / acceptor pair."""
from __future__ import annotations

from typing import Optional, Sequence

from ..geometry.core import angle as _angle
from ..geometry.core import distance as _distance
from .hydrogen_locator import HydrogenIndex, find_bonded_hydrogen, infer_amide_hydrogen
from .models import Atom, BondEndpoint, DetectionOptions, HydrogenBond, HydrogenRef
from .strength import classify_strength

# Donor-acceptor separations below this are treated as clashes, not bonds.
MIN_DISTANCE = 2.5
# Assumed D-H...A angle when the donor has no modeled hydrogen.
IDEAL_LINEAR_ANGLE = 180.0


def evaluate(donor: Atom, acceptor: Atom, all_atoms: Sequence[Atom], options: DetectionOptions,
             hydrogen_index: Optional[HydrogenIndex] = None, bond_id: str = '') -> Optional[HydrogenBond]:
    """Return a HydrogenBond if the pair passes distance and angle criteria.

    Args:
        donor: candidate donor heavy atom
        acceptor: candidate acceptor atom
        all_atoms: full atom collection, scanned for the donor's hydrogen
        options: distance / angle thresholds
        hydrogen_index: prebuilt per-residue hydrogen lookup; when given it is
            used instead of scanning ``all_atoms``
        bond_id: identifier stamped on the resulting record
    """
    if donor.chain_id == acceptor.chain_id and donor.residue_seq == acceptor.residue_seq:
        return None

    dist = _distance(donor.position, acceptor.position)
    # NaN fails this check
    if not MIN_DISTANCE <= dist <= options.max_distance:
        return None

    if hydrogen_index is not None:
        hydrogen = hydrogen_index.find(donor)
    else:
        hydrogen = find_bonded_hydrogen(donor, all_atoms)

    inferred = False
    if hydrogen is None and options.infer_hydrogens:
        if hydrogen_index is not None:
            hydrogen = hydrogen_index.infer(donor)
        else:
            hydrogen = infer_amide_hydrogen(donor, all_atoms)
        inferred = hydrogen is not None

    if hydrogen is not None:
        dha = _angle(hydrogen.position, donor.position, acceptor.position)
    else:
        dha = IDEAL_LINEAR_ANGLE

    if dha < options.min_angle:
        return None

    return HydrogenBond(
        id=bond_id,
        donor=BondEndpoint.from_atom(donor),
        hydrogen=HydrogenRef(hydrogen.atom_name, tuple(hydrogen.position), inferred) if hydrogen is not None else None,
        acceptor=BondEndpoint.from_atom(acceptor),
        distance=dist,
        angle=dha,
        strength=classify_strength(dist, dha),
    )


__all__ = ['evaluate', 'MIN_DISTANCE', 'IDEAL_LINEAR_ANGLE']
