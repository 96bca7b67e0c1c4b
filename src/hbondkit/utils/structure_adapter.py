"""Map in-memory Biopython structures onto plain ``Atom`` records.

The detector depends only on ``Atom``; hosts holding a ``Bio.PDB`` object
(already parsed elsewhere) use ``atoms_from_structure`` to cross that
boundary. No file reading happens here.
"""
from __future__ import annotations
from typing import List, Union

from Bio.PDB.Chain import Chain
from Bio.PDB.Model import Model
from Bio.PDB.Structure import Structure
from loguru import logger

from ..analysis.models import Atom
from ..analysis.residue_tables import WATER_NAMES


def _element_of(bio_atom) -> str:
    element = (getattr(bio_atom, 'element', '') or '').strip().upper()
    if element and element != 'X':
        return element
    # Fallback: first alphabetic character of the atom name ("1HB" -> "H")
    for ch in bio_atom.get_name():
        if ch.isalpha():
            return ch.upper()
    return 'X'


def atoms_from_structure(entity: Union[Structure, Model, Chain], model_index: int = 0,
                         exclude_waters: bool = False) -> List[Atom]:
    """Flatten a Biopython Structure / Model / Chain into Atom records.

    For a Structure only the model at ``model_index`` is used. Residue order
    and atom order follow the Biopython hierarchy, which keeps detection
    output deterministic. Blank chain ids are kept as an empty string so they
    never merge with a real chain.
    """
    if isinstance(entity, Structure):
        models = list(entity)
        if not models:
            logger.warning("Structure has no models")
            return []
        entity = models[model_index]
    chains = [entity] if isinstance(entity, Chain) else list(entity)

    atoms: List[Atom] = []
    for chain in chains:
        chain_id = str(chain.get_id()).strip()
        for residue in chain:
            resname = residue.get_resname().strip()
            if exclude_waters and resname in WATER_NAMES:
                continue
            res_seq = int(residue.get_id()[1])
            for bio_atom in residue.get_atoms():
                x, y, z = (float(c) for c in bio_atom.get_coord())
                atoms.append(Atom(
                    chain_id=chain_id,
                    residue_seq=res_seq,
                    residue_name=resname,
                    atom_name=bio_atom.get_name(),
                    element=_element_of(bio_atom),
                    position=(x, y, z),
                ))
    return atoms


__all__ = ['atoms_from_structure']
