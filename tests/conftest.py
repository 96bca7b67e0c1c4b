"""Test configuration ensuring src package discoverability & settings reset helpers."""
import sys
from pathlib import Path

import numpy as np
import pytest

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from hbondkit.analysis.models import Atom  # noqa: E402
from hbondkit.utils.settings import get_settings  # noqa: E402


def reset_settings_cache():  # convenience for tests toggling env flags
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def make_atom(atom_name, element, residue_seq, position, chain_id='A', residue_name='ALA'):
    return Atom(chain_id=chain_id, residue_seq=residue_seq, residue_name=residue_name,
                atom_name=atom_name, element=element, position=position)


@pytest.fixture
def atom_factory():
    return make_atom


_RESIDUE_CYCLE = ['SER', 'ASP', 'LYS', 'GLY', 'THR', 'GLU', 'ASN', 'TYR', 'ALA', 'HIS']
_SIDECHAIN = {
    'SER': [('OG', 'O')], 'ASP': [('OD1', 'O'), ('OD2', 'O')], 'LYS': [('NZ', 'N')],
    'THR': [('OG1', 'O')], 'GLU': [('OE1', 'O'), ('OE2', 'O')], 'ASN': [('OD1', 'O'), ('ND2', 'N')],
    'TYR': [('OH', 'O')], 'HIS': [('ND1', 'N'), ('NE2', 'N')],
}


def build_synthetic_atoms(n_residues=200, seed=7, with_hydrogens=True):
    """Crowded pseudo-protein: residues on a jittered lattice, backbone plus
    polar side-chain atoms, optional amide hydrogens ~1.0 Å from N."""
    rng = np.random.default_rng(seed)
    atoms = []
    side = int(np.ceil(n_residues ** (1.0 / 3.0)))
    for i in range(n_residues):
        chain = 'A' if i < n_residues // 2 else 'B'
        resname = _RESIDUE_CYCLE[i % len(_RESIDUE_CYCLE)]
        base = np.array([i % side, (i // side) % side, i // (side * side)], dtype=float) * 4.5
        def place(offset):
            p = base + np.asarray(offset) + rng.normal(0.0, 0.6, 3)
            return tuple(float(c) for c in p)
        n_pos = place((0.0, 0.0, 0.0))
        atoms.append(make_atom('N', 'N', i + 1, n_pos, chain, resname))
        if with_hydrogens and i % 3 != 0:
            direction = rng.normal(0.0, 1.0, 3)
            direction /= np.linalg.norm(direction)
            h_pos = tuple(float(c) for c in np.asarray(n_pos) + direction * 1.0)
            atoms.append(make_atom('H', 'H', i + 1, h_pos, chain, resname))
        atoms.append(make_atom('CA', 'C', i + 1, place((1.4, 0.4, 0.0)), chain, resname))
        atoms.append(make_atom('C', 'C', i + 1, place((2.2, 1.4, 0.0)), chain, resname))
        atoms.append(make_atom('O', 'O', i + 1, place((2.0, 2.5, 0.6)), chain, resname))
        for name, element in _SIDECHAIN.get(resname, []):
            atoms.append(make_atom(name, element, i + 1, place((1.5, -1.5, 1.5)), chain, resname))
    return atoms


@pytest.fixture(scope="module")
def synthetic_atoms():
    return build_synthetic_atoms()
