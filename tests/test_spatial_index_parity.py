"""KD-tree candidate generation must reproduce the full cross-product scan."""
from hbondkit import DetectionOptions, HydrogenBondDetector, ResidueRef


def _run(monkeypatch, atoms, options, use_index):
    from hbondkit.utils.settings import get_settings

    monkeypatch.setenv("HBONDKIT_ENABLE_SPATIAL_INDEX", "1" if use_index else "0")
    monkeypatch.setenv("HBONDKIT_KDTREE_PAIR_THRESHOLD", "0")
    get_settings.cache_clear()
    det = HydrogenBondDetector()
    return det.detect_hydrogen_bonds(atoms, options), det.instrumentation


def test_indexed_and_full_scan_agree(monkeypatch, synthetic_atoms):
    full, full_instr = _run(monkeypatch, synthetic_atoms, DetectionOptions(), use_index=False)
    indexed, idx_instr = _run(monkeypatch, synthetic_atoms, DetectionOptions(), use_index=True)
    assert full == indexed
    assert full_instr['kdtree_used'] is False
    assert idx_instr['kdtree_used'] is True
    assert idx_instr['candidate_pairs'] < full_instr['candidate_pairs'] == full_instr['raw_pairs']


def test_agreement_with_wider_cutoff_and_radius(monkeypatch, synthetic_atoms):
    opts = DetectionOptions(max_distance=4.2, min_angle=100.0,
                            radius_from_selection=12.0, selected_residue=ResidueRef('A', 40))
    full, _ = _run(monkeypatch, synthetic_atoms, opts, use_index=False)
    indexed, _ = _run(monkeypatch, synthetic_atoms, opts, use_index=True)
    assert full == indexed


def _spread_pairs(atom_factory, n):
    atoms = []
    for i in range(n):
        atoms.append(atom_factory('N', 'N', i + 1, (i * 10.0, 0, 0)))
        atoms.append(atom_factory('O', 'O', 1000 + i, (i * 10.0, 0, 3.0)))
    return atoms


def _count_tree_builds(monkeypatch):
    import hbondkit.geometry.core as core

    built = []
    real = core._KDTree

    def counting(data, *args, **kwargs):
        built.append(len(data))
        return real(data, *args, **kwargs)

    monkeypatch.setattr(core, "_KDTree", counting)
    return built


def test_kdtree_flag_matches_tree_actually_built(monkeypatch, atom_factory):
    from hbondkit.utils.settings import get_settings

    built = _count_tree_builds(monkeypatch)
    atoms = _spread_pairs(atom_factory, 80)  # 6400 raw pairs, above the default 5000
    get_settings.cache_clear()
    det = HydrogenBondDetector()
    hbonds = det.detect_hydrogen_bonds(atoms)
    assert det.instrumentation['raw_pairs'] == 6400
    assert det.instrumentation['kdtree_used'] is True
    assert built
    assert len(hbonds) == 80


def test_below_threshold_builds_no_tree(monkeypatch, atom_factory):
    from hbondkit.utils.settings import get_settings

    built = _count_tree_builds(monkeypatch)
    monkeypatch.setenv("HBONDKIT_KDTREE_PAIR_THRESHOLD", "10000")
    get_settings.cache_clear()
    det = HydrogenBondDetector()
    det.detect_hydrogen_bonds(_spread_pairs(atom_factory, 80))
    assert det.instrumentation['kdtree_used'] is False
    assert built == []
