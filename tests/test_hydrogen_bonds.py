"""Detector-level scenarios and invariants."""
import pytest

from hbondkit import DetectionOptions, HydrogenBondDetector, ResidueRef, Strength, detect
from hbondkit.analysis.strength import classify_strength


def test_scenario_single_moderate_bond_without_hydrogens(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 5, (0, 0, 3.0))]
    hbonds = detect(atoms)
    assert len(hbonds) == 1
    hb = hbonds[0]
    assert hb.id == 'hbond-1'
    assert hb.distance == pytest.approx(3.0)
    assert hb.angle == 180.0
    assert hb.hydrogen is None
    assert hb.strength is Strength.MODERATE
    assert (hb.donor.chain_id, hb.donor.residue_seq, hb.donor.atom_name) == ('A', 1, 'N')
    assert (hb.acceptor.residue_seq, hb.acceptor.atom_name) == (5, 'O')


def test_scenario_beyond_max_distance(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 5, (0, 0, 4.0))]
    assert detect(atoms) == []


def test_scenario_explicit_hydrogen_strong(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('H', 'H', 1, (0, 0, 1.0)),
        atom_factory('O', 'O', 5, (0, 0, 2.7)),
    ]
    hbonds = detect(atoms)
    assert len(hbonds) == 1
    hb = hbonds[0]
    assert hb.hydrogen is not None
    assert hb.hydrogen.atom_name == 'H'
    assert hb.hydrogen.position == (0.0, 0.0, 1.0)
    assert hb.angle == pytest.approx(180.0)
    assert hb.distance == pytest.approx(2.7)
    assert hb.strength is Strength.STRONG


def test_scenario_same_residue(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 1, (0, 0, 3.0))]
    assert detect(atoms) == []


def test_scenario_radius_filter_far_selection(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 5, (0, 0, 3.0)),
        atom_factory('CA', 'C', 20, (50.0, 50.0, 50.0)),
    ]
    opts = DetectionOptions(radius_from_selection=5.0, selected_residue=ResidueRef('A', 20))
    assert detect(atoms, opts) == []
    assert len(detect(atoms)) == 1


def test_radius_filter_near_selection_keeps_bond(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 5, (0, 0, 3.0)),
        atom_factory('CA', 'C', 20, (0.0, 1.0, 1.5)),
    ]
    opts = DetectionOptions(radius_from_selection=5.0, selected_residue=('A', 20))
    assert len(detect(atoms, opts)) == 1


def test_radius_filter_on_absent_residue_is_noop(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 5, (0, 0, 3.0))]
    opts = DetectionOptions(radius_from_selection=1.0, selected_residue=ResidueRef('Q', 999))
    assert len(detect(atoms, opts)) == 1


def test_radius_without_selection_is_ignored(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 5, (0, 0, 3.0))]
    assert len(detect(atoms, DetectionOptions(radius_from_selection=0.5))) == 1


@pytest.mark.parametrize("atoms", [None, [], iter(())])
def test_empty_input_returns_empty_list(atoms):
    assert detect(atoms) == []


def test_non_finite_atoms_are_excluded(atom_factory):
    nan = float('nan')
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 5, (0, 0, 3.0)),
        atom_factory('O', 'O', 6, (nan, 0, 2.0)),
        atom_factory('N', 'N', 7, (0, float('inf'), 0)),
        atom_factory('H', 'H', 1, (nan, nan, nan)),
    ]
    hbonds = detect(atoms)
    assert len(hbonds) == 1
    assert hbonds[0].hydrogen is None


def test_non_finite_atoms_do_not_shift_centroid(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 5, (0, 0, 3.0)),
        atom_factory('CA', 'C', 20, (0.0, 0.0, 1.5)),
        atom_factory('CB', 'C', 20, (float('nan'), 0.0, 0.0)),
    ]
    opts = DetectionOptions(radius_from_selection=2.0, selected_residue=ResidueRef('A', 20))
    assert len(detect(atoms, opts)) == 1


def test_ids_are_sequential(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 2, (0, 0, 3.0)),
        atom_factory('N', 'N', 3, (10, 0, 0)),
        atom_factory('O', 'O', 4, (10, 0, 2.9)),
    ]
    hbonds = detect(atoms)
    assert [hb.id for hb in hbonds] == ['hbond-1', 'hbond-2']
    assert [hb.donor.residue_seq for hb in hbonds] == [1, 3]


def test_sidechain_pair_detected(atom_factory):
    atoms = [
        atom_factory('OG', 'O', 10, (0, 0, 0), residue_name='SER'),
        atom_factory('OD1', 'O', 30, (0, 0, 2.75), residue_name='ASP'),
    ]
    hbonds = detect(atoms)
    assert len(hbonds) == 1
    assert hbonds[0].donor.residue_name == 'SER'
    assert hbonds[0].strength is Strength.STRONG


def test_unknown_residue_sidechain_ignored(atom_factory):
    atoms = [
        atom_factory('OG', 'O', 10, (0, 0, 0), residue_name='XYZ'),
        atom_factory('OD1', 'O', 30, (0, 0, 2.75), residue_name='ASP'),
    ]
    assert detect(atoms) == []


def test_invariants_on_synthetic_structure(synthetic_atoms):
    opts = DetectionOptions()
    hbonds = detect(synthetic_atoms, opts)
    assert hbonds, "synthetic structure should yield some bonds"
    for hb in hbonds:
        assert 2.5 <= hb.distance <= opts.max_distance
        assert hb.angle >= opts.min_angle
        assert (hb.donor.chain_id, hb.donor.residue_seq) != (hb.acceptor.chain_id, hb.acceptor.residue_seq)
        assert hb.strength is classify_strength(hb.distance, hb.angle)
    assert len({hb.id for hb in hbonds}) == len(hbonds)


def test_determinism(synthetic_atoms):
    first = detect(synthetic_atoms)
    second = detect(list(synthetic_atoms))
    assert first == second


def test_hydrogen_absent_fallback(synthetic_atoms):
    heavy_only = [a for a in synthetic_atoms if a.element != 'H']
    hbonds = detect(heavy_only)
    assert hbonds
    assert all(hb.hydrogen is None and hb.angle == 180.0 for hb in hbonds)


def test_detector_uses_config_defaults(atom_factory):
    from hbondkit.utils.config import load_config

    config = load_config()
    config.apply_preset('conservative')
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)), atom_factory('O', 'O', 5, (0, 0, 3.4))]
    assert HydrogenBondDetector(config).detect_hydrogen_bonds(atoms) == []
    assert len(HydrogenBondDetector().detect_hydrogen_bonds(atoms)) == 1


def test_involving_residue(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 2, (0, 0, 3.0)),
        atom_factory('N', 'N', 3, (10, 0, 0)),
        atom_factory('O', 'O', 4, (10, 0, 2.9)),
    ]
    hbonds = detect(atoms)
    picked = HydrogenBondDetector.involving_residue(hbonds, ('A', 4))
    assert [hb.id for hb in picked] == ['hbond-2']


def test_funnel_instrumentation(synthetic_atoms):
    det = HydrogenBondDetector()
    hbonds = det.detect_hydrogen_bonds(synthetic_atoms)
    instr = det.instrumentation
    assert instr['hbonds'] == len(hbonds) == instr['accepted_pairs']
    assert 0 <= instr['accepted_pairs'] <= instr['candidate_pairs'] <= instr['raw_pairs']
    assert instr['raw_pairs'] == instr['donors'] * instr['acceptors']
    assert 0.0 <= instr['acceptance_ratio'] <= 1.0
    assert instr['phase_eval_ms'] is not None and instr['phase_eval_ms'] >= 0.0


def test_include_water_false_skips_water_partners(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('O', 'O', 100, (0, 0, 3.0), residue_name='HOH'),
        atom_factory('O', 'O', 7, (10, 0, 3.0)),
        atom_factory('N', 'N', 8, (10, 0, 0)),
    ]
    assert [hb.acceptor.residue_name for hb in detect(atoms)] == ['HOH', 'ALA']
    dry = detect(atoms, DetectionOptions(include_water=False))
    assert len(dry) == 1
    assert dry[0].acceptor.residue_seq == 7
    assert dry[0].id == 'hbond-1'


def test_infer_hydrogens_through_detector(atom_factory):
    atoms = [
        atom_factory('N', 'N', 1, (0, 0, 0)),
        atom_factory('CA', 'C', 1, (1.46, 0, 0)),
        atom_factory('O', 'O', 5, (0, 0, 2.9)),
    ]
    assert len(detect(atoms)) == 1
    assert detect(atoms, DetectionOptions(infer_hydrogens=True)) == []


def test_dict_list_and_residue_labels(atom_factory):
    atoms = [atom_factory('N', 'N', 1, (0, 0, 0)),
             atom_factory('O', 'O', 5, (0, 0, 3.0), residue_name='GLY')]
    det = HydrogenBondDetector()
    hbonds = det.detect_hydrogen_bonds(atoms)
    assert hbonds[0].donor_residue == 'ALA1'
    assert hbonds[0].acceptor_residue == 'GLY5'
    rows = det.to_dict_list(hbonds)
    assert rows == [hbonds[0].to_dict()]
    assert rows[0]['strength'] == 'moderate'
    assert rows[0]['hydrogen'] is None
