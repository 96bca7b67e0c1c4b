"""
Hydrogen bond detection for molecular structures.

Detects conventional donor-H...acceptor hydrogen bonds from plain ``Atom``
records using distance (2.5 Å to ``max_distance``) and D-H...A angle
(``>= min_angle``) criteria, then buckets each bond as strong / moderate /
weak. Donors without a modeled hydrogen are scored with an idealized linear
geometry (180°); this is an approximation, not a measurement.
"""

import time
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from ..geometry.core import is_finite_position, pairwise_within_cutoff, uses_kdtree
from ..performance.timing import time_block
from ..utils.instrumentation import build_funnel
from ..utils.settings import get_settings
from .atom_classifier import is_acceptor, is_donor
from .hydrogen_locator import HydrogenIndex
from .models import Atom, DetectionOptions, HydrogenBond, ResidueRef
from .pair_evaluator import evaluate
from .residue_tables import WATER_NAMES
from .spatial_filter import filter_by_radius

# Slack added to the KD-tree query radius so float rounding in the tree never
# drops a pair the exact scalar check would accept.
_CUTOFF_SLACK = 1e-6


class HydrogenBondDetector:
    """Detects hydrogen bonds in a collection of atoms."""

    def __init__(self, config=None):
        """
        Initialize hydrogen bond detector.

        Args:
            config: optional AppConfig; its ``interactions`` parameters provide
                the default DetectionOptions when a call passes none
        """
        self.config = config
        self.instrumentation: Dict[str, object] = {}

    def _default_options(self) -> DetectionOptions:
        if self.config is not None and getattr(self.config, 'interactions', None) is not None:
            return self.config.interactions.to_options()
        return DetectionOptions()

    def detect_hydrogen_bonds(self, atoms: Optional[Iterable[Atom]],
                              options: Optional[DetectionOptions] = None) -> List[HydrogenBond]:
        """Detect all hydrogen bonds among ``atoms``.

        Returns an empty list for missing or empty input. Atoms with non-finite
        coordinates are dropped before classification. Output order follows
        donor order, then acceptor order, of the input sequence.
        """
        options = options or self._default_options()
        settings = get_settings()
        t_start = time.perf_counter()

        all_atoms = [a for a in (atoms or ()) if is_finite_position(a.position)]
        if not all_atoms:
            logger.warning("No atoms supplied; skipping hydrogen bond detection")
            self.instrumentation = build_funnel(donors=0, acceptors=0, hydrogens=0, hbonds=0)
            return []

        donors, acceptors = self._select_participants(all_atoms, options)
        self._log(f"Found {len(donors)} potential donors, {len(acceptors)} acceptors")

        raw_pairs = len(donors) * len(acceptors)
        with time_block("hbond.pair_generation", items=raw_pairs):
            pairs, kdtree_used = self._candidate_pairs(donors, acceptors, options, settings)
        t_pair_end = time.perf_counter()

        hydrogen_index = HydrogenIndex(all_atoms)
        hbonds: List[HydrogenBond] = []
        candidate_pairs = 0
        with time_block("hbond.evaluation"):
            for di, ai in pairs:
                candidate_pairs += 1
                hbond = evaluate(donors[di], acceptors[ai], all_atoms, options,
                                 hydrogen_index=hydrogen_index,
                                 bond_id=f"hbond-{len(hbonds) + 1}")
                if hbond is not None:
                    hbonds.append(hbond)
        t_eval_end = time.perf_counter()

        self.instrumentation = build_funnel(
            raw_pairs=raw_pairs,
            candidate_pairs=candidate_pairs,
            accepted_pairs=len(hbonds),
            kdtree_used=kdtree_used,
            pair_gen_seconds=t_pair_end - t_start,
            eval_seconds=t_eval_end - t_pair_end,
            donors=len(donors),
            acceptors=len(acceptors),
            hydrogens=len(hydrogen_index),
            hbonds=len(hbonds),
        )
        self._log(
            f"{'[kdtree] ' if kdtree_used else ''}Detected {len(hbonds)} H-bonds in "
            f"{(t_eval_end - t_start) * 1000.0:.2f}ms (checked {candidate_pairs} of {raw_pairs} pairs)"
        )
        return hbonds

    def _select_participants(self, all_atoms: List[Atom],
                             options: DetectionOptions) -> Tuple[List[Atom], List[Atom]]:
        donors = [a for a in all_atoms if is_donor(a.atom_name, a.element, a.residue_name)]
        acceptors = [a for a in all_atoms if is_acceptor(a.atom_name, a.element, a.residue_name)]
        if not options.include_water:
            donors = [a for a in donors if a.residue_name not in WATER_NAMES]
            acceptors = [a for a in acceptors if a.residue_name not in WATER_NAMES]
        if options.uses_radius_filter:
            radius = float(options.radius_from_selection)
            donors = filter_by_radius(donors, options.selected_residue, radius, all_atoms)
            acceptors = filter_by_radius(acceptors, options.selected_residue, radius, all_atoms)
            logger.debug(
                f"Radius filter {radius:.2f}Å around {options.selected_residue.chain_id}"
                f"{options.selected_residue.residue_seq}: {len(donors)} donors, {len(acceptors)} acceptors kept"
            )
        return donors, acceptors

    def _candidate_pairs(self, donors: Sequence[Atom], acceptors: Sequence[Atom],
                         options: DetectionOptions, settings) -> Tuple[Iterable[Tuple[int, int]], bool]:
        """Yield (donor_idx, acceptor_idx) pairs in donor-major order.

        Above the configured pair count a KD-tree pre-selects pairs within
        ``max_distance``; every pair it drops would fail the distance check
        anyway, so the accepted bonds are identical to the full scan.
        """
        threshold = settings.kdtree_pair_threshold
        if settings.enable_spatial_index and uses_kdtree(len(donors), len(acceptors), kdtree_threshold=threshold):
            ia, ib = pairwise_within_cutoff(
                [d.position for d in donors],
                [a.position for a in acceptors],
                options.max_distance + _CUTOFF_SLACK,
                kdtree_threshold=threshold,
            )
            return list(zip(ia.tolist(), ib.tolist())), True
        return ((di, ai) for di in range(len(donors)) for ai in range(len(acceptors))), False

    def _log(self, message: str) -> None:
        settings = get_settings()
        if settings.performance_mode and not settings.verbose_detector_logs:
            logger.debug(message)
        else:
            logger.info(message)

    @staticmethod
    def involving_residue(hbonds: Iterable[HydrogenBond], residue: Any) -> List[HydrogenBond]:
        """Bonds whose donor or acceptor belongs to ``residue``."""
        ref = ResidueRef.coerce(residue)
        return [
            hb for hb in hbonds
            if (hb.donor.chain_id, hb.donor.residue_seq) == ref.key
            or (hb.acceptor.chain_id, hb.acceptor.residue_seq) == ref.key
        ]

    def to_dict_list(self, hydrogen_bonds: List[HydrogenBond]) -> List[Dict[str, Any]]:
        """Convert hydrogen bonds to list of dictionaries."""
        return [hb.to_dict() for hb in hydrogen_bonds]


def detect(atoms: Optional[Iterable[Atom]], options: Optional[DetectionOptions] = None) -> List[HydrogenBond]:
    """Module-level convenience wrapper around HydrogenBondDetector."""
    return HydrogenBondDetector().detect_hydrogen_bonds(atoms, options)


__all__ = ['HydrogenBondDetector', 'detect']
