"""Pair funnel recorded by the hydrogen bond detector after each run.

The funnel narrows from every donor x acceptor combination (``raw_pairs``)
to the pairs actually evaluated (``candidate_pairs``, fewer when the spatial
index pruned) to accepted bonds (``accepted_pairs``). Stored as a plain dict
so hosts can log or JSON-dump it directly.
"""
from __future__ import annotations
from typing import Dict, Optional

FUNNEL_KEYS = (
    'raw_pairs', 'candidate_pairs', 'accepted_pairs', 'acceptance_ratio',
    'kdtree_used', 'phase_pair_gen_ms', 'phase_eval_ms',
)


def acceptance_ratio(accepted: int, candidates: int) -> float:
    return accepted / candidates if candidates else 0.0


def _ms(seconds: Optional[float]) -> Optional[float]:
    return None if seconds is None else round(seconds * 1000.0, 3)


def build_funnel(*, raw_pairs: int = 0, candidate_pairs: int = 0, accepted_pairs: int = 0,
                 kdtree_used: bool = False, pair_gen_seconds: Optional[float] = None,
                 eval_seconds: Optional[float] = None, **counts: int) -> Dict[str, object]:
    """Funnel dict with the standard keys followed by any extra ``counts``."""
    funnel: Dict[str, object] = {
        'raw_pairs': int(raw_pairs),
        'candidate_pairs': int(candidate_pairs),
        'accepted_pairs': int(accepted_pairs),
        'acceptance_ratio': acceptance_ratio(int(accepted_pairs), int(candidate_pairs)),
        'kdtree_used': bool(kdtree_used),
        'phase_pair_gen_ms': _ms(pair_gen_seconds),
        'phase_eval_ms': _ms(eval_seconds),
    }
    funnel.update({k: int(v) for k, v in counts.items()})
    return funnel


__all__ = ['FUNNEL_KEYS', 'acceptance_ratio', 'build_funnel']
