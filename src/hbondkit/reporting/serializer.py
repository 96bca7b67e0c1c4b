"""Serialization helpers for detected hydrogen bonds.

Turns HydrogenBond records into plain dicts, JSON text, flat CSV rows and a
small per-strength summary. Accepts already-converted dicts as well so
callers can round-trip stored results.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional
import csv
import io
import json

from ..analysis.models import HydrogenBond, Strength
from ..utils.settings import get_settings

CSV_COLUMNS = [
    "id", "donor_chain", "donor_residue_seq", "donor_residue_name", "donor_atom",
    "hydrogen_atom", "hydrogen_inferred", "acceptor_chain", "acceptor_residue_seq", "acceptor_residue_name",
    "acceptor_atom", "distance", "angle", "strength",
]


def _round_floats(v: Any, precision: int):
    if isinstance(v, float):
        return round(v, precision)
    if isinstance(v, list):
        return [_round_floats(x, precision) for x in v]
    if isinstance(v, dict):
        return {k: _round_floats(val, precision) for k, val in v.items()}
    return v


def _as_dict(item: Any) -> Dict[str, Any]:
    if isinstance(item, HydrogenBond):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    raise TypeError(f"Cannot serialize object of type {type(item).__name__} as a hydrogen bond")


def hbonds_to_dicts(hbonds: Iterable[Any], precision: Optional[int] = None) -> List[Dict[str, Any]]:
    """Convert bonds to dicts, rounding floats when ``precision`` is given."""
    out = [_as_dict(hb) for hb in hbonds]
    if precision is not None:
        out = [_round_floats(d, precision) for d in out]
    return out


def export_json(hbonds: Iterable[Any], precision: Optional[int] = None, indent: Optional[int] = None) -> str:
    """JSON array of bonds; precision defaults to HBONDKIT_DEFAULT_FLOAT_PRECISION."""
    if precision is None:
        precision = get_settings().default_float_precision
    return json.dumps(hbonds_to_dicts(hbonds, precision), indent=indent,
                      separators=None if indent else (',', ':'))


def _flat_row(d: Dict[str, Any]) -> Dict[str, Any]:
    donor = d.get('donor') or {}
    acceptor = d.get('acceptor') or {}
    hydrogen = d.get('hydrogen') or {}
    return {
        "id": d.get('id'),
        "donor_chain": donor.get('chain_id'),
        "donor_residue_seq": donor.get('residue_seq'),
        "donor_residue_name": donor.get('residue_name'),
        "donor_atom": donor.get('atom_name'),
        "hydrogen_atom": hydrogen.get('atom_name', ''),
        "hydrogen_inferred": hydrogen.get('inferred', ''),
        "acceptor_chain": acceptor.get('chain_id'),
        "acceptor_residue_seq": acceptor.get('residue_seq'),
        "acceptor_residue_name": acceptor.get('residue_name'),
        "acceptor_atom": acceptor.get('atom_name'),
        "distance": d.get('distance'),
        "angle": d.get('angle'),
        "strength": d.get('strength'),
    }


def export_csv(hbonds: Iterable[Any], precision: Optional[int] = None) -> str:
    if precision is None:
        precision = get_settings().default_float_precision
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_COLUMNS)
    writer.writeheader()
    for d in hbonds_to_dicts(hbonds, precision):
        writer.writerow(_flat_row(d))
    return buf.getvalue()


def summarize(hbonds: Iterable[Any]) -> Dict[str, Any]:
    """Counts and fractions per strength plus mean distance / angle."""
    rows = hbonds_to_dicts(hbonds)
    counts = {s.value: 0 for s in Strength}
    for d in rows:
        counts[Strength(d['strength']).value] += 1
    total = len(rows)
    return {
        'total_hbonds': total,
        'counts': counts,
        'fractions': {k: (v / total if total else 0.0) for k, v in counts.items()},
        'with_explicit_hydrogen': sum(1 for d in rows if d.get('hydrogen') and not d['hydrogen'].get('inferred')),
        'with_inferred_hydrogen': sum(1 for d in rows if d.get('hydrogen') and d['hydrogen'].get('inferred')),
        'mean_distance': (sum(d['distance'] for d in rows) / total) if total else None,
        'mean_angle': (sum(d['angle'] for d in rows) / total) if total else None,
    }


__all__ = ['hbonds_to_dicts', 'export_json', 'export_csv', 'summarize', 'CSV_COLUMNS']
