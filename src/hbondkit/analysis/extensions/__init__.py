"""Post-detection analytics over hydrogen bond results.

Each module exposes a ``compute(hbonds)`` function returning a plain dict.
"""

from .hbond_subtypes import compute as compute_hbond_subtypes  # noqa: F401

__all__ = ['compute_hbond_subtypes']
