"""Wall-clock accounting for detector phases.

``time_block`` wraps a phase inline, ``time_function`` wraps a callable; both
feed the process-wide ``TIMINGS`` collector, which callers read through
``snapshot()``. Recording is a no-op when HBONDKIT_ENABLE_TIMING=0.
"""
from __future__ import annotations
import functools
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..utils.settings import get_settings


@dataclass
class _Bucket:
    seconds: float = 0.0
    calls: int = 0
    items: int = 0

    def as_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "total_time": round(self.seconds, 6),
            "calls": self.calls,
            "avg_time": round(self.seconds / self.calls, 6) if self.calls else 0.0,
        }
        if self.items:
            out["total_items"] = self.items
            if self.seconds:
                out["items_per_sec"] = round(self.items / self.seconds, 3)
        return out


class TimingCollector:
    """Thread-safe accumulator of wall time per named phase."""

    def __init__(self):
        self._lock = threading.Lock()
        self._buckets: Dict[str, _Bucket] = {}

    def record(self, name: str, seconds: float, items: Optional[int] = None) -> None:
        if not get_settings().enable_timing:
            return
        with self._lock:
            bucket = self._buckets.setdefault(name, _Bucket())
            bucket.seconds += seconds
            bucket.calls += 1
            if items:
                bucket.items += int(items)

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        with self._lock:
            return {name: b.as_dict() for name, b in self._buckets.items()}

    def clear(self) -> None:
        with self._lock:
            self._buckets.clear()


TIMINGS = TimingCollector()


@contextmanager
def time_block(name: str, items: Optional[int] = None):
    start = time.perf_counter()
    try:
        yield
    finally:
        TIMINGS.record(name, time.perf_counter() - start, items=items)


def _count_items(result: Any, items_attr: str) -> Optional[int]:
    if items_attr == "__len__":
        return len(result) if hasattr(result, "__len__") else None
    if isinstance(result, dict):
        value = result.get(items_attr)
    else:
        value = getattr(result, items_attr, None)
    return int(value) if value is not None else None


def time_function(name: Optional[str] = None, items_attr: Optional[str] = None):
    """Record each call of the decorated function under ``name``.

    ``items_attr`` names a key or attribute of the result holding a processed
    item count; ``"__len__"`` counts the result itself.
    """
    def deco(fn: Callable):
        bucket = name or fn.__name__

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            result = fn(*args, **kwargs)
            items = _count_items(result, items_attr) if items_attr and result is not None else None
            TIMINGS.record(bucket, time.perf_counter() - start, items=items)
            return result
        return wrapper
    return deco


__all__ = ["time_block", "time_function", "TIMINGS", "TimingCollector"]
