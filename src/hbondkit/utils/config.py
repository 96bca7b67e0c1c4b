"""
Configuration management for hbondkit.

Detection parameters live in ``HBondConfig``; named presets bundle commonly
used parameter sets and may be extended from a YAML file.
"""

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import hashlib
import json

import yaml
from dotenv import load_dotenv

from ..analysis.models import DetectionOptions, ResidueRef
from .settings import get_settings

# Load environment variables
load_dotenv()


@dataclass
class HBondConfig:
    """Hydrogen bond detection parameters."""

    hbond_distance_cutoff: float = 3.5
    hbond_angle_cutoff: float = 120.0
    # Only used together with a selected residue at call time
    radius_from_selection: Optional[float] = None

    # Internal version & hash fields (auto-managed)
    _version: int = 1  # bump manually when semantic meaning of any param changes
    _param_hash: str = field(default="", init=False, repr=False)

    def compute_hash(self) -> str:
        """Compute a stable hash of all public parameters.

        Excludes private fields (those starting with underscore). Produces a
        short 10-char hex digest for compact cache keys.
        """
        data = {k: v for k, v in asdict(self).items() if not k.startswith('_')}
        payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:10]
        self._param_hash = digest
        return digest

    @property
    def param_hash(self) -> str:
        if not self._param_hash:
            return self.compute_hash()
        return self._param_hash

    def to_options(self, selected_residue: Optional[ResidueRef] = None) -> DetectionOptions:
        return DetectionOptions(
            max_distance=self.hbond_distance_cutoff,
            min_angle=self.hbond_angle_cutoff,
            radius_from_selection=self.radius_from_selection,
            selected_residue=ResidueRef.coerce(selected_residue) if selected_residue is not None else None,
        )


DEFAULT_PRESETS: Dict[str, Dict[str, float]] = {
    "conservative": {"hbond_distance_cutoff": 3.2, "hbond_angle_cutoff": 130.0},
    "literature_default": {"hbond_distance_cutoff": 3.5, "hbond_angle_cutoff": 120.0},
    "exploratory": {"hbond_distance_cutoff": 3.9, "hbond_angle_cutoff": 110.0},
}


def _normalize_key(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def load_presets_file(path: Path) -> Dict[str, Dict[str, Any]]:
    """Read ``{preset_name: {param: value}}`` from a YAML file.

    Keys are normalized to snake_case; entries that are not mappings are
    ignored.
    """
    with Path(path).open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Preset file {path} must contain a mapping at top level")
    return {_normalize_key(k): dict(v) for k, v in data.items() if isinstance(v, dict)}


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "hbondkit"
    version: str = "1.0.0"
    interactions: HBondConfig = field(default_factory=HBondConfig)
    presets: Dict[str, Dict[str, Any]] = field(default_factory=lambda: {k: dict(v) for k, v in DEFAULT_PRESETS.items()})
    presets_file: Optional[Path] = None

    def __post_init__(self):
        if self.presets_file is None and get_settings().presets_file:
            self.presets_file = Path(get_settings().presets_file)
        if self.presets_file is not None:
            # user presets override built-ins of the same name
            self.presets.update(load_presets_file(self.presets_file))

    def get_preset(self, name: str) -> HBondConfig:
        """Return an HBondConfig for preset ``name``; raises KeyError if unknown."""
        key = _normalize_key(name)
        if key not in self.presets:
            raise KeyError(f"Unknown preset '{name}' (available: {sorted(self.presets)})")
        params = {k: v for k, v in self.presets[key].items() if k in HBondConfig.__dataclass_fields__ and not k.startswith('_')}
        return HBondConfig(**params)

    def apply_preset(self, name: str) -> HBondConfig:
        self.interactions = self.get_preset(name)
        return self.interactions


def load_config(presets_file: Optional[Path] = None) -> AppConfig:
    """Load application configuration."""
    return AppConfig(presets_file=Path(presets_file) if presets_file else None)
