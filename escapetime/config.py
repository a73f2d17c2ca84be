# escapetime/config.py
from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict

import yaml

from escapetime.errors import ConfigurationError

# keys a YAML run file may carry besides the fractal parameters
RUN_OPTION_KEYS = ("palette", "backend")


@dataclass(frozen=True)
class FractalConfig:
    size: int = 512          # pixels per side, the image is square
    scale: float = 10.0      # side of the sampled square, centered at 0
    complexity: int = 3      # exponent p in z <- z^p + z

    def __post_init__(self):
        self.validate()
        object.__setattr__(self, "size", int(self.size))
        object.__setattr__(self, "scale", float(self.scale))
        object.__setattr__(self, "complexity", int(self.complexity))

    def validate(self):
        if not _is_int(self.size):
            raise ConfigurationError(f"size must be an integer, got {self.size!r}")
        if self.size <= 0:
            raise ConfigurationError(f"size must be positive, got {self.size}")

        if not isinstance(self.scale, numbers.Real) or isinstance(self.scale, bool):
            raise ConfigurationError(f"scale must be a real number, got {self.scale!r}")
        if not math.isfinite(self.scale) or self.scale <= 0:
            raise ConfigurationError(f"scale must be positive and finite, got {self.scale}")

        if not _is_int(self.complexity):
            raise ConfigurationError(f"complexity must be an integer, got {self.complexity!r}")
        if self.complexity < 1:
            raise ConfigurationError(f"complexity must be at least 1, got {self.complexity}")

    @property
    def extent(self):
        """(xmin, xmax, ymin, ymax) of the sampled plane square."""
        half = self.scale / 2
        return (-half, half, -half, half)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, Any]) -> "FractalConfig":
        fields = {k: mapping[k] for k in ("size", "scale", "complexity") if k in mapping}
        return cls(**fields)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _is_int(v) -> bool:
    return isinstance(v, numbers.Integral) and not isinstance(v, bool)


def load_settings(config_path) -> Dict[str, Any]:
    """
    Read a YAML run file into a plain dict.

    Accepted keys: size, scale, complexity, palette, backend.
    An empty file gives an empty dict.
    """
    path = Path(config_path)
    try:
        with open(path, "r") as f:
            cfg = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Cannot parse {path}: {e}") from e

    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ConfigurationError(f"{path} must hold a mapping, got {type(cfg).__name__}")

    allowed = {"size", "scale", "complexity", *RUN_OPTION_KEYS}
    unknown = sorted(set(cfg) - allowed)
    if unknown:
        raise ConfigurationError(f"Unknown keys in {path}: {', '.join(map(str, unknown))}")
    return cfg


def load_config(config_path) -> FractalConfig:
    """YAML run file -> validated FractalConfig (missing keys take defaults)."""
    return FractalConfig.from_mapping(load_settings(config_path))
