import sys
from pathlib import Path

import numpy as np
import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from escapetime.config import FractalConfig, load_config, load_settings
from escapetime.errors import ConfigurationError


def test_defaults():
    cfg = FractalConfig()
    assert (cfg.size, cfg.scale, cfg.complexity) == (512, 10.0, 3)


def test_values_are_normalized():
    cfg = FractalConfig(size=np.int64(16), scale=4, complexity=2)
    assert type(cfg.size) is int
    assert type(cfg.scale) is float
    assert cfg.extent == (-2.0, 2.0, -2.0, 2.0)
    assert cfg.to_dict() == {"size": 16, "scale": 4.0, "complexity": 2}


@pytest.mark.parametrize("kwargs", [
    {"size": 0},
    {"size": -3},
    {"size": 2.5},
    {"size": True},
    {"scale": 0.0},
    {"scale": -1.0},
    {"scale": float("inf")},
    {"scale": float("nan")},
    {"scale": "big"},
    {"complexity": 0},
    {"complexity": -2},
    {"complexity": 2.0},
])
def test_invalid_values_are_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        FractalConfig(**kwargs)


def test_load_config(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("size: 32\nscale: 3.5\ncomplexity: 4\npalette: gray\n")
    cfg = load_config(path)
    assert cfg == FractalConfig(size=32, scale=3.5, complexity=4)
    assert load_settings(path)["palette"] == "gray"


def test_load_config_missing_keys_take_defaults(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("size: 32\n")
    assert load_config(path) == FractalConfig(size=32)


def test_empty_file_is_all_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_config(path) == FractalConfig()


def test_default_yaml_in_repo_loads():
    cfg = load_config(ROOT / "configs" / "default.yaml")
    assert cfg == FractalConfig()


@pytest.mark.parametrize("text", [
    "size: 32\nzoom: 2\n",
    "- 1\n- 2\n",
    "size: [1, 2\n",
    "size: 0\n",
])
def test_bad_files_are_rejected(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(ConfigurationError):
        load_config(path)
