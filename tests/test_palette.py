import sys
from pathlib import Path

import numpy as np
import pytest

# Add repo root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from escapetime.errors import ConfigurationError
from escapetime.palette import classic_color, classic_palette, grayscale_palette, pick_palette


def test_classic_color_known_values():
    assert classic_color(0) == (0, 27, 0)
    assert classic_color(1024) == (204, 223, 132)
    # 4 // 5 == 0, integer division
    assert classic_color(4) == classic_color(0)
    # gray 51: 51 | 27 = 59, 51 & 150 = 18
    assert classic_color(255) == (51, 59, 18)


def test_classic_palette_matches_scalar_form():
    counts = np.arange(0, 1025).reshape(25, 41)
    rgb = classic_palette(counts)
    assert rgb.shape == (25, 41, 3)
    assert rgb.dtype == np.uint8
    for count in (0, 5, 137, 500, 999, 1024):
        j, i = divmod(count, 41)
        assert tuple(rgb[j, i]) == classic_color(count)


def test_grayscale_palette_interior_is_dark():
    rgb = grayscale_palette(np.array([0, 1024]), 1024)
    np.testing.assert_array_equal(rgb[0], [255, 255, 255])
    np.testing.assert_array_equal(rgb[1], [0, 0, 0])


def test_pick_palette():
    counts = np.array([[0, 1024]])
    np.testing.assert_array_equal(pick_palette("classic")(counts, 1024), classic_palette(counts))
    np.testing.assert_array_equal(pick_palette("Gray")(counts, 1024), grayscale_palette(counts, 1024))
    with pytest.raises(ConfigurationError, match="Unknown palette"):
        pick_palette("rainbow")
