import numpy as np

from escapetime.errors import ConfigurationError


def classic_color(count: int):
    """RGB triple for a single iteration count."""
    gray = int(count) // 5
    return gray, (gray | 27) % 255, (gray & 150) % 255


def classic_palette(counts):
    """Array form of classic_color: counts of any shape -> uint8 (..., 3)."""
    gray = np.asarray(counts, dtype=np.int64) // 5
    r = gray
    g = (gray | 27) % 255
    b = (gray & 150) % 255
    return np.stack([r, g, b], axis=-1).astype(np.uint8)


def grayscale_palette(counts, max_iteration):
    """Map iteration counts to grayscale RGB, interior dark."""
    norm = np.asarray(counts, dtype=np.float64) / max_iteration
    norm = 1.0 - norm
    gray = (255 * norm).clip(0, 255).astype(np.uint8)
    return np.stack([gray, gray, gray], axis=-1)


def pick_palette(name: str):
    """Return a palette matching the renderer's expected signature:
    palette(counts, max_iteration) -> uint8 array (..., 3)
    """
    key = str(name).lower()

    if key == "classic":
        def palette(counts, max_iteration):
            return classic_palette(counts)
        return palette

    if key in ("gray", "grey", "grayscale"):
        return grayscale_palette

    raise ConfigurationError(f"Unknown palette: {name}")
