from pathlib import Path

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from PIL import Image

from escapetime.errors import ConfigurationError

IMAGE_FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
}


def _check_buffer(buffer):
    buf = np.asarray(buffer)
    if buf.dtype != np.uint8 or buf.ndim != 3 or buf.shape[2] != 3:
        raise ConfigurationError(f"Expected a uint8 (h, w, 3) buffer, got {buf.dtype} {buf.shape}")
    return buf


def save_image(buffer, out_path) -> Path:
    """Write a pixel buffer as PNG or JPEG, picked by the file suffix."""
    out_path = Path(out_path)
    fmt = IMAGE_FORMATS.get(out_path.suffix.lower())
    if fmt is None:
        raise ConfigurationError(
            f"Unsupported image suffix {out_path.suffix!r}; use one of {', '.join(IMAGE_FORMATS)}"
        )
    buf = _check_buffer(buffer)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    im = Image.fromarray(buf)
    im.save(out_path, format=fmt)
    return out_path


def save_figure(buffer, config, out_path, title=None) -> Path:
    """
    Save the buffer as an annotated matplotlib figure with plane axes.

    Row 0 of the buffer is the lowest imaginary value, hence origin="lower".
    """
    buf = _check_buffer(buffer)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    xmin, xmax, ymin, ymax = config.extent
    if title is None:
        title = f"z <- z^{config.complexity} + z ({config.size}x{config.size}, scale={config.scale:g})"

    fig = plt.figure(figsize=(8, 8))
    plt.imshow(buf, origin="lower", extent=[xmin, xmax, ymin, ymax])
    plt.title(title)
    plt.xlabel("Re(z0)")
    plt.ylabel("Im(z0)")
    plt.gca().set_aspect("equal", adjustable="box")
    plt.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path
