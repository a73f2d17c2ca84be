"""
Render one escape-time fractal and save it.

Run:
    python -m scripts.make_image --size 512 --scale 10 --complexity 3 --outfile figures/fractal.png
    python -m scripts.make_image --config configs/default.yaml --outfile figures/fractal.png

Flags given on the command line override values from --config.
"""

import argparse
import os
import sys
import time
from pathlib import Path

# Ensure repository root is on sys.path so `from escapetime...` works when running
# this script directly (e.g. `python scripts/make_image.py`).
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from escapetime.config import FractalConfig, load_settings
from escapetime.engine import BACKENDS, render
from escapetime.errors import ConfigurationError
from escapetime.export import save_figure, save_image


def build_parser():
    parser = argparse.ArgumentParser(description="Render a z <- z^p + z escape-time fractal")
    parser.add_argument("--config", type=str, default=None,
                        help="YAML file with size/scale/complexity/palette/backend")
    parser.add_argument("--size", type=int, default=None)
    parser.add_argument("--scale", type=float, default=None)
    parser.add_argument("--complexity", type=int, default=None)
    parser.add_argument("--palette", type=str, default=None,
                        choices=["classic", "gray"])
    parser.add_argument("--backend", type=str, default=None,
                        choices=list(BACKENDS))
    parser.add_argument("--outfile", type=str, required=True,
                        help="output image (.png, .jpg or .jpeg)")
    parser.add_argument("--figure", type=str, default=None,
                        help="optional annotated matplotlib figure")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config) if args.config else {}
        for key in ("size", "scale", "complexity", "palette", "backend"):
            value = getattr(args, key)
            if value is not None:
                settings[key] = value

        cfg = FractalConfig.from_mapping(settings)
        palette = settings.get("palette", "classic")
        backend = settings.get("backend", "vectorized")
        out_path = Path(args.outfile)

        print(f"[run] size={cfg.size}, scale={cfg.scale:g}, complexity={cfg.complexity}, "
              f"palette={palette}, backend={backend}")

        start_time = time.time()
        img = render(cfg, palette=palette, backend=backend)
        print(f"[run] calculation finished in {time.time() - start_time:.2f} seconds.")

        save_image(img, out_path)
        print(f"[run] saved {out_path}")

        if args.figure:
            fig_path = save_figure(img, cfg, args.figure)
            print(f"[run] saved {fig_path}")
    except (ConfigurationError, FileNotFoundError) as e:
        parser.error(str(e))

    print("[run] done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
