"""Bake a cloud noise volume and save its z-slices as a PNG contact sheet."""

from __future__ import annotations

import argparse
import math
from pathlib import Path

import numpy as np
from PIL import Image

from nimbus import config
from nimbus.noise import GenerationParameters, bake_volume


def contact_sheet(volume: np.ndarray, columns: int = 8) -> np.ndarray:
    """Lay the ``[z, y, x]`` slices of ``volume`` out in a grid, row by row."""
    depth, height, width = volume.shape
    rows = math.ceil(depth / columns)
    sheet = np.zeros((rows * height, columns * width), dtype=np.uint8)
    for z in range(depth):
        row, col = divmod(z, columns)
        sheet[row * height : (row + 1) * height, col * width : (col + 1) * width] = (
            volume[z]
        )
    return sheet


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Preview cloud noise slices")
    parser.add_argument("--seed", type=int, default=config.DEFAULT_SEED)
    parser.add_argument("--frequency", type=float, default=config.DEFAULT_FREQUENCY)
    parser.add_argument(
        "--cells", type=int, default=config.DEFAULT_FEATURE_POINT_COUNT
    )
    parser.add_argument("--resolution", type=int, default=config.VOLUME_RESOLUTION)
    parser.add_argument("--columns", type=int, default=8)
    parser.add_argument("--scale", type=int, default=4, help="pixel upscale factor")
    parser.add_argument(
        "--output", type=Path, default=Path("assets/previews/cloud_noise.png")
    )
    args = parser.parse_args(argv)

    params = GenerationParameters(
        seed=args.seed,
        frequency=args.frequency,
        feature_point_count=args.cells,
        resolution=args.resolution,
    )
    volume = bake_volume(params)

    sheet = contact_sheet(volume.data, columns=args.columns)
    image = Image.fromarray(sheet, mode="L")
    if args.scale > 1:
        image = image.resize(
            (image.width * args.scale, image.height * args.scale),
            Image.Resampling.NEAREST,
        )

    args.output.parent.mkdir(parents=True, exist_ok=True)
    image.save(args.output)
    print(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
