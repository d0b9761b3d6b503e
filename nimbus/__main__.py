"""Bake a cloud noise volume headlessly and report on it."""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np

from nimbus import config
from nimbus.app import AppConfig, CloudApp
from nimbus.cloud.rebuild import BackgroundRebuildCoordinator
from nimbus.cloud.settings import CloudSettings
from nimbus.noise import GenerationParameters, InvalidParameterError
from nimbus.util.live_vars import live_variable_registry


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nimbus", description="Bake a tiled cellular cloud noise volume."
    )
    parser.add_argument("--seed", type=int, default=config.DEFAULT_SEED)
    parser.add_argument("--frequency", type=float, default=config.DEFAULT_FREQUENCY)
    parser.add_argument(
        "--cells",
        type=int,
        default=config.DEFAULT_FEATURE_POINT_COUNT,
        help="number of feature points",
    )
    parser.add_argument("--resolution", type=int, default=config.VOLUME_RESOLUTION)
    parser.add_argument(
        "--frames", type=int, default=1, help="ticks to run (at least one)"
    )
    parser.add_argument(
        "--fps", type=float, default=None, help="tick rate cap, uncapped if omitted"
    )
    parser.add_argument(
        "--background", action="store_true", help="bake on a worker thread"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    generation = GenerationParameters(
        seed=args.seed,
        frequency=args.frequency,
        feature_point_count=args.cells,
        resolution=args.resolution,
    )
    try:
        settings = CloudSettings(generation)
    except InvalidParameterError as e:
        print(f"nimbus: {e}", file=sys.stderr)
        return 2

    app_config = AppConfig(fps=args.fps, background_bakes=args.background)
    with CloudApp(settings, app_config) as app:
        app.run(max(1, args.frames))
        coordinator = app.coordinator
        if isinstance(coordinator, BackgroundRebuildCoordinator):
            # Let the last bake land so there is something to report.
            for _ in range(config.MAX_SETTLE_TICKS):
                if not settings.needs_rebuild:
                    break
                coordinator.wait()
                app.update()
            if settings.needs_rebuild:
                print(
                    f"nimbus: no bake landed after {config.MAX_SETTLE_TICKS} ticks",
                    file=sys.stderr,
                )
                return 1

        volume = app.volume
        clock = app.clock
        bake_stats = live_variable_registry.get_variable("time.cloud.bake_ms")
        print(f"ticks:        {clock.tick_count} ({clock.mean_fps:.1f} fps mean)")
        print(f"resolution:   {volume.resolution}^3 ({volume.nbytes} bytes)")
        print(f"seed:         {generation.seed}")
        print(f"frequency:    {generation.frequency}")
        print(f"cells:        {generation.feature_point_count}")
        print(f"mean density: {float(np.mean(volume.data)) / 255.0:.4f}")
        print(f"max density:  {int(volume.data.max())}")
        if bake_stats is not None:
            print(f"bake time:    {bake_stats.get_value()} ms")
    return 0


if __name__ == "__main__":
    sys.exit(main())
