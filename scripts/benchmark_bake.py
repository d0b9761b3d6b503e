#!/usr/bin/env python3
"""Benchmark noise volume bake time across resolutions and cell counts."""

from __future__ import annotations

import argparse
import time

from nimbus.noise import GenerationParameters, bake_volume

CASES: tuple[tuple[int, int], ...] = (
    (16, 16),
    (32, 4),
    (32, 16),
    (32, 64),
    (48, 16),
    (64, 16),
)


class BakeBenchmark:
    """Benchmark runner for ``bake_volume``."""

    def __init__(self, iterations: int, frequency: float) -> None:
        self.iterations = iterations
        self.frequency = frequency
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, resolution: int, cells: int) -> float:
        """Run one case and return the average bake time in milliseconds."""
        elapsed_total = 0.0

        for i in range(self.iterations):
            params = GenerationParameters(
                seed=i,
                frequency=self.frequency,
                feature_point_count=cells,
                resolution=resolution,
            )
            start = time.perf_counter()
            bake_volume(params)
            elapsed_total += time.perf_counter() - start

        return (elapsed_total / self.iterations) * 1000.0

    def run(self) -> None:
        """Run every configured case."""
        print("Noise Volume Bake Benchmark")
        print("=" * 42)
        print(f"Iterations per case: {self.iterations}")
        print()
        print(f"{'Case':>12} {'Bake (ms)':>14}")
        print("-" * 42)

        for resolution, cells in CASES:
            bake_ms = self._run_case(resolution, cells)

            case_key = f"{resolution}^3/{cells}"
            self.results[case_key] = {"bake_ms": bake_ms}

            print(f"{case_key:>12} {bake_ms:14.2f}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark noise volume bakes")
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of bakes per case (default: 3)",
    )
    parser.add_argument("--frequency", type=float, default=4.0)
    args = parser.parse_args(argv)

    benchmark = BakeBenchmark(iterations=args.iterations, frequency=args.frequency)
    benchmark.run()


if __name__ == "__main__":
    main()
