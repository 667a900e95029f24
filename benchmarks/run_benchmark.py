"""Benchmark reconstruction speed and quality across puzzle sizes."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from tile_jigsaw.evaluator import PuzzleEvaluator
from tile_jigsaw.pipeline import solve_puzzle
from tile_jigsaw.scanner import SEA_MONSTER
from tile_jigsaw.utils import generate_puzzle, shuffle_tiles


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    seam_acc_mean: float
    seam_acc_min: float
    image_match_rate: float
    pattern_recall: float
    runtime_mean_sec: float
    runtime_max_sec: float


@dataclass
class CaseResult:
    seam_accuracy: float
    image_match: bool
    planted: int
    found: int
    runtime_sec: float


def run_case(grid_size: int, tile_size: int, seed: int, plant: int) -> CaseResult:
    puzzle = generate_puzzle(
        grid_size=grid_size,
        tile_size=tile_size,
        seed=seed,
        density=0.2,
        pattern=SEA_MONSTER if plant else None,
        plant=plant,
    )
    shuffled, _ = shuffle_tiles(puzzle.tiles, seed=seed)

    t0 = time.perf_counter()
    result = solve_puzzle(shuffled)
    runtime_sec = time.perf_counter() - t0

    metrics = PuzzleEvaluator().evaluate(result.grid, result.image, expected=puzzle.image)
    return CaseResult(
        seam_accuracy=metrics.seam_accuracy,
        image_match=bool(metrics.image_match),
        planted=len(puzzle.planted),
        found=result.scan.matches,
        runtime_sec=runtime_sec,
    )


def run_case_multi_seed(grid_size: int, tile_size: int, seeds: List[int], plant: int) -> BenchmarkRow:
    cases = [run_case(grid_size, tile_size, seed=seed, plant=plant) for seed in seeds]

    seam = np.array([c.seam_accuracy for c in cases], dtype=np.float64)
    match = np.array([c.image_match for c in cases], dtype=np.float64)
    rt = np.array([c.runtime_sec for c in cases], dtype=np.float64)
    planted = sum(c.planted for c in cases)
    found = sum(min(c.found, c.planted) for c in cases)
    return BenchmarkRow(
        grid=f"{grid_size}x{grid_size}",
        seeds=len(seeds),
        seam_acc_mean=float(np.mean(seam)),
        seam_acc_min=float(np.min(seam)),
        image_match_rate=float(np.mean(match)),
        pattern_recall=found / planted if planted else 1.0,
        runtime_mean_sec=float(np.mean(rt)),
        runtime_max_sec=float(np.max(rt)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run tile puzzle benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 6, 12],
        help="Grid sizes to benchmark (default: 3 6 12)",
    )
    parser.add_argument("--tile-size", type=int, default=10, help="Tile side in pixels (default: 10)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    parser.add_argument(
        "--plant",
        type=int,
        default=2,
        help="Sea monsters hidden in each puzzle (default: 2)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'SeamMean':>10}{'SeamMin':>10}"
        f"{'ImgMatch':>10}{'Recall':>10}{'RtMean(s)':>11}{'RtMax(s)':>11}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.seam_acc_mean:>10.4f}"
            f"{row.seam_acc_min:>10.4f}"
            f"{row.image_match_rate:>10.4f}"
            f"{row.pattern_recall:>10.4f}"
            f"{row.runtime_mean_sec:>11.4f}"
            f"{row.runtime_max_sec:>11.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(size, args.tile_size, seeds=seeds, plant=args.plant)
        for size in args.sizes
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
