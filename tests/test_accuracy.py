"""Reconstruction accuracy on synthetic puzzles of several sizes."""

from __future__ import annotations

import pytest

from tile_jigsaw.evaluator import PuzzleEvaluator
from tile_jigsaw.pipeline import solve_puzzle
from tile_jigsaw.scanner import SEA_MONSTER
from tile_jigsaw.solver import JigsawSolver, SolverConfig
from tile_jigsaw.utils import compose_image_from_grid, generate_puzzle, shuffle_tiles


def _run_case(grid_size: int, seed: int = 42, tile_size: int = 12):
    puzzle = generate_puzzle(grid_size=grid_size, tile_size=tile_size, seed=seed)
    shuffled, _ = shuffle_tiles(puzzle.tiles, seed=seed)
    grid = JigsawSolver(SolverConfig()).solve(shuffled)
    image = compose_image_from_grid(grid)
    return puzzle, PuzzleEvaluator().evaluate(grid, image, expected=puzzle.image)


@pytest.mark.parametrize("grid_size", [2, 3, 4, 6])
def test_synthetic_reconstruction_is_exact(grid_size: int) -> None:
    """Shuffled, randomly oriented tiles come back as the original image."""
    puzzle, result = _run_case(grid_size)
    assert result.tile_count == grid_size * grid_size
    assert result.unique_tiles
    assert result.seam_accuracy == 1.0
    assert result.image_match


@pytest.mark.parametrize("seed", [1, 42])
def test_full_size_puzzle_of_ten_pixel_tiles(seed: int) -> None:
    """A shuffled 12x12 grid of 10x10 tiles, the scale of real inputs, reconstructs exactly."""
    puzzle, result = _run_case(12, seed=seed, tile_size=10)
    assert result.tile_count == 144
    assert result.unique_tiles
    assert result.seam_accuracy == 1.0
    assert result.image_match
    assert puzzle.image.shape == (96, 96)


def test_different_shuffles_agree() -> None:
    """Two shuffles of one puzzle reconstruct to the same image up to orientation."""
    puzzle = generate_puzzle(grid_size=3, tile_size=10, seed=5)
    evaluator = PuzzleEvaluator()
    images = []
    for seed in (1, 2):
        shuffled, _ = shuffle_tiles(puzzle.tiles, seed=seed)
        images.append(compose_image_from_grid(JigsawSolver().solve(shuffled)))
    assert evaluator.compute_image_match(images[0], images[1].pixels)


def test_planted_patterns_are_counted() -> None:
    """Every planted sea monster is found and subtracted from the roughness."""
    puzzle = generate_puzzle(
        grid_size=4, tile_size=12, seed=3, density=0.15, pattern=SEA_MONSTER, plant=3
    )
    shuffled, _ = shuffle_tiles(puzzle.tiles, seed=3)
    result = solve_puzzle(shuffled)
    on_pixels = int((puzzle.image == "#").sum())
    assert result.scan.matches == 3
    assert result.roughness == on_pixels - 3 * SEA_MONSTER.cell_count
    assert result.scan.positions == puzzle.planted
    assert (result.scan.image.pixels == puzzle.image).all()
