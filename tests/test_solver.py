"""Grid assembly tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np
import pytest

from tile_jigsaw.errors import AssemblyError, UnsolvableTilesError
from tile_jigsaw.evaluator import PuzzleEvaluator
from tile_jigsaw.matcher import Direction
from tile_jigsaw.parser import parse_tiles
from tile_jigsaw.solver import JigsawSolver, SolverConfig
from tile_jigsaw.tile import Tile
from tile_jigsaw.utils import compose_image_from_grid

SAMPLE = Path(__file__).resolve().parent / "data" / "sample_tiles.txt"


def _sample_tiles() -> List[Tile]:
    return parse_tiles(SAMPLE.read_text())


def test_sample_assembles_into_3x3() -> None:
    """Every tile is placed once and every seam matches."""
    tiles = _sample_tiles()
    grid = JigsawSolver().solve(tiles)
    assert [len(row) for row in grid] == [3, 3, 3]
    placed = sorted(tile.id for row in grid for tile in row)
    assert placed == sorted(tile.id for tile in tiles)
    assert PuzzleEvaluator().compute_seam_accuracy(grid) == 1.0
    assert grid[1][1].id == 1427


def test_top_left_is_smallest_corner() -> None:
    """Assembly starts from the lowest corner id and places corners at the grid corners."""
    grid = JigsawSolver().solve(_sample_tiles())
    assert grid[0][0].id == 1171
    assert {grid[0][0].id, grid[0][-1].id, grid[-1][0].id, grid[-1][-1].id} == {1171, 1951, 2971, 3079}


def test_reconstruction_is_idempotent() -> None:
    """Two runs over the same tiles give the same composite image."""
    tiles = _sample_tiles()
    first = compose_image_from_grid(JigsawSolver().solve(tiles))
    second = compose_image_from_grid(JigsawSolver().solve(tiles))
    assert first == second
    assert first.id == 0
    assert first.size == 3 * 8


def test_duplicated_tile_is_rejected() -> None:
    """A tile copied under a new id cannot yield a complete square grid."""
    tiles = _sample_tiles()
    tiles.append(Tile(id=9999, pixels=tiles[0].pixels))
    with pytest.raises(UnsolvableTilesError, match="expected 4 corner tiles"):
        JigsawSolver().solve(tiles)


def test_incomplete_grid_is_rejected() -> None:
    """A grid holding fewer tiles than were given fails the completeness check."""
    tile = _sample_tiles()[0]
    with pytest.raises(AssemblyError, match="placed 1 of 9 tiles"):
        JigsawSolver._check_complete([[tile]], 9)


def test_ragged_grid_is_rejected() -> None:
    """Rows of different lengths fail even when every tile was placed."""
    a, b, c = _sample_tiles()[:3]
    with pytest.raises(AssemblyError, match=r"rows have unequal lengths: \[2, 1\]"):
        JigsawSolver._check_complete([[a, b], [c]], 3)


def test_non_square_grid_is_rejected() -> None:
    """A single row of two tiles is complete but not square."""
    a, b = _sample_tiles()[:2]
    with pytest.raises(AssemblyError, match="assembled grid is 1x2, expected a square"):
        JigsawSolver._check_complete([[a, b]], 2)


def test_vertical_seam_mismatch_is_rejected() -> None:
    """Stacked tiles whose facing rows differ are caught by the seam check."""
    upper = Tile.from_rows(1, ["#.#", "...", "##."])
    lower = Tile.from_rows(2, ["#..", "...", "..."])
    JigsawSolver._check_vertical_seams([[upper], [Tile.from_rows(3, ["##.", "...", "..."])]])
    with pytest.raises(AssemblyError, match="seam mismatch between tile 1 and tile 2 at row 1, col 0"):
        JigsawSolver._check_vertical_seams([[upper], [lower]])


def test_corner_without_fitting_orientation_is_rejected() -> None:
    """A corner whose neighbors share none of its edges cannot be oriented."""
    corner = Tile.from_rows(1, ["#..", "...", "..."])
    stranger = Tile.from_rows(2, ["###", "###", "###"])
    other = Tile.from_rows(3, ["#.#", ".#.", "#.#"])
    with pytest.raises(AssemblyError, match="corner tile 1 has no orientation fitting its neighbors"):
        JigsawSolver()._orient_top_left(corner, [stranger, other])


def _ambiguous_fixture():
    current = Tile.from_rows(1, ["..#", "..#", "#.."])
    first = Tile.from_rows(2, ["#..", "#..", "..."])
    second = Tile.from_rows(3, ["#.#", "#..", ".##"])
    graph = {1: [2, 3], 2: [1], 3: [1]}
    by_id = {tile.id: tile for tile in (current, first, second)}
    return current, graph, by_id


def test_ambiguous_neighbor_raises() -> None:
    """Two different tiles fitting the same edge are flagged, not resolved silently."""
    current, graph, by_id = _ambiguous_fixture()
    solver = JigsawSolver(SolverConfig(reject_ambiguous=True))
    with pytest.raises(AssemblyError, match="ambiguous right neighbor for tile 1"):
        solver._find_neighbor(current, graph, by_id, {1}, Direction.RIGHT)


def test_ambiguous_neighbor_first_wins_when_allowed() -> None:
    """With ambiguity allowed, the first neighbor in graph order wins."""
    current, graph, by_id = _ambiguous_fixture()
    solver = JigsawSolver(SolverConfig(reject_ambiguous=False))
    found = solver._find_neighbor(current, graph, by_id, {1}, Direction.RIGHT)
    assert found == by_id[2]
    assert found.left == current.right


def test_placed_tiles_are_skipped() -> None:
    """Tiles already in the grid are never offered again."""
    current, graph, by_id = _ambiguous_fixture()
    found = JigsawSolver()._find_neighbor(current, graph, by_id, {1, 2}, Direction.RIGHT)
    assert found == by_id[3]
    assert np.array_equal(found.pixels, by_id[3].pixels)
