"""End-to-end reconstruction: adjacency, assembly, compositing and pattern scan."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional

from .parser import parse_tiles
from .scanner import SEA_MONSTER, Pattern, PatternScanner, ScanResult
from .solver import JigsawSolver, SolverConfig
from .tile import Tile
from .utils import compose_image_from_grid


@dataclass
class PuzzleResult:
    """Both puzzle answers plus the intermediate artifacts they came from."""

    corner_product: int
    roughness: int
    grid: List[List[Tile]]
    image: Tile
    scan: ScanResult


def solve_puzzle(
    tiles: List[Tile], config: Optional[SolverConfig] = None, pattern: Pattern = SEA_MONSTER
) -> PuzzleResult:
    """Reconstruct the image and score it.

    Parse, adjacency and assembly errors propagate. Finding no pattern is a
    normal outcome: the roughness is then the raw on-pixel count.
    """
    solver = JigsawSolver(config)
    grid = solver.solve(tiles)
    corners = [grid[0][0], grid[0][-1], grid[-1][0], grid[-1][-1]]
    image = compose_image_from_grid(grid)
    scan = PatternScanner(pattern).scan(image)
    return PuzzleResult(
        corner_product=math.prod(tile.id for tile in corners),
        roughness=scan.roughness,
        grid=grid,
        image=image,
        scan=scan,
    )


def solve_puzzle_text(
    text: str, config: Optional[SolverConfig] = None, pattern: Pattern = SEA_MONSTER
) -> PuzzleResult:
    """Parse `Tile <id>:` blocks from `text` and solve them."""
    return solve_puzzle(parse_tiles(text), config=config, pattern=pattern)
