"""Greedy grid assembly of oriented tiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Set

from .errors import AssemblyError
from .matcher import Direction, EdgeMatcher
from .tile import Tile


@dataclass
class SolverConfig:
    """Configuration for the grid assembler."""

    reject_ambiguous: bool = True
    verify_seams: bool = True


class JigsawSolver:
    """Place tiles row by row, starting from an oriented top-left corner."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config if config is not None else SolverConfig()
        self.matcher = EdgeMatcher()

    def solve(self, tiles: List[Tile]) -> List[List[Tile]]:
        """Return the assembled grid of oriented tiles, row-major."""
        graph = self.matcher.build_neighbor_graph(tiles)
        corners = self.matcher.validate(graph)
        by_id: Dict[int, Tile] = {tile.id: tile for tile in tiles}

        start = by_id[corners[0]]
        leader: Optional[Tile] = self._orient_top_left(start, [by_id[n] for n in graph[start.id]])
        placed: Set[int] = set()
        grid: List[List[Tile]] = []

        while leader is not None:
            placed.add(leader.id)
            row = [leader]
            current = self._find_neighbor(row[-1], graph, by_id, placed, Direction.RIGHT)
            while current is not None:
                placed.add(current.id)
                row.append(current)
                current = self._find_neighbor(row[-1], graph, by_id, placed, Direction.RIGHT)
            grid.append(row)
            leader = self._find_neighbor(row[0], graph, by_id, placed, Direction.DOWN)

        self._check_complete(grid, len(tiles))
        if self.config.verify_seams:
            self._check_vertical_seams(grid)
        return grid

    def _orient_top_left(self, corner: Tile, neighbors: List[Tile]) -> Tile:
        """Pick the corner orientation facing its first neighbor to the right and its second below."""
        right_edges = set(neighbors[0].possible_borders())
        bottom_edges = set(neighbors[1].possible_borders())
        for variant in corner.variants():
            if variant.right in right_edges and variant.bottom in bottom_edges:
                return variant
        raise AssemblyError(f"corner tile {corner.id} has no orientation fitting its neighbors")

    def _find_neighbor(
        self,
        current: Tile,
        graph: Dict[int, List[int]],
        by_id: Dict[int, Tile],
        placed: Set[int],
        direction: Direction,
    ) -> Optional[Tile]:
        """Return the first unplaced neighbor orientation abutting `current` in `direction`."""
        edge = current.right if direction == Direction.RIGHT else current.bottom
        fits: List[Tile] = []
        for tile_id in graph[current.id]:
            if tile_id in placed:
                continue
            for variant in by_id[tile_id].variants():
                facing = variant.left if direction == Direction.RIGHT else variant.top
                if facing == edge:
                    fits.append(variant)
                    break

        if not fits:
            return None
        if len(fits) > 1 and self.config.reject_ambiguous:
            ids = [tile.id for tile in fits]
            raise AssemblyError(
                f"ambiguous {direction.name.lower()} neighbor for tile {current.id}: {ids}"
            )
        return fits[0]

    @staticmethod
    def _check_complete(grid: List[List[Tile]], expected: int) -> None:
        placed = sum(len(row) for row in grid)
        if placed != expected:
            raise AssemblyError(f"placed {placed} of {expected} tiles")
        widths = {len(row) for row in grid}
        if len(widths) != 1:
            raise AssemblyError(f"rows have unequal lengths: {[len(row) for row in grid]}")
        if len(grid) != len(grid[0]):
            raise AssemblyError(f"assembled grid is {len(grid)}x{len(grid[0])}, expected a square")

    @staticmethod
    def _check_vertical_seams(grid: List[List[Tile]]) -> None:
        # Horizontal seams hold by construction; stacked tiles were only checked in column 0.
        for r in range(1, len(grid)):
            for c, (above, below) in enumerate(zip(grid[r - 1], grid[r])):
                if above.bottom != below.top:
                    raise AssemblyError(
                        f"seam mismatch between tile {above.id} and tile {below.id} at row {r}, col {c}"
                    )
