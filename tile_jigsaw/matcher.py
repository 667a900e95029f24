"""Edge matching and neighbor graph construction."""

from __future__ import annotations

import math
from collections import defaultdict
from enum import IntEnum
from typing import Dict, List, Set

from .errors import UnsolvableTilesError
from .tile import Tile


class Direction(IntEnum):
    """Supported relative directions between neighboring pieces."""

    RIGHT = 0
    DOWN = 1


def canonical_edge(edge: str) -> str:
    """Orientation-free key for an edge: the smaller of the edge and its reversal."""
    reverse = edge[::-1]
    return edge if edge <= reverse else reverse


class EdgeMatcher:
    """Find which tiles can sit next to each other in some orientation."""

    def build_neighbor_graph(self, tiles: List[Tile]) -> Dict[int, List[int]]:
        """Map every tile id to the sorted ids of tiles sharing an edge with it.

        Two tiles are neighbors when one of the first tile's possible borders
        equals a raw border of the other. Indexing borders by their canonical
        form finds the same pairs without testing every pair of tiles.
        """
        index: Dict[str, Set[int]] = defaultdict(set)
        for tile in tiles:
            for edge in tile.borders():
                index[canonical_edge(edge)].add(tile.id)

        graph: Dict[int, Set[int]] = {tile.id: set() for tile in tiles}
        for owners in index.values():
            for a in owners:
                graph[a].update(b for b in owners if b != a)
        return {tile_id: sorted(neighbors) for tile_id, neighbors in graph.items()}

    def find_corners(self, graph: Dict[int, List[int]]) -> List[int]:
        """Sorted ids of tiles with exactly two neighbors."""
        return sorted(tile_id for tile_id, neighbors in graph.items() if len(neighbors) == 2)

    def validate(self, graph: Dict[int, List[int]]) -> List[int]:
        """Check the graph can be a rectangular jigsaw and return its corners."""
        loose = sorted(tile_id for tile_id, neighbors in graph.items() if len(neighbors) < 2)
        if loose:
            raise UnsolvableTilesError(f"tiles with fewer than two neighbors: {loose}")
        corners = self.find_corners(graph)
        if len(corners) != 4:
            raise UnsolvableTilesError(f"expected 4 corner tiles, found {len(corners)}: {corners}")
        return corners

    def corner_product(self, tiles: List[Tile]) -> int:
        """Product of the four corner ids, without assembling the image."""
        return math.prod(self.validate(self.build_neighbor_graph(tiles)))


def corner_product(tiles: List[Tile]) -> int:
    return EdgeMatcher().corner_product(tiles)
