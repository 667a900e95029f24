"""Evaluation metrics for tile reconstruction quality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .tile import Tile


@dataclass
class EvaluationResult:
    """Container for reconstruction metrics."""

    seam_accuracy: float
    tile_count: int
    unique_tiles: bool
    image_match: Optional[bool] = None


class PuzzleEvaluator:
    """Compute core quality metrics for reconstructed puzzles."""

    def compute_seam_accuracy(self, grid: List[List[Tile]]) -> float:
        """Fraction of right/down seams whose facing edges are identical."""
        correct = 0
        total = 0
        rows = len(grid)
        for r in range(rows):
            cols = len(grid[r])
            for c in range(cols):
                cur = grid[r][c]
                if c + 1 < cols:
                    total += 1
                    if cur.right == grid[r][c + 1].left:
                        correct += 1
                if r + 1 < rows and c < len(grid[r + 1]):
                    total += 1
                    if cur.bottom == grid[r + 1][c].top:
                        correct += 1
        return correct / total if total else 0.0

    def compute_image_match(self, image: Tile, expected: np.ndarray) -> bool:
        """True when some orientation of `image` reproduces `expected` exactly."""
        return any(np.array_equal(variant.pixels, expected) for variant in image.variants())

    def evaluate(
        self, grid: List[List[Tile]], image: Tile, expected: Optional[np.ndarray] = None
    ) -> EvaluationResult:
        """Calculate all metrics for an assembled grid and its composite."""
        ids = [tile.id for row in grid for tile in row]
        return EvaluationResult(
            seam_accuracy=self.compute_seam_accuracy(grid),
            tile_count=len(ids),
            unique_tiles=len(ids) == len(set(ids)),
            image_match=None if expected is None else self.compute_image_match(image, expected),
        )
