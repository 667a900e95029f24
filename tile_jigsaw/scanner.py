"""Search a composite image for a fixed pixel pattern under every orientation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .tile import Tile


@dataclass(frozen=True, eq=False)
class Pattern:
    """A multi-row template; `mask` marks cells that must be on, the rest are don't-care."""

    mask: np.ndarray

    @classmethod
    def from_lines(cls, lines: Sequence[str], mark: str = "#") -> "Pattern":
        """Build a pattern from text rows, padding ragged rows with don't-care cells."""
        if not lines:
            raise ValueError("pattern needs at least one row")
        width = max(len(line) for line in lines)
        mask = np.zeros((len(lines), width), dtype=bool)
        for i, line in enumerate(lines):
            for j, ch in enumerate(line):
                mask[i, j] = ch == mark
        if not mask.any():
            raise ValueError(f"pattern has no {mark!r} cells")
        mask.setflags(write=False)
        return cls(mask=mask)

    @property
    def shape(self) -> Tuple[int, int]:
        return int(self.mask.shape[0]), int(self.mask.shape[1])

    @property
    def cell_count(self) -> int:
        return int(np.count_nonzero(self.mask))


SEA_MONSTER = Pattern.from_lines(
    [
        "                  # ",
        "#    ##    ##    ###",
        " #  #  #  #  #  #   ",
    ]
)


@dataclass
class ScanResult:
    """Outcome of scanning one composite image."""

    image: Tile
    """The composite in the orientation where matches were found, or as given."""

    orientation: Optional[int]
    """Index into `Tile.variants()` of the matching orientation, None when nothing matched."""

    positions: List[Tuple[int, int]] = field(default_factory=list)
    roughness: int = 0

    @property
    def matches(self) -> int:
        return len(self.positions)


class PatternScanner:
    """Count pattern occurrences and the roughness left over."""

    def __init__(self, pattern: Pattern = SEA_MONSTER, on_pixel: str = "#") -> None:
        self.pattern = pattern
        self.on_pixel = on_pixel

    def find_matches(self, image: Tile) -> List[Tuple[int, int]]:
        """Top-left anchors where every required pattern cell lands on an on-pixel."""
        on = image.pixels == self.on_pixel
        height, width = self.pattern.shape
        if height > on.shape[0] or width > on.shape[1]:
            return []
        windows = sliding_window_view(on, (height, width))
        hits = windows[:, :, self.pattern.mask].all(axis=-1)
        return [(int(i), int(j)) for i, j in zip(*np.nonzero(hits))]

    def scan(self, image: Tile) -> ScanResult:
        """Try the 8 orientations in order and stop at the first with any match."""
        total = image.count(self.on_pixel)
        for index, variant in enumerate(image.variants()):
            positions = self.find_matches(variant)
            if positions:
                return ScanResult(
                    image=variant,
                    orientation=index,
                    positions=positions,
                    roughness=total - self.pattern.cell_count * len(positions),
                )
        return ScanResult(image=image, orientation=None, positions=[], roughness=total)


def mark_matches(
    image: Tile, pattern: Pattern, positions: Sequence[Tuple[int, int]], mark: str = "O"
) -> np.ndarray:
    """Return a copy of the image pixels with matched pattern cells replaced by `mark`."""
    out = image.pixels.copy()
    height, width = pattern.shape
    for i, j in positions:
        region = out[i : i + height, j : j + width]
        region[pattern.mask] = mark
    return out
