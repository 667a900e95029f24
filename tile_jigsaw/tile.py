"""Square pixel tiles and their eight orientations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


@dataclass(frozen=True, eq=False)
class Tile:
    """A square block of single-character pixels with a stable identifier."""

    id: int
    pixels: np.ndarray

    def __post_init__(self) -> None:
        # Own a private read-only copy; the caller's array is left untouched.
        pixels = np.array(self.pixels, copy=True)
        if pixels.ndim != 2 or pixels.shape[0] != pixels.shape[1]:
            raise ValueError(f"tile {self.id} must be square, got shape {pixels.shape}")
        if pixels.shape[0] == 0:
            raise ValueError(f"tile {self.id} has no pixels")
        pixels.setflags(write=False)
        object.__setattr__(self, "pixels", pixels)

    @classmethod
    def from_rows(cls, tile_id: int, rows: Sequence[str]) -> "Tile":
        """Create a tile from equal-length text rows."""
        if not rows:
            raise ValueError(f"tile {tile_id} has no rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise ValueError(f"tile {tile_id} has rows of inconsistent length: {sorted(widths)}")
        pixels = np.array([list(row) for row in rows], dtype="<U1")
        return cls(id=int(tile_id), pixels=pixels)

    @property
    def size(self) -> int:
        return int(self.pixels.shape[0])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tile):
            return NotImplemented
        return self.id == other.id and np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"Tile(id={self.id}, size={self.size})"

    def borders(self) -> List[str]:
        """Return edges as [top, bottom, left, right].

        Top and bottom read left to right, left and right read top to bottom.
        """
        return [
            "".join(self.pixels[0, :]),
            "".join(self.pixels[-1, :]),
            "".join(self.pixels[:, 0]),
            "".join(self.pixels[:, -1]),
        ]

    @property
    def top(self) -> str:
        return "".join(self.pixels[0, :])

    @property
    def bottom(self) -> str:
        return "".join(self.pixels[-1, :])

    @property
    def left(self) -> str:
        return "".join(self.pixels[:, 0])

    @property
    def right(self) -> str:
        return "".join(self.pixels[:, -1])

    def possible_borders(self) -> List[str]:
        """Raw borders followed by their reversals: every edge any orientation can show."""
        raw = self.borders()
        return raw + [edge[::-1] for edge in raw]

    def rot90(self) -> "Tile":
        """Rotate 90 degrees counter-clockwise: new (i, j) is old (j, size-1-i)."""
        return Tile(id=self.id, pixels=np.rot90(self.pixels))

    def flip(self) -> "Tile":
        """Mirror horizontally by reversing every row."""
        return Tile(id=self.id, pixels=self.pixels[:, ::-1])

    def variants(self) -> List["Tile"]:
        """Return all 8 orientations in a fixed order.

        Order: identity, rot, rot^2, rot^3, then the same four each followed
        by a flip. Assembly and scanning take the first match in this order,
        so keeping it stable keeps results reproducible.
        """
        rotations = [self]
        for _ in range(3):
            rotations.append(rotations[-1].rot90())
        return rotations + [tile.flip() for tile in rotations]

    def interior(self) -> np.ndarray:
        """Pixels with the outermost ring removed."""
        return self.pixels[1:-1, 1:-1]

    def count(self, pixel: str = "#") -> int:
        return int(np.count_nonzero(self.pixels == pixel))

    def render(self) -> str:
        return "\n".join("".join(row) for row in self.pixels)
