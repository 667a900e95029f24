"""Image composition and reproducible synthetic puzzles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from .matcher import canonical_edge
from .scanner import Pattern
from .tile import Tile

FIRST_TILE_ID = 1000


def compose_image_from_grid(grid: List[List[Tile]]) -> Tile:
    """Strip every tile's border ring and join the interiors row-major into one image tile."""
    if not grid or not grid[0]:
        raise ValueError("cannot compose an empty grid")
    if grid[0][0].size < 3:
        raise ValueError("tiles must be at least 3x3 to have an interior")
    pixels = np.vstack([np.hstack([tile.interior() for tile in row]) for row in grid])
    return Tile(id=0, pixels=pixels)


def compose_tiles_row_major(tiles: List[Tile], rows: int, cols: int) -> np.ndarray:
    """Lay out whole tiles in list order, borders included."""
    size = tiles[0].size
    canvas = np.full((rows * size, cols * size), ".", dtype="<U1")
    for idx, tile in enumerate(tiles[: rows * cols]):
        r, c = divmod(idx, cols)
        canvas[r * size : (r + 1) * size, c * size : (c + 1) * size] = tile.pixels
    return canvas


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def generate_random_pixels(
    size: int, density: float = 0.5, rng: Optional[np.random.Generator] = None, seed: int = 42
) -> np.ndarray:
    """Square array of '#' and '.' with roughly `density` of the cells on."""
    rng = rng if rng is not None else set_random_seed(seed)
    on = rng.random((size, size)) < density
    return np.where(on, "#", ".").astype("<U1")


def plant_pattern(
    image: np.ndarray, pattern: Pattern, count: int, rng: np.random.Generator, max_attempts: int = 10000
) -> List[Tuple[int, int]]:
    """Stamp `count` non-overlapping copies of `pattern` into `image` in place."""
    height, width = pattern.shape
    if height > image.shape[0] or width > image.shape[1]:
        raise ValueError("pattern does not fit in the image")
    taken = np.zeros(image.shape, dtype=bool)
    anchors: List[Tuple[int, int]] = []
    for _ in range(max_attempts):
        if len(anchors) == count:
            break
        i = int(rng.integers(0, image.shape[0] - height + 1))
        j = int(rng.integers(0, image.shape[1] - width + 1))
        if taken[i : i + height, j : j + width].any():
            continue
        taken[i : i + height, j : j + width] = True
        image[i : i + height, j : j + width][pattern.mask] = "#"
        anchors.append((i, j))
    if len(anchors) != count:
        raise ValueError(f"could only place {len(anchors)} of {count} patterns")
    return sorted(anchors)


# (index of the whole seam, index of its middle pixels) into the full image
Seam = Tuple[Tuple, Tuple]


def _seams(grid_size: int, tile_size: int) -> List[Seam]:
    """Index every tile edge of the full image as (whole seam, seam without its end pixels).

    End pixels sit where seams cross, so only the middle of a seam belongs to
    it alone.
    """
    step = tile_size - 1
    seams: List[Seam] = []
    for line in range(grid_size + 1):
        for block in range(grid_size):
            y, x = line * step, block * step
            seams.append(((y, slice(x, x + tile_size)), (y, slice(x + 1, x + step))))
            seams.append(((slice(x, x + tile_size), y), (slice(x + 1, x + step), y)))
    return seams


def _conflicting_seams(full: np.ndarray, seams: List[Seam]) -> List[int]:
    """Indices of seams that read the same both ways or repeat an earlier seam up to reversal."""
    seen = set()
    conflicts: List[int] = []
    for idx, (whole, _) in enumerate(seams):
        edge = "".join(full[whole])
        key = canonical_edge(edge)
        if edge == edge[::-1] or key in seen:
            conflicts.append(idx)
        else:
            seen.add(key)
    return conflicts


@dataclass
class SyntheticPuzzle:
    """Tiles cut from a known image, kept in their true grid order."""

    tiles: List[Tile]
    image: np.ndarray
    grid_size: int
    planted: List[Tuple[int, int]] = field(default_factory=list)


def generate_puzzle(
    grid_size: int = 3,
    tile_size: int = 10,
    seed: int = 42,
    density: float = 0.3,
    pattern: Optional[Pattern] = None,
    plant: int = 0,
    max_attempts: int = 1000,
) -> SyntheticPuzzle:
    """Build a solvable puzzle whose composite image is known.

    Adjacent tiles share their seam line, as in the text format. Each round
    redraws the middle pixels of the seams that are palindromes or repeat
    another seam up to reversal, leaving the rest in place, until every edge
    is unique and exactly one reconstruction exists. `max_attempts` bounds
    the number of rounds.
    """
    if grid_size < 2 or tile_size < 3:
        raise ValueError("grid_size must be >= 2 and tile_size >= 3")
    rng = set_random_seed(seed)
    inner = tile_size - 2
    step = tile_size - 1

    image = generate_random_pixels(grid_size * inner, density=density, rng=rng)
    planted: List[Tuple[int, int]] = []
    if plant:
        if pattern is None:
            raise ValueError("plant requires a pattern")
        planted = plant_pattern(image, pattern, plant, rng)

    full = generate_random_pixels(grid_size * step + 1, density=0.5, rng=rng)
    for r in range(grid_size):
        for c in range(grid_size):
            full[r * step + 1 : r * step + 1 + inner, c * step + 1 : c * step + 1 + inner] = image[
                r * inner : (r + 1) * inner, c * inner : (c + 1) * inner
            ]

    seams = _seams(grid_size, tile_size)
    for _ in range(max_attempts):
        conflicts = _conflicting_seams(full, seams)
        if not conflicts:
            break
        for idx in conflicts:
            full[seams[idx][1]] = np.where(rng.random(inner) < 0.5, "#", ".")
    else:
        raise RuntimeError(f"seams still collide after {max_attempts} rounds of redrawing")

    tiles = [
        Tile(
            id=FIRST_TILE_ID + r * grid_size + c,
            pixels=full[r * step : r * step + tile_size, c * step : c * step + tile_size],
        )
        for r in range(grid_size)
        for c in range(grid_size)
    ]
    image.setflags(write=False)
    return SyntheticPuzzle(tiles=tiles, image=image, grid_size=grid_size, planted=planted)


def shuffle_tiles(tiles: List[Tile], seed: int = 42) -> Tuple[List[Tile], np.ndarray]:
    """Return tiles in random order, each in a random orientation, and the permutation."""
    rng = set_random_seed(seed)
    order = rng.permutation(len(tiles))
    shuffled = [tiles[i].variants()[int(rng.integers(0, 8))] for i in order]
    return shuffled, order


def pixels_to_levels(pixels: np.ndarray, on_pixel: str = "#", mark: str = "O") -> np.ndarray:
    """Map pixels to 0/1/2 levels (off, on, marked) for plotting."""
    levels = np.zeros(pixels.shape, dtype=np.uint8)
    levels[pixels == on_pixel] = 1
    levels[pixels == mark] = 2
    return levels
