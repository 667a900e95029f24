"""Reconstruct a tile puzzle from its text description and report both results."""

from __future__ import annotations

import argparse
from pathlib import Path

import numpy as np

from tile_jigsaw.matcher import corner_product
from tile_jigsaw.parser import parse_tiles
from tile_jigsaw.pipeline import PuzzleResult, solve_puzzle
from tile_jigsaw.scanner import SEA_MONSTER, Pattern, mark_matches
from tile_jigsaw.solver import SolverConfig
from tile_jigsaw.utils import pixels_to_levels


def load_pattern(path: Path | None) -> Pattern:
    """Read a pattern file, or fall back to the sea monster."""
    if path is None:
        return SEA_MONSTER
    return Pattern.from_lines([line for line in path.read_text().splitlines() if line.strip()])


def save_image(path: Path, pixels: np.ndarray) -> None:
    """Save the highlighted composite as an image file."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, pixels_to_levels(pixels), cmap="viridis", vmin=0, vmax=2)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Reassemble a tile puzzle and scan it for a pattern.")
    parser.add_argument("--input", required=True, help="Path to the 'Tile <id>:' text file")
    parser.add_argument(
        "--pattern",
        default=None,
        help="Optional pattern file where '#' marks required cells (default: sea monster)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Optional output path for the composite image (default: do not save)",
    )
    parser.add_argument(
        "--allow-ambiguous",
        action="store_true",
        help="Take the first fitting neighbor instead of failing when several tiles fit",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the composite with matched pattern cells highlighted",
    )
    return parser.parse_args()


def report(result: PuzzleResult) -> None:
    print(f"Grid: {len(result.grid)}x{len(result.grid[0])}")
    print(f"Composite size: {result.image.size}x{result.image.size}")
    if result.scan.orientation is None:
        print("Pattern matches: 0 (no orientation matched)")
    else:
        print(f"Pattern matches: {result.scan.matches} (orientation {result.scan.orientation})")
    print(f"Roughness: {result.roughness}")


def main() -> None:
    """Run the reconstruction pipeline on a text puzzle."""
    args = parse_args()
    input_path = Path(args.input)
    pattern = load_pattern(Path(args.pattern) if args.pattern else None)
    config = SolverConfig(reject_ambiguous=not args.allow_ambiguous)

    tiles = parse_tiles(input_path.read_text())
    print(f"Input: {input_path}")
    print(f"Tiles: {len(tiles)}")
    # From the neighbor graph alone, independent of assembly.
    print(f"Corner product: {corner_product(tiles)}")

    result = solve_puzzle(tiles, config=config, pattern=pattern)
    report(result)

    marked = mark_matches(result.scan.image, pattern, result.scan.positions)
    if args.output:
        output_path = Path(args.output)
        save_image(output_path, marked)
        print(f"Output image: {output_path.resolve()}")

    if args.show:
        import matplotlib.pyplot as plt

        fig, ax = plt.subplots(1, 1, figsize=(6, 6))
        ax.imshow(pixels_to_levels(marked), cmap="viridis", vmin=0, vmax=2)
        ax.set_title(f"Roughness {result.roughness}")
        ax.axis("off")
        plt.tight_layout()
        plt.show()


if __name__ == "__main__":
    main()
