"""Parse `Tile <id>:` text blocks into tiles."""

from __future__ import annotations

import re
from typing import List, Set

from .errors import TileParseError
from .tile import Tile

_HEADER = re.compile(r"^Tile (\d+):$")
_BLOCK_SEPARATOR = re.compile(r"\n\s*\n")
# Blank lines before the first block and after the last one
_OUTER_BLANK_LINES = re.compile(r"^\s*\n|\n\s*$")


class TileParser:
    """Split puzzle text into blank-line separated blocks and build one tile per block."""

    def parse(self, text: str) -> List[Tile]:
        """Return tiles in input order, raising `TileParseError` on the first bad block.

        All tiles must share one size.
        """
        text = text.replace("\r\n", "\n")
        if not text.strip():
            return []

        tiles: List[Tile] = []
        seen: Set[int] = set()
        for number, block in enumerate(_BLOCK_SEPARATOR.split(_OUTER_BLANK_LINES.sub("", text)), start=1):
            tile = self.parse_block(block, number)
            if tile.id in seen:
                raise TileParseError(f"block {number}: duplicate tile id {tile.id}")
            if tiles and tile.size != tiles[0].size:
                size = tiles[0].size
                raise TileParseError(
                    f"block {number}: tile {tile.id} is {tile.size}x{tile.size}, expected {size}x{size}"
                )
            seen.add(tile.id)
            tiles.append(tile)
        return tiles

    def parse_block(self, block: str, number: int = 1) -> Tile:
        """Parse a single header-plus-rows block.

        Whitespace around the header is ignored. Pixel rows are taken as
        written, so a space is a pixel like any other character.
        """
        lines = block.strip("\n").split("\n")
        lines[0] = lines[0].strip()
        match = _HEADER.match(lines[0])
        if match is None:
            raise TileParseError(f"block {number}: unreadable header {lines[0]!r}")
        tile_id = int(match.group(1))

        rows = lines[1:]
        if not rows:
            raise TileParseError(f"block {number}: tile {tile_id} has no rows")
        widths = {len(row) for row in rows}
        if len(widths) != 1:
            raise TileParseError(
                f"block {number}: tile {tile_id} has rows of inconsistent length {sorted(widths)}"
            )
        if len(rows) != len(rows[0]):
            raise TileParseError(
                f"block {number}: tile {tile_id} is {len(rows)}x{len(rows[0])}, expected a square"
            )
        return Tile.from_rows(tile_id, rows)


def parse_tiles(text: str) -> List[Tile]:
    """Parse every tile block in `text`."""
    return TileParser().parse(text)
