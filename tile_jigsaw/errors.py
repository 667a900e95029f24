"""Error types raised while parsing and reconstructing tile puzzles."""

from __future__ import annotations


class JigsawError(ValueError):
    """Base class for invalid or unsolvable puzzle input."""


class TileParseError(JigsawError):
    """A tile block could not be read."""


class UnsolvableTilesError(JigsawError):
    """The neighbor graph does not describe a rectangular jigsaw."""


class AssemblyError(JigsawError):
    """Greedy assembly could not produce a complete, consistent grid."""
