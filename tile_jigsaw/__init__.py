"""Jigsaw tile image reconstruction package."""

from .errors import AssemblyError, JigsawError, TileParseError, UnsolvableTilesError
from .evaluator import EvaluationResult, PuzzleEvaluator
from .matcher import Direction, EdgeMatcher, corner_product
from .parser import TileParser, parse_tiles
from .pipeline import PuzzleResult, solve_puzzle, solve_puzzle_text
from .scanner import SEA_MONSTER, Pattern, PatternScanner, ScanResult, mark_matches
from .solver import JigsawSolver, SolverConfig
from .tile import Tile
from .utils import compose_image_from_grid, generate_puzzle, shuffle_tiles

__all__ = [
    "Tile",
    "TileParser",
    "parse_tiles",
    "Direction",
    "EdgeMatcher",
    "corner_product",
    "SolverConfig",
    "JigsawSolver",
    "compose_image_from_grid",
    "Pattern",
    "SEA_MONSTER",
    "PatternScanner",
    "ScanResult",
    "mark_matches",
    "PuzzleResult",
    "solve_puzzle",
    "solve_puzzle_text",
    "EvaluationResult",
    "PuzzleEvaluator",
    "generate_puzzle",
    "shuffle_tiles",
    "JigsawError",
    "TileParseError",
    "UnsolvableTilesError",
    "AssemblyError",
]
