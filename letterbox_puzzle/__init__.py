"""Letterbox word puzzle: board geometry, puzzle engine, loaders and view adapters."""

from .geometry import BoardSpec, NodeRef, build_board_spec
from .engine import GameState, PuzzleEngine, PuzzleEvent, init_state, reduce
from .lexicon import Lexicon, load_lexicon
from .puzzle_io import Puzzle, PuzzleValidationError, list_puzzles, load_puzzle

__all__ = [
    "BoardSpec",
    "GameState",
    "Lexicon",
    "NodeRef",
    "Puzzle",
    "PuzzleEngine",
    "PuzzleEvent",
    "PuzzleValidationError",
    "build_board_spec",
    "init_state",
    "list_puzzles",
    "load_lexicon",
    "load_puzzle",
    "reduce",
]
