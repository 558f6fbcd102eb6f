"""Shared fixtures: the bundled board and a small fixed vocabulary."""

import pytest

from letterbox_puzzle.engine import PuzzleEngine
from letterbox_puzzle.geometry import build_board_spec
from letterbox_puzzle.puzzle_io import puzzle_from_sides

SAMPLE_SIDES = {"top": "GIA", "left": "WHO", "right": "LSE", "bottom": "RVT"}

# "ea" is not English; it is here so the chain HE -> EA can be exercised.
TEST_WORDS = {"he", "ea", "hat", "goal", "live", "eths", "swear"}


@pytest.fixture
def layout():
    return build_board_spec()


@pytest.fixture
def puzzle(layout):
    return puzzle_from_sides(SAMPLE_SIDES, layout, id="sample", title="Sample")


@pytest.fixture
def lexicon():
    return set(TEST_WORDS)


@pytest.fixture
def engine(puzzle, lexicon):
    return PuzzleEngine(puzzle, lexicon)
