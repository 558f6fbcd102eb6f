"""Puzzle file loading and validation."""

import json
import os

import pytest

from letterbox_puzzle.puzzle_io import (
    DEFAULT_TARGET_WORDS,
    PuzzleValidationError,
    default_puzzle_dir,
    list_puzzles,
    load_puzzle,
    parse_puzzle,
)

VALID = {
    "schema_version": "letterbox.v1",
    "meta": {"id": "p1", "title": "First", "target_words": 3},
    "board": {"top": "GIA", "left": "WHO", "right": "LSE", "bottom": "RVT"},
}


def write_puzzle(directory, name, doc):
    path = directory / name
    path.write_text(json.dumps(doc) if not isinstance(doc, str) else doc, encoding="utf-8")
    return str(path)


class TestParsePuzzle:
    """Schema validation."""

    def test_valid_document(self, layout):
        puzzle = parse_puzzle(VALID, layout, filename="/x/p1.json")
        assert puzzle.board["top"] == ("G", "I", "A")
        assert puzzle.board["bottom"] == ("R", "V", "T")
        assert puzzle.total_distinct_letters == 12
        assert puzzle.puzzle_id == "p1"
        assert puzzle.target_words == 3
        assert puzzle.filename == "p1.json"

    def test_letters_normalised(self, layout):
        doc = dict(VALID, board={"top": "g i a", "left": ["w", "h", "o"], "right": "lse", "bottom": "RVT"})
        puzzle = parse_puzzle(doc, layout)
        assert puzzle.board["top"] == ("G", "I", "A")
        assert puzzle.board["left"] == ("W", "H", "O")

    def test_default_target_words(self, layout):
        doc = dict(VALID, meta={"id": "p"})
        assert parse_puzzle(doc, layout).target_words == DEFAULT_TARGET_WORDS

    def test_wrong_schema_version(self, layout):
        with pytest.raises(PuzzleValidationError, match="schema_version"):
            parse_puzzle(dict(VALID, schema_version="puzzlefile.v2"), layout)

    def test_missing_side(self, layout):
        board = {"top": "GIA", "left": "WHO", "right": "LSE"}
        with pytest.raises(PuzzleValidationError, match="missing required sides"):
            parse_puzzle(dict(VALID, board=board), layout)

    def test_unknown_side(self, layout):
        board = dict(VALID["board"], middle="XYZ")
        with pytest.raises(PuzzleValidationError, match="unknown sides"):
            parse_puzzle(dict(VALID, board=board), layout)

    def test_wrong_length(self, layout):
        board = dict(VALID["board"], top="GIAX")
        with pytest.raises(PuzzleValidationError, match="length 4"):
            parse_puzzle(dict(VALID, board=board), layout)

    def test_non_letters(self, layout):
        board = dict(VALID["board"], top="G1A")
        with pytest.raises(PuzzleValidationError, match="Invalid character"):
            parse_puzzle(dict(VALID, board=board), layout)

    def test_empty_side(self, layout):
        board = dict(VALID["board"], top="")
        with pytest.raises(PuzzleValidationError, match="non-empty"):
            parse_puzzle(dict(VALID, board=board), layout)

    @pytest.mark.parametrize("total", [0, 13, "12", True])
    def test_bad_total_distinct_letters(self, layout, total):
        with pytest.raises(PuzzleValidationError, match="total_distinct_letters"):
            parse_puzzle(dict(VALID, total_distinct_letters=total), layout)

    def test_total_distinct_letters_override(self, layout):
        puzzle = parse_puzzle(dict(VALID, total_distinct_letters=10), layout)
        assert puzzle.total_distinct_letters == 10

    def test_not_an_object(self, layout):
        with pytest.raises(PuzzleValidationError):
            parse_puzzle(["GIA"], layout)  # type: ignore[arg-type]


class TestFiles:
    """Reading puzzle files from disk."""

    def test_load_puzzle(self, tmp_path, layout):
        path = write_puzzle(tmp_path, "p1.json", VALID)
        puzzle = load_puzzle(path, layout)
        assert puzzle.puzzle_id == "p1"

    def test_load_invalid_json(self, tmp_path, layout):
        path = write_puzzle(tmp_path, "bad.json", "{not json")
        with pytest.raises(PuzzleValidationError, match="not valid JSON"):
            load_puzzle(path, layout)

    def test_list_puzzles_sorted_and_skips_bad(self, tmp_path):
        write_puzzle(tmp_path, "b.json", dict(VALID, meta={"id": "b", "title": "Bee"}))
        write_puzzle(tmp_path, "a.json", dict(VALID, meta={}))
        write_puzzle(tmp_path, "broken.json", "{")
        write_puzzle(tmp_path, "list.json", "[1, 2]")
        (tmp_path / "notes.txt").write_text("ignore me")

        metas = list_puzzles(str(tmp_path))
        assert [m.filename for m in metas] == ["a.json", "b.json"]
        assert metas[0].id == "a"
        assert metas[0].title == "a"
        assert metas[1].title == "Bee"

    def test_list_missing_dir(self, tmp_path):
        assert list_puzzles(str(tmp_path / "nope")) == []

    def test_bundled_puzzle_loads(self, layout):
        puzzle_dir = default_puzzle_dir()
        metas = list_puzzles(puzzle_dir)
        assert metas, puzzle_dir
        puzzle = load_puzzle(os.path.join(puzzle_dir, metas[0].filename), layout)
        assert puzzle.board["top"] == ("G", "I", "A")

    def test_puzzle_dir_from_environment(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LETTERBOX_PUZZLE_DIR", str(tmp_path))
        assert default_puzzle_dir() == str(tmp_path)
        assert default_puzzle_dir("explicit") == "explicit"
