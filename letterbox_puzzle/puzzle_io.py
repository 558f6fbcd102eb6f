from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .geometry import BoardSpec

log = logging.getLogger("letterbox")

SCHEMA_VERSION = "letterbox.v1"
DEFAULT_TARGET_WORDS = 4


class PuzzleValidationError(ValueError):
    pass


def _norm_letters(s: str) -> str:
    return "".join(ch for ch in str(s).upper().strip() if ch != " ")


def _validate_letters_only(s: str) -> None:
    for ch in s:
        if "A" <= ch <= "Z":
            continue
        raise PuzzleValidationError(
            f"Invalid character '{ch}' in string '{s}'. Only A–Z allowed."
        )


# Side -> ordered letters (index 0..n-1)
Board = Dict[str, Tuple[str, ...]]


@dataclass(frozen=True)
class PuzzleMeta:
    id: str
    title: str
    subtitle: str
    author: str
    date: str
    filename: str


@dataclass(frozen=True)
class Puzzle:
    schema_version: str
    meta: dict
    board: Board
    total_distinct_letters: int
    filename: str

    @property
    def puzzle_id(self) -> str:
        return str((self.meta or {}).get("id", self.filename))

    @property
    def target_words(self) -> int:
        try:
            return int((self.meta or {}).get("target_words", DEFAULT_TARGET_WORDS))
        except (TypeError, ValueError):
            return DEFAULT_TARGET_WORDS


def list_puzzles(puzzle_dir: str) -> List[PuzzleMeta]:
    metas: List[PuzzleMeta] = []
    if not os.path.isdir(puzzle_dir):
        return metas

    for fn in sorted(os.listdir(puzzle_dir)):
        if not fn.lower().endswith(".json"):
            continue
        path = os.path.join(puzzle_dir, fn)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Skipping unreadable puzzle %s: %s", path, e)
            continue
        if not isinstance(raw, dict):
            log.warning("Skipping puzzle %s: top level is not an object", path)
            continue
        meta = raw.get("meta", {}) or {}
        metas.append(
            PuzzleMeta(
                id=str(meta.get("id", fn.replace(".json", ""))),
                title=str(meta.get("title", fn.replace(".json", ""))),
                subtitle=str(meta.get("subtitle", "")),
                author=str(meta.get("author", "")),
                date=str(meta.get("date", "")),
                filename=fn,
            )
        )
    return metas


def parse_puzzle(raw: dict, layout: BoardSpec, filename: str = "<memory>") -> Puzzle:
    """Validate a decoded puzzle document.

    Schema
    ------
    {
      "schema_version": "letterbox.v1",
      "board": {"top": "GIA", "left": "WHO", "right": "LSE", "bottom": "RVT"},
      "total_distinct_letters": 12,     # optional, defaults to the node count
      "meta": {"id": ..., "title": ..., "target_words": 4, ...}
    }
    """
    if not isinstance(raw, dict):
        raise PuzzleValidationError("Puzzle document must be a JSON object")

    schema_version = str(raw.get("schema_version", "")).strip()
    if schema_version != SCHEMA_VERSION:
        raise PuzzleValidationError(
            f"Unsupported or missing schema_version: {schema_version!r}. Expected {SCHEMA_VERSION!r}."
        )

    meta = raw.get("meta", {}) or {}
    board_raw = raw.get("board", {}) or {}
    if not isinstance(board_raw, dict):
        raise PuzzleValidationError("board must be an object keyed by side")

    missing = [side for side in layout.sides if side not in board_raw]
    if missing:
        raise PuzzleValidationError(f"Puzzle missing required sides: {missing}")
    unknown = sorted(set(board_raw) - set(layout.sides))
    if unknown:
        raise PuzzleValidationError(f"Puzzle has unknown sides: {unknown}")

    board: Board = {}
    for side in layout.sides:
        letters = board_raw[side]
        if isinstance(letters, list):
            letters = "".join(str(x) for x in letters)
        letters = _norm_letters(letters)
        if not letters:
            raise PuzzleValidationError(f"board.{side} missing non-empty string")
        _validate_letters_only(letters)
        if len(letters) != layout.letters_per_side:
            raise PuzzleValidationError(
                f"board.{side} length {len(letters)} != required {layout.letters_per_side}"
            )
        board[side] = tuple(letters)

    total_raw = raw.get("total_distinct_letters", layout.node_count)
    if isinstance(total_raw, bool) or not isinstance(total_raw, int):
        raise PuzzleValidationError("total_distinct_letters must be an integer")
    if not 1 <= total_raw <= layout.node_count:
        raise PuzzleValidationError(
            f"total_distinct_letters {total_raw} outside 1..{layout.node_count}"
        )

    distinct = {ch for letters in board.values() for ch in letters}
    if len(distinct) < total_raw:
        log.warning(
            "Puzzle %s has %d distinct letters but needs %d to win; it cannot be solved.",
            filename, len(distinct), total_raw,
        )

    return Puzzle(
        schema_version=schema_version,
        meta=meta,
        board=board,
        total_distinct_letters=total_raw,
        filename=os.path.basename(filename),
    )


def load_puzzle(path: str, layout: BoardSpec) -> Puzzle:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except ValueError as e:
        raise PuzzleValidationError(f"{os.path.basename(path)} is not valid JSON: {e}") from e
    return parse_puzzle(raw, layout, filename=path)


def default_puzzle_dir(override: Optional[str] = None) -> str:
    if override:
        return override
    env_dir = os.environ.get("LETTERBOX_PUZZLE_DIR")
    if env_dir:
        return env_dir
    return os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "puzzles")


def puzzle_from_sides(board: Dict[str, str], layout: BoardSpec, **meta) -> Puzzle:
    """Build a puzzle straight from side strings (tests, ad-hoc boards)."""
    return parse_puzzle(
        {"schema_version": SCHEMA_VERSION, "board": dict(board), "meta": meta},
        layout,
    )
