"""CLI / terminal mode for the letterbox puzzle."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, List, Optional

from .engine import PuzzleEngine
from .geometry import BoardSpec, NodeRef, build_board_spec
from .lexicon import load_lexicon
from .puzzle_io import PuzzleValidationError, default_puzzle_dir, list_puzzles, load_puzzle
from .render import render_progress_text
from .ui_adapters import find_node_for_letter, make_view_props

log = logging.getLogger("letterbox")

_SIDE_KEYS = {"t": "top", "l": "left", "r": "right", "b": "bottom"}


def draw_board(engine: PuzzleEngine, layout: BoardSpec) -> str:
    """ASCII square: top letters above, bottom below, left/right on the rows.

    Letters in the current word are wrapped in [], the last one in <>,
    letters used anywhere so far are uppercase, unused ones lowercase.
    """

    def cell(node: NodeRef) -> str:
        letter = engine.letter_at(node)
        if not engine.is_visited(node):
            letter = letter.lower()
        if engine.is_current_tail(node):
            return f"<{letter}>"
        if engine.is_part_of_current_path(node):
            return f"[{letter}]"
        return f" {letter} "

    top = "".join(cell(NodeRef("top", i)) for i in range(layout.letters_per_side))
    bottom = "".join(cell(NodeRef("bottom", i)) for i in range(layout.letters_per_side))
    width = len(top)
    lines = ["     " + top, "    +" + "-" * width + "+"]
    for i in range(layout.letters_per_side):
        lines.append(f"{cell(NodeRef('left', i))} |" + " " * width + f"| {cell(NodeRef('right', i))}")
    lines.append("    +" + "-" * width + "+")
    lines.append("     " + bottom)
    return "\n".join(lines)


def parse_node(token: str) -> Optional[NodeRef]:
    """``t0``, ``l2``, ``right1`` -> NodeRef; None if unparseable."""
    token = token.strip().lower()
    if len(token) < 2 or not token[-1].isdigit():
        return None
    side_part, idx = token[:-1], int(token[-1])
    side = _SIDE_KEYS.get(side_part, side_part)
    if side not in _SIDE_KEYS.values():
        return None
    return NodeRef(side, idx)


def run_cli(
    engine: PuzzleEngine,
    layout: BoardSpec,
    read: Optional[Callable[[str], str]] = None,
    write: Optional[Callable[[str], None]] = None,
) -> None:
    """Interactive loop. Returns when input ends or the player quits."""
    read = read or input
    write = write or print
    write("Commands:")
    write("  LETTERS            -- select letters in order (e.g. he)")
    write("  @t0 @l1 ...        -- select exact nodes by side/index")
    write("  -                  -- delete last letter")
    write("  enter / .          -- submit the current word")
    write("  restart            -- clear everything")
    write("  quit               -- leave")

    was_won = False
    while True:
        props = make_view_props(engine.state, layout, engine.puzzle)
        write("")
        write(draw_board(engine, layout))
        write(f"  word: {props['word'] or '-'}")
        write(f"  {render_progress_text(props)}")
        if props["status"]["won"] and not was_won:
            write(f"  *** Solved in {props['status']['words_used']} words! ***")
        was_won = props["status"]["won"]

        try:
            inp = read("  > ").strip()
        except (EOFError, KeyboardInterrupt):
            write("")
            return

        cmd = inp.lower()
        if cmd in ("quit", "exit", "q"):
            return
        if cmd in ("enter", "."):
            if not engine.submit():
                write("  Not a word")
            continue
        if cmd == "-":
            engine.delete_last()
            continue
        if cmd == "restart":
            engine.restart()
            continue

        for token in inp.split():
            if token.startswith("@"):
                node = parse_node(token[1:])
                if node is None or not engine.select_node(node):
                    write(f"  Can't select {token}")
                    break
                continue
            stopped = False
            for i, ch in enumerate(token):
                node = find_node_for_letter(engine.state, layout, ch, token[i + 1 : i + 2] or None)
                if node is None:
                    write(f"  Can't select {ch.upper()} here")
                    stopped = True
                    break
                engine.select_node(node)
            if stopped:
                break


def _pick_puzzle_path(puzzle_dir: str, name: Optional[str]) -> str:
    if name and os.path.exists(name):
        return name
    metas = list_puzzles(puzzle_dir)
    if not metas:
        raise PuzzleValidationError(f"No puzzles found in {puzzle_dir}")
    if name:
        for m in metas:
            if name in (m.id, m.filename):
                return os.path.join(puzzle_dir, m.filename)
        raise PuzzleValidationError(f"No puzzle named {name!r} in {puzzle_dir}")
    return os.path.join(puzzle_dir, metas[0].filename)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Play a letterbox puzzle in the terminal.")
    parser.add_argument("puzzle", nargs="?", help="Puzzle id, filename or path (default: first found)")
    parser.add_argument("--puzzle-dir", default=None, help="Directory of puzzle JSON files")
    parser.add_argument("--lexicon", default=None, help="Word list, one word per line")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug-level logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s  %(levelname)-7s  %(message)s",
        datefmt="%H:%M:%S",
    )

    layout = build_board_spec()
    try:
        path = _pick_puzzle_path(default_puzzle_dir(args.puzzle_dir), args.puzzle)
        puzzle = load_puzzle(path, layout)
    except (OSError, PuzzleValidationError) as e:
        log.error("Puzzle invalid: %s", e)
        return 1

    title = str((puzzle.meta or {}).get("title", puzzle.puzzle_id))
    print("=" * 50)
    print(f"  {title}")
    print("=" * 50)

    engine = PuzzleEngine(puzzle, load_lexicon(args.lexicon))
    run_cli(engine, layout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
