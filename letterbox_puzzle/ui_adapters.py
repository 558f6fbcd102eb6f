from __future__ import annotations

from typing import Any, Dict, List, Optional

from .engine import (
    GameState,
    Path,
    assembled_word,
    can_select,
    is_current_tail,
    is_part_of_current_path,
    is_visited,
    is_win,
    letter_at,
    used_letters,
    word_strings,
)
from .geometry import BoardSpec, NodeRef, label_position, node_id, node_position
from .puzzle_io import Puzzle

PROGRESS_SEPARATOR = " - "


def _segments(layout: BoardSpec, path: Path, square_size: float) -> List[Dict[str, Any]]:
    # A single-node path still yields one zero-length segment (drawn as a dot).
    out: List[Dict[str, Any]] = []
    for i, node in enumerate(path):
        nxt = path[i + 1] if i + 1 < len(path) else node
        x1, y1 = node_position(layout, node, square_size)
        x2, y2 = node_position(layout, nxt, square_size)
        out.append({"from": node_id(node), "to": node_id(nxt), "x1": x1, "y1": y1, "x2": x2, "y2": y2})
    return out


def progress_tokens(words: List[str]) -> List[Dict[str, Any]]:
    """Letters of the accepted chain, dimming every letter value already seen earlier."""
    seen = set()
    tokens: List[Dict[str, Any]] = []
    for i, word in enumerate(words):
        for letter in word:
            tokens.append({"text": letter, "kind": "letter", "dimmed": letter in seen})
            seen.add(letter)
        if i + 1 < len(words):
            tokens.append({"text": PROGRESS_SEPARATOR, "kind": "separator", "dimmed": False})
    return tokens


def make_view_props(
    state: GameState,
    layout: BoardSpec,
    puzzle: Puzzle,
    square_size: float = 1.0,
) -> Dict[str, Any]:
    """Build render props for one frame of the board."""

    nodes_payload: List[Dict[str, Any]] = []
    for node in layout.nodes:
        x, y = node_position(layout, node, square_size)
        lx, ly = label_position(layout, node, square_size)
        nodes_payload.append(
            {
                "id": node_id(node),
                "side": node.side,
                "index": node.index,
                "letter": letter_at(state, node),
                "x": x,
                "y": y,
                "label_x": lx,
                "label_y": ly,
                "highlight": {
                    "part_of_word": is_part_of_current_path(state, node),
                    "currently_selected": is_current_tail(state, node),
                    "has_been_selected": is_visited(state, node),
                    "can_be_selected": can_select(state, node),
                },
            }
        )

    words = word_strings(state)
    if words:
        progress = progress_tokens(words)
    else:
        progress = [{"text": f"Try to solve in {puzzle.target_words} words", "kind": "prompt", "dimmed": False}]

    return {
        "schema_version": "letterbox.v1.props",
        "square_size": square_size,
        "nodes": nodes_payload,
        "segments": {
            "current": _segments(layout, state.path, square_size),
            "previous": [_segments(layout, p, square_size) for p in state.history],
        },
        "word": assembled_word(state),
        "progress": progress,
        "status": {
            "won": is_win(state),
            "words_used": len(state.history),
            "letters_used": len(used_letters(state)),
            "letters_total": state.total_distinct_letters,
            "last_action": state.last_action,
        },
        "sync": {
            "puzzle_id": state.puzzle_id,
            "state_id": state.state_id,
        },
    }


def find_node_for_letter(
    state: GameState,
    layout: BoardSpec,
    letter: str,
    next_letter: Optional[str] = None,
) -> Optional[NodeRef]:
    """Selectable node carrying ``letter`` for typed input.

    When a letter sits on more than one side, ``next_letter`` (the following
    typed character) picks the node that leaves it playable: one with a
    ``next_letter`` node on a different side. Otherwise the first match in
    board order wins.
    """
    matches = [
        node for node in layout.nodes
        if letter_at(state, node) == letter.upper() and can_select(state, node)
    ]
    if not matches:
        return None
    if next_letter:
        follow_sides = {
            node.side for node in layout.nodes
            if letter_at(state, node) == next_letter.upper()
        }
        for node in matches:
            if follow_sides - {node.side}:
                return node
    return matches[0]
