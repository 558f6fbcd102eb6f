from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Container, List, Literal, Optional, Set, Tuple

from .geometry import NodeRef
from .puzzle_io import Board, Puzzle

log = logging.getLogger("letterbox.engine")


# -----------------------------
# Contracts
# -----------------------------

Path = Tuple[NodeRef, ...]

EventType = Literal[
    "SELECT_NODE",
    "DELETE_LAST",
    "SUBMIT",
    "RESTART",
]


@dataclass(frozen=True)
class PuzzleEvent:
    type: EventType
    payload: dict


@dataclass(frozen=True)
class GameState:
    puzzle_id: str
    state_id: str  # unique per init/restart (forces frontend resync)

    board: Board

    # Accepted words, oldest first. Entries are tuples and never edited in place.
    history: Tuple[Path, ...]
    # In-progress word; after an accepted word it starts with that word's last node.
    path: Path

    total_distinct_letters: int

    last_action: str = ""


def init_state(puzzle: Puzzle) -> GameState:
    return GameState(
        puzzle_id=puzzle.puzzle_id,
        state_id=str(uuid.uuid4()),
        board=puzzle.board,
        history=(),
        path=(),
        total_distinct_letters=puzzle.total_distinct_letters,
        last_action="init",
    )


# -----------------------------
# Derived queries
# -----------------------------


def letter_at(state: GameState, node: NodeRef) -> str:
    return state.board[node.side][node.index]


def path_word(state: GameState, path: Path) -> str:
    return "".join(letter_at(state, n) for n in path)


def assembled_word(state: GameState) -> str:
    return path_word(state, state.path)


def word_strings(state: GameState) -> List[str]:
    return [path_word(state, p) for p in state.history]


def used_letters(state: GameState) -> Set[str]:
    """Distinct letter values across accepted words (the in-progress path does not count)."""
    return {letter_at(state, n) for p in state.history for n in p}


def is_win(state: GameState) -> bool:
    return len(used_letters(state)) == state.total_distinct_letters


def is_visited(state: GameState, node: NodeRef) -> bool:
    if node in state.path:
        return True
    return any(node in p for p in state.history)


def is_part_of_current_path(state: GameState, node: NodeRef) -> bool:
    return node in state.path


def is_current_tail(state: GameState, node: NodeRef) -> bool:
    return bool(state.path) and state.path[-1] == node


def can_select(state: GameState, node: NodeRef) -> bool:
    if not state.path:
        return True
    return node.side != state.path[-1].side


def is_on_board(state: GameState, node: NodeRef) -> bool:
    letters = state.board.get(node.side)
    return letters is not None and 0 <= node.index < len(letters)


# -----------------------------
# Reducer
# -----------------------------


def reduce(state: GameState, event: PuzzleEvent, lexicon: Container[str]) -> GameState:
    """Authoritative state transition."""
    payload = event.payload or {}

    t = event.type
    if t == "SELECT_NODE":
        out = _on_select(state, payload)
    elif t == "DELETE_LAST":
        out = _on_delete(state)
    elif t == "SUBMIT":
        out = _on_submit(state, lexicon)
    elif t == "RESTART":
        out = _on_restart(state)
    else:
        out = replace(state, last_action=f"ignored:{t}")

    log.debug("%s -> %s (word=%r, history=%d)", t, out.last_action, assembled_word(out), len(out.history))
    return out


def _node_from_payload(payload: dict) -> Optional[NodeRef]:
    node = payload.get("node")
    if isinstance(node, NodeRef):
        return node
    try:
        return NodeRef(str(payload["side"]), int(payload["index"]))
    except (KeyError, TypeError, ValueError):
        return None


def _on_select(state: GameState, payload: dict) -> GameState:
    node = _node_from_payload(payload)
    if node is None or not is_on_board(state, node):
        return replace(state, last_action="select:unknown_node")

    if not can_select(state, node):
        return replace(state, last_action="select:same_side")

    return replace(state, path=state.path + (node,), last_action="select")


def _on_delete(state: GameState) -> GameState:
    """
    Delete behavior:
    - Only the carried-over chain letter left: reopen the last accepted word.
    - Otherwise drop the last node of the in-progress word.
    """
    if state.history and len(state.path) == 1:
        return replace(
            state,
            history=state.history[:-1],
            path=state.history[-1],
            last_action="delete:reopen",
        )

    if not state.path:
        return replace(state, last_action="delete:empty")

    return replace(state, path=state.path[:-1], last_action="delete")


def _on_submit(state: GameState, lexicon: Container[str]) -> GameState:
    if not state.path:
        return replace(state, last_action="submit:empty")

    word = assembled_word(state).lower()
    if word not in lexicon:
        return replace(state, last_action="submit:invalid")

    return replace(
        state,
        history=state.history + (state.path,),
        path=(state.path[-1],),
        last_action="submit:accepted",
    )


def _on_restart(state: GameState) -> GameState:
    # Clear progress, keep board and puzzle_id.
    return replace(
        state,
        state_id=str(uuid.uuid4()),
        history=(),
        path=(),
        last_action="restart",
    )


# -----------------------------
# Owner object
# -----------------------------


class PuzzleEngine:
    """Owns one puzzle's state and the lexicon it checks words against.

    The lexicon only has to support ``word in lexicon`` for lowercase words,
    so a plain ``set`` works as well as ``lexicon.Lexicon``.
    """

    def __init__(self, puzzle: Puzzle, lexicon: Container[str]):
        self.puzzle = puzzle
        self.lexicon = lexicon
        self.state = init_state(puzzle)

    def dispatch(self, event: PuzzleEvent) -> GameState:
        self.state = reduce(self.state, event, self.lexicon)
        return self.state

    # Operations

    def select_node(self, node: NodeRef) -> bool:
        """Append ``node`` to the path. Returns False if the move was ignored."""
        self.dispatch(PuzzleEvent(type="SELECT_NODE", payload={"node": node}))
        return self.state.last_action == "select"

    def delete_last(self) -> None:
        self.dispatch(PuzzleEvent(type="DELETE_LAST", payload={}))

    def submit(self) -> bool:
        """Returns False only when the word is not in the lexicon."""
        self.dispatch(PuzzleEvent(type="SUBMIT", payload={}))
        return self.state.last_action != "submit:invalid"

    def restart(self) -> None:
        self.dispatch(PuzzleEvent(type="RESTART", payload={}))

    # Views

    @property
    def history(self) -> Tuple[Path, ...]:
        return self.state.history

    @property
    def path(self) -> Path:
        return self.state.path

    def letter_at(self, node: NodeRef) -> str:
        return letter_at(self.state, node)

    def assembled_word(self) -> str:
        return assembled_word(self.state)

    def word_strings(self) -> List[str]:
        return word_strings(self.state)

    def used_letters(self) -> Set[str]:
        return used_letters(self.state)

    def is_win(self) -> bool:
        return is_win(self.state)

    def is_visited(self, node: NodeRef) -> bool:
        return is_visited(self.state, node)

    def is_part_of_current_path(self, node: NodeRef) -> bool:
        return is_part_of_current_path(self.state, node)

    def is_current_tail(self, node: NodeRef) -> bool:
        return is_current_tail(self.state, node)

    def can_select(self, node: NodeRef) -> bool:
        return can_select(self.state, node)
