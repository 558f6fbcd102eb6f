from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, NamedTuple, Tuple

# --- Types ---

# Board edges. Order here is the canonical iteration order.
Side = Literal["top", "left", "right", "bottom"]

SIDES: Tuple[Side, ...] = ("top", "left", "right", "bottom")
LETTERS_PER_SIDE = 3

# Fractions along a side where its nodes sit (outer nodes are inset from the corners).
OUTER_NODE_PROPORTION = 0.16
NODE_PROPORTIONS: Tuple[float, ...] = (
    OUTER_NODE_PROPORTION,
    0.5,
    1 - OUTER_NODE_PROPORTION,
)

# Label offsets per side, in units of square_size / 10.
LABEL_OFFSETS: Dict[Side, Tuple[float, float]] = {
    "top": (0.0, -0.9),
    "bottom": (0.0, 1.2),
    "left": (-1.0, 0.08),
    "right": (1.0, 0.08),
}


class NodeRef(NamedTuple):
    """One board position, identified by side and index along that side."""
    side: str
    index: int


Point = Tuple[float, float]


@dataclass(frozen=True)
class BoardSpec:
    """Static layout contract.

    Notes
    -----
    - Positions are in a unit square; scale them with ``node_position``.
    - Letters are NOT part of this geometry (see ``puzzle_io.Puzzle.board``).
    """

    sides: Tuple[Side, ...]
    letters_per_side: int

    # Canonical node order: side by side, index ascending
    nodes: List[NodeRef]

    # Node -> (x, y) in the unit square
    unit_positions: Dict[NodeRef, Point]

    @property
    def node_count(self) -> int:
        return len(self.nodes)


def build_board_spec() -> BoardSpec:
    """Build the fixed four-sided geometry (3 nodes per side)."""

    nodes: List[NodeRef] = [NodeRef(side, i) for side in SIDES for i in range(LETTERS_PER_SIDE)]

    unit_positions: Dict[NodeRef, Point] = {}
    for node in nodes:
        p = NODE_PROPORTIONS[node.index]
        if node.side == "top":
            unit_positions[node] = (p, 0.0)
        elif node.side == "bottom":
            unit_positions[node] = (p, 1.0)
        elif node.side == "left":
            unit_positions[node] = (0.0, p)
        else:
            unit_positions[node] = (1.0, p)

    return BoardSpec(
        sides=SIDES,
        letters_per_side=LETTERS_PER_SIDE,
        nodes=nodes,
        unit_positions=unit_positions,
    )


def node_position(layout: BoardSpec, node: NodeRef, square_size: float) -> Point:
    ux, uy = layout.unit_positions[node]
    return (ux * square_size, uy * square_size)


def label_position(layout: BoardSpec, node: NodeRef, square_size: float) -> Point:
    x, y = node_position(layout, node, square_size)
    ox, oy = LABEL_OFFSETS[node.side]  # type: ignore[index]
    return (x + ox * square_size / 10, y + oy * square_size / 10)


def node_id(node: NodeRef) -> str:
    return f"{node.side}:{node.index}"
