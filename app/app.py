from __future__ import annotations

import os
import sys

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import streamlit as st

from letterbox_puzzle.geometry import NodeRef, build_board_spec, node_id
from letterbox_puzzle.lexicon import load_lexicon
from letterbox_puzzle.puzzle_io import (
    PuzzleValidationError,
    default_puzzle_dir,
    list_puzzles,
    load_puzzle,
)
from letterbox_puzzle.engine import PuzzleEngine
from letterbox_puzzle.render import render_board_svg, render_progress_html
from letterbox_puzzle.ui_adapters import find_node_for_letter, make_view_props


APP_TITLE = "Letterbox"
BOARD_PX = 480

DEFAULT_INSTRUCTIONS = """**How to Play**

Spell words by tracing letters around the square.

- Consecutive letters must come from **different sides**.
- Letters can be reused.
- Each word starts with the **last letter** of the previous word.
- Use **all letters** to win.
- **Delete** on the carried-over first letter reopens the previous word.
"""


@st.cache_resource
def _lexicon():
    return load_lexicon()


def _ensure_state() -> None:
    if "board_spec" not in st.session_state:
        st.session_state.board_spec = build_board_spec()

    if "engine" not in st.session_state:
        st.session_state.engine = None
    if "celebrated_state" not in st.session_state:
        st.session_state.celebrated_state = None
    if "show_instructions" not in st.session_state:
        st.session_state.show_instructions = False


def _select(node: NodeRef) -> None:
    st.session_state.engine.select_node(node)


def _delete() -> None:
    st.session_state.engine.delete_last()


def _submit() -> None:
    if not st.session_state.engine.submit():
        st.toast("Not a word")


def _restart() -> None:
    st.session_state.engine.restart()
    st.session_state.celebrated_state = None


def _type_letters() -> None:
    # Typed letters pick a selectable node that keeps the next letter playable.
    engine = st.session_state.engine
    typed = st.session_state.get("typed_letters", "").strip()
    for i, ch in enumerate(typed):
        node = find_node_for_letter(engine.state, st.session_state.board_spec, ch, typed[i + 1 : i + 2] or None)
        if node is None:
            st.toast(f"Can't play {ch.upper()} here")
            break
        engine.select_node(node)
    st.session_state.typed_letters = ""


def _node_button(node: NodeRef, props_by_id: dict) -> None:
    node_props = props_by_id[node_id(node)]
    hl = node_props["highlight"]
    label = node_props["letter"]
    if hl["currently_selected"]:
        label = f"**:red[{label}]**"
    elif hl["part_of_word"]:
        label = f":red[{label}]"
    st.button(
        label,
        key=f"node-{node_id(node)}",
        on_click=_select,
        args=(node,),
        disabled=not hl["can_be_selected"],
        use_container_width=True,
    )


def _node_pad(layout, props) -> None:
    """Clickable letters laid out like the board: top row, side columns, bottom row."""
    props_by_id = {n["id"]: n for n in props["nodes"]}
    n = layout.letters_per_side

    cols = st.columns(n + 2)
    for i in range(n):
        with cols[i + 1]:
            _node_button(NodeRef("top", i), props_by_id)

    for i in range(n):
        cols = st.columns(n + 2)
        with cols[0]:
            _node_button(NodeRef("left", i), props_by_id)
        with cols[-1]:
            _node_button(NodeRef("right", i), props_by_id)

    cols = st.columns(n + 2)
    for i in range(n):
        with cols[i + 1]:
            _node_button(NodeRef("bottom", i), props_by_id)


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, page_icon="🔤", layout="wide")
    _ensure_state()

    layout = st.session_state.board_spec
    puzzle_dir = default_puzzle_dir()
    metas = list_puzzles(puzzle_dir)

    with st.sidebar:
        st.header("Puzzle")
        if not metas:
            st.warning(f"No puzzles found in {puzzle_dir}")
            st.stop()

        options = {f"{m.id} — {m.title}": m for m in metas}
        pick = st.selectbox("Select a puzzle", list(options.keys()))
        chosen = options[pick]

        load_clicked = st.button("Load puzzle", type="primary", use_container_width=True)

        st.divider()
        if st.button("Instructions", use_container_width=True):
            st.session_state.show_instructions = not st.session_state.show_instructions

    if load_clicked or st.session_state.engine is None:
        path = os.path.join(puzzle_dir, chosen.filename)
        try:
            puzzle = load_puzzle(path, layout)
        except PuzzleValidationError as e:
            st.session_state.engine = None
            st.error(f"Puzzle invalid: {e}")
        else:
            st.session_state.engine = PuzzleEngine(puzzle, _lexicon())
            st.session_state.celebrated_state = None

    engine = st.session_state.engine

    # Header from the loaded puzzle's meta if available
    if engine is not None:
        meta = engine.puzzle.meta or {}
        title = str(meta.get("title", chosen.title)).strip() or APP_TITLE
        subtitle = str(meta.get("subtitle", "")).strip()
        instructions = meta.get("instructions", DEFAULT_INSTRUCTIONS)
    else:
        title = str(chosen.title).strip() or APP_TITLE
        subtitle = str(chosen.subtitle).strip()
        instructions = DEFAULT_INSTRUCTIONS

    st.title(title)
    if subtitle:
        st.caption(subtitle)

    if st.session_state.show_instructions:
        with st.expander("Instructions", expanded=True):
            st.markdown(instructions)

    if engine is None:
        st.info("Load a puzzle to start playing.")
        st.stop()

    props = make_view_props(engine.state, layout, engine.puzzle)

    # Celebrate once per win; deleting back out of the win re-arms it.
    status = props["status"]
    if status["won"]:
        if st.session_state.celebrated_state != props["sync"]["state_id"]:
            st.session_state.celebrated_state = props["sync"]["state_id"]
            st.balloons()
    else:
        st.session_state.celebrated_state = None

    left, right = st.columns([1, 1])
    with left:
        st.markdown(f"<h1 style='text-align: center'>{props['word'] or '&nbsp;'}</h1>", unsafe_allow_html=True)
        st.divider()
        st.markdown(
            f"<div style='text-align: center; font-size: 1.25rem; font-weight: bold'>{render_progress_html(props)}</div>",
            unsafe_allow_html=True,
        )
        if status["won"]:
            st.success(f"Solved in {status['words_used']} words!")

        b1, b2, b3 = st.columns(3)
        with b1:
            st.button("Restart", on_click=_restart, use_container_width=True)
        with b2:
            st.button("Delete", on_click=_delete, use_container_width=True)
        with b3:
            st.button("Enter", on_click=_submit, type="primary", use_container_width=True)

        st.text_input("Type letters", key="typed_letters", on_change=_type_letters)

    with right:
        st.markdown(render_board_svg(props, size=BOARD_PX), unsafe_allow_html=True)
        _node_pad(layout, props)


if __name__ == "__main__":
    main()
