"""SVG drawing of the board from view props."""

from __future__ import annotations

from html import escape
from typing import Any, Dict, List

# Colour palette
_PINK = "rgb(250, 166, 164)"
_INK = "#000"
_PAPER = "#FFF"
_DIMMED = "#5F4442"
_SEPARATOR = "#FFF"

_MARGIN_FACTOR = 0.15  # of svg size, on each side of the square


def _scaled(v: float, props: Dict[str, Any], scale: float) -> float:
    return round(v / float(props.get("square_size", 1.0)) * scale, 2)


def _line(seg: Dict[str, Any], props: Dict[str, Any], scale: float, dashed: bool) -> str:
    attrs = (
        f'x1="{_scaled(seg["x1"], props, scale)}" y1="{_scaled(seg["y1"], props, scale)}" '
        f'x2="{_scaled(seg["x2"], props, scale)}" y2="{_scaled(seg["y2"], props, scale)}" '
        f'stroke="{_PINK}" stroke-width="5"'
    )
    if dashed:
        attrs += ' stroke-dasharray="10,10"'
    else:
        attrs += ' opacity="0.3"'
    return f"<line {attrs} />"


def _dot(node: Dict[str, Any], props: Dict[str, Any], scale: float, radius: float) -> str:
    hl = node["highlight"]
    x = _scaled(node["x"], props, scale)
    y = _scaled(node["y"], props, scale)
    lx = _scaled(node["label_x"], props, scale)
    ly = _scaled(node["label_y"], props, scale)
    stroke = _PINK if hl["part_of_word"] else _INK
    fill = _INK if hl["currently_selected"] else _PAPER
    text_fill = _INK if (hl["part_of_word"] or hl["has_been_selected"]) else _PAPER
    return (
        f'<g id="node-{escape(node["id"])}">'
        f'<circle cx="{x}" cy="{y}" r="{radius}" stroke-width="3" stroke="{stroke}" fill="{fill}" />'
        f'<text x="{lx}" y="{ly}" text-anchor="middle" dominant-baseline="middle" '
        f'font-size="{round(scale / 10, 2)}" font-weight="500" fill="{text_fill}">'
        f'{escape(node["letter"])}</text>'
        f"</g>"
    )


def render_board_svg(props: Dict[str, Any], size: int = 480, background: str = "#FAA6A4") -> str:
    """Render the square, the accepted-word lines, the in-progress line and the nodes."""
    square = size * (1 - 2 * _MARGIN_FACTOR)
    margin = round(size * _MARGIN_FACTOR, 2)
    radius = round(square / 40, 2)

    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{size}" height="{size}" '
        f'viewBox="0 0 {size} {size}">',
        f'<rect width="{size}" height="{size}" fill="{background}" />',
        f'<g transform="translate({margin}, {margin})">',
        f'<rect width="{round(square, 2)}" height="{round(square, 2)}" stroke="{_INK}" stroke-width="3" fill="{_PAPER}" />',
    ]
    for word_segments in props["segments"]["previous"]:
        parts.extend(_line(s, props, square, dashed=False) for s in word_segments)
    parts.extend(_line(s, props, square, dashed=True) for s in props["segments"]["current"])
    parts.extend(_dot(n, props, square, radius) for n in props["nodes"])
    parts.append("</g></svg>")
    return "".join(parts)


def render_progress_html(props: Dict[str, Any]) -> str:
    spans: List[str] = []
    for tok in props["progress"]:
        if tok["kind"] == "separator":
            colour = _SEPARATOR
        elif tok["dimmed"]:
            colour = _DIMMED
        else:
            colour = _INK
        spans.append(f'<span style="color: {colour}">{escape(tok["text"])}</span>')
    return "".join(spans)


def render_progress_text(props: Dict[str, Any]) -> str:
    """Plain-text progress line; dimmed letters are lowercased."""
    out: List[str] = []
    for tok in props["progress"]:
        out.append(tok["text"].lower() if tok["dimmed"] else tok["text"])
    return "".join(out)
