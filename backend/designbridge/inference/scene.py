"""Scene graph reader: canvas JSON → read-only SceneNode tree.

Accepts Fabric.js-style object dicts (``type``/``left``/``top``/``rx``/
``objects``...) and the normalized field names used by SceneNode itself
(``kind``/``x``/``y``/``children``...). Never raises on malformed input:
missing or non-finite numbers become 0, unknown kinds read as rectangles.
Order is preserved exactly; nothing is filtered.
"""

from __future__ import annotations

import dataclasses
import logging
import math
import re
from typing import Any, Dict, List, Optional, Set, Tuple

from .models import Geometry, NodeKind, SceneNode, Style

logger = logging.getLogger(__name__)

# Canvas object type → node kind
_KIND_ALIASES = {
    "rect": NodeKind.RECTANGLE,
    "rectangle": NodeKind.RECTANGLE,
    "circle": NodeKind.ELLIPSE,
    "ellipse": NodeKind.ELLIPSE,
    "text": NodeKind.TEXT,
    "i-text": NodeKind.TEXT,
    "itext": NodeKind.TEXT,
    "textbox": NodeKind.TEXT,
    "image": NodeKind.IMAGE,
    "img": NodeKind.IMAGE,
    "group": NodeKind.GROUP,
    "activeselection": NodeKind.GROUP,
}

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+)\s*)?\)$"
)


def _num(value: Any, default: float = 0.0) -> float:
    """Coerce to a finite float, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def normalize_color(value: Any) -> Optional[str]:
    """Normalize a fill/stroke value to a lowercase color string.

    'rgb(255, 255, 255)' → '#ffffff'; {'r': 1, 'g': 1, 'b': 1} → '#ffffff';
    gradients → their first color stop; empty/None → None.
    """
    if value is None:
        return None
    if isinstance(value, dict):
        if {"r", "g", "b"} <= value.keys():
            r = round(_num(value.get("r")) * 255)
            g = round(_num(value.get("g")) * 255)
            b = round(_num(value.get("b")) * 255)
            return f"#{r:02x}{g:02x}{b:02x}"
        stops = value.get("colorStops") or []
        if stops and isinstance(stops[0], dict):
            return normalize_color(stops[0].get("color"))
        return None
    if not isinstance(value, str):
        return None
    color = value.strip().lower()
    if not color:
        return None
    m = _RGB_RE.match(color)
    if m:
        r, g, b = (min(int(m.group(i)), 255) for i in (1, 2, 3))
        alpha = m.group(4)
        if alpha is not None and _num(alpha, 1.0) == 0:
            return "transparent"
        return f"#{r:02x}{g:02x}{b:02x}"
    return color


def _read_kind(data: Dict[str, Any]) -> NodeKind:
    raw = str(_first(data, "kind", "type") or "").strip().lower()
    kind = _KIND_ALIASES.get(raw)
    if kind is None:
        if raw:
            logger.debug("Unknown canvas object type '%s', reading as rectangle", raw)
        return NodeKind.RECTANGLE
    return kind


def _read_geometry(data: Dict[str, Any]) -> Geometry:
    geo = data.get("geometry")
    if isinstance(geo, dict):
        data = {**data, **geo}
    scale_x = _num(data.get("scaleX"), 1.0)
    scale_y = _num(data.get("scaleY"), 1.0)
    return Geometry(
        x=_num(_first(data, "x", "left")),
        y=_num(_first(data, "y", "top")),
        width=_num(data.get("width")) * scale_x,
        height=_num(data.get("height")) * scale_y,
        rotation=_num(_first(data, "rotation", "angle")),
    )


def _read_style(data: Dict[str, Any]) -> Style:
    style = data.get("style")
    if isinstance(style, dict):
        data = {**data, **style}
    radius = max(
        _num(_first(data, "corner_radius", "cornerRadius")),
        _num(data.get("rx")),
        _num(data.get("ry")),
    )
    return Style(
        fill=normalize_color(data.get("fill")),
        stroke=normalize_color(data.get("stroke")),
        stroke_width=_num(_first(data, "stroke_width", "strokeWidth")),
        corner_radius=radius,
        opacity=_num(data.get("opacity"), 1.0),
    )


def _read_text(data: Dict[str, Any]) -> Optional[str]:
    text = _first(data, "text", "characters")
    return None if text is None else str(text)


def _unique_id(node_id: str, path: str, seen_ids: Set[str]) -> str:
    """``node_id`` if unused, else the position path, suffixed until unused."""
    if node_id not in seen_ids:
        return node_id
    candidate, n = path, 0
    while candidate in seen_ids:
        n += 1
        candidate = f"{path}~{n}"
    logger.debug("Duplicate node id '%s' at %s, using '%s'", node_id, path, candidate)
    return candidate


def _reserve_ids(node: SceneNode, path: str, seen_ids: Set[str]) -> SceneNode:
    """Register a prebuilt SceneNode's ids, renaming any that collide."""
    node_id = _unique_id(node.id, path, seen_ids)
    seen_ids.add(node_id)
    children = tuple(
        _reserve_ids(child, f"{path}.{i}", seen_ids)
        for i, child in enumerate(node.children)
    )
    if node_id == node.id and all(a is b for a, b in zip(children, node.children)):
        return node
    return dataclasses.replace(node, id=node_id, children=children)


def _read_node(data: Any, path: str, seen_ids: Set[str]) -> SceneNode:
    if not isinstance(data, dict):
        logger.debug("Non-object canvas entry at %s, reading as empty rectangle", path)
        data = {}

    node_id = data.get("id")
    node_id = str(node_id) if node_id not in (None, "") else path
    node_id = _unique_id(node_id, path, seen_ids)
    seen_ids.add(node_id)

    kind = _read_kind(data)
    children: Tuple[SceneNode, ...] = ()
    if kind == NodeKind.GROUP:
        raw_children = _first(data, "children", "objects") or []
        if not isinstance(raw_children, (list, tuple)):
            raw_children = []
        children = tuple(
            _read_node(child, f"{path}.{i}", seen_ids)
            for i, child in enumerate(raw_children)
        )

    font_size = _first(data, "font_size", "fontSize")
    font_weight = _first(data, "font_weight", "fontWeight")
    src = _first(data, "src", "source")

    return SceneNode(
        id=node_id,
        kind=kind,
        geometry=_read_geometry(data),
        style=_read_style(data),
        text=_read_text(data) if kind == NodeKind.TEXT else None,
        font_size=_num(font_size) if font_size is not None else None,
        font_weight=str(font_weight) if font_weight is not None else None,
        src=str(src) if src is not None else None,
        children=children,
    )


def read_scene(objects: Any) -> List[SceneNode]:
    """Read the canvas's top-level object collection, in render order."""
    if isinstance(objects, SceneNode):
        return [objects]
    if not isinstance(objects, (list, tuple)):
        logger.warning("Scene is not a list (got %s); reading as empty", type(objects).__name__)
        return []
    seen_ids: Set[str] = set()
    nodes = []
    for i, obj in enumerate(objects):
        if isinstance(obj, SceneNode):
            nodes.append(_reserve_ids(obj, f"n{i}", seen_ids))
        else:
            nodes.append(_read_node(obj, f"n{i}", seen_ids))
    return nodes


def read_canvas(canvas: Dict[str, Any]) -> Tuple[List[SceneNode], Optional[float], Optional[float]]:
    """Read a serialized canvas ({"objects": [...], "width": ..., "height": ...}).

    Returns (nodes, width, height); width/height are None when absent.
    """
    nodes = read_scene(canvas.get("objects", []))
    width = _num(canvas.get("width")) or None
    height = _num(canvas.get("height")) or None
    return nodes, width, height


def iter_text_nodes(nodes: List[SceneNode]):
    """Every text node in the graph, depth-first in document order."""
    for node in nodes:
        for n in node.iter_subtree():
            if n.kind == NodeKind.TEXT:
                yield n
