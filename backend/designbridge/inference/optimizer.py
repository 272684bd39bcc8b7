"""Component tree optimizer: layout grouping between synthesis and emission.

Modes:
- none (default): identity, components pass through untouched
- row: consecutive components whose top edges lie within the threshold are
  wrapped in one container with layout="row"
- column: same, using left edges and layout="column"

Grouping only merges neighbours in discovery order, so emission order is
preserved and provenance (node_ids) is carried by the nested children.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .. import settings
from .models import ComponentMapping, ComponentType

logger = logging.getLogger(__name__)

LAYOUT_MODES = ("none", "row", "column")

_EDGE: Dict[str, Callable[[ComponentMapping], float]] = {
    "row": lambda c: c.bounds.get("y", 0.0),
    "column": lambda c: c.bounds.get("x", 0.0),
}


def _union_bounds(components: Sequence[ComponentMapping]) -> Dict[str, float]:
    x1 = min(c.bounds.get("x", 0.0) for c in components)
    y1 = min(c.bounds.get("y", 0.0) for c in components)
    x2 = max(c.bounds.get("x", 0.0) + c.bounds.get("width", 0.0) for c in components)
    y2 = max(c.bounds.get("y", 0.0) + c.bounds.get("height", 0.0) for c in components)
    return {"x": x1, "y": y1, "width": x2 - x1, "height": y2 - y1}


def _make_group(layout: str, members: List[ComponentMapping], index: int) -> ComponentMapping:
    return ComponentMapping(
        id=f"layout-{layout}-{index}",
        type=ComponentType.CONTAINER,
        props={"layout": layout, "element": "layout"},
        children=tuple(members),
        bounds=_union_bounds(members),
    )


def group_runs(
    components: Sequence[ComponentMapping],
    layout: str,
    threshold: float,
) -> List[ComponentMapping]:
    """Merge runs of aligned neighbours into layout containers."""
    edge = _EDGE[layout]
    result: List[ComponentMapping] = []
    run: List[ComponentMapping] = []
    groups = 0

    def flush() -> None:
        nonlocal groups
        if len(run) >= 2:
            groups += 1
            result.append(_make_group(layout, list(run), groups))
        else:
            result.extend(run)
        run.clear()

    for comp in components:
        if run and abs(edge(comp) - edge(run[-1])) > threshold:
            flush()
        run.append(comp)
    flush()

    if groups:
        logger.info("Layout grouping (%s): %d components → %d groups", layout, len(components), groups)
    return result


def optimize(
    components: Sequence[ComponentMapping],
    mode: Optional[str] = None,
    threshold: Optional[float] = None,
) -> List[ComponentMapping]:
    """Apply layout grouping per ``mode`` (default from settings.LAYOUT_GROUPING)."""
    mode = (mode or settings.LAYOUT_GROUPING or "none").lower()
    if mode not in LAYOUT_MODES:
        logger.warning("Unknown layout grouping mode '%s', skipping optimization", mode)
        mode = "none"
    if mode == "none":
        return list(components)
    if threshold is None:
        threshold = settings.LAYOUT_GROUPING_THRESHOLD
    return group_runs(components, mode, threshold)
