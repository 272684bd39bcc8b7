"""Core data types for design-to-code inference.

- SceneNode: read-only view of one canvas object (shape, text, image, group)
- ComponentMapping: one recognized UI component plus its emitted code
- ClaimIndex: per-run ownership index (node id → component id)
- Thresholds: heuristic constants, defaults from designbridge.settings
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Optional, Tuple

from .. import settings


class NodeKind(str, Enum):
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    TEXT = "text"
    IMAGE = "image"
    GROUP = "group"


class ComponentType(str, Enum):
    BUTTON = "button"
    INPUT = "input"
    CARD = "card"
    NAVBAR = "navbar"
    TEXT = "text"
    IMAGE = "image"
    CONTAINER = "container"


@dataclass(frozen=True)
class Geometry:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rotation: float = 0.0  # carried through, ignored by inference

    @property
    def aspect_ratio(self) -> float:
        """width / height, with a zero height treated as 1."""
        return self.width / (self.height or 1)

    def bounds(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


@dataclass(frozen=True)
class Style:
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 0.0
    corner_radius: float = 0.0
    opacity: float = 1.0


@dataclass(frozen=True)
class SceneNode:
    """One drawable element of the canvas.

    ``children`` is only populated for groups. Child geometry is read as
    absolute canvas coordinates.
    """
    id: str
    kind: NodeKind
    geometry: Geometry = field(default_factory=Geometry)
    style: Style = field(default_factory=Style)
    text: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[str] = None
    src: Optional[str] = None
    children: Tuple["SceneNode", ...] = ()

    def iter_descendants(self) -> Iterator["SceneNode"]:
        """Depth-first, document-order walk of everything below this node."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def iter_subtree(self) -> Iterator["SceneNode"]:
        yield self
        yield from self.iter_descendants()

    @property
    def is_bold(self) -> bool:
        weight = (self.font_weight or "").strip().lower()
        if weight in ("bold", "bolder"):
            return True
        return weight.isdigit() and int(weight) >= 700


@dataclass(frozen=True)
class ComponentMapping:
    """Structured description of one recognized UI component.

    ``node_ids`` records provenance: every scene node this component owns.
    """
    id: str
    type: ComponentType
    props: Dict[str, Any] = field(default_factory=dict)
    children: Tuple["ComponentMapping", ...] = ()
    code: str = ""
    node_ids: Tuple[str, ...] = ()
    bounds: Dict[str, float] = field(default_factory=dict)

    def iter_node_ids(self) -> Iterator[str]:
        """Provenance of this component and all nested children."""
        yield from self.node_ids
        for child in self.children:
            yield from child.iter_node_ids()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "props": self.props,
            "children": [c.to_dict() for c in self.children],
            "code": self.code,
            "node_ids": list(self.node_ids),
            "bounds": dict(self.bounds),
        }


class ClaimIndex:
    """Ownership index for one analysis run.

    Maps node id → id of the component that claimed it. A node is claimed
    at most once; claiming a node claims its whole subtree.
    """

    def __init__(self) -> None:
        self._owner: Dict[str, str] = {}

    def is_claimed(self, node: SceneNode) -> bool:
        return node.id in self._owner

    def owner_of(self, node_id: str) -> Optional[str]:
        return self._owner.get(node_id)

    def claim(self, node: SceneNode, component_id: str) -> Tuple[str, ...]:
        """Claim ``node`` and its unclaimed descendants for ``component_id``.

        Returns the ids newly claimed, in document order.
        """
        claimed = []
        for n in node.iter_subtree():
            if n.id in self._owner:
                continue
            self._owner[n.id] = component_id
            claimed.append(n.id)
        return tuple(claimed)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._owner)

    def __len__(self) -> int:
        return len(self._owner)


@dataclass(frozen=True)
class Thresholds:
    """Heuristic constants. Build with from_settings() or override per call."""
    canvas_width: float = 1200.0
    button_min_aspect: float = 2.0
    button_max_aspect: float = 6.0
    input_min_aspect: float = 4.0
    light_fills: FrozenSet[str] = frozenset({"#ffffff", "#f9f9f9", "#fff", "white"})
    dark_fills: FrozenSet[str] = frozenset({"#000000", "#111111", "#000", "black"})
    card_min_children: int = 2
    navbar_max_top: float = 100.0
    navbar_min_width_ratio: float = 0.8
    label_above_x_tolerance: float = 50.0
    label_left_y_tolerance: float = 20.0
    heading_1_min_font: float = 32.0
    heading_2_min_font: float = 24.0
    heading_3_min_font: float = 18.0
    default_font_size: float = 16.0
    navbar_brand: str = "DesignOS"

    @classmethod
    def from_settings(cls, **overrides: Any) -> "Thresholds":
        values = dict(
            canvas_width=settings.DEFAULT_CANVAS_WIDTH,
            button_min_aspect=settings.BUTTON_MIN_ASPECT,
            button_max_aspect=settings.BUTTON_MAX_ASPECT,
            input_min_aspect=settings.INPUT_MIN_ASPECT,
            light_fills=settings.LIGHT_FILLS,
            dark_fills=settings.DARK_FILLS,
            card_min_children=settings.CARD_MIN_CHILDREN,
            navbar_max_top=settings.NAVBAR_MAX_TOP,
            navbar_min_width_ratio=settings.NAVBAR_MIN_WIDTH_RATIO,
            label_above_x_tolerance=settings.LABEL_ABOVE_X_TOLERANCE,
            label_left_y_tolerance=settings.LABEL_LEFT_Y_TOLERANCE,
            heading_1_min_font=settings.HEADING_1_MIN_FONT,
            heading_2_min_font=settings.HEADING_2_MIN_FONT,
            heading_3_min_font=settings.HEADING_3_MIN_FONT,
            default_font_size=settings.DEFAULT_FONT_SIZE,
            navbar_brand=settings.NAVBAR_BRAND,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass(frozen=True)
class InferenceContext:
    """Read-only view of the whole scene shared by every strategy in one run."""
    thresholds: Thresholds
    text_nodes: Tuple[SceneNode, ...] = ()

    @property
    def canvas_width(self) -> float:
        return self.thresholds.canvas_width
