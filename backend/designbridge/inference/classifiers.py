"""Pattern classifier: ordered UI-pattern strategies over top-level nodes.

Each strategy answers two questions about a scene node:
- matches(node, ctx): does this node look like my pattern?
- synthesize(node, ctx): extract my canonical props

Strategies are evaluated in DEFAULT_STRATEGIES order and the first match
wins. The order is a tie-break policy:

1. button: a small rounded rectangle holding text is a button before it
   can be read as a card
2. input: wide, light, stroked rectangles
3. card: groups with a filled background rectangle and text
4. navbar: full-width, top-anchored elements, read before they can fall
   through to a generic container

Nodes no strategy claims go to classify_generic(), which always succeeds.
Predicates never raise; malformed nodes simply fail to match.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from .models import ComponentType, InferenceContext, NodeKind, SceneNode
from .synthesizer import (
    effective_corner_radius,
    nested_texts,
    synthesize_button,
    synthesize_card,
    synthesize_container,
    synthesize_image,
    synthesize_input,
    synthesize_navbar,
    synthesize_text,
)

logger = logging.getLogger(__name__)


class PatternStrategy(Protocol):
    """Interface for a UI-pattern classifier strategy."""

    component_type: ComponentType

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        ...

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        ...


# --- Strategies ---


class ButtonStrategy:
    component_type = ComponentType.BUTTON

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        if node.kind not in (NodeKind.RECTANGLE, NodeKind.GROUP):
            return False
        if effective_corner_radius(node) <= 0:
            return False
        if node.kind == NodeKind.GROUP and not nested_texts(node):
            return False
        t = ctx.thresholds
        return t.button_min_aspect < node.geometry.aspect_ratio < t.button_max_aspect

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        return synthesize_button(node, ctx)


class InputStrategy:
    component_type = ComponentType.INPUT

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        if node.kind != NodeKind.RECTANGLE:
            return False
        t = ctx.thresholds
        has_light_fill = (node.style.fill or "").lower() in t.light_fills
        has_border = bool(node.style.stroke) and node.style.stroke_width > 0
        return node.geometry.aspect_ratio > t.input_min_aspect and has_light_fill and has_border

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        return synthesize_input(node, ctx)


class CardStrategy:
    component_type = ComponentType.CARD

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        if node.kind != NodeKind.GROUP:
            return False
        children = node.children
        has_background = any(
            c.kind == NodeKind.RECTANGLE and c.style.fill for c in children
        )
        has_text = any(c.kind == NodeKind.TEXT for c in children)
        return has_background and has_text and len(children) >= ctx.thresholds.card_min_children

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        return synthesize_card(node, ctx)


class NavbarStrategy:
    component_type = ComponentType.NAVBAR

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        if node.kind not in (NodeKind.RECTANGLE, NodeKind.GROUP):
            return False
        t = ctx.thresholds
        is_top = node.geometry.y < t.navbar_max_top
        is_wide = node.geometry.width >= ctx.canvas_width * t.navbar_min_width_ratio
        return is_top and is_wide

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        return synthesize_navbar(node, ctx)


DEFAULT_STRATEGIES: Tuple[PatternStrategy, ...] = (
    ButtonStrategy(),
    InputStrategy(),
    CardStrategy(),
    NavbarStrategy(),
)


# --- Generic fallback ---

_GENERIC: Dict[NodeKind, Tuple[ComponentType, Callable[[SceneNode, InferenceContext], Dict[str, Any]]]] = {
    NodeKind.TEXT: (ComponentType.TEXT, synthesize_text),
    NodeKind.IMAGE: (ComponentType.IMAGE, synthesize_image),
}


def classify_generic(node: SceneNode, ctx: InferenceContext) -> Tuple[ComponentType, Dict[str, Any]]:
    """text → text, image → image, everything else → container."""
    comp_type, synth = _GENERIC.get(node.kind, (ComponentType.CONTAINER, synthesize_container))
    return comp_type, synth(node, ctx)


def match_strategy(
    node: SceneNode,
    ctx: InferenceContext,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
) -> Optional[PatternStrategy]:
    """First strategy (in priority order) whose predicate accepts ``node``."""
    for strategy in strategies:
        if strategy.matches(node, ctx):
            return strategy
    return None


def classify_node(
    node: SceneNode,
    ctx: InferenceContext,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
) -> Tuple[ComponentType, Dict[str, Any]]:
    """Assign a component type and props to one top-level node."""
    strategy = match_strategy(node, ctx, strategies)
    if strategy is not None:
        logger.debug("Node %s matched %s", node.id, strategy.component_type.value)
        return strategy.component_type, strategy.synthesize(node, ctx)

    comp_type, props = classify_generic(node, ctx)
    logger.debug("Node %s fell through to generic %s", node.id, comp_type.value)
    return comp_type, props


def strategy_names(strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES) -> List[str]:
    return [s.component_type.value for s in strategies]
