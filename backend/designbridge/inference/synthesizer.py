"""Component synthesizer: classified scene node → canonical prop set.

Every extractor is total: a missing field degrades to a documented default
(e.g. button label "Button", card title "Card Title") instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .models import InferenceContext, NodeKind, SceneNode, Thresholds
from .spatial import detect_input_type, find_nearby_label

DEFAULT_BUTTON_LABEL = "Button"
DEFAULT_INPUT_PLACEHOLDER = "Enter text..."
DEFAULT_CARD_TITLE = "Card Title"
DEFAULT_CARD_DESCRIPTION = "Card description"
DEFAULT_NAV_ITEM = "Nav Item"
DEFAULT_NAV_ITEMS = ("Home", "About", "Services", "Contact")
DEFAULT_IMAGE_ALT = "Image"

TRANSPARENT_FILLS = frozenset({"transparent", "none"})


# =====================================================================
# Node helpers
# =====================================================================


def nested_texts(node: SceneNode) -> List[SceneNode]:
    """All text nodes below ``node`` in document order."""
    return [n for n in node.iter_descendants() if n.kind == NodeKind.TEXT]


def background_rect(node: SceneNode) -> Optional[SceneNode]:
    """First direct rectangle child of a group (its visual background)."""
    for child in node.children:
        if child.kind == NodeKind.RECTANGLE:
            return child
    return None


def effective_fill(node: SceneNode) -> Optional[str]:
    """Fill of the node, or of a group's background rectangle."""
    if node.style.fill:
        return node.style.fill
    if node.kind == NodeKind.GROUP:
        bg = background_rect(node)
        if bg is not None:
            return bg.style.fill
    return None


def effective_corner_radius(node: SceneNode) -> float:
    if node.style.corner_radius > 0:
        return node.style.corner_radius
    if node.kind == NodeKind.GROUP:
        bg = background_rect(node)
        if bg is not None:
            return bg.style.corner_radius
    return 0.0


def extract_styles(node: SceneNode) -> Dict[str, Any]:
    geo = node.geometry
    return {
        "width": geo.width,
        "height": geo.height,
        "background_color": effective_fill(node),
        "border_color": node.style.stroke,
        "border_width": node.style.stroke_width,
        "border_radius": effective_corner_radius(node),
        "opacity": node.style.opacity,
        "position": {"x": geo.x, "y": geo.y},
    }


# =====================================================================
# Pattern components
# =====================================================================


def detect_button_variant(fill: Optional[str], thresholds: Thresholds) -> str:
    """near-black → primary, no fill / transparent → outline, else secondary."""
    if fill and fill.lower() in thresholds.dark_fills:
        return "primary"
    if not fill or fill.lower() in TRANSPARENT_FILLS:
        return "outline"
    return "secondary"


def synthesize_button(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    texts = nested_texts(node)
    label = (texts[0].text if texts else None) or DEFAULT_BUTTON_LABEL
    return {
        "label": label,
        "variant": detect_button_variant(effective_fill(node), ctx.thresholds),
        "style": extract_styles(node),
    }


def synthesize_input(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    label = find_nearby_label(node, ctx.text_nodes, ctx.thresholds)
    return {
        "placeholder": label or DEFAULT_INPUT_PLACEHOLDER,
        "label": label,
        "type": detect_input_type(label),
        "style": extract_styles(node),
    }


def synthesize_card(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    texts = nested_texts(node)
    default_size = ctx.thresholds.default_font_size

    title_node = None
    for text in texts:
        size = text.font_size or default_size
        if title_node is None or size > (title_node.font_size or default_size):
            title_node = text
    description_node = next((t for t in texts if t is not title_node), None)
    image_node = next((n for n in node.iter_descendants() if n.kind == NodeKind.IMAGE), None)

    return {
        "title": (title_node.text if title_node else None) or DEFAULT_CARD_TITLE,
        "description": (description_node.text if description_node else None) or DEFAULT_CARD_DESCRIPTION,
        "image": image_node.src if image_node else None,
        "style": extract_styles(node),
    }


def synthesize_navbar(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    items = [t.text or DEFAULT_NAV_ITEM for t in nested_texts(node)]
    return {
        "brand": ctx.thresholds.navbar_brand,
        "items": items or list(DEFAULT_NAV_ITEMS),
        "style": extract_styles(node),
    }


# =====================================================================
# Generic components
# =====================================================================


def text_tag(node: SceneNode, thresholds: Thresholds) -> str:
    """Heading tier by font size; bold body text → strong; else p."""
    size = node.font_size or thresholds.default_font_size
    if size > thresholds.heading_1_min_font:
        return "h1"
    if size > thresholds.heading_2_min_font:
        return "h2"
    if size > thresholds.heading_3_min_font:
        return "h3"
    if node.is_bold:
        return "strong"
    return "p"


def synthesize_text(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    return {
        "text": node.text or "",
        "tag": text_tag(node, ctx.thresholds),
        "font_size": node.font_size or ctx.thresholds.default_font_size,
        "font_weight": node.font_weight,
        "color": node.style.fill,
    }


def synthesize_image(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    return {
        "src": node.src or "",
        "alt": DEFAULT_IMAGE_ALT,
        "width": node.geometry.width,
        "height": node.geometry.height,
    }


def synthesize_container(node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
    return {
        "element": node.kind.value,
        "style": extract_styles(node),
    }
