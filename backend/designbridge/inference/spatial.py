"""Spatial relationship resolver: proximity inference between unrelated nodes.

Used to link an input field to the label text sitting above or beside it,
and to infer the HTML input type from that label.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from .models import SceneNode, Thresholds

logger = logging.getLogger(__name__)

DEFAULT_INPUT_TYPE = "text"

# (keywords, input type); first row with a matching keyword wins
INPUT_TYPE_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("email",), "email"),
    (("password",), "password"),
    (("phone", "tel"), "tel"),
    (("number", "amount"), "number"),
    (("date",), "date"),
)


def find_nearby_label(
    node: SceneNode,
    text_nodes: Iterable[SceneNode],
    thresholds: Optional[Thresholds] = None,
) -> Optional[str]:
    """Return the text of the first text node above or left of ``node``.

    Above: text top < node top and left edges within the horizontal tolerance.
    Left: text left < node left and top edges within the vertical tolerance.
    Scans in the given order (document order) and stops at the first hit.
    """
    t = thresholds or Thresholds()
    target = node.geometry

    for text in text_nodes:
        if text.id == node.id:
            continue
        geo = text.geometry

        if geo.y < target.y and abs(geo.x - target.x) < t.label_above_x_tolerance:
            logger.debug("Label for %s: '%s' (above)", node.id, text.text)
            return text.text or None

        if geo.x < target.x and abs(geo.y - target.y) < t.label_left_y_tolerance:
            logger.debug("Label for %s: '%s' (left)", node.id, text.text)
            return text.text or None

    return None


def detect_input_type(label: Optional[str]) -> str:
    """Map label text to an input type via INPUT_TYPE_KEYWORDS.

    'Email Address' → 'email', 'Amount' → 'number', 'Name' → 'text'.
    """
    if not label:
        return DEFAULT_INPUT_TYPE
    lower = label.lower()
    for keywords, input_type in INPUT_TYPE_KEYWORDS:
        if any(kw in lower for kw in keywords):
            return input_type
    return DEFAULT_INPUT_TYPE
