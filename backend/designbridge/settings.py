"""Inference runtime settings: tunable thresholds for pattern recognition.

All values read from environment variables with defaults matching the
canvas editor's original heuristics. Import from here instead of hardcoding.

Infrastructure config (API host, CORS origins, log directory) stays
in designbridge/config.py.
"""

from __future__ import annotations

import os
from typing import FrozenSet


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


def _color_set(key: str, default: str) -> FrozenSet[str]:
    raw = os.getenv(key, default)
    return frozenset(c.strip().lower() for c in raw.split(",") if c.strip())


# =====================================================================
# Canvas
# =====================================================================

# Used for navbar detection when the caller does not pass the canvas width
DEFAULT_CANVAS_WIDTH = _float("DEFAULT_CANVAS_WIDTH", 1200.0)


# =====================================================================
# Pattern predicates
# =====================================================================

# Button: width/height strictly between these bounds
BUTTON_MIN_ASPECT = _float("BUTTON_MIN_ASPECT", 2.0)
BUTTON_MAX_ASPECT = _float("BUTTON_MAX_ASPECT", 6.0)

# Input field: width/height strictly above this
INPUT_MIN_ASPECT = _float("INPUT_MIN_ASPECT", 4.0)

# Fills read as "light" (input background) and "near-black" (primary button)
LIGHT_FILLS = _color_set("LIGHT_FILLS", "#ffffff,#f9f9f9,#fff,white")
DARK_FILLS = _color_set("DARK_FILLS", "#000000,#111111,#000,black")

# Card: minimum direct children (background + content)
CARD_MIN_CHILDREN = _int("CARD_MIN_CHILDREN", 2)

# Navbar: top edge above this, width at least this share of the canvas
NAVBAR_MAX_TOP = _float("NAVBAR_MAX_TOP", 100.0)
NAVBAR_MIN_WIDTH_RATIO = _float("NAVBAR_MIN_WIDTH_RATIO", 0.8)


# =====================================================================
# Spatial relationships
# =====================================================================

# Label above an input: max horizontal offset between left edges
LABEL_ABOVE_X_TOLERANCE = _float("LABEL_ABOVE_X_TOLERANCE", 50.0)
# Label left of an input: max vertical offset between top edges
LABEL_LEFT_Y_TOLERANCE = _float("LABEL_LEFT_Y_TOLERANCE", 20.0)


# =====================================================================
# Text tiers
# =====================================================================

HEADING_1_MIN_FONT = _float("HEADING_1_MIN_FONT", 32.0)
HEADING_2_MIN_FONT = _float("HEADING_2_MIN_FONT", 24.0)
HEADING_3_MIN_FONT = _float("HEADING_3_MIN_FONT", 18.0)
DEFAULT_FONT_SIZE = _float("DEFAULT_FONT_SIZE", 16.0)


# =====================================================================
# Pipeline
# =====================================================================

# Top-level nodes classified between event-loop yields in analyze_async()
ANALYSIS_BATCH_SIZE = _int("ANALYSIS_BATCH_SIZE", 200)

# layout_grouping: "none" (default) | "row" | "column"
#   none: optimizer is the identity
#   row: merge consecutive components sharing a top edge
#   column: merge consecutive components sharing a left edge
LAYOUT_GROUPING = _str("LAYOUT_GROUPING", "none")

# Max edge offset for two components to share a row/column
LAYOUT_GROUPING_THRESHOLD = _float("LAYOUT_GROUPING_THRESHOLD", 50.0)

# Navbar brand shown when nothing better is known
NAVBAR_BRAND = _str("NAVBAR_BRAND", "DesignOS")
