"""Design-to-code inference: scene reader, pattern classifier, spatial
resolver, component synthesizer, tree optimizer and code emitter."""

from .classifiers import (
    DEFAULT_STRATEGIES,
    ButtonStrategy,
    CardStrategy,
    InputStrategy,
    NavbarStrategy,
    PatternStrategy,
    classify_node,
)
from .emitter import emit_component, render_application
from .engine import (
    AnalysisResult,
    analyze,
    analyze_async,
    generate_application,
    run_analysis,
    summarize_components,
)
from .models import (
    ClaimIndex,
    ComponentMapping,
    ComponentType,
    Geometry,
    NodeKind,
    SceneNode,
    Style,
    Thresholds,
)
from .scene import read_canvas, read_scene
from .spatial import detect_input_type, find_nearby_label

__all__ = [
    "DEFAULT_STRATEGIES",
    "AnalysisResult",
    "ButtonStrategy",
    "CardStrategy",
    "ClaimIndex",
    "ComponentMapping",
    "ComponentType",
    "Geometry",
    "InputStrategy",
    "NavbarStrategy",
    "NodeKind",
    "PatternStrategy",
    "SceneNode",
    "Style",
    "Thresholds",
    "analyze",
    "analyze_async",
    "classify_node",
    "detect_input_type",
    "emit_component",
    "find_nearby_label",
    "generate_application",
    "read_canvas",
    "read_scene",
    "render_application",
    "run_analysis",
    "summarize_components",
]
