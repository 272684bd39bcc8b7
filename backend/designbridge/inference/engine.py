"""Design-to-code inference engine: public entry points.

Pipeline: read_scene → (per top-level node) classify ⇄ resolve labels →
synthesize → optimize → emit.

Single pass over top-level nodes in render order. Each run owns a fresh
ClaimIndex; a node claimed by a classified group is never classified again.
Nothing is shared between runs, so concurrent analyses of the same scene
are independent.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .. import settings
from ..errors import AnalysisCancelled
from .classifiers import DEFAULT_STRATEGIES, PatternStrategy, classify_node
from .emitter import attach_code, render_application
from .models import ClaimIndex, ComponentMapping, InferenceContext, SceneNode, Thresholds
from .optimizer import optimize
from .scene import iter_text_nodes, read_scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisResult:
    """Components in discovery order plus the ownership index (node id → component id)."""
    components: List[ComponentMapping] = field(default_factory=list)
    claims: Dict[str, str] = field(default_factory=dict)


class _AnalysisPass:
    """State for one analysis run. Never reused across runs."""

    def __init__(
        self,
        nodes: List[SceneNode],
        thresholds: Thresholds,
        strategies: Sequence[PatternStrategy],
    ):
        self.nodes = nodes
        self.strategies = strategies
        self.ctx = InferenceContext(
            thresholds=thresholds,
            text_nodes=tuple(iter_text_nodes(nodes)),
        )
        self.claims = ClaimIndex()
        self.components: List[ComponentMapping] = []
        self._counters: Counter = Counter()

    def step(self, node: SceneNode) -> None:
        if self.claims.is_claimed(node):
            return
        comp_type, props = classify_node(node, self.ctx, self.strategies)
        self._counters[comp_type] += 1
        comp_id = f"{comp_type.value}-{self._counters[comp_type]}"
        node_ids = self.claims.claim(node, comp_id)
        self.components.append(ComponentMapping(
            id=comp_id,
            type=comp_type,
            props=props,
            node_ids=node_ids,
            bounds=node.geometry.bounds(),
        ))

    def finish(self, layout: Optional[str]) -> AnalysisResult:
        optimized = optimize(self.components, mode=layout)
        emitted = [attach_code(c) for c in optimized]
        logger.info(
            "Analyzed %d top-level nodes → %d components (%s)",
            len(self.nodes),
            len(emitted),
            ", ".join(f"{t.value}:{n}" for t, n in sorted(self._counters.items(), key=lambda kv: kv[0].value)),
        )
        return AnalysisResult(components=emitted, claims=self.claims.as_dict())


def _prepare(
    nodes: Any,
    canvas_width: Optional[float],
    thresholds: Optional[Thresholds],
) -> Tuple[List[SceneNode], Thresholds]:
    scene = read_scene(nodes)
    if thresholds is None:
        thresholds = Thresholds.from_settings(canvas_width=canvas_width)
    elif canvas_width:
        thresholds = dataclasses.replace(thresholds, canvas_width=canvas_width)
    return scene, thresholds


def run_analysis(
    nodes: Any,
    canvas_width: Optional[float] = None,
    thresholds: Optional[Thresholds] = None,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
    layout: Optional[str] = None,
) -> AnalysisResult:
    """Classify, synthesize, optimize and emit a whole scene.

    Args:
        nodes: top-level canvas objects (raw dicts or SceneNode)
        canvas_width: canvas width for navbar detection (default from settings)
        thresholds: heuristic overrides
        strategies: pattern strategies in priority order
        layout: optimizer mode ("none" | "row" | "column")
    """
    scene, thresholds = _prepare(nodes, canvas_width, thresholds)
    run = _AnalysisPass(scene, thresholds, strategies)
    for node in scene:
        run.step(node)
    return run.finish(layout)


def analyze(
    nodes: Any,
    canvas_width: Optional[float] = None,
    thresholds: Optional[Thresholds] = None,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
    layout: Optional[str] = None,
) -> List[ComponentMapping]:
    """Recognized components, in discovery order, with code attached."""
    return run_analysis(nodes, canvas_width, thresholds, strategies, layout).components


def generate_application(
    nodes: Any,
    canvas_width: Optional[float] = None,
    thresholds: Optional[Thresholds] = None,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
    layout: Optional[str] = None,
) -> str:
    """Full page source built from analyze() of the same scene."""
    components = analyze(nodes, canvas_width, thresholds, strategies, layout)
    return render_application(c.code for c in components)


async def analyze_async(
    nodes: Any,
    canvas_width: Optional[float] = None,
    thresholds: Optional[Thresholds] = None,
    strategies: Sequence[PatternStrategy] = DEFAULT_STRATEGIES,
    layout: Optional[str] = None,
    batch_size: Optional[int] = None,
    cancel_event: Optional[asyncio.Event] = None,
) -> AnalysisResult:
    """Batched analysis that yields to the event loop between batches.

    ``cancel_event`` is checked before each batch. When set, raises
    AnalysisCancelled and discards every partial component.
    """
    scene, thresholds = _prepare(nodes, canvas_width, thresholds)
    size = max(1, batch_size or settings.ANALYSIS_BATCH_SIZE)
    run = _AnalysisPass(scene, thresholds, strategies)
    total = len(scene)

    for start in range(0, total, size):
        if cancel_event is not None and cancel_event.is_set():
            logger.info("Analysis cancelled at %d/%d top-level nodes", start, total)
            raise AnalysisCancelled(start, total)
        for node in scene[start:start + size]:
            run.step(node)
        await asyncio.sleep(0)

    if cancel_event is not None and cancel_event.is_set():
        raise AnalysisCancelled(total, total)
    return run.finish(layout)


def summarize_components(components: Sequence[ComponentMapping]) -> Dict[str, Any]:
    """Counts for a "found N components" panel message."""
    by_type: Counter = Counter(c.type.value for c in components)
    return {"total": len(components), "by_type": dict(sorted(by_type.items()))}
