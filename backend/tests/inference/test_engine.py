"""Tests for designbridge.inference.engine: end-to-end analysis.

Covers:
- landing-page scenario (navbar + button) through analyze/generate_application
- form scenario (label inference) and generic text headings
- partition of scene nodes across components
- idempotence of repeated runs
- analyze_async batching, cancellation, concurrent runs
- summarize_components
"""

from __future__ import annotations

import asyncio
from collections import Counter
from typing import Any, Dict, List

import pytest

from designbridge.errors import AnalysisCancelled
from designbridge.inference import (
    ComponentType,
    Thresholds,
    analyze,
    analyze_async,
    generate_application,
    run_analysis,
    summarize_components,
)
from designbridge.inference.classifiers import DEFAULT_STRATEGIES
from designbridge.inference.models import InferenceContext, SceneNode


# ─── Scenes ───────────────────────────────────────────────────────────


def _landing_scene() -> List[Dict[str, Any]]:
    return [
        {
            "id": "nav", "type": "group", "left": 0, "top": 0, "width": 1200, "height": 64,
            "objects": [{"id": "nav-title", "type": "text", "text": "Dashboard",
                         "left": 24, "top": 20, "fontSize": 20}],
        },
        {
            "id": "cta", "type": "group", "left": 100, "top": 400, "width": 160, "height": 48,
            "fill": "#000000", "rx": 8,
            "objects": [{"id": "cta-label", "type": "text", "text": "Get Started",
                         "left": 120, "top": 412, "fontSize": 16}],
        },
    ]


def _form_scene() -> List[Dict[str, Any]]:
    return [
        {"id": "email-label", "type": "text", "text": "Email Address",
         "left": 100, "top": 110, "fontSize": 14},
        {"id": "email-field", "type": "rect", "left": 100, "top": 140, "width": 300, "height": 40,
         "fill": "#ffffff", "stroke": "#d1d5db", "strokeWidth": 1},
    ]


def _mixed_scene() -> List[Dict[str, Any]]:
    return _landing_scene() + _form_scene() + [
        {"id": "card", "type": "group", "left": 100, "top": 600, "width": 300, "height": 200, "objects": [
            {"id": "card-bg", "type": "rect", "left": 100, "top": 600, "width": 300, "height": 200,
             "fill": "#ffffff"},
            {"id": "card-title", "type": "text", "text": "Pro", "left": 120, "top": 620, "fontSize": 24},
            {"id": "card-body", "type": "text", "text": "For teams", "left": 120, "top": 660},
            {"id": "card-inner", "type": "group", "objects": [
                {"id": "card-img", "type": "image", "src": "/pro.png"},
            ]},
        ]},
        {"id": "hero", "type": "text", "text": "Build faster", "left": 100, "top": 200, "fontSize": 48},
        {"id": "photo", "type": "image", "src": "/photo.jpg", "width": 320, "height": 180},
        {"id": "blob", "type": "circle", "width": 40, "height": 40},
    ]


# ─── Scenarios ────────────────────────────────────────────────────────


class TestLandingScenario:
    def test_types_in_render_order(self):
        components = analyze(_landing_scene(), canvas_width=1200)
        assert [c.type for c in components] == [ComponentType.NAVBAR, ComponentType.BUTTON]
        assert [c.id for c in components] == ["navbar-1", "button-1"]

    def test_props(self):
        navbar, button = analyze(_landing_scene(), canvas_width=1200)
        assert navbar.props["items"] == ["Dashboard"]
        assert button.props["label"] == "Get Started"
        assert button.props["variant"] == "primary"

    def test_group_claims_nested_text(self):
        result = run_analysis(_landing_scene(), canvas_width=1200)
        assert result.claims == {
            "nav": "navbar-1",
            "nav-title": "navbar-1",
            "cta": "button-1",
            "cta-label": "button-1",
        }
        assert len(result.components) == 2

    def test_application_contains_fragments_in_order(self):
        components = analyze(_landing_scene(), canvas_width=1200)
        code = generate_application(_landing_scene(), canvas_width=1200)
        assert code.count("<nav") == 1
        assert code.count("<button") == 1
        assert code.index("<nav") < code.index("<button")
        assert "Get Started" in code
        for comp in components:
            first_line = comp.code.split("\n")[0]
            assert first_line in code

    def test_narrow_canvas_changes_navbar(self):
        components = analyze(_landing_scene(), canvas_width=2000)
        assert components[0].type == ComponentType.CONTAINER


class TestFormScenario:
    def test_label_feeds_input(self):
        components = analyze(_form_scene())
        assert [c.type for c in components] == [ComponentType.TEXT, ComponentType.INPUT]
        field = components[1]
        assert field.props["label"] == "Email Address"
        assert field.props["placeholder"] == "Email Address"
        assert field.props["type"] == "email"
        assert 'type="email"' in field.code

    def test_label_text_still_emitted(self):
        label = analyze(_form_scene())[0]
        assert label.props["text"] == "Email Address"
        assert label.props["tag"] == "p"


class TestGenericText:
    @pytest.mark.parametrize("size,tag", [(48, "h1"), (20, "h3"), (14, "p")])
    def test_heading_levels(self, size, tag):
        comp = analyze([{"type": "text", "text": "T", "fontSize": size}])[0]
        assert comp.type == ComponentType.TEXT
        assert comp.code == f"<{tag}>T</{tag}>"


# ─── Invariants ───────────────────────────────────────────────────────


def _all_node_ids(nodes: List[SceneNode]) -> List[str]:
    return [n.id for node in nodes for n in node.iter_subtree()]


class TestPartition:
    def test_every_node_owned_exactly_once(self):
        from designbridge.inference.scene import read_scene

        scene = _mixed_scene()
        result = run_analysis(scene, canvas_width=1200)
        provenance = Counter(nid for c in result.components for nid in c.iter_node_ids())

        assert set(provenance) == set(_all_node_ids(read_scene(scene)))
        assert all(n == 1 for n in provenance.values())
        assert set(result.claims) == set(provenance)

    def test_card_owns_nested_image(self):
        result = run_analysis(_mixed_scene(), canvas_width=1200)
        card = next(c for c in result.components if c.type == ComponentType.CARD)
        assert result.claims["card-img"] == card.id
        assert card.props["image"] == "/pro.png"
        assert card.props["title"] == "Pro"

    def test_partition_survives_layout_grouping(self):
        result = run_analysis(_mixed_scene(), canvas_width=1200, layout="column")
        provenance = Counter(nid for c in result.components for nid in c.iter_node_ids())
        assert all(n == 1 for n in provenance.values())
        assert set(result.claims) == set(provenance)

    def test_explicit_id_colliding_with_position_keeps_node(self):
        scene = [
            {"id": "n1", "type": "text", "text": "Title", "fontSize": 40},
            {"type": "image", "src": "/a.png", "width": 320, "height": 180},
            {"type": "group", "left": 100, "top": 600, "objects": [
                {"id": "n2.1", "type": "rect", "fill": "#ffffff"},
                {"type": "text", "text": "Body"},
            ]},
        ]
        result = run_analysis(scene, canvas_width=1200)
        assert [c.type for c in result.components] == [
            ComponentType.TEXT, ComponentType.IMAGE, ComponentType.CARD,
        ]
        provenance = Counter(nid for c in result.components for nid in c.iter_node_ids())
        assert len(provenance) == 5
        assert all(n == 1 for n in provenance.values())
        assert len(result.components[2].node_ids) == 3

    def test_component_ids_unique(self):
        ids = [c.id for c in analyze(_mixed_scene())]
        assert len(ids) == len(set(ids))


class TestIdempotence:
    def test_repeated_runs_identical(self):
        scene = _mixed_scene()
        first = analyze(scene, canvas_width=1200)
        second = analyze(scene, canvas_width=1200)
        assert first == second
        assert generate_application(scene, canvas_width=1200) == generate_application(scene, canvas_width=1200)

    def test_input_not_mutated(self):
        scene = _landing_scene()
        before = repr(scene)
        analyze(scene)
        assert repr(scene) == before


class TestMalformedScenes:
    def test_garbage_entries_become_containers(self):
        components = analyze(["junk", None, {"type": "rect", "width": float("nan")}])
        assert [c.type for c in components] == [ComponentType.CONTAINER] * 3

    def test_empty_scene(self):
        assert analyze([]) == []
        code = generate_application([])
        assert "export default function App()" in code

    def test_non_list_scene(self):
        assert analyze({"objects": []}) == []


class TestOverrides:
    def test_thresholds_with_canvas_width(self):
        wide = Thresholds(canvas_width=5000)
        assert analyze(_landing_scene(), thresholds=wide)[0].type == ComponentType.CONTAINER
        assert analyze(_landing_scene(), canvas_width=1200, thresholds=wide)[0].type == ComponentType.NAVBAR

    def test_custom_strategies(self):
        components = analyze(_landing_scene(), strategies=DEFAULT_STRATEGIES[:1])
        assert [c.type for c in components] == [ComponentType.CONTAINER, ComponentType.BUTTON]


# ─── analyze_async ────────────────────────────────────────────────────


class _CancelAfterFirst:
    """Strategy that never matches but trips the cancel event when consulted."""
    component_type = ComponentType.CONTAINER

    def __init__(self, event: asyncio.Event):
        self.event = event

    def matches(self, node: SceneNode, ctx: InferenceContext) -> bool:
        self.event.set()
        return False

    def synthesize(self, node: SceneNode, ctx: InferenceContext) -> Dict[str, Any]:
        return {}


class TestAnalyzeAsync:
    @pytest.mark.asyncio
    async def test_matches_sync_result(self):
        scene = _mixed_scene()
        result = await analyze_async(scene, canvas_width=1200, batch_size=2)
        assert result.components == analyze(scene, canvas_width=1200)

    @pytest.mark.asyncio
    async def test_pre_cancelled(self):
        event = asyncio.Event()
        event.set()
        with pytest.raises(AnalysisCancelled) as exc:
            await analyze_async(_mixed_scene(), cancel_event=event)
        assert exc.value.processed == 0
        assert exc.value.total == len(_mixed_scene())

    @pytest.mark.asyncio
    async def test_cancelled_between_batches(self):
        event = asyncio.Event()
        with pytest.raises(AnalysisCancelled) as exc:
            await analyze_async(
                _mixed_scene(),
                strategies=(_CancelAfterFirst(event),),
                batch_size=1,
                cancel_event=event,
            )
        assert exc.value.processed == 1

    @pytest.mark.asyncio
    async def test_concurrent_runs_independent(self):
        landing, form = await asyncio.gather(
            analyze_async(_landing_scene(), canvas_width=1200, batch_size=1),
            analyze_async(_form_scene(), batch_size=1),
        )
        assert [c.id for c in landing.components] == ["navbar-1", "button-1"]
        assert [c.id for c in form.components] == ["text-1", "input-1"]
        assert set(landing.claims).isdisjoint(form.claims)


class TestSummary:
    def test_counts_by_type(self):
        summary = summarize_components(analyze(_mixed_scene(), canvas_width=1200))
        assert summary["total"] == 8
        assert summary["by_type"] == {
            "button": 1, "card": 1, "container": 1, "image": 1,
            "input": 1, "navbar": 1, "text": 2,
        }

    def test_empty(self):
        assert summarize_components([]) == {"total": 0, "by_type": {}}
