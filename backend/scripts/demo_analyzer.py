#!/usr/bin/env python3
"""Demo: Run the design-to-code engine on a canvas JSON export and show results.

Usage:
    python scripts/demo_analyzer.py [canvas.json] [--out page.tsx]

Without a path, a small built-in landing page scene is analyzed.
"""

import asyncio
import json
import sys
import os

# Add backend to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from designbridge.inference import analyze_async, render_application, summarize_components
from designbridge.inference.scene import read_canvas

SAMPLE_CANVAS = {
    "width": 1200,
    "height": 800,
    "objects": [
        {"type": "group", "left": 0, "top": 0, "width": 1200, "height": 64,
         "objects": [{"type": "text", "text": "Dashboard", "left": 24, "top": 20, "fontSize": 20}]},
        {"type": "text", "text": "Ship designs faster", "left": 100, "top": 140, "fontSize": 40},
        {"type": "text", "text": "Email", "left": 100, "top": 230, "fontSize": 14},
        {"type": "rect", "left": 100, "top": 260, "width": 300, "height": 40,
         "fill": "#ffffff", "stroke": "#d1d5db", "strokeWidth": 1},
        {"type": "group", "left": 100, "top": 400, "width": 160, "height": 48,
         "fill": "#000000", "rx": 8,
         "objects": [{"type": "text", "text": "Get Started", "left": 120, "top": 412}]},
    ],
}


def _load_canvas(argv):
    if argv and not argv[0].startswith("--"):
        json_path = os.path.abspath(argv[0])
        with open(json_path, encoding="utf-8") as f:
            return json_path, json.load(f)
    return "<built-in sample>", SAMPLE_CANVAS


async def main():
    argv = sys.argv[1:]
    source, canvas = _load_canvas(argv)
    out_path = argv[argv.index("--out") + 1] if "--out" in argv[:-1] else None

    print("=== Design-to-Code Demo ===")
    print(f"Input: {source}\n")

    objects = canvas.get("objects", []) if isinstance(canvas, dict) else canvas
    _, width, _ = read_canvas(canvas) if isinstance(canvas, dict) else (None, None, None)
    result = await analyze_async(objects, canvas_width=width)

    # --- Component breakdown ---
    summary = summarize_components(result.components)
    print(f"Total components: {summary['total']}")
    print(f"\n{'='*60}")
    print("COMPONENT LIST (render order):")
    print(f"{'='*60}")

    for i, comp in enumerate(result.components):
        b = comp.bounds
        print(f"\n[{i+1}] {comp.id}")
        print(f"    Type:     {comp.type.value}")
        print(f"    Nodes:    {', '.join(comp.node_ids)}")
        print(f"    Bounds:   {b.get('width', 0)}x{b.get('height', 0)} @ ({b.get('x', 0)}, {b.get('y', 0)})")
        props = {k: v for k, v in comp.props.items() if k != "style"}
        print(f"    Props:    {props}")

    print(f"\n{'='*60}")
    print("BY TYPE:")
    print(f"{'='*60}")
    for comp_type, count in summary["by_type"].items():
        print(f"  {comp_type}: {count}")

    # --- Generated page ---
    code = render_application(c.code for c in result.components)
    if out_path:
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(code)
        print(f"\nPage written to {out_path} ({len(code)} chars)")
    else:
        print(f"\n{'='*60}")
        print("GENERATED PAGE:")
        print(f"{'='*60}")
        print(code)


if __name__ == "__main__":
    asyncio.run(main())
