"""Code emitter: component type + props → React/Tailwind JSX source.

Each component type has exactly one template. Templates are pure functions
of (props, children_code): no module state, no clock, no randomness, so
re-emitting an unchanged ComponentMapping yields byte-identical code.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Iterable, List, Sequence

from .models import ComponentMapping, ComponentType

INDENT = "  "

APP_IMPORTS = (
    "import React from 'react'\n"
    "import Image from 'next/image'\n"
)

BUTTON_VARIANT_CLASSES = {
    "primary": "px-4 py-2 rounded-lg bg-gray-900 text-white hover:bg-gray-700 transition-colors",
    "secondary": "px-4 py-2 rounded-lg bg-blue-600 text-white hover:bg-blue-700 transition-colors",
    "outline": "px-4 py-2 rounded-lg border border-gray-300 text-gray-900 hover:bg-gray-50 transition-colors",
}

LAYOUT_CLASSES = {
    "row": "flex flex-row items-start gap-4",
    "column": "flex flex-col gap-4",
}


# =====================================================================
# Escaping
# =====================================================================


def jsx_text(value: Any) -> str:
    """Escape a value for use as JSX element text."""
    text = "" if value is None else str(value)
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )


def jsx_attr(value: Any) -> str:
    """Escape a value for a double-quoted JSX attribute."""
    text = "" if value is None else str(value)
    return text.replace("&", "&amp;").replace('"', "&quot;")


def js_string(value: Any) -> str:
    """Escape a value for a single-quoted JS string literal."""
    text = "" if value is None else str(value)
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def num_literal(value: Any) -> str:
    """160.0 → '160', 12.5 → '12.5', garbage → '0'."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    if number != number or number in (float("inf"), float("-inf")):
        return "0"
    if number.is_integer():
        return str(int(number))
    return f"{number:.2f}".rstrip("0").rstrip(".")


def indent(code: str, levels: int = 1) -> str:
    pad = INDENT * levels
    return "\n".join(pad + line if line else line for line in code.split("\n"))


# =====================================================================
# Templates
# =====================================================================


def button_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    label = props.get("label") or "Button"
    classes = BUTTON_VARIANT_CLASSES.get(props.get("variant"), BUTTON_VARIANT_CLASSES["secondary"])
    return (
        "<button\n"
        '  type="button"\n'
        f'  className="{classes}"\n'
        f"  onClick={{() => console.log('{js_string(label)} clicked')}}\n"
        ">\n"
        f"  {jsx_text(label)}\n"
        "</button>"
    )


def input_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    label = props.get("label")
    lines = ['<div className="mb-4">']
    if label:
        lines.append(f'  <label className="block text-sm font-medium mb-2">{jsx_text(label)}</label>')
    lines += [
        "  <input",
        f'    type="{jsx_attr(props.get("type") or "text")}"',
        f'    placeholder="{jsx_attr(props.get("placeholder") or "")}"',
        '    className="w-full px-3 py-2 border border-gray-300 rounded-lg '
        'focus:outline-none focus:ring-2 focus:ring-blue-500"',
        "  />",
        "</div>",
    ]
    return "\n".join(lines)


def card_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    title = props.get("title") or "Card Title"
    lines = ['<div className="bg-white rounded-lg shadow-lg p-6">']
    if props.get("image"):
        lines.append(
            f'  <img src="{jsx_attr(props["image"])}" alt="{jsx_attr(title)}" '
            'className="w-full h-48 object-cover rounded-md mb-4" />'
        )
    lines += [
        f'  <h3 className="text-xl font-semibold mb-2">{jsx_text(title)}</h3>',
        f'  <p className="text-gray-600">{jsx_text(props.get("description") or "")}</p>',
    ]
    lines += [indent(code) for code in children_code]
    lines.append("</div>")
    return "\n".join(lines)


def navbar_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    items = props.get("items") or []
    lines = [
        '<nav className="bg-white shadow-sm px-6 py-4">',
        '  <div className="flex justify-between items-center">',
        f'    <div className="text-xl font-bold">{jsx_text(props.get("brand") or "")}</div>',
        '    <div className="flex gap-6">',
    ]
    lines += [
        f'      <a href="#" className="text-gray-700 hover:text-blue-600">{jsx_text(item)}</a>'
        for item in items
    ]
    lines += [
        "    </div>",
        "  </div>",
        "</nav>",
    ]
    return "\n".join(lines)


def text_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    tag = props.get("tag") or "p"
    return f"<{tag}>{jsx_text(props.get('text'))}</{tag}>"


def image_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    return (
        f'<Image src="{jsx_attr(props.get("src"))}" alt="{jsx_attr(props.get("alt") or "Image")}" '
        f'width={{{num_literal(props.get("width"))}}} height={{{num_literal(props.get("height"))}}} />'
    )


def container_template(props: Dict[str, Any], children_code: Sequence[str] = ()) -> str:
    layout = props.get("layout")
    if layout in LAYOUT_CLASSES:
        inner = "\n".join(indent(code) for code in children_code)
        return f'<div className="{LAYOUT_CLASSES[layout]}">\n{inner}\n</div>'
    if props.get("element") == "rectangle":
        return '<div className="container" />'
    return "<div />"


TEMPLATES: Dict[ComponentType, Callable[[Dict[str, Any], Sequence[str]], str]] = {
    ComponentType.BUTTON: button_template,
    ComponentType.INPUT: input_template,
    ComponentType.CARD: card_template,
    ComponentType.NAVBAR: navbar_template,
    ComponentType.TEXT: text_template,
    ComponentType.IMAGE: image_template,
    ComponentType.CONTAINER: container_template,
}


# =====================================================================
# Public API
# =====================================================================


def emit_component(
    comp_type: ComponentType,
    props: Dict[str, Any],
    children_code: Sequence[str] = (),
) -> str:
    """Render one component's JSX fragment from its type and props."""
    return TEMPLATES[ComponentType(comp_type)](props, tuple(children_code))


def attach_code(component: ComponentMapping) -> ComponentMapping:
    """Return a copy of ``component`` (and its children) with ``code`` filled in."""
    children = tuple(attach_code(child) for child in component.children)
    code = emit_component(component.type, component.props, [c.code for c in children])
    return dataclasses.replace(component, children=children, code=code)


def render_application(fragments: Iterable[str]) -> str:
    """Wrap top-level fragments, in order, in one page document."""
    body: List[str] = [indent(fragment, 3) for fragment in fragments]
    lines = [
        APP_IMPORTS,
        "export default function App() {",
        "  return (",
        '    <div className="min-h-screen bg-gray-50">',
        *body,
        "    </div>",
        "  )",
        "}",
        "",
    ]
    return "\n".join(lines)
