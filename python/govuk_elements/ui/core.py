from __future__ import annotations

from dataclasses import dataclass, field
from html import escape
from typing import Any, Iterable

VOID_TAGS = {"input", "br", "hr", "img", "link", "meta"}


@dataclass
class Element:
    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)

    def to_html(self) -> str:
        return render_node(self)


@dataclass(frozen=True)
class Raw:
    """Pre-escaped markup, emitted verbatim.

    Only translations stored under an ``_html`` key are wrapped in this type.
    """

    markup: str

    def __str__(self) -> str:
        return self.markup


def _flatten(children: Iterable[Any]) -> list[Any]:
    flat: list[Any] = []
    for child in children:
        if child is None:
            continue
        if isinstance(child, (list, tuple)):
            flat.extend(_flatten(child))
        else:
            flat.append(child)
    return flat


def el(tag: str, *children: Any, **props: Any) -> Element:
    return Element(tag=tag, props=props, children=_flatten(children))


def fragment(*children: Any) -> list[Any]:
    return _flatten(children)


def _normalize_attr_name(name: str) -> str:
    if name == "class_name":
        return "class"
    if name == "html_for":
        return "for"
    return name.replace("_", "-")


def _render_attrs(props: dict[str, Any]) -> str:
    parts: list[str] = []
    for key, value in props.items():
        if value is None or value is False:
            continue
        attr = _normalize_attr_name(key)
        if value is True:
            parts.append(attr)
        else:
            parts.append(f'{attr}="{escape(_render_attr_value(value), quote=True)}"')
    return (" " + " ".join(parts)) if parts else ""


def _render_attr_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(part) for part in value if part)
    return str(value)


def render_node(node: Any) -> str:
    if node is None:
        return ""
    if isinstance(node, Raw):
        return node.markup
    if isinstance(node, (list, tuple)):
        return "".join(render_node(child) for child in node)
    if isinstance(node, Element):
        attrs = _render_attrs(node.props)
        if node.tag in VOID_TAGS:
            return f"<{node.tag}{attrs} />"
        children_html = "".join(render_node(child) for child in node.children)
        return f"<{node.tag}{attrs}>{children_html}</{node.tag}>"
    return escape(str(node))


def text_content(node: Any) -> str:
    if node is None:
        return ""
    if isinstance(node, Raw):
        return node.markup
    if isinstance(node, str):
        return node
    if isinstance(node, Element):
        return "".join(text_content(child) for child in node.children)
    if isinstance(node, (list, tuple)):
        return "".join(text_content(child) for child in node)
    return str(node)


def walk(node: Any) -> Iterable[Element]:
    """Yield every element of a tree, depth first, in document order."""
    if isinstance(node, Element):
        yield node
        for child in node.children:
            yield from walk(child)
    elif isinstance(node, (list, tuple)):
        for item in node:
            yield from walk(item)


def merge_classes(*parts: Any) -> str:
    values: list[str] = []
    for part in parts:
        if not part:
            continue
        if isinstance(part, (list, tuple)):
            values.extend(str(p).strip() for p in part if p and str(p).strip())
            continue
        text = str(part).strip()
        if text:
            values.append(text)
    return " ".join(values)
