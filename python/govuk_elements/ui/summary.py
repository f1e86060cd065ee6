from __future__ import annotations

from typing import Any

from ..collector import ErrorCollector, ErrorEntry
from ..config import Config
from ..i18n import Translator
from .core import Element, el, render_node


def _summary_messages(entries: list[ErrorEntry], config: Config) -> Element:
    return el(
        "ul",
        [el("li", el("a", entry.message, href=f"#{entry.anchor_id}")) for entry in entries],
        class_name=config.summary["list_class"],
    )


def error_summary(
    entity: Any,
    heading: Any,
    description: Any = None,
    *,
    translator: Translator | None = None,
    config: Config | None = None,
    object_name: str | None = None,
) -> Element | None:
    """Error summary for ``entity`` and everything nested under it.

    Returns ``None`` when nothing in the graph has errors; callers render
    nothing in that case. Pass the ``object_name`` given to :class:`FormBuilder`
    when it differs from the entity's model key so the links match the ids.
    """
    entries = ErrorCollector(translator).collect(entity, object_name)
    if not entries:
        return None
    config = config or Config.default()
    summary = config.summary
    return el(
        "div",
        el("h1", heading, id=summary["heading_id"], class_name=summary["heading_class"]),
        el("p", description) if description else None,
        _summary_messages(entries, config),
        class_name=summary["class"],
        role=summary["role"],
        aria_labelledby=summary["heading_id"],
        tabindex="-1",
    )


def render_error_summary(
    entity: Any,
    heading: Any,
    description: Any = None,
    *,
    translator: Translator | None = None,
    config: Config | None = None,
    object_name: str | None = None,
) -> str | None:
    node = error_summary(entity, heading, description, translator=translator, config=config, object_name=object_name)
    return None if node is None else render_node(node)
