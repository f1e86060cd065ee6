from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .i18n import Translator
from .messages import full_messages_for
from .model import child_entities, error_attributes
from .naming import attribute_prefix, field_id, model_param_key, nested_segment


@dataclass(frozen=True)
class ErrorEntry:
    anchor_id: str
    message: str


class ErrorCollector:
    """Collects every error reachable from a root entity.

    Entries come out in attribute order for each entity, parents before
    children, children in ``nested_fields`` order. Each entity is visited once
    per call, so cyclic graphs terminate.
    """

    def __init__(self, translator: Translator | None = None) -> None:
        self.translator = translator

    def collect(self, entity: Any, object_name: str | None = None) -> list[ErrorEntry]:
        """Anchors start from ``object_name`` when given, as the form builder's ids do."""
        if entity is None:
            return []
        prefix = attribute_prefix(object_name) if object_name else model_param_key(entity)
        entries: list[ErrorEntry] = []
        self._collect(entity, prefix, set(), entries)
        return entries

    def _collect(self, entity: Any, prefix: str, visited: set[int], out: list[ErrorEntry]) -> None:
        if id(entity) in visited:
            return
        visited.add(id(entity))

        for attribute in error_attributes(entity):
            anchor = field_id(prefix, attribute)
            for message in full_messages_for(entity, attribute, self.translator):
                out.append(ErrorEntry(anchor, message))

        for name, value in child_entities(entity):
            child_prefix = f"{prefix}_{nested_segment(name, value)}"
            children = value if isinstance(value, list) else [value]
            for child in children:
                self._collect(child, child_prefix, visited, out)


def errors_exist(entity: Any, translator: Translator | None = None) -> bool:
    return bool(ErrorCollector(translator).collect(entity))
