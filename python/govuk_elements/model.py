"""Object-model surface read by the renderers.

The validation engine fills an entity's :class:`Errors`; the renderers only
read it. Child entities are opted into with a ``nested_fields`` class attribute.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Iterator

from .naming import is_entity_sequence


@dataclass(frozen=True)
class ErrorDetail:
    attribute: str
    kind: str = "invalid"
    message: str | None = None


class Errors:
    """Ordered attribute -> error details collection."""

    def __init__(self) -> None:
        self._details: dict[str, list[ErrorDetail]] = {}

    def add(self, attribute: str, kind: str = "invalid", message: str | None = None) -> ErrorDetail:
        detail = ErrorDetail(str(attribute), kind, message)
        self._details.setdefault(detail.attribute, []).append(detail)
        return detail

    def details_for(self, attribute: Any) -> list[ErrorDetail]:
        return list(self._details.get(str(attribute), ()))

    def messages_for(self, attribute: Any) -> list[str]:
        return [d.message or d.kind for d in self.details_for(attribute)]

    def attributes(self) -> list[str]:
        return [name for name, details in self._details.items() if details]

    def clear(self) -> None:
        self._details.clear()

    def __contains__(self, attribute: object) -> bool:
        return bool(self._details.get(str(attribute)))

    def __iter__(self) -> Iterator[ErrorDetail]:
        for details in self._details.values():
            yield from details

    def __len__(self) -> int:
        return sum(len(details) for details in self._details.values())

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        kinds = {name: [d.kind for d in details] for name, details in self._details.items() if details}
        return f"Errors({kinds!r})"


class Model:
    """Convenience base for validatable entities.

    Subclasses override :meth:`validate` to add errors; ``nested_fields`` names
    the attributes holding child entities, in the order they are traversed.
    """

    nested_fields: ClassVar[tuple[str, ...]] = ()
    model_name: ClassVar[str | None] = None

    @property
    def errors(self) -> Errors:
        errors = self.__dict__.get("_errors")
        if errors is None:
            errors = Errors()
            self.__dict__["_errors"] = errors
        return errors

    def validate(self) -> None:
        pass

    def valid(self) -> bool:
        self.errors.clear()
        self.validate()
        return not self.errors


def is_validatable(value: Any) -> bool:
    return value is not None and hasattr(value, "errors")


def has_errors(entity: Any) -> bool:
    return is_validatable(entity) and bool(entity.errors)


def error_details(entity: Any, attribute: Any) -> list[ErrorDetail]:
    if not is_validatable(entity):
        return []
    return entity.errors.details_for(attribute)


def error_messages(entity: Any, attribute: Any) -> list[str]:
    return [d.message or d.kind for d in error_details(entity, attribute)]


def error_attributes(entity: Any) -> list[str]:
    if not has_errors(entity):
        return []
    return entity.errors.attributes()


def child_entities(entity: Any) -> Iterator[tuple[str, Any]]:
    """Yield ``(field_name, value)`` for declared nested fields holding entities."""
    for name in getattr(type(entity), "nested_fields", ()):
        value = getattr(entity, name, None)
        if is_entity_sequence(value):
            items = [item for item in value if is_validatable(item)]
            if items:
                yield name, items
        elif is_validatable(value):
            yield name, value
