"""Name normalization shared by anchors, field ids and translation keys.

The error summary links to ``#<anchor>`` and the form builder renders
``id="<anchor>"``; both sides build the string through the helpers here.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

_NAMESPACE_SEPARATORS = re.compile(r"::|[./\\]")
_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")
_SEPARATOR_RUN = re.compile(r"[\s\-]+")
_VALID_SEGMENT = re.compile(r"^[a-z][a-z0-9_]*$")


class AnchorPathError(ValueError):
    """A name could not be turned into an id fragment."""


def underscore(name: Any) -> str:
    """``"Steps::Appeal::Penalty"`` -> ``"steps/appeal/penalty"``."""
    text = _NAMESPACE_SEPARATORS.sub("/", str(name).strip())
    text = _ACRONYM_BOUNDARY.sub(r"\1_\2", text)
    text = _WORD_BOUNDARY.sub(r"\1_\2", text)
    text = _SEPARATOR_RUN.sub("_", text)
    return text.lower()


def humanize(name: Any) -> str:
    """Last dotted segment, underscores to spaces, first letter capitalized."""
    text = str(name).split(".")[-1]
    text = underscore(text).split("/")[-1]
    if text.endswith("_id") and len(text) > 3:
        text = text[:-3]
    text = text.replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def _model_name(entity_or_type: Any) -> str:
    cls = entity_or_type if isinstance(entity_or_type, type) else type(entity_or_type)
    return getattr(cls, "model_name", None) or cls.__name__


def model_i18n_key(entity_or_type: Any) -> str:
    """Dotted translation key, e.g. ``steps.appeal.penalty``."""
    return underscore(_model_name(entity_or_type)).replace("/", ".")


def model_param_key(entity_or_type: Any) -> str:
    """Flat key used for form object names and anchors, e.g. ``steps_appeal_penalty``."""
    return normalize_segment(underscore(_model_name(entity_or_type)).replace("/", "_"))


def normalize_segment(name: Any) -> str:
    text = underscore(name).replace("/", "_")
    text = re.sub(r"_+", "_", text).strip("_")
    if not _VALID_SEGMENT.match(text):
        raise AnchorPathError(f"Cannot build an id fragment from {name!r}")
    return text


def is_entity_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def nested_segment(field_name: str, value: Any) -> str:
    """Path segment contributed by a nested field.

    Sequence-valued fields use the element's model key; elements are not indexed.
    """
    if is_entity_sequence(value):
        for item in value:
            if item is not None:
                return f"{model_param_key(item)}_attributes"
    return f"{normalize_segment(field_name)}_attributes"


def attribute_prefix(object_name: str) -> str:
    """``"person[address_attributes]"`` -> ``"person_address_attributes"``."""
    text = str(object_name).replace("[", "_").replace("]", "_")
    text = re.sub(r"_+", "_", text).rstrip("_")
    if not text:
        raise AnchorPathError(f"Cannot build an id prefix from {object_name!r}")
    return text


def field_id(prefix: str, attribute: Any) -> str:
    return f"{prefix}_{normalize_segment(attribute)}"
