from __future__ import annotations

import re
from html import unescape
from typing import Any

from .i18n import NULL_TRANSLATOR, Translator, interpolate
from .model import ErrorDetail, error_details
from .naming import humanize, model_i18n_key, model_param_key
from .ui.core import Raw

_TAG = re.compile(r"<[^>]*>")

DEFAULT_KIND_MESSAGES = {
    "blank": "can't be blank",
    "empty": "can't be empty",
    "invalid": "is invalid",
    "inclusion": "is not included in the list",
    "too_long": "is too long",
    "too_short": "is too short",
    "taken": "has already been taken",
    "confirmation": "doesn't match confirmation",
}


def default_label(attribute: Any) -> str:
    return humanize(attribute)


def translation_scope(entity: Any, object_name: str | None = None) -> str:
    if entity is not None:
        return model_param_key(entity)
    return str(object_name or "")


def localized(
    translator: Translator, scope: str, attribute: Any, default: Any, object_scope: str
) -> Any:
    key = f"{object_scope}.{attribute}" if object_scope else str(attribute)
    return translator.translate(key, default, scope)


def localized_label(translator: Translator, attribute: Any, object_scope: str) -> Any:
    return localized(translator, "helpers.label", attribute, default_label(attribute), object_scope)


def full_message(
    entity: Any,
    detail: ErrorDetail,
    translator: Translator | None = None,
    object_scope: str | None = None,
) -> str:
    """Text shown for one error, both inline and in the summary.

    A translation under ``activemodel.errors.models`` for the attribute's error
    kind replaces the engine's message. Otherwise the default label inside the
    engine's message is swapped for the localized one.
    """
    translator = translator or NULL_TRANSLATOR
    scope = object_scope if object_scope is not None else translation_scope(entity)
    label = plain_text(localized_label(translator, detail.attribute, scope))
    template = translator.lookup(
        f"activemodel.errors.models.{model_i18n_key(entity)}.attributes.{detail.attribute}.{detail.kind}"
    )
    if template is not None:
        return interpolate(template, attribute=label)

    if detail.message is not None:
        return detail.message.replace(default_label(detail.attribute), label, 1)

    kind_message = translator.lookup(f"errors.messages.{detail.kind}") or DEFAULT_KIND_MESSAGES.get(
        detail.kind, DEFAULT_KIND_MESSAGES["invalid"]
    )
    fmt = translator.lookup("errors.format") or "%{attribute} %{message}"
    return interpolate(fmt, attribute=label, message=interpolate(kind_message, attribute=label))


def full_messages_for(
    entity: Any,
    attribute: Any,
    translator: Translator | None = None,
    object_scope: str | None = None,
) -> list[str]:
    return [
        full_message(entity, detail, translator, object_scope)
        for detail in error_details(entity, attribute)
    ]


def plain_text(text: Any) -> str:
    """Labels from ``_html`` translations lose their markup inside messages."""
    if isinstance(text, Raw):
        return unescape(_TAG.sub("", text.markup))
    return str(text)
