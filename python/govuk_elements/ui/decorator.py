"""Per-field decoration: classes, label, hint, inline error and ARIA wiring."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from ..config import Config
from ..i18n import NULL_TRANSLATOR, Translator
from ..messages import default_label, full_messages_for, localized, translation_scope
from ..model import error_messages, has_errors
from ..naming import attribute_prefix, field_id
from .core import Element, el, merge_classes

INPUT_TYPES = {
    "text": "text",
    "email": "email",
    "password": "password",
    "number": "number",
    "phone": "tel",
    "telephone": "tel",
    "range": "range",
    "search": "search",
    "url": "url",
}
FIELD_KINDS = set(INPUT_TYPES) | {"text_area", "select"}


def merge_attributes(attributes: Mapping[str, Any] | None, default: Mapping[str, Any]) -> dict[str, Any]:
    """Combine ``default`` into ``attributes``; for shared keys defaults come first."""
    merged = dict(attributes or {})
    for key, value in default.items():
        if key in merged:
            merged[key] = _as_list(value) + _as_list(merged[key])
        else:
            merged[key] = value
    return merged


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


@dataclass
class FieldContext:
    object_name: str
    entity: Any
    attribute: str
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def translation_scope(self) -> str:
        return translation_scope(self.entity, self.object_name)

    @property
    def field_id(self) -> str:
        return field_id(attribute_prefix(self.object_name), self.attribute)

    @property
    def input_name(self) -> str:
        return f"{self.object_name}[{self.attribute}]"

    @property
    def has_error(self) -> bool:
        return has_errors(self.entity) and bool(error_messages(self.entity, self.attribute))

    @property
    def error_id(self) -> str:
        return f"error_message_{self.field_id}"

    def value(self) -> Any:
        if "value" in self.options:
            return self.options["value"]
        return getattr(self.entity, self.attribute, None) if self.entity is not None else None

    def for_attribute(self, attribute: str, **options: Any) -> "FieldContext":
        return FieldContext(self.object_name, self.entity, attribute, options)


@dataclass
class DecoratedField:
    wrapper_class: str
    wrapper_id: str | None
    input_class: str
    label: Element
    input: Element
    hint: Element | None = None
    error: Element | None = None
    error_anchor_id: str | None = None

    def to_element(self) -> Element:
        return el("div", self.label, self.input, class_name=self.wrapper_class, id=self.wrapper_id)


class FieldDecorator:
    def __init__(self, translator: Translator | None = None, config: Config | None = None) -> None:
        self.translator = translator or NULL_TRANSLATOR
        self.config = config or Config.default()

    def css(self, name: str) -> str:
        return self.config.css(name)

    # -- text lookups -----------------------------------------------------

    def localized(self, ctx: FieldContext, scope: str, attribute: Any, default: Any) -> Any:
        return localized(self.translator, scope, attribute, default, ctx.translation_scope)

    def label_text(self, ctx: FieldContext, attribute: Any = None, explicit: Any = None) -> Any:
        if explicit:
            return explicit
        attribute = ctx.attribute if attribute is None else attribute
        return self.localized(ctx, "helpers.label", attribute, default_label(attribute))

    def fieldset_text(self, ctx: FieldContext, attribute: Any, explicit: Any = None) -> Any:
        if explicit:
            return explicit
        text = self.localized(ctx, "helpers.fieldset", attribute, None)
        return text if text is not None else self.label_text(ctx, attribute)

    def hint_text(self, ctx: FieldContext, attribute: Any = None) -> Any:
        attribute = ctx.attribute if attribute is None else attribute
        return self.localized(ctx, "helpers.hint", attribute, None)

    def error_text(self, ctx: FieldContext) -> str | None:
        if not ctx.has_error:
            return None
        messages = full_messages_for(ctx.entity, ctx.attribute, self.translator, ctx.translation_scope)
        return messages[0] if messages else None

    # -- markup pieces ----------------------------------------------------

    def hint(self, ctx: FieldContext, attribute: Any = None) -> Element | None:
        text = self.hint_text(ctx, attribute)
        if text is None:
            return None
        return el("span", text, class_name=self.css("form_hint"))

    def error(self, ctx: FieldContext) -> Element | None:
        text = self.error_text(ctx)
        if text is None:
            return None
        return el("span", text, class_name=self.css("error_message"), id=ctx.error_id)

    def wrapper_class(self, ctx: FieldContext, attributes: Iterable[str] | None = None) -> str:
        attributes = [ctx.attribute] if attributes is None else list(attributes)
        erroring = any(ctx.for_attribute(a).has_error for a in attributes)
        return merge_classes(self.css("form_group"), self.css("form_group_error") if erroring else None)

    def wrapper_id(self, ctx: FieldContext) -> str | None:
        return f"error_{ctx.field_id}" if ctx.has_error else None

    def input_class(self, ctx: FieldContext, extra: Any = None) -> str:
        defaults = [self.css("form_control")]
        if ctx.has_error:
            defaults.append(self.css("form_control_error"))
        return merge_classes(merge_attributes({"class_name": extra}, {"class_name": defaults})["class_name"])

    def label(
        self,
        ctx: FieldContext,
        text: Any = None,
        label_options: Mapping[str, Any] | None = None,
        input_id: str | None = None,
    ) -> Element:
        props = merge_attributes(label_options, {"class_name": [self.css("form_label")]})
        props["class_name"] = merge_classes(props["class_name"])
        props.setdefault("html_for", input_id or ctx.field_id)
        return el("label", self.label_text(ctx, explicit=text), self.error(ctx), self.hint(ctx), **props)

    # -- inputs -----------------------------------------------------------

    def input_attributes(self, ctx: FieldContext, extra: dict[str, Any]) -> dict[str, Any]:
        """Pull ``aria_describedby``, ``name`` and ``id`` out of the caller's options.

        A caller ``aria_describedby`` is appended after the inline error id; a
        caller ``name`` or ``id`` replaces the generated one.
        """
        own_error = ctx.error_id if ctx.has_error else None
        described_by = merge_classes(own_error, extra.pop("aria_describedby", None))
        return {
            "aria_describedby": described_by or None,
            "name": extra.pop("name", None) or ctx.input_name,
            "id": extra.pop("id", None) or ctx.field_id,
        }

    def _input(
        self, ctx: FieldContext, kind: str, input_class: str, attrs: dict[str, Any], extra: dict[str, Any]
    ) -> Element:
        if kind == "text_area":
            return el(
                "textarea",
                _text_value(ctx.value()),
                aria_describedby=attrs["aria_describedby"],
                class_name=input_class,
                name=attrs["name"],
                id=attrs["id"],
                **extra,
            )
        if kind == "select":
            return self._select(ctx, input_class, attrs, extra)
        value = None if kind == "password" else ctx.value()
        return el(
            "input",
            aria_describedby=attrs["aria_describedby"],
            class_name=input_class,
            type=extra.pop("type", None) or INPUT_TYPES[kind],
            value=None if value is None else str(value),
            name=attrs["name"],
            id=attrs["id"],
            **extra,
        )

    def _select(
        self, ctx: FieldContext, input_class: str, attrs: dict[str, Any], extra: dict[str, Any]
    ) -> Element:
        choices = extra.pop("choices", ())
        include_blank = extra.pop("include_blank", False)
        selected = extra.pop("selected", ctx.value())
        options: list[Element] = []
        if include_blank:
            blank_text = include_blank if isinstance(include_blank, str) else ""
            options.append(el("option", blank_text, value=""))
        for value, text in choices:
            options.append(
                el("option", text, value=str(value), selected=selected is not None and str(value) == str(selected))
            )
        return el(
            "select",
            options,
            aria_describedby=attrs["aria_describedby"],
            class_name=input_class,
            name=attrs["name"],
            id=attrs["id"],
            **extra,
        )

    def decorate(self, ctx: FieldContext, kind: str = "text", **options: Any) -> DecoratedField:
        if kind not in FIELD_KINDS:
            raise ValueError(f"Unsupported field kind {kind!r}. Expected one of: {', '.join(sorted(FIELD_KINDS))}")
        ctx.options.update(options)
        extra = {k: v for k, v in ctx.options.items() if k not in {"label", "label_options", "class_name", "value"}}
        attrs = self.input_attributes(ctx, extra)

        input_class = self.input_class(ctx, ctx.options.get("class_name"))
        label = self.label(ctx, ctx.options.get("label"), ctx.options.get("label_options"), attrs["id"])
        return DecoratedField(
            wrapper_class=self.wrapper_class(ctx),
            wrapper_id=self.wrapper_id(ctx),
            input_class=input_class,
            label=label,
            input=self._input(ctx, kind, input_class, attrs, extra),
            hint=self.hint(ctx),
            error=self.error(ctx),
            error_anchor_id=ctx.field_id if ctx.has_error else None,
        )


def _text_value(value: Any) -> str:
    return "" if value is None else str(value)
