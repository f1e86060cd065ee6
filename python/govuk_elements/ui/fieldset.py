"""Fieldsets for radio and check box groups, with optional revealing panels."""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from .core import Element, el, fragment, merge_classes
from .decorator import FieldContext, FieldDecorator, merge_attributes

DEFAULT_CHOICES = ("yes", "no")

Content = Callable[["FieldsetScope"], Any]


def _send(obj: Any, name: str | None) -> Any:
    if name is None:
        return obj
    value = getattr(obj, name)
    return value() if callable(value) else value


class FieldsetScope:
    """Passed to caller-supplied fieldset content.

    Carries the attribute the enclosing fieldset renders, so row helpers do not
    need it repeated. A scope lives for one fieldset render call.
    """

    def __init__(self, renderer: "FieldsetRenderer", ctx: FieldContext, builder: Any = None) -> None:
        self.renderer = renderer
        self.ctx = ctx
        self.builder = builder

    @property
    def attribute(self) -> str:
        return self.ctx.attribute

    def radio_input(
        self,
        choice: Any,
        *,
        panel_id: str | None = None,
        panel: Any = None,
        **options: Any,
    ) -> list[Any]:
        if panel is not None and panel_id is None:
            panel_id = f"{self.attribute}_{choice}_panel"
        row = self.renderer.radio_inputs(self.ctx, [choice], data_target=panel_id, **options)[0]
        return fragment(row, self.revealing_panel(panel_id, panel) if panel is not None else None)

    def check_box_input(
        self,
        attribute: str,
        *,
        panel_id: str | None = None,
        panel: Any = None,
        **options: Any,
    ) -> list[Any]:
        if panel is not None and panel_id is None:
            panel_id = f"{attribute}_panel"
        row = self.renderer.check_box_inputs(self.ctx, [attribute], data_target=panel_id, **options)[0]
        return fragment(row, self.revealing_panel(panel_id, panel) if panel is not None else None)

    def revealing_panel(self, panel_id: str, content: Any) -> Element:
        return self.renderer.revealing_panel(panel_id, content, self.builder)


class FieldsetRenderer:
    def __init__(self, decorator: FieldDecorator) -> None:
        self.decorator = decorator

    def css(self, name: str) -> str:
        return self.decorator.css(name)

    def legend(
        self,
        ctx: FieldContext,
        attributes: Sequence[str],
        legend_options: Mapping[str, Any] | None = None,
    ) -> Element:
        legend_options = dict(legend_options or {})
        legend_text = legend_options.pop("text", None)
        props = merge_attributes(legend_options, {"class_name": [self.css("form_label_bold")]})
        props["class_name"] = merge_classes(props["class_name"])

        tags: list[Any] = [el("span", self.decorator.fieldset_text(ctx, ctx.attribute, legend_text), **props)]
        seen: set[str] = set()
        for attribute in [ctx.attribute, *attributes]:
            if attribute in seen:
                continue
            seen.add(attribute)
            tags.append(self.decorator.error(ctx.for_attribute(attribute)))
        tags.append(self.decorator.hint(ctx))
        return el("legend", tags)

    def _fieldset(
        self,
        ctx: FieldContext,
        attributes: Sequence[str],
        body: Any,
        *,
        inline: bool,
        legend_options: Mapping[str, Any] | None,
        fieldset_id: str | None,
    ) -> Element:
        erroring = [a for a in [ctx.attribute, *attributes] if ctx.for_attribute(a).has_error]
        wrapper_id = f"error_{ctx.for_attribute(erroring[0]).field_id}" if erroring else None
        return el(
            "div",
            el(
                "fieldset",
                self.legend(ctx, attributes, legend_options),
                body,
                class_name=self.css("inline") if inline else None,
                id=fieldset_id,
            ),
            class_name=self.decorator.wrapper_class(ctx, [ctx.attribute, *attributes]),
            id=wrapper_id,
        )

    def _body(self, ctx: FieldContext, content: Content | None, builder: Any, default: Callable[[], Any]) -> Any:
        if content is None:
            return default()
        return content(FieldsetScope(self, ctx, builder))

    def radio_button_fieldset(
        self,
        ctx: FieldContext,
        *,
        choices: Iterable[Any] | None = None,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
        value_method: str | None = None,
        text_method: str | None = None,
        content: Content | None = None,
        builder: Any = None,
    ) -> Element:
        body = self._body(
            ctx,
            content,
            builder,
            lambda: self.radio_inputs(ctx, choices, value_method=value_method, text_method=text_method),
        )
        return self._fieldset(
            ctx, [], body, inline=inline, legend_options=legend_options, fieldset_id=ctx.field_id
        )

    def check_box_fieldset(
        self,
        ctx: FieldContext,
        attributes: Sequence[str],
        *,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
        content: Content | None = None,
        builder: Any = None,
    ) -> Element:
        attributes = list(attributes)
        body = self._body(ctx, content, builder, lambda: self.check_box_inputs(ctx, attributes))
        # The legend key may double as one of the check boxes; keep input ids unique.
        fieldset_id = None if ctx.attribute in attributes else ctx.field_id
        return self._fieldset(
            ctx, attributes, body, inline=inline, legend_options=legend_options, fieldset_id=fieldset_id
        )

    def collection_radio_buttons(
        self,
        ctx: FieldContext,
        collection: Iterable[Any],
        value_method: str | None,
        text_method: str | None,
        *,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
    ) -> Element:
        return self.radio_button_fieldset(
            ctx,
            choices=list(collection),
            inline=inline,
            legend_options=legend_options,
            value_method=value_method,
            text_method=text_method,
        )

    def collection_check_boxes(
        self,
        ctx: FieldContext,
        collection: Iterable[Any],
        value_method: str | None,
        text_method: str | None,
        *,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
    ) -> Element:
        current = {str(v) for v in _selected_values(ctx.value())}
        described_by = ctx.error_id if ctx.has_error else None
        name = f"{ctx.input_name}[]"
        rows: list[Any] = [el("input", name=name, type="hidden", value="")]
        for item in collection:
            value = str(_send(item, value_method))
            input_id = self._choice_id(ctx, value)
            rows.append(
                el(
                    "div",
                    el(
                        "input",
                        aria_describedby=described_by,
                        type="checkbox",
                        value=value,
                        checked=value in current,
                        name=name,
                        id=input_id,
                    ),
                    el("label", str(_send(item, text_method)), html_for=input_id),
                    class_name=self.css("multiple_choice"),
                )
            )
        return self._fieldset(
            ctx, [], rows, inline=inline, legend_options=legend_options, fieldset_id=ctx.field_id
        )

    def _choice_id(self, ctx: FieldContext, value: Any) -> str:
        return f"{ctx.field_id}_{_sanitize(value)}"

    def _row(self, input_node: Any, label: Element, class_name: Any, data_target: str | None) -> Element:
        return el(
            "div",
            input_node,
            label,
            class_name=merge_classes(self.css("multiple_choice"), class_name),
            data_target=data_target,
        )

    def radio_inputs(
        self,
        ctx: FieldContext,
        choices: Iterable[Any] | None = None,
        *,
        value_method: str | None = None,
        text_method: str | None = None,
        class_name: Any = None,
        data_target: str | None = None,
    ) -> list[Element]:
        choices = list(choices) if choices is not None else list(DEFAULT_CHOICES)
        current = ctx.value()
        described_by = ctx.error_id if ctx.has_error else None
        rows: list[Element] = []
        for choice in choices:
            value = str(_send(choice, value_method))
            input_id = self._choice_id(ctx, value)
            if text_method is not None:
                text = _send(choice, text_method)
            else:
                text = self.decorator.label_text(ctx, f"{ctx.attribute}.{value}")
            rows.append(
                self._row(
                    el(
                        "input",
                        aria_describedby=described_by,
                        type="radio",
                        value=value,
                        checked=current is not None and str(current) == value,
                        name=ctx.input_name,
                        id=input_id,
                    ),
                    el("label", text, html_for=input_id),
                    class_name,
                    data_target,
                )
            )
        return rows

    def check_box_inputs(
        self,
        ctx: FieldContext,
        attributes: Iterable[str],
        *,
        class_name: Any = None,
        data_target: str | None = None,
    ) -> list[Element]:
        rows: list[Element] = []
        for attribute in attributes:
            box = ctx.for_attribute(attribute)
            rows.append(
                self._row(
                    fragment(
                        el("input", name=box.input_name, type="hidden", value="0"),
                        el(
                            "input",
                            aria_describedby=box.error_id if box.has_error else None,
                            type="checkbox",
                            value="1",
                            checked=_is_checked(box.value()),
                            name=box.input_name,
                            id=box.field_id,
                        ),
                    ),
                    el("label", self.decorator.label_text(box), html_for=box.field_id),
                    class_name,
                    data_target,
                )
            )
        return rows

    def revealing_panel(self, panel_id: str, content: Any, builder: Any = None) -> Element:
        if callable(content):
            content = content(builder)
        return el("div", content, class_name=self.css("panel"), id=panel_id)


def _sanitize(value: Any) -> str:
    text = "_".join(str(value).split())
    return "".join(ch for ch in text if ch.isalnum() or ch in "_-").lower()


def _selected_values(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def _is_checked(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)
