from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Sequence

from ..config import Config
from ..i18n import NULL_TRANSLATOR, Translator
from ..naming import is_entity_sequence, model_param_key, nested_segment
from .core import Element
from .decorator import FieldContext, FieldDecorator
from .fieldset import Content, FieldsetRenderer, _send


class FormBuilder:
    """Renders GOV.UK Elements form groups for one object.

    ``object_name`` drives input names (``person[name]``) and ids
    (``person_name``); nested builders from :meth:`fields_for` extend it the same
    way the error summary extends its anchors.
    """

    def __init__(
        self,
        object_name: str | None = None,
        entity: Any = None,
        *,
        translator: Translator | None = None,
        config: Config | None = None,
    ) -> None:
        if object_name is None:
            if entity is None:
                raise ValueError("FormBuilder needs an object_name or an entity")
            object_name = model_param_key(entity)
        self.object_name = object_name
        self.entity = entity
        self.translator = translator or NULL_TRANSLATOR
        self.config = config or Config.default()
        self.decorator = FieldDecorator(self.translator, self.config)
        self.fieldsets = FieldsetRenderer(self.decorator)

    def context(self, attribute: str, **options: Any) -> FieldContext:
        return FieldContext(self.object_name, self.entity, attribute, options)

    def fields_for(self, name: str, record: Any = None) -> "FormBuilder | list[FormBuilder]":
        if record is None:
            record = getattr(self.entity, name, None)
        object_name = f"{self.object_name}[{nested_segment(name, record)}]"
        if is_entity_sequence(record):
            return [self._nested(object_name, item) for item in record]
        return self._nested(object_name, record)

    def _nested(self, object_name: str, record: Any) -> "FormBuilder":
        return FormBuilder(object_name, record, translator=self.translator, config=self.config)

    # -- single inputs ----------------------------------------------------

    def field(self, kind: str, attribute: str, **options: Any) -> Element:
        return self.decorator.decorate(self.context(attribute), kind, **options).to_element()

    def text_field(self, attribute: str, **options: Any) -> Element:
        return self.field("text", attribute, **options)

    def email_field(self, attribute: str, **options: Any) -> Element:
        return self.field("email", attribute, **options)

    def password_field(self, attribute: str, **options: Any) -> Element:
        return self.field("password", attribute, **options)

    def number_field(self, attribute: str, **options: Any) -> Element:
        return self.field("number", attribute, **options)

    def phone_field(self, attribute: str, **options: Any) -> Element:
        return self.field("phone", attribute, **options)

    def telephone_field(self, attribute: str, **options: Any) -> Element:
        return self.field("telephone", attribute, **options)

    def range_field(self, attribute: str, **options: Any) -> Element:
        return self.field("range", attribute, **options)

    def search_field(self, attribute: str, **options: Any) -> Element:
        return self.field("search", attribute, **options)

    def url_field(self, attribute: str, **options: Any) -> Element:
        return self.field("url", attribute, **options)

    def text_area(self, attribute: str, **options: Any) -> Element:
        return self.field("text_area", attribute, **options)

    def collection_select(
        self,
        attribute: str,
        collection: Iterable[Any],
        value_method: str | None,
        text_method: str | None,
        **options: Any,
    ) -> Element:
        choices = [(_send(item, value_method), _send(item, text_method)) for item in collection]
        return self.field("select", attribute, choices=choices, **options)

    # -- fieldsets --------------------------------------------------------

    def radio_button_fieldset(
        self,
        attribute: str,
        *,
        choices: Iterable[Any] | None = None,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
        value_method: str | None = None,
        text_method: str | None = None,
        content: Content | None = None,
    ) -> Element:
        return self.fieldsets.radio_button_fieldset(
            self.context(attribute),
            choices=choices,
            inline=inline,
            legend_options=legend_options,
            value_method=value_method,
            text_method=text_method,
            content=content,
            builder=self,
        )

    def check_box_fieldset(
        self,
        legend_key: str,
        attributes: Sequence[str],
        *,
        inline: bool = False,
        legend_options: Mapping[str, Any] | None = None,
        content: Content | None = None,
    ) -> Element:
        return self.fieldsets.check_box_fieldset(
            self.context(legend_key),
            attributes,
            inline=inline,
            legend_options=legend_options,
            content=content,
            builder=self,
        )

    def collection_radio_buttons(
        self,
        attribute: str,
        collection: Iterable[Any],
        value_method: str | None,
        text_method: str | None,
        **options: Any,
    ) -> Element:
        return self.fieldsets.collection_radio_buttons(
            self.context(attribute), collection, value_method, text_method, **options
        )

    def collection_check_boxes(
        self,
        attribute: str,
        collection: Iterable[Any],
        value_method: str | None,
        text_method: str | None,
        **options: Any,
    ) -> Element:
        return self.fieldsets.collection_check_boxes(
            self.context(attribute), collection, value_method, text_method, **options
        )

    def revealing_panel(self, panel_id: str, content: Any | Callable[["FormBuilder"], Any]) -> Element:
        return self.fieldsets.revealing_panel(panel_id, content, self)
