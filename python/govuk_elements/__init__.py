"""GOV.UK Elements form markup and accessible error summaries.

Form groups, labels, hints, inline errors and fieldsets are produced by
:class:`FormBuilder`; :func:`error_summary` walks an entity graph and links
every validation error to the input rendered for it.
"""
from .naming import AnchorPathError
from .model import ErrorDetail, Errors, Model, child_entities, error_messages, has_errors
from .i18n import TranslationCatalogError, TranslationWarning, Translator
from .config import Config
from .collector import ErrorCollector, ErrorEntry, errors_exist
from .ui.core import Element, Raw, el, render_node
from .ui.summary import error_summary, render_error_summary
from .ui.decorator import DecoratedField, FieldContext, FieldDecorator
from .ui.fieldset import FieldsetRenderer, FieldsetScope
from .ui.builder import FormBuilder
from .ui.accessibility import A11yValidationError, A11yWarning, ErrorLinkContract

__version__ = "0.1.0"

__all__ = [
    "A11yValidationError",
    "A11yWarning",
    "AnchorPathError",
    "Config",
    "DecoratedField",
    "Element",
    "ErrorCollector",
    "ErrorDetail",
    "ErrorEntry",
    "ErrorLinkContract",
    "Errors",
    "FieldContext",
    "FieldDecorator",
    "FieldsetRenderer",
    "FieldsetScope",
    "FormBuilder",
    "Model",
    "Raw",
    "TranslationCatalogError",
    "TranslationWarning",
    "Translator",
    "child_entities",
    "el",
    "error_messages",
    "error_summary",
    "errors_exist",
    "has_errors",
    "render_error_summary",
    "render_node",
]
