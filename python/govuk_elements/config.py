from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .i18n import Translator

CONFIG_FILENAME = "govuk_elements.toml"

# Default configuration structure
DEFAULT_CONFIG: Dict[str, Any] = {
    "classes": {
        "form_group": "form-group",
        "form_group_error": "form-group-error",
        "form_control": "form-control",
        "form_control_error": "form-control-error",
        "form_label": "form-label",
        "form_label_bold": "form-label-bold",
        "form_hint": "form-hint",
        "error_message": "error-message",
        "multiple_choice": "multiple-choice",
        "panel": "panel panel-border-narrow js-hidden",
        "inline": "inline",
    },
    "summary": {
        "class": "error-summary",
        "role": "alert",
        "heading_id": "error-summary-heading",
        "heading_class": "heading-medium error-summary-heading",
        "list_class": "error-summary-list",
    },
    "i18n": {
        "locale": "en",
        "default_locale": "en",
        "catalogs": [],  # TOML files, relative to the config file
    },
}


def _merge(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in extra.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


class Config:
    def __init__(self, data: Optional[Dict[str, Any]] = None, path: Optional[Path] = None):
        self.data = _merge(DEFAULT_CONFIG, data or {})
        self.path = path
        self.root = path.parent if path is not None else Path.cwd()

    @classmethod
    def default(cls) -> "Config":
        return cls()

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from govuk_elements.toml.

        Without an explicit path the current directory is searched; a missing
        file there means defaults.
        """
        if path is None:
            candidate = Path.cwd() / CONFIG_FILENAME
            if not candidate.exists():
                return cls()
            path = candidate
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Failed to parse {path}: {e}") from e

        return cls(data, path)

    @property
    def classes(self) -> Dict[str, str]:
        return self.data["classes"]

    @property
    def summary(self) -> Dict[str, str]:
        return self.data["summary"]

    @property
    def i18n(self) -> Dict[str, Any]:
        return self.data["i18n"]

    def css(self, name: str) -> str:
        return self.classes[name]

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    def get_catalog_paths(self) -> List[Path]:
        catalogs = self.i18n.get("catalogs", [])
        if isinstance(catalogs, str):
            catalogs = [catalogs]
        return [self.resolve_path(c) for c in catalogs]

    def translator(self, locale: Optional[str] = None) -> Translator:
        return Translator.load(
            self.get_catalog_paths(),
            locale=locale or self.i18n.get("locale", "en"),
            default_locale=self.i18n.get("default_locale", "en"),
        )
