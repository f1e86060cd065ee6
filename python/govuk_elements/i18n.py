"""Translation lookup over layered TOML catalogs.

Catalog files keep the locale as the top-level table::

    [en.helpers.label.person]
    name = "Full name"

Lookups try the requested locale first, then the default locale.
"""
from __future__ import annotations

import copy
import re
import warnings
from collections import ChainMap
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Iterable

try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .ui.core import Raw

_PLACEHOLDER = re.compile(r"%\{(\w+)\}")


class TranslationCatalogError(ValueError):
    pass


class TranslationWarning(UserWarning):
    """Catalog entries that were skipped while loading."""


def _flatten(table: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    out: dict[str, str] = {}
    for raw_key, value in table.items():
        key = f"{prefix}.{raw_key}" if prefix else str(raw_key)
        if isinstance(value, Mapping):
            out.update(_flatten(value, key))
        elif isinstance(value, str):
            out[key] = value
        else:
            warnings.warn(
                f"Skipping non-string translation {key!r} ({type(value).__name__})",
                TranslationWarning,
                stacklevel=3,
            )
    return out


def interpolate(template: str, **values: Any) -> str:
    """Replace ``%{name}`` placeholders; unknown names are left in place."""

    def sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in values:
            return str(values[name])
        return match.group(0)

    return _PLACEHOLDER.sub(sub, template)


def _present(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


class Translator:
    def __init__(
        self,
        catalogs: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        locale: str = "en",
        default_locale: str = "en",
    ) -> None:
        self._catalogs: dict[str, dict[str, str]] = {}
        for lang, table in (catalogs or {}).items():
            self._catalogs.setdefault(str(lang), {}).update(_flatten(table))
        self._use_locale(locale, default_locale)

    def _use_locale(self, locale: str, default_locale: str) -> None:
        self.locale = locale
        self.default_locale = default_locale
        chain = [self._catalogs.get(locale, {})]
        if default_locale != locale:
            chain.append(self._catalogs.get(default_locale, {}))
        self._view: ChainMap[str, str] = ChainMap(*chain)

    @classmethod
    def load(cls, paths: Iterable[str | Path], **kwargs: Any) -> "Translator":
        merged: dict[str, dict[str, Any]] = {}
        for path in paths:
            p = Path(path)
            try:
                with open(p, "rb") as f:
                    data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise TranslationCatalogError(f"Failed to parse {p}: {e}") from e
            for lang, table in data.items():
                if not isinstance(table, Mapping):
                    raise TranslationCatalogError(
                        f"{p}: top-level key {lang!r} must be a locale table"
                    )
                merged.setdefault(lang, {})
                merged[lang] = _deep_merge(merged[lang], table)
        return cls(merged, **kwargs)

    def with_locale(self, locale: str) -> "Translator":
        clone = copy.copy(self)
        clone._use_locale(locale, self.default_locale)
        return clone

    def lookup(self, key: str) -> str | None:
        for layer in self._view.maps:
            value = _present(layer.get(key))
            if value is not None:
                return value
        return None

    def translate(self, key: str, default: Any = None, scope: str | None = None) -> Any:
        """Resolve ``scope.key`` one locale at a time.

        Within a locale an ``_html`` variant wins and comes back as :class:`Raw`.
        """
        full_key = f"{scope}.{key}" if scope else key
        for layer in self._view.maps:
            raw = _present(layer.get(f"{full_key}_html"))
            if raw is not None:
                return Raw(raw)
            plain = _present(layer.get(full_key))
            if plain is not None:
                return plain
        return default

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.lookup(key) is not None


def _deep_merge(base: Mapping[str, Any], extra: Mapping[str, Any]) -> dict[str, Any]:
    out = dict(base)
    for key, value in extra.items():
        if isinstance(value, Mapping) and isinstance(out.get(key), Mapping):
            out[key] = _deep_merge(out[key], value)
        else:
            out[key] = value
    return out


NULL_TRANSLATOR = Translator()
