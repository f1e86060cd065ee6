from __future__ import annotations

import warnings
from typing import Any

from .core import Element


class A11yValidationError(ValueError):
    def __init__(self, message: str, report: dict[str, Any]) -> None:
        super().__init__(message)
        self.report = report


class A11yWarning(UserWarning):
    pass


def _id_tokens(value: Any) -> list[str]:
    if value is None:
        return []
    return [tok for tok in str(value).split() if tok.strip()]


def _diagnostic(code: str, severity: str, message: str, path: str, **extra: Any) -> dict[str, Any]:
    out = {
        "code": code,
        "severity": severity,
        "message": message,
        "path": path,
    }
    out.update(extra)
    return out


def _walk_elements(nodes: tuple[Any, ...]) -> list[tuple[Element, str]]:
    found: list[tuple[Element, str]] = []

    def visit(node: Any, path: str) -> None:
        if isinstance(node, Element):
            found.append((node, path))
            idx = 0
            for child in node.children:
                if isinstance(child, Element):
                    idx += 1
                    visit(child, f"{path}/{child.tag}[{idx}]")
                elif isinstance(child, (list, tuple)):
                    visit(child, path)
        elif isinstance(node, (list, tuple)):
            for item in node:
                visit(item, path)

    for position, root in enumerate(nodes, start=1):
        if isinstance(root, Element):
            visit(root, f"/{position}/{root.tag}[1]")
        else:
            visit(root, f"/{position}/fragment")
    return found


class ErrorLinkContract:
    """Checks that error summary links and ARIA references resolve.

    Pass the summary and the rendered form groups together; every
    ``href="#..."`` in the summary must land on an element id.
    """

    def validate(self, *nodes: Any, mode: str | None = "warn") -> dict[str, Any]:
        normalized_mode = None if mode is None else str(mode).strip().lower()
        if normalized_mode not in {None, "", "warn", "raise"}:
            raise ValueError(f"Unsupported validation mode {mode!r}")
        if normalized_mode == "":
            normalized_mode = None

        diagnostics: list[dict[str, Any]] = []
        ids: dict[str, str] = {}
        references: list[tuple[str, str, str]] = []

        for node, path in _walk_elements(nodes):
            props = node.props
            node_id = props.get("id")
            if node_id is not None:
                text_id = str(node_id).strip()
                if text_id in ids:
                    diagnostics.append(
                        _diagnostic(
                            "ID_DUPLICATE",
                            "warning",
                            f"Duplicate id {text_id!r}.",
                            path,
                            id=text_id,
                            first_seen_path=ids[text_id],
                        )
                    )
                else:
                    ids[text_id] = path

            for attr_name in ("aria_labelledby", "aria_describedby"):
                for token in _id_tokens(props.get(attr_name)):
                    references.append((attr_name.replace("_", "-"), token, path))

            href = props.get("href")
            if node.tag == "a" and isinstance(href, str) and href.startswith("#") and len(href) > 1:
                references.append(("href", href[1:], path))

            target = props.get("data_target")
            if target:
                references.append(("data-target", str(target), path))

        codes = {"href": "SUMMARY_LINK_DEAD", "data-target": "PANEL_TARGET_MISSING"}
        for attr_name, target_id, path in references:
            if target_id not in ids:
                diagnostics.append(
                    _diagnostic(
                        codes.get(attr_name, "IDREF_MISSING"),
                        "error",
                        f"{attr_name} references missing id {target_id!r}.",
                        path,
                        attr=attr_name,
                        target_id=target_id,
                    )
                )

        errors = [d for d in diagnostics if d["severity"] == "error"]
        warnings_only = [d for d in diagnostics if d["severity"] != "error"]
        report = {
            "ok": not errors,
            "mode": normalized_mode,
            "error_count": len(errors),
            "warning_count": len(warnings_only),
            "errors": errors,
            "warnings": warnings_only,
            "diagnostics": diagnostics,
        }

        if normalized_mode == "warn":
            for diag in diagnostics:
                warnings.warn(
                    f"[{diag['severity']}] {diag['code']}: {diag['message']} ({diag['path']})",
                    A11yWarning,
                    stacklevel=2,
                )
        if normalized_mode == "raise" and errors:
            raise A11yValidationError("Error link validation failed", report)
        return report
