"""Human-readable console rendering of analysis results."""

from __future__ import annotations

from typing import List, Sequence

from ..config import DEFAULT_MAX_VALUE_LENGTH
from ..models import AnalysisResult, PropValue

_ELLIPSIS = "..."


def truncate(value: str, limit: int = DEFAULT_MAX_VALUE_LENGTH) -> str:
    if limit <= 0 or len(value) <= limit:
        return value
    return value[:limit] + _ELLIPSIS


def format_prop_value(value: PropValue, limit: int = DEFAULT_MAX_VALUE_LENGTH) -> str:
    if value is True:
        return "true"
    return f'"{truncate(str(value), limit)}"'


def format_result(result: AnalysisResult, *, max_value_length: int = DEFAULT_MAX_VALUE_LENGTH) -> str:
    lines: List[str] = [f"=== {result.file_path} ==="]
    lines.append(f"Script type: {result.script_type or 'none'}")
    lines.append(f"Style blocks: {result.style_count}")

    lines.append(f"Components ({len(result.components)}):")
    for component in result.components:
        lines.append(f"  - {component.name}")
        for key, value in component.props.items():
            lines.append(f"      {key} = {format_prop_value(value, max_value_length)}")

    for label, values in (
        ("Imports", result.imports),
        ("Defined props", result.defined_props),
        ("Data", result.data),
        ("Computed", result.computed),
        ("Methods", result.methods),
    ):
        lines.append(f"{label} ({len(values)}):")
        lines.extend(f"  - {value}" for value in values)
    return "\n".join(lines)


def format_report(
    results: Sequence[AnalysisResult],
    *,
    total: int | None = None,
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
) -> str:
    """Render every result followed by a one-line summary."""
    sections = [format_result(result, max_value_length=max_value_length) for result in results]
    analysed = total if total is not None else len(results)
    sections.append(f"Analyzed {len(results)} of {analysed} file(s).")
    return "\n\n".join(sections) + "\n"


__all__ = ["format_prop_value", "format_report", "format_result", "truncate"]
