"""HTML reports rendered from Jinja templates."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from ..config import DEFAULT_MAX_VALUE_LENGTH, REPORT_TEMPLATES
from ..models import AnalysisResult, PropValue
from .console import truncate
from .json_report import result_to_dict

_DEFAULT_TEMPLATES_DIR = Path(__file__).with_name("templates")


class ReportError(RuntimeError):
    """Raised when a report cannot be rendered or written."""


@dataclass
class ComponentRow:
    """One component usage with its file grouping removed."""

    file_path: str
    component_name: str
    props: Dict[str, PropValue] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filePath": self.file_path,
            "componentName": self.component_name,
            "props": dict(self.props),
        }


def flatten_components(results: Sequence[AnalysisResult]) -> List[ComponentRow]:
    """Return one row per component usage, in result then template order."""
    return [
        ComponentRow(file_path=result.file_path, component_name=component.name, props=component.props)
        for result in results
        for component in result.components
    ]


class HtmlReportRenderer:
    """Renders the ``summary`` or ``component`` HTML report."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        max_value_length: int = DEFAULT_MAX_VALUE_LENGTH,
    ) -> None:
        self.templates_dir = templates_dir
        self.max_value_length = max_value_length
        self._env = self._create_env(templates_dir)

    def render(self, results: Sequence[AnalysisResult], template: str = "summary") -> str:
        if template not in REPORT_TEMPLATES:
            options = ", ".join(REPORT_TEMPLATES)
            raise ReportError(f"Unknown report template {template!r}; expected one of: {options}")
        try:
            jinja_template = self._env.get_template(f"{template}.html.j2")
        except TemplateNotFound as exc:
            raise ReportError(f"Report template not found: {exc.name}") from exc

        if template == "component":
            rows = [row.to_dict() for row in flatten_components(results)]
            return jinja_template.render(rows=rows, file_count=len(results))
        return jinja_template.render(results=[result_to_dict(result) for result in results])

    def write(self, results: Sequence[AnalysisResult], path: Path, template: str = "summary") -> Path:
        content = self.render(results, template)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ReportError(f"Failed to write {path}: {exc}") from exc
        return path

    def _create_env(self, templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_DEFAULT_TEMPLATES_DIR))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        env.filters["truncate_value"] = self._truncate_value
        return env

    def _truncate_value(self, value: PropValue) -> str:
        if value is True:
            return "true"
        return truncate(str(value), self.max_value_length)


__all__ = ["ComponentRow", "HtmlReportRenderer", "ReportError", "flatten_components"]
