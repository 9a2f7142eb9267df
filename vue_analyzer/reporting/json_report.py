"""JSON serialisation of analysis results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Sequence

from ..models import AnalysisResult, ComponentUsage


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    return {
        "filePath": result.file_path,
        "scriptType": result.script_type,
        "styleCount": result.style_count,
        "components": [
            {"name": component.name, "props": dict(component.props)}
            for component in result.components
        ],
        "imports": list(result.imports),
        "definedProps": list(result.defined_props),
        "data": list(result.data),
        "computed": list(result.computed),
        "methods": list(result.methods),
    }


def result_from_dict(payload: Dict[str, Any]) -> AnalysisResult:
    try:
        components = [
            ComponentUsage(name=str(item["name"]), props=dict(item.get("props") or {}))
            for item in payload.get("components") or []
        ]
        return AnalysisResult(
            file_path=str(payload["filePath"]),
            script_type=payload.get("scriptType"),
            style_count=int(payload.get("styleCount", 0)),
            components=components,
            imports=list(payload.get("imports") or []),
            defined_props=list(payload.get("definedProps") or []),
            data=list(payload.get("data") or []),
            computed=list(payload.get("computed") or []),
            methods=list(payload.get("methods") or []),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid analysis record: {exc}") from exc


def render_json(results: Sequence[AnalysisResult]) -> str:
    """Return the results as a pretty-printed JSON array."""
    return json.dumps([result_to_dict(result) for result in results], indent=2)


def write_json_report(results: Sequence[AnalysisResult], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_json(results) + "\n", encoding="utf-8")
    return path


def load_json_report(path: Path) -> List[AnalysisResult]:
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise ValueError(f"{path} does not contain a JSON array")
    return [result_from_dict(item) for item in payload]


__all__ = [
    "load_json_report",
    "render_json",
    "result_from_dict",
    "result_to_dict",
    "write_json_report",
]
