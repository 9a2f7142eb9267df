from __future__ import annotations

import json
from pathlib import Path

import pytest

from vue_analyzer.models import AnalysisResult, ComponentUsage
from vue_analyzer.reporting import (
    load_json_report,
    render_json,
    result_from_dict,
    result_to_dict,
    write_json_report,
)


def _result() -> AnalysisResult:
    return AnalysisResult(
        file_path="src/Page.vue",
        script_type="script",
        style_count=1,
        components=[ComponentUsage(name="Foo", props={":bar": "baz", "disabled": True})],
        imports=["vue"],
        defined_props=[],
        data=["count"],
        computed=["double"],
        methods=["increment"],
    )


def test_result_to_dict_uses_camel_case_keys() -> None:
    assert result_to_dict(_result()) == {
        "filePath": "src/Page.vue",
        "scriptType": "script",
        "styleCount": 1,
        "components": [{"name": "Foo", "props": {":bar": "baz", "disabled": True}}],
        "imports": ["vue"],
        "definedProps": [],
        "data": ["count"],
        "computed": ["double"],
        "methods": ["increment"],
    }


def test_render_json_is_a_pretty_printed_array() -> None:
    text = render_json([_result()])

    assert text.startswith("[\n  {\n")
    assert json.loads(text)[0]["components"][0]["props"]["disabled"] is True


def test_written_report_loads_back(tmp_path: Path) -> None:
    original = [_result(), AnalysisResult(file_path="Empty.vue", script_type=None, style_count=0)]
    path = write_json_report(original, tmp_path / "nested" / "report.json")

    assert path.read_text(encoding="utf-8").endswith("]\n")
    assert load_json_report(path) == original


def test_result_from_dict_rejects_incomplete_records() -> None:
    with pytest.raises(ValueError, match="Invalid analysis record"):
        result_from_dict({"scriptType": "script"})


def test_load_json_report_requires_an_array(tmp_path: Path) -> None:
    path = tmp_path / "report.json"
    path.write_text('{"filePath": "x"}', encoding="utf-8")

    with pytest.raises(ValueError, match="JSON array"):
        load_json_report(path)
