"""Tests for vue_analyzer.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from vue_analyzer.config import AnalyzerConfig, ConfigError, ReportConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, AnalyzerConfig)
    assert config.root == tmp_path.resolve()
    assert config.exclude_paths == []
    assert config.max_workers is None
    assert config.report == ReportConfig()
    assert config.report.max_value_length == 50


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".vue-analyzer.yml"
    config_file.write_text(
        """
exclude_paths:
  - "dist/"
  - "legacy/**"
max_workers: 4
report:
  format: HTML
  output: reports/vue.html
  template: component
  templates_dir: templates
  max_value_length: 80
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    root = tmp_path.resolve()
    assert config.exclude_paths == ["dist/", "legacy/**"]
    assert config.max_workers == 4
    assert config.report.format == "html"
    assert config.report.output == root / "reports/vue.html"
    assert config.report.template == "component"
    assert config.report.templates_dir == root / "templates"
    assert config.report.max_value_length == 80


def test_load_config_accepts_explicit_file(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("exclude_paths: build/\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.exclude_paths == ["build/"]
    assert config.root == tmp_path.resolve()


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".vue-analyzer.yml").write_text("\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.exclude_paths == []
    assert config.report.format == "console"


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("- just\n- a list\n", "mapping"),
        ("report: [unclosed\n", "Failed to parse"),
        ("max_workers: 0\n", "max_workers"),
        ("report:\n  format: pdf\n", "report.format"),
        ("report:\n  template: fancy\n", "report.template"),
        ("report:\n  max_value_length: 0\n", "report.max_value_length"),
        ("report:\n  max_value_length: -5\n", "report.max_value_length"),
    ],
)
def test_load_config_rejects_invalid_content(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".vue-analyzer.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
