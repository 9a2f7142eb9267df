"""Configuration loading for vue-analyzer (.vue-analyzer.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".vue-analyzer.yml"

REPORT_FORMATS = ("console", "json", "html")
REPORT_TEMPLATES = ("summary", "component")
DEFAULT_MAX_VALUE_LENGTH = 50


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ReportConfig:
    """Report rendering preferences."""

    format: str = "console"
    output: Optional[Path] = None
    template: str = "summary"
    templates_dir: Optional[Path] = None
    max_value_length: int = DEFAULT_MAX_VALUE_LENGTH


@dataclass
class AnalyzerConfig:
    """Represents the settings defined in .vue-analyzer.yml."""

    root: Path
    exclude_paths: List[str] = field(default_factory=list)
    max_workers: Optional[int] = None
    report: ReportConfig = field(default_factory=ReportConfig)


def load_config(config_path: Path) -> AnalyzerConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return AnalyzerConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    max_workers = _as_int(data.get("max_workers"))
    if max_workers is not None and max_workers < 1:
        raise ConfigError("max_workers must be a positive integer")

    report = ReportConfig()
    report_data = _as_dict(data.get("report"))
    if report_data:
        report_format = _as_str(report_data.get("format"))
        if report_format is not None:
            report.format = _choice(report_format, REPORT_FORMATS, "report.format")
        template = _as_str(report_data.get("template"))
        if template is not None:
            report.template = _choice(template, REPORT_TEMPLATES, "report.template")
        output = _as_str(report_data.get("output"))
        report.output = root / output if output else None
        templates_dir = _as_str(report_data.get("templates_dir"))
        report.templates_dir = root / templates_dir if templates_dir else None
        max_length = _as_int(report_data.get("max_value_length"))
        if max_length is not None:
            if max_length < 1:
                raise ConfigError("report.max_value_length must be a positive integer")
            report.max_value_length = max_length

    return AnalyzerConfig(
        root=root,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        max_workers=max_workers,
        report=report,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _choice(value: str, allowed: Sequence[str], key: str) -> str:
    lowered = value.lower()
    if lowered not in allowed:
        options = ", ".join(allowed)
        raise ConfigError(f"{key} must be one of: {options} (got {value!r})")
    return lowered


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "AnalyzerConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "REPORT_FORMATS",
    "REPORT_TEMPLATES",
    "ReportConfig",
    "load_config",
]
