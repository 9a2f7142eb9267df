"""Per-file analysis and concurrent batch runs."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Optional, Sequence

from .analyzers.script import analyze_script
from .analyzers.template import find_components
from .config import AnalyzerConfig
from .logging import get_logger
from .models import (
    SCRIPT_CLASSIC,
    SCRIPT_SETUP,
    AnalysisResult,
    BatchReport,
    ComponentUsage,
    FileOutcome,
    ScriptAnalysis,
    ScriptType,
)
from .parsing.sfc import SfcDescriptor, SfcParseError, parse_sfc
from .parsing.template import compile_template
from .repo_scanner import RepoScanner

logger = get_logger("orchestrator")

_HTML_TEMPLATE_LANGS = {None, "html"}


def analyze_file(file_path: str | Path) -> FileOutcome:
    """Analyse one document, turning every failure into an error outcome."""
    path_str = str(file_path)
    try:
        content = Path(file_path).read_text(encoding="utf-8")
        descriptor = parse_sfc(content, filename=path_str)
        result = _build_result(path_str, descriptor)
    except SfcParseError as exc:
        message = "; ".join(exc.errors)
        logger.error("Error parsing %s: %s", path_str, message)
        return FileOutcome(file_path=path_str, error=message)
    except FileNotFoundError:
        message = f"File not found at {path_str}"
        logger.error("Error: %s", message)
        return FileOutcome(file_path=path_str, error=message)
    except Exception as exc:  # noqa: BLE001
        message = f"{type(exc).__name__}: {exc}"
        if logger.isEnabledFor(logging.DEBUG):
            logger.exception("An unexpected error occurred while analyzing %s", path_str)
        else:
            logger.error("An unexpected error occurred while analyzing %s: %s", path_str, message)
        return FileOutcome(file_path=path_str, error=message)
    logger.debug(
        "Analyzed %s: %d components, %d imports",
        path_str,
        len(result.components),
        len(result.imports),
    )
    return FileOutcome(file_path=path_str, result=result)


def analyze_vue_file(file_path: str | Path) -> Optional[AnalysisResult]:
    """Return the analysis of ``file_path``, or ``None`` when it cannot be analysed."""
    return analyze_file(file_path).result


def _build_result(file_path: str, descriptor: SfcDescriptor) -> AnalysisResult:
    script_type: ScriptType = None
    if descriptor.script_setup is not None:
        script_type = SCRIPT_SETUP
    elif descriptor.script is not None:
        script_type = SCRIPT_CLASSIC

    # A classic <script> wins over <script setup> when a document has both.
    block = descriptor.script if descriptor.script is not None else descriptor.script_setup
    script = ScriptAnalysis()
    if block is not None and block.content.strip():
        script = analyze_script(block.content, block.lang)

    components: List[ComponentUsage] = []
    template = descriptor.template
    if template is not None:
        if template.lang in _HTML_TEMPLATE_LANGS:
            find_components(compile_template(template.content), components)
        else:
            logger.warning(
                "Skipping <template lang=%r> in %s; only HTML templates are analysed",
                template.lang,
                file_path,
            )

    return AnalysisResult(
        file_path=file_path,
        script_type=script_type,
        style_count=len(descriptor.styles),
        components=components,
        imports=script.imports,
        defined_props=script.defined_props,
        data=script.data,
        computed=script.computed,
        methods=script.methods,
    )


class Orchestrator:
    """Discovers documents and analyses them concurrently."""

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        scanner: RepoScanner | None = None,
        max_workers: int | None = None,
    ) -> None:
        self.config = config
        exclude_paths = config.exclude_paths if config is not None else []
        self.scanner = scanner or RepoScanner(exclude_paths)
        if max_workers is None and config is not None:
            max_workers = config.max_workers
        self.max_workers = max_workers
        self.logger = logger

    def discover(self, targets: Sequence[str | Path]) -> List[Path]:
        files = self.scanner.scan(targets)
        self.logger.debug("Discovered %d files", len(files))
        return files

    def analyze(self, files: Sequence[str | Path]) -> BatchReport:
        """Analyse every file at once and wait for all of them.

        Outcomes keep the order of ``files``; a failed file yields an error
        outcome and never affects the others.
        """
        if not files:
            return BatchReport()
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="vue-analyzer"
        ) as executor:
            futures = [executor.submit(analyze_file, path) for path in files]
            outcomes = [future.result() for future in futures]
        report = BatchReport(outcomes=outcomes)
        self.logger.info(
            "Analyzed %d of %d files successfully", len(report.results), len(outcomes)
        )
        return report

    def run(self, targets: Sequence[str | Path]) -> BatchReport:
        return self.analyze(self.discover(targets))


__all__ = ["Orchestrator", "analyze_file", "analyze_vue_file"]
