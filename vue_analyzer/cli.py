"""CLI entrypoints for vue-analyzer commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REPORT_TEMPLATES, AnalyzerConfig, ConfigError, load_config
from .logging import configure_logging
from .orchestrator import Orchestrator
from .repo_scanner import VUE_SUFFIX
from .reporting import HtmlReportRenderer, ReportError, format_report, write_json_report


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vue-analyzer",
        description="Analyze Vue single-file components for component usage and bindings.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze Vue files or every .vue file under the given directories.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to analyze (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--json",
        dest="json_output",
        type=Path,
        help="Write the results as a JSON array to this file.",
    )
    analyze_parser.add_argument(
        "--html",
        dest="html_output",
        type=Path,
        help="Write an HTML report to this file.",
    )
    analyze_parser.add_argument(
        "--template",
        choices=REPORT_TEMPLATES,
        default=None,
        help="HTML report template: per-file summary or flattened component list.",
    )
    analyze_parser.add_argument(
        "--templates-dir",
        type=Path,
        default=None,
        help="Directory with custom summary.html.j2/component.html.j2 templates.",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .vue-analyzer.yml (defaults to the first target's directory).",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Maximum number of files analysed in parallel.",
    )
    analyze_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for vue-analyzer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=getattr(args, "log_file", None))

    if args.command == "analyze":
        _run_analyze(parser, args)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analyze(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    try:
        config = _load_config(args)
    except ConfigError as exc:
        parser.exit(1, f"vue-analyzer: {exc}\n")

    orchestrator = Orchestrator(config, max_workers=args.workers)
    files = orchestrator.discover(args.paths)
    if not files:
        targets = ", ".join(args.paths)
        parser.exit(1, f"No {VUE_SUFFIX} files found in {targets}\n")

    report = orchestrator.analyze(files)
    results = report.results

    json_output = args.json_output
    html_output = args.html_output
    if json_output is None and html_output is None and config.report.output is not None:
        if config.report.format == "json":
            json_output = config.report.output
        elif config.report.format == "html":
            html_output = config.report.output

    if json_output is None and html_output is None:
        sys.stdout.write(
            format_report(
                results,
                total=len(report.outcomes),
                max_value_length=config.report.max_value_length,
            )
        )
        return

    try:
        if json_output is not None:
            path = write_json_report(results, json_output)
            print(f"JSON report written to {_relativize(path)}")
        if html_output is not None:
            renderer = HtmlReportRenderer(
                args.templates_dir or config.report.templates_dir,
                max_value_length=config.report.max_value_length,
            )
            template = args.template or config.report.template
            path = renderer.write(results, html_output, template)
            print(f"HTML report written to {_relativize(path)}")
    except (OSError, ReportError) as exc:
        parser.exit(1, f"vue-analyzer: failed to write report: {exc}\n")

    if report.failures:
        print(f"{len(report.failures)} of {len(report.outcomes)} file(s) could not be analyzed.")


def _load_config(args: argparse.Namespace) -> AnalyzerConfig:
    if args.config is not None:
        return load_config(args.config)
    first = Path(args.paths[0]) if args.paths else Path(".")
    return load_config(first if first.is_dir() else first.parent)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
