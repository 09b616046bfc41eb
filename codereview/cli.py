"""Command-line entry point for the code review scanner."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List

from .config import load_config
from .engine import run_analysis
from .errors import ConfigurationError
from .log import configure_logging, get_logger
from .render import format_summary_table, render_html, render_json
from .result import ReportModel
from .utils import iter_code_files

DEFAULT_SOURCE_DIRS = (".",)
DEFAULT_EXTENSIONS = (".py",)

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Static code review scanner reporting quality, security and maintainability issues",
    )
    parser.add_argument(
        "--source",
        "-s",
        dest="source_dirs",
        action="append",
        default=[],
        help="Directory containing source to review (repeatable).",
    )
    parser.add_argument(
        "--config",
        "-c",
        dest="config_path",
        default=None,
        help="YAML or JSON file overriding analyzer thresholds.",
    )
    parser.add_argument(
        "--format",
        choices=["json", "html"],
        default="json",
        help="Report format for file output (defaults to json).",
    )
    parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        type=str,
        default=None,
        help="Path to write the report (e.g., artifacts/review.html).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of files analyzed concurrently.",
    )
    parser.add_argument(
        "--extension",
        dest="extensions",
        action="append",
        default=[],
        help="File extension to review, including the dot (repeatable, defaults to .py).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Minimum level of diagnostic messages written to stderr.",
    )
    return parser


def discover_files(source_dirs: Iterable[str], extensions: Iterable[str]) -> List[Path]:
    roots = list(source_dirs)
    for root in roots:
        if not Path(root).is_dir():
            raise SystemExit(f"Invalid directory: {root}")
    return list(iter_code_files(roots, extensions=tuple(extensions)))


def write_output(report: ReportModel, output_path: str | None, report_format: str) -> None:
    summary = format_summary_table(report)
    print(summary)

    payload = render_html(report) if report_format == "html" else render_json(report)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload, encoding="utf-8")
        print(f"\nReport written to {output_path}")
    else:
        print(f"\n{report_format.upper()} Report")
        print(payload)


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        config = load_config(args.config_path)
    except ConfigurationError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    sources = args.source_dirs or list(DEFAULT_SOURCE_DIRS)
    files = discover_files(sources, args.extensions or DEFAULT_EXTENSIONS)
    if not files:
        print("No source files found.")
    logger.debug("Discovered {} files under {}", len(files), ", ".join(sources))

    report = run_analysis(files, config=config, workers=args.workers)
    write_output(report, args.output_path, args.format)
    return report.exit_code()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
