"""Turn a finished report model into console, JSON or HTML output."""

from __future__ import annotations

import html
import json
from typing import List

from .result import DeclarationKind, FileAnalysisResult, ReportModel

HTML_HEAD = """<html>
<head>
    <title>Code Review Report</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; }
        h1 { text-align: center; }
        table { width: 100%; border-collapse: collapse; margin-top: 20px; }
        th { background-color: #add8e6; padding: 10px; border: 1px solid #ddd; }
        td { padding: 10px; border: 1px solid #ddd; text-align: left; vertical-align: top; }
        tr:nth-child(even) { background-color: #f9f9f9; }
    </style>
</head>
<body>
    <h1>Code Review Report</h1>"""


def format_summary_table(report: ReportModel, max_findings: int = 5) -> str:
    """Create a human-readable summary table for console output."""

    lines: List[str] = []
    lines.append("Review Summary")
    lines.append("=" * 40)
    lines.append(
        f"Files: {report.total_files}  Classes: {report.total_classes}  "
        f"Methods: {report.total_methods}  Properties: {report.total_properties}"
    )
    header = f"{'Severity':<14} | {'Count':>5}"
    lines.append(header)
    lines.append("-" * len(header))
    summary = report.severity_counts()
    for severity, count in summary.as_rows():
        lines.append(f"{severity:<14} | {count:>5}")
    lines.append("-" * len(header))
    for category, count in report.category_counts().items():
        lines.append(f"{category.value:<14} | {count:>5}")
    lines.append("-" * len(header))
    status = "PASS" if report.passed else "FAIL"
    lines.append(f"Status    : {status}")
    lines.append(f"Findings  : {report.total_findings}")
    if report.failed_files:
        lines.append(f"Unparsable: {len(report.failed_files)}")

    findings = report.top_findings(max_findings)
    if findings:
        lines.append("")
        lines.append("Top Findings")
        lines.append("-" * 40)
        for finding in findings:
            lines.append(f"[{finding.severity.value}] {finding.message} ({finding.rule})")
            lines.append(f"  Location: {finding.location}")
    return "\n".join(lines)


def render_json(report: ReportModel) -> str:
    return json.dumps(report.to_dict(), indent=2)


def render_html(report: ReportModel) -> str:
    """Render the per-file table of the classic HTML review report."""

    rows = [
        HTML_HEAD,
        "    <table>",
        "        <tr><th>File</th><th>Classes</th><th>Methods</th><th>Properties</th><th>Issues</th></tr>",
    ]
    for result in report.per_file:
        rows.append(_html_row(result))
    rows.append("    </table>")
    rows.append(
        f"    <p>{report.total_files} files, {report.total_findings} issues "
        f"({'PASS' if report.passed else 'FAIL'})</p>"
    )
    rows.append("</body>")
    rows.append("</html>")
    return "\n".join(rows)


def _html_row(result: FileAnalysisResult) -> str:
    def names(kind: DeclarationKind) -> str:
        found = result.names(kind)
        return html.escape(", ".join(found)) if found else "None"

    if result.findings:
        issues = "<br>".join(
            html.escape(f"[{finding.severity.value}] {finding.message}") for finding in result.findings
        )
    elif result.parse_failed:
        issues = "Could not be parsed"
    else:
        issues = "No Issues Found"
    cells = [
        html.escape(result.file_id),
        names(DeclarationKind.CLASS),
        names(DeclarationKind.METHOD),
        names(DeclarationKind.PROPERTY),
        issues,
    ]
    return "        <tr>" + "".join(f"<td>{cell}</td>" for cell in cells) + "</tr>"
