import json
from functools import reduce

from codereview.render import format_summary_table, render_html, render_json
from codereview.result import (
    DeclarationKind,
    FileAnalysisResult,
    Finding,
    Location,
    ReportModel,
    fold,
)
from codereview.severity import Category, Severity


def build_report():
    results = [
        FileAnalysisResult(
            file_id="pkg/<core>.py",
            declarations={
                DeclarationKind.CLASS: ("Engine",),
                DeclarationKind.METHOD: ("Start",),
                DeclarationKind.PROPERTY: (),
            },
            findings=(
                Finding(
                    rule="hardcoded_secret",
                    category=Category.SECURITY,
                    severity=Severity.CRITICAL,
                    message="Possible hardcoded secret in string literal 'a<password>'.",
                    location=Location("pkg/<core>.py", 4, None),
                ),
            ),
        ),
        FileAnalysisResult.empty("pkg/clean.py"),
        FileAnalysisResult.empty("pkg/broken.py", parse_failed=True),
    ]
    return reduce(fold, results, ReportModel.empty())


def test_summary_table_lists_totals_and_top_findings():
    table = format_summary_table(build_report())

    assert "Review Summary" in table
    assert "Files: 3  Classes: 1  Methods: 1  Properties: 0" in table
    assert "CRITICAL       |     1" in table
    assert "SECURITY       |     1" in table
    assert "Status    : FAIL" in table
    assert "Unparsable: 1" in table
    assert "Location: pkg/<core>.py:4" in table


def test_json_round_trips_to_report_dict():
    report = build_report()

    assert json.loads(render_json(report)) == report.to_dict()


def test_html_escapes_and_uses_placeholders():
    page = render_html(build_report())

    assert "<title>Code Review Report</title>" in page
    assert "<td>pkg/&lt;core&gt;.py</td><td>Engine</td><td>Start</td><td>None</td>" in page
    assert "[CRITICAL] Possible hardcoded secret in string literal &#x27;a&lt;password&gt;&#x27;." in page
    assert "<td>pkg/clean.py</td><td>None</td><td>None</td><td>None</td><td>No Issues Found</td>" in page
    assert "<td>Could not be parsed</td>" in page
