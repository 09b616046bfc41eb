from functools import reduce

import pytest

from codereview.result import (
    DeclarationKind,
    FileAnalysisResult,
    Finding,
    Location,
    ReportModel,
    fold,
    merge,
)
from codereview.severity import Category, Severity


def finding(file_id, category, severity, line):
    return Finding(
        rule="test_rule",
        category=category,
        severity=severity,
        message=f"{category.value} at {line}",
        location=Location(file_id, line),
    )


def sample_results():
    return [
        FileAnalysisResult(
            file_id="a.py",
            declarations={
                DeclarationKind.CLASS: ("Alpha",),
                DeclarationKind.METHOD: ("Run", "Stop"),
                DeclarationKind.PROPERTY: (),
            },
            findings=(
                finding("a.py", Category.NAMING, Severity.LOW, 1),
                finding("a.py", Category.SECURITY, Severity.CRITICAL, 2),
            ),
        ),
        FileAnalysisResult.empty("broken.py", parse_failed=True),
        FileAnalysisResult(
            file_id="b.py",
            declarations={
                DeclarationKind.CLASS: (),
                DeclarationKind.METHOD: ("Go",),
                DeclarationKind.PROPERTY: ("Name", "Size"),
            },
            findings=(
                finding("b.py", Category.NAMING, Severity.LOW, 3),
                finding("b.py", Category.CODE_SMELL, Severity.MEDIUM, 4),
            ),
        ),
    ]


def test_fold_accumulates_totals_and_preserves_discovery_order():
    report = reduce(fold, sample_results(), ReportModel.empty())

    assert report.total_files == 3
    assert report.total_classes == 1
    assert report.total_methods == 3
    assert report.total_properties == 2
    assert report.total_findings == 4
    assert [result.file_id for result in report.per_file] == ["a.py", "broken.py", "b.py"]
    assert [item.location.line for item in report.by_category[Category.NAMING]] == [1, 3]
    assert report.failed_files == ["broken.py"]


def test_every_finding_lands_in_exactly_one_bucket():
    report = reduce(fold, sample_results(), ReportModel.empty())

    per_file_total = sum(len(result.findings) for result in report.per_file)
    bucket_total = sum(len(items) for items in report.by_category.values())
    assert report.total_findings == per_file_total == bucket_total
    assert report.total_files == len(report.per_file)
    assert list(report.by_category) == list(Category)


def test_balanced_merge_matches_sequential_fold():
    results = sample_results()
    sequential = reduce(fold, results, ReportModel.empty())

    left = ReportModel.from_result(results[0])
    right = merge(ReportModel.from_result(results[1]), ReportModel.from_result(results[2]))

    assert merge(left, right) == sequential
    assert merge(ReportModel.empty(), sequential) == sequential


def test_empty_report():
    report = ReportModel.empty()

    assert report.total_files == 0
    assert report.total_findings == 0
    assert report.passed
    assert report.exit_code() == 0
    assert report.to_dict()["files"] == []


def test_top_findings_rank_by_severity_then_discovery_order():
    report = reduce(fold, sample_results(), ReportModel.empty())

    ranked = report.top_findings(limit=3)

    assert [item.severity for item in ranked] == [Severity.CRITICAL, Severity.MEDIUM, Severity.LOW]
    assert ranked[2].location.line == 1


def test_severity_summary_and_exit_code():
    report = reduce(fold, sample_results(), ReportModel.empty())
    summary = report.severity_counts()

    assert summary.as_rows() == [("CRITICAL", 1), ("HIGH", 0), ("MEDIUM", 1), ("LOW", 2)]
    assert summary.total == 4
    assert not report.passed
    assert report.exit_code() == 2


def test_severity_is_totally_ordered():
    assert Severity.CRITICAL > Severity.HIGH > Severity.MEDIUM > Severity.LOW
    assert sorted([Severity.LOW, Severity.CRITICAL, Severity.MEDIUM]) == [
        Severity.LOW,
        Severity.MEDIUM,
        Severity.CRITICAL,
    ]


def test_to_dict_serializes_enums():
    report = reduce(fold, sample_results(), ReportModel.empty())
    data = report.to_dict()

    assert data["totals"]["files"] == 3
    assert data["summary"]["critical"] == 1
    assert data["by_category"]["SECURITY"][0]["severity"] == "CRITICAL"
    assert data["files"][1]["parse_failed"] is True
    assert data["files"][0]["findings"][0]["location"] == {"file_id": "a.py", "line": 1, "symbol": None}


def test_report_mappings_are_read_only():
    report = reduce(fold, sample_results(), ReportModel.empty())

    with pytest.raises(TypeError):
        report.by_category[Category.SECURITY] = ()
    with pytest.raises(TypeError):
        report.per_file[0].declarations[DeclarationKind.CLASS] = ("Injected",)
    with pytest.raises(TypeError):
        ReportModel.empty().by_category[Category.SECURITY] = ("x",)

    assert report.total_findings == sum(len(items) for items in report.by_category.values())


def test_equal_reports_hash_equal():
    first = reduce(fold, sample_results(), ReportModel.empty())
    second = reduce(fold, sample_results(), ReportModel.empty())

    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_one_pass_aggregation_matches_fold():
    results = sample_results() * 50

    folded = reduce(fold, results, ReportModel.empty())
    aggregated = ReportModel.from_results(results)

    assert aggregated == folded
    assert aggregated.total_files == 150
    assert ReportModel.from_results([]) == ReportModel.empty()
