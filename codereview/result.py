"""Core result data structures for the review engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .severity import SEVERITY_ORDER, Category, Severity


@dataclass(frozen=True)
class Location:
    """Where a finding was detected; line and symbol are best-effort."""

    file_id: str
    line: Optional[int] = None
    symbol: Optional[str] = None

    def __str__(self) -> str:
        if self.line is None:
            return self.file_id
        return f"{self.file_id}:{self.line}"


@dataclass(frozen=True)
class Finding:
    """Capture a single rule evaluation result."""

    rule: str
    category: Category
    severity: Severity
    message: str
    location: Location
    recommendation: str = ""

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["category"] = self.category.value
        data["severity"] = self.severity.value
        return data


class DeclarationKind(str, Enum):
    CLASS = "CLASS"
    METHOD = "METHOD"
    PROPERTY = "PROPERTY"


def _no_declarations() -> Dict[DeclarationKind, Tuple[str, ...]]:
    return {kind: () for kind in DeclarationKind}


@dataclass(frozen=True)
class FileAnalysisResult:
    """Declarations and findings for one analyzed file."""

    file_id: str
    declarations: Mapping[DeclarationKind, Tuple[str, ...]] = field(default_factory=_no_declarations)
    findings: Tuple[Finding, ...] = ()
    parse_failed: bool = False

    def __post_init__(self) -> None:
        declarations = {kind: tuple(self.declarations.get(kind, ())) for kind in DeclarationKind}
        object.__setattr__(self, "declarations", MappingProxyType(declarations))
        object.__setattr__(self, "findings", tuple(self.findings))

    def __hash__(self) -> int:
        return hash((self.file_id, tuple(self.declarations.items()), self.findings, self.parse_failed))

    @classmethod
    def empty(cls, file_id: str, parse_failed: bool = False) -> "FileAnalysisResult":
        """Zero declarations and zero findings, used when parsing fails."""

        return cls(file_id=file_id, parse_failed=parse_failed)

    def names(self, kind: DeclarationKind) -> Tuple[str, ...]:
        return tuple(self.declarations.get(kind, ()))

    def count(self, kind: DeclarationKind) -> int:
        return len(self.names(kind))

    def to_dict(self) -> Dict[str, object]:
        return {
            "file": self.file_id,
            "classes": list(self.names(DeclarationKind.CLASS)),
            "methods": list(self.names(DeclarationKind.METHOD)),
            "properties": list(self.names(DeclarationKind.PROPERTY)),
            "findings": [finding.to_dict() for finding in self.findings],
            "parse_failed": self.parse_failed,
        }


@dataclass
class Summary:
    """Aggregate finding counts by severity."""

    critical: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    def increment(self, severity: Severity) -> None:
        attr = severity.value.lower()
        setattr(self, attr, getattr(self, attr) + 1)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def as_rows(self) -> List[Tuple[str, int]]:
        """Return severity/count pairs ordered for reporting."""

        return [(severity.value, getattr(self, severity.value.lower())) for severity in SEVERITY_ORDER]

    @property
    def total(self) -> int:
        return sum(getattr(self, severity.value.lower()) for severity in SEVERITY_ORDER)


def _empty_buckets() -> Dict[Category, Tuple[Finding, ...]]:
    return {category: () for category in Category}


@dataclass(frozen=True)
class ReportModel:
    """Aggregated, read-only view of a whole review run.

    ``per_file`` follows discovery order and every ``by_category`` bucket keeps
    first-seen order across files. Build one with :func:`fold`, :func:`merge`
    or :meth:`from_results`; the mappings are read-only proxies.
    """

    total_files: int = 0
    total_classes: int = 0
    total_methods: int = 0
    total_properties: int = 0
    total_findings: int = 0
    by_category: Mapping[Category, Tuple[Finding, ...]] = field(default_factory=_empty_buckets)
    per_file: Tuple[FileAnalysisResult, ...] = ()

    def __post_init__(self) -> None:
        buckets = {category: tuple(self.by_category.get(category, ())) for category in Category}
        object.__setattr__(self, "by_category", MappingProxyType(buckets))
        object.__setattr__(self, "per_file", tuple(self.per_file))

    def __hash__(self) -> int:
        return hash(
            (
                self.total_files,
                self.total_classes,
                self.total_methods,
                self.total_properties,
                self.total_findings,
                tuple(self.by_category.items()),
                self.per_file,
            )
        )

    @classmethod
    def empty(cls) -> "ReportModel":
        return cls()

    @classmethod
    def from_result(cls, result: FileAnalysisResult) -> "ReportModel":
        return cls.from_results((result,))

    @classmethod
    def from_results(cls, results: Iterable[FileAnalysisResult]) -> "ReportModel":
        """Aggregate results in one pass; equal to folding them in order."""

        per_file = tuple(results)
        buckets: Dict[Category, List[Finding]] = {category: [] for category in Category}
        for result in per_file:
            for finding in result.findings:
                buckets[finding.category].append(finding)
        return cls(
            total_files=len(per_file),
            total_classes=sum(result.count(DeclarationKind.CLASS) for result in per_file),
            total_methods=sum(result.count(DeclarationKind.METHOD) for result in per_file),
            total_properties=sum(result.count(DeclarationKind.PROPERTY) for result in per_file),
            total_findings=sum(len(result.findings) for result in per_file),
            by_category={category: tuple(items) for category, items in buckets.items()},
            per_file=per_file,
        )

    @property
    def findings(self) -> List[Finding]:
        """All findings in discovery order."""

        return [finding for result in self.per_file for finding in result.findings]

    @property
    def failed_files(self) -> List[str]:
        return [result.file_id for result in self.per_file if result.parse_failed]

    def severity_counts(self) -> Summary:
        summary = Summary()
        for finding in self.findings:
            summary.increment(finding.severity)
        return summary

    def category_counts(self) -> Dict[Category, int]:
        return {category: len(self.by_category.get(category, ())) for category in Category}

    @property
    def passed(self) -> bool:
        summary = self.severity_counts()
        return summary.critical == 0 and summary.high == 0 and summary.medium == 0

    def exit_code(self) -> int:
        summary = self.severity_counts()
        if summary.critical > 0 or summary.high > 0:
            return 2
        if summary.medium > 0:
            return 1
        return 0

    def top_findings(self, limit: int = 5) -> List[Finding]:
        """Return findings ordered by severity ranking, most severe first."""

        # sorted() is stable, so equal severities keep discovery order.
        ordered = sorted(self.findings, key=lambda finding: -finding.severity.rank)
        return ordered[:limit]

    def to_dict(self) -> Dict[str, object]:
        return {
            "totals": {
                "files": self.total_files,
                "classes": self.total_classes,
                "methods": self.total_methods,
                "properties": self.total_properties,
                "findings": self.total_findings,
            },
            "summary": self.severity_counts().to_dict(),
            "by_category": {
                category.value: [finding.to_dict() for finding in self.by_category.get(category, ())]
                for category in Category
            },
            "files": [result.to_dict() for result in self.per_file],
            "passed": self.passed,
        }


def merge(left: ReportModel, right: ReportModel) -> ReportModel:
    """Combine two partial reports; files of ``left`` come first."""

    return ReportModel(
        total_files=left.total_files + right.total_files,
        total_classes=left.total_classes + right.total_classes,
        total_methods=left.total_methods + right.total_methods,
        total_properties=left.total_properties + right.total_properties,
        total_findings=left.total_findings + right.total_findings,
        by_category={
            category: tuple(left.by_category.get(category, ())) + tuple(right.by_category.get(category, ()))
            for category in Category
        },
        per_file=left.per_file + right.per_file,
    )


def fold(current: ReportModel, result: FileAnalysisResult) -> ReportModel:
    """Fold one file's result into the running report."""

    return merge(current, ReportModel.from_result(result))
