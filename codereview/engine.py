"""Run detector rules over files and fold the results into a report."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .config import AnalyzerConfig
from .errors import ParseError
from .log import get_logger
from .parsing import load_view
from .result import DeclarationKind, FileAnalysisResult, ReportModel
from .rules import Rule
from .rules.documentation import MissingDocumentationRule
from .rules.naming import MethodNamingRule, VariableNamingRule
from .rules.performance import InefficientCollectionChainRule
from .rules.refactoring import RefactoringPriorityRule
from .rules.security import HardcodedSecretRule
from .rules.smells import DeepNestingRule, LongMethodRule, TooManyParametersRule, UnusedImportRule
from .syntax import NodeKind, SyntaxView

logger = get_logger(__name__)

ViewLoader = Callable[[Path], SyntaxView]

DECLARATION_NODES = {
    DeclarationKind.CLASS: NodeKind.CLASS,
    DeclarationKind.METHOD: NodeKind.METHOD,
    DeclarationKind.PROPERTY: NodeKind.PROPERTY,
}


def load_rules(config: Optional[AnalyzerConfig] = None) -> List[Rule]:
    """Return the configured rules in their fixed execution order."""

    config = config or AnalyzerConfig()
    return [
        HardcodedSecretRule(),
        InefficientCollectionChainRule(),
        LongMethodRule(config.long_method_statement_threshold),
        DeepNestingRule(config.max_nested_conditionals),
        TooManyParametersRule(config.max_parameter_count),
        UnusedImportRule(),
        MissingDocumentationRule(),
        MethodNamingRule(),
        VariableNamingRule(),
        RefactoringPriorityRule(config.refactoring_method_statement_threshold),
    ]


def analyze_view(view: SyntaxView, rules: Sequence[Rule]) -> FileAnalysisResult:
    findings = []
    for rule in rules:
        findings.extend(rule.scan(view))
    return FileAnalysisResult(
        file_id=view.file_id,
        declarations={kind: view.declarations(node_kind) for kind, node_kind in DECLARATION_NODES.items()},
        findings=tuple(findings),
    )


def analyze_file(path: Path, rules: Sequence[Rule], loader: ViewLoader = load_view) -> FileAnalysisResult:
    """Analyze one file; a parse failure yields an empty result instead of an error."""

    try:
        view = loader(path)
    except ParseError as exc:
        logger.warning("Skipping {}: {}", exc.file_id, exc.reason)
        return FileAnalysisResult.empty(str(path), parse_failed=True)
    result = analyze_view(view, rules)
    logger.debug("Analyzed {} ({} findings)", result.file_id, len(result.findings))
    return result


def run_analysis(
    paths: Iterable[Path],
    config: Optional[AnalyzerConfig] = None,
    rules: Optional[Sequence[Rule]] = None,
    workers: int = 1,
    loader: ViewLoader = load_view,
) -> ReportModel:
    """Analyze ``paths`` and fold their results in discovery order.

    Files may be analyzed on a thread pool when ``workers`` > 1; results are
    still folded in the order the paths were given.
    """

    config = (config or AnalyzerConfig()).validate()
    if rules is None:
        rules = load_rules(config)
    files = list(paths)

    if workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(lambda path: analyze_file(path, rules, loader), files))
    else:
        results = [analyze_file(path, rules, loader) for path in files]

    report = ReportModel.from_results(results)
    logger.info(
        "Reviewed {} files: {} findings ({} unparsable)",
        report.total_files,
        report.total_findings,
        len(report.failed_files),
    )
    return report
