"""Aggregation of page results into a single accessibility report.

Two views of the same data are produced here. The issue list is
deduplicated by rule id, so a defect repeated on every page is one issue
with an accurate instance and URL count. The summary counts raw node-level
violations across all pages, so it reflects the total severity load.
"""

import time
import uuid
from typing import Dict, Iterable, List, Sequence, Tuple

from ..logging import get_logger
from ..models.pages import PageResult, Violation, utc_timestamp
from ..models.reports import (
    AccessibilityReport,
    AuditStatus,
    AuditSummary,
    ManualCheckItem,
    NormalizedIssue,
    ScorecardStatus,
    Section508ScorecardEntry,
    WcagScorecardEntry,
)
from ..models.scans import ScanBatch
from ..standards import (
    SECTION_508_PROVISIONS,
    WCAG_CRITERIA,
    get_section508_for_rule,
    get_wcag_aa_criteria,
    get_wcag_for_rule,
)

logger = get_logger(__name__)

_MANUAL_CHECKS: Tuple[ManualCheckItem, ...] = (
    ManualCheckItem(
        category='Keyboard',
        check='Keyboard Navigation',
        description='All interactive elements can be reached and operated using keyboard only.',
        wcag_criteria=['2.1.1', '2.1.2'],
    ),
    ManualCheckItem(
        category='Keyboard',
        check='Focus Visibility',
        description='Focus indicator is clearly visible on all interactive elements.',
        wcag_criteria=['2.4.7'],
    ),
    ManualCheckItem(
        category='Keyboard',
        check='Focus Order',
        description='Tab order follows a logical sequence matching visual layout.',
        wcag_criteria=['2.4.3'],
    ),
    ManualCheckItem(
        category='Screen Reader',
        check='Screen Reader Compatibility',
        description='Content is announced correctly and in logical order by screen readers.',
        wcag_criteria=['1.3.1', '1.3.2', '4.1.2'],
    ),
    ManualCheckItem(
        category='Screen Reader',
        check='Form Instructions',
        description='Form fields have clear labels and error messages are announced.',
        wcag_criteria=['3.3.1', '3.3.2'],
    ),
    ManualCheckItem(
        category='Visual',
        check='Zoom/Reflow',
        description='Content remains usable when zoomed to 200% without horizontal scrolling.',
        wcag_criteria=['1.4.4', '1.4.10'],
    ),
    ManualCheckItem(
        category='Visual',
        check='Text Spacing',
        description='Content adapts to increased text spacing without loss of functionality.',
        wcag_criteria=['1.4.12'],
    ),
    ManualCheckItem(
        category='Cognitive',
        check='Error Prevention',
        description='Users can review and correct submissions before final submission.',
        wcag_criteria=['3.3.4'],
    ),
)


def collect_violations(results: Iterable[PageResult]) -> List[Tuple[Violation, str]]:
    """Flatten page results into (violation, source URL) pairs in scan order."""
    return [(violation, result.url) for result in results for violation in result.violations]


def deduplicate_violations(violations: Iterable[Tuple[Violation, str]]) -> List[NormalizedIssue]:
    """Collapse violations sharing a rule id into one NormalizedIssue each.

    The first violation seen for a rule supplies its impact and texts. The
    result is ordered by severity; equal severities keep discovery order.
    """
    issues: Dict[str, NormalizedIssue] = {}

    for violation, url in violations:
        fingerprint = violation.id
        issue = issues.get(fingerprint)

        if issue is None:
            issue = NormalizedIssue(
                rule_id=violation.id,
                impact=violation.impact,
                description=violation.description,
                help=violation.help,
                help_url=violation.help_url,
                wcag_criteria=get_wcag_for_rule(violation.id),
                section508_refs=get_section508_for_rule(violation.id),
                fingerprint=fingerprint,
            )
            issues[fingerprint] = issue

        issue.add_occurrence(url, violation.nodes)

    # sorted() is stable, so discovery order survives within a severity
    return sorted(issues.values(), key=lambda issue: issue.severity_rank)


def calculate_summary(results: Iterable[PageResult]) -> AuditSummary:
    """Calculate raw severity counts and rule totals across all pages."""
    summary = AuditSummary()

    for result in results:
        for violation in result.violations:
            current = getattr(summary, violation.impact)
            setattr(summary, violation.impact, current + violation.node_count)
        summary.total_passes += len(result.passes)
        summary.total_incomplete += len(result.incomplete)
        summary.total_inapplicable += len(result.inapplicable)

    summary.total_violations = summary.critical + summary.serious + summary.moderate + summary.minor
    return summary


def determine_status(summary: AuditSummary) -> AuditStatus:
    """Determine overall audit status based on violation severity."""
    if summary.critical > 0 or summary.serious > 0:
        return 'Fail'
    if summary.moderate > 0 or summary.minor > 0:
        return 'Conditional Pass'
    return 'Pass'


def scorecard_status(passed: int, failed: int) -> ScorecardStatus:
    if failed > 0 and passed == 0:
        return 'fail'
    if failed > 0 and passed > 0:
        return 'partial'
    return 'pass'


def _tally(
    results: Iterable[PageResult],
    keys: Iterable[str],
    refs_for_rule,
) -> Dict[str, List[int]]:
    """Count passes (+1 per rule) and failures (+nodes per violation) per key.

    References outside ``keys`` are ignored.
    """
    stats: Dict[str, List[int]] = {key: [0, 0] for key in keys}

    for result in results:
        for rule in result.passes:
            for ref in refs_for_rule(rule.id):
                if ref in stats:
                    stats[ref][0] += 1
        for violation in result.violations:
            for ref in refs_for_rule(violation.id):
                if ref in stats:
                    stats[ref][1] += violation.node_count

    return stats


def build_wcag_scorecard(results: Sequence[PageResult]) -> List[WcagScorecardEntry]:
    """Build the WCAG 2.x A/AA scorecard, ordered by criterion number."""
    stats = _tally(
        results,
        (criterion.id for criterion in get_wcag_aa_criteria()),
        lambda rule_id: [criterion.id for criterion in get_wcag_for_rule(rule_id)],
    )

    scorecard = [
        WcagScorecardEntry(
            criterion=WCAG_CRITERIA[criterion_id],
            passed=passed,
            failed=failed,
            status=scorecard_status(passed, failed),
        )
        for criterion_id, (passed, failed) in stats.items()
    ]

    return sorted(scorecard, key=lambda entry: entry.criterion.sort_key)


def build_section508_scorecard(results: Sequence[PageResult]) -> List[Section508ScorecardEntry]:
    """Build the Section 508 scorecard in provision table order."""
    stats = _tally(results, SECTION_508_PROVISIONS.keys(), get_section508_for_rule)

    return [
        Section508ScorecardEntry(
            provision=provision,
            description=SECTION_508_PROVISIONS[provision],
            passed=passed,
            failed=failed,
            status=scorecard_status(passed, failed),
        )
        for provision, (passed, failed) in stats.items()
    ]


def get_default_manual_checks() -> List[ManualCheckItem]:
    """Get the manual verification checklist included in every report."""
    return list(_MANUAL_CHECKS)


def new_audit_id() -> str:
    return str(uuid.uuid4())


def build_report(
    audit_id: str,
    urls: Sequence[str],
    batch: ScanBatch,
    started_at: float,
) -> AccessibilityReport:
    """Build the complete accessibility report from scan outcomes.

    ``started_at`` is a ``time.monotonic()`` reading taken when the audit began.
    """
    results = batch.results

    issues = deduplicate_violations(collect_violations(results))
    summary = calculate_summary(results)
    overall_status = determine_status(summary)

    report = AccessibilityReport(
        audit_id=audit_id,
        timestamp=utc_timestamp(),
        duration=int((time.monotonic() - started_at) * 1000),
        urls=list(urls),
        successful_scans=batch.successful_scans,
        failed_scans=batch.failed_scans,
        overall_status=overall_status,
        summary=summary,
        wcag_scorecard=build_wcag_scorecard(results),
        section508_scorecard=build_section508_scorecard(results),
        issues=issues,
        raw_results=results,
        manual_checks=get_default_manual_checks(),
    )

    logger.info(
        "Report built",
        audit_id=audit_id,
        overall_status=overall_status,
        unique_issues=len(issues),
        total_violations=summary.total_violations,
        successful_scans=report.successful_scans,
        failed_scans=len(report.failed_scans),
    )

    if report.successful_scans == 0:
        logger.warning(
            "No pages were scanned successfully; overall status reflects no data",
            audit_id=audit_id,
        )

    return report
