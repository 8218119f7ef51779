"""Format accessibility audit results into the sectioned markdown report.

Each section uses a "### Concept N — Title" heading followed by
"**A) Concept Summary**". Downstream rendering locates sections by these
headings and by position, so both must stay stable.
"""

from typing import List

from ..models.reports import AccessibilityReport, AuditStatus, ScorecardStatus
from .disclaimer import ACCESSIBILITY_DISCLAIMER

MAX_DETAILED_ISSUES = 10
MAX_WCAG_ROWS = 15
MAX_SECTION508_ROWS = 10

CONCEPT_SUMMARY = "**A) Concept Summary**"

SECTION_HEADINGS = (
    "### Concept 0 — Disclaimer",
    "### Concept 1 — Findings Summary",
    "### Concept 2 — WCAG + Section 508 Scorecard",
    "### Concept 3 — Detailed Issues",
    "### Concept 4 — Manual Verification Required",
    "### Concept 5 — Export Options",
)

_STATUS_EMOJI = {
    'Pass': '✅',
    'Conditional Pass': '⚠️',
    'Fail': '❌',
}

_STATUS_EXPLANATION = {
    'Pass': 'No automated accessibility violations detected.',
    'Conditional Pass': 'Only moderate or minor issues found. Manual review recommended.',
    'Fail': 'Critical or serious accessibility barriers detected. Immediate action required.',
}

_SCORECARD_ICON = {
    'pass': '✅',
    'fail': '❌',
    'partial': '⚠️',
}


def format_accessibility_report(report: AccessibilityReport) -> str:
    """Generate the complete formatted report."""
    sections = [
        format_disclaimer_section(),
        format_findings_summary(report),
        format_scorecard(report),
        format_detailed_issues(report),
        format_manual_verification(report),
        format_export_options(report),
    ]

    # Blank-line separation only; horizontal rules interfere with parsing
    return '\n\n'.join(sections)


def _section(heading: str, body: str) -> str:
    return f"{heading}\n\n{CONCEPT_SUMMARY}\n\n{body}"


def format_disclaimer_section() -> str:
    return _section(SECTION_HEADINGS[0], ACCESSIBILITY_DISCLAIMER)


def _priority(count: int, label: str) -> str:
    return label if count > 0 else '—'


def format_findings_summary(report: AccessibilityReport) -> str:
    summary = report.summary
    status: AuditStatus = report.overall_status

    lines = [
        f"{_STATUS_EMOJI[status]} **Overall Status: {status}**",
        "",
        _STATUS_EXPLANATION[status],
        "",
        "| Metric | Value |",
        "|--------|-------|",
        f"| **URLs Scanned** | {report.successful_scans} of {len(report.urls)} |",
        f"| **Total Issues** | {summary.total_violations} |",
        f"| **Rules Passed** | {summary.total_passes} |",
        f"| **Needs Review** | {summary.total_incomplete} |",
        "",
        "**Issues by Severity:**",
        "",
        "| Severity | Count | Priority |",
        "|----------|-------|----------|",
        f"| Critical | {summary.critical} | {_priority(summary.critical, '🔴 Immediate')} |",
        f"| Serious | {summary.serious} | {_priority(summary.serious, '🟠 High')} |",
        f"| Moderate | {summary.moderate} | {_priority(summary.moderate, '🟡 Medium')} |",
        f"| Minor | {summary.minor} | {_priority(summary.minor, '🟢 Low')} |",
    ]

    if report.failed_scans:
        lines += ["", f"**Note:** {len(report.failed_scans)} URL(s) could not be scanned."]

    return _section(SECTION_HEADINGS[1], '\n'.join(lines))


def _icon(status: ScorecardStatus) -> str:
    return _SCORECARD_ICON[status]


def format_scorecard(report: AccessibilityReport) -> str:
    wcag_rows = [
        f"| {e.criterion.id} | {e.criterion.title} | {e.criterion.level} | "
        f"{_icon(e.status)} | {e.passed} | {e.failed} |"
        for e in report.tested_wcag_entries[:MAX_WCAG_ROWS]
    ]
    if not wcag_rows:
        wcag_rows = ["| — | No criteria tested | — | — | — | — |"]

    section508_rows = [
        f"| {e.provision} | {e.description[:40]}... | {_icon(e.status)} | {e.failed} |"
        for e in report.tested_section508_entries[:MAX_SECTION508_ROWS]
    ]

    lines = [
        "**WCAG 2.x AA Compliance:**",
        "",
        "| SC | Title | Level | Status | Passed | Failed |",
        "|----|-------|-------|--------|--------|--------|",
        *wcag_rows,
    ]

    if section508_rows:
        lines += [
            "",
            "**Section 508 Compliance:**",
            "",
            "| Provision | Description | Status | Issues |",
            "|-----------|-------------|--------|--------|",
            *section508_rows,
        ]

    lines += [
        "",
        "*Note: Only criteria with test results are shown. Some criteria require manual verification.*",
    ]

    return _section(SECTION_HEADINGS[2], '\n'.join(lines))


def format_detailed_issues(report: AccessibilityReport) -> str:
    if not report.issues:
        return _section(
            SECTION_HEADINGS[3],
            "No accessibility issues were detected by automated testing.\n\n"
            "**Important:** This does not guarantee full compliance. "
            "Please complete the manual verification checklist in Section 4.",
        )

    details: List[str] = []
    for index, issue in enumerate(report.issues[:MAX_DETAILED_ISSUES], start=1):
        wcag_refs = ', '.join(c.id for c in issue.wcag_criteria) or 'N/A'
        section508_refs = ', '.join(issue.section508_refs) or 'N/A'
        details.append('\n'.join([
            f"**{index}. {issue.description}**",
            f"- **Severity:** {issue.impact.upper()}",
            f"- **Instances:** {issue.instance_count} occurrence(s) across "
            f"{len(issue.affected_urls)} page(s)",
            f"- **WCAG:** {wcag_refs}",
            f"- **Section 508:** {section508_refs}",
            f"- **Fix:** {issue.help}",
            f"- **Learn more:** {issue.help_url}",
        ]))

    body = f"**{len(report.issues)} unique issue(s) identified:**\n\n" + '\n\n'.join(details)

    remaining = len(report.issues) - MAX_DETAILED_ISSUES
    if remaining > 0:
        body += (
            f"\n\n*...and {remaining} more issue(s). "
            "Export the full report for complete details.*"
        )

    return _section(f"{SECTION_HEADINGS[3]} (Deduplicated)", body)


def format_manual_verification(report: AccessibilityReport) -> str:
    checklist = '\n\n'.join(
        f"- [ ] **{check.check}** ({check.category})\n"
        f"  {check.description}\n"
        f"  *WCAG: {', '.join(check.wcag_criteria)}*"
        for check in report.manual_checks
    )

    body = (
        "Automated testing catches approximately 30-40% of accessibility issues. "
        "The following checks **require human evaluation**:\n\n"
        f"{checklist}\n\n"
        "**Testing recommendations:**\n"
        "1. Navigate using keyboard only (Tab, Shift+Tab, Enter, Escape, Arrow keys)\n"
        "2. Test with screen readers: NVDA (Windows), VoiceOver (Mac/iOS), TalkBack (Android)\n"
        "3. Test at 200% zoom and verify content reflows properly\n"
        "4. Verify focus indicators are visible on all interactive elements\n"
        "5. Check that all functionality works without relying on color alone"
    )

    return _section(SECTION_HEADINGS[4], body)


def duration_seconds(duration_ms: int) -> int:
    """Milliseconds to whole seconds, rounding halves up."""
    return int(duration_ms / 1000 + 0.5)


def format_export_options(report: AccessibilityReport) -> str:
    body = '\n'.join([
        "Your accessibility audit report is available in multiple formats:",
        "",
        "**Available exports:**",
        "- **JSON** — Machine-readable format with full violation details",
        "- **HTML** — Formatted report for sharing with stakeholders",
        "- **CSV** — Spreadsheet-compatible issue list",
        "- **Text** — Plain-text summary for email and tickets",
        "",
        "**Audit metadata:**",
        f"- **Audit ID:** {report.audit_id}",
        f"- **Timestamp:** {report.timestamp}",
        f"- **Duration:** {duration_seconds(report.duration)}s",
        f"- **URLs scanned:** {', '.join(report.urls)}",
        "",
        "Use the export buttons above to download your preferred format.",
        "",
        "**Tip:** Schedule regular audits to track accessibility improvements over time.",
    ])

    return _section(SECTION_HEADINGS[5], body)


def generate_recommendation(report: AccessibilityReport) -> str:
    """Generate a one-line recommendation based on audit results."""
    summary = report.summary

    if report.overall_status == 'Pass':
        return (
            "Your pages passed automated accessibility checks. Complete the manual "
            "verification checklist to ensure full WCAG 2.x AA compliance."
        )

    if report.overall_status == 'Fail':
        if summary.critical > 0:
            return (
                f"Address {summary.critical} critical accessibility issue(s) immediately. "
                "These barriers prevent users with disabilities from accessing your content."
            )
        return (
            f"Fix {summary.serious} serious accessibility issue(s) to remove significant "
            "barriers for users with disabilities."
        )

    return (
        f"Review and address {summary.moderate + summary.minor} moderate/minor accessibility "
        "issue(s) to improve the experience for all users."
    )
