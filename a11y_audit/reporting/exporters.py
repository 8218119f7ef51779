"""Export formats for accessibility reports.

Every export carries the disclaimer verbatim: JSON and CSV use the plain
text, HTML embeds the styled block.
"""

import csv
import io
import json
from pathlib import Path
from typing import Any, Dict, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..models.reports import AccessibilityReport
from .disclaimer import ACCESSIBILITY_DISCLAIMER_HTML, ACCESSIBILITY_DISCLAIMER_PLAIN
from .formatter import duration_seconds, generate_recommendation

TEMPLATES_DIR = Path(__file__).parent / "templates"

CSV_COLUMNS = [
    "Rule ID",
    "Impact",
    "Description",
    "Instances",
    "Affected URLs",
    "WCAG Criteria",
    "Section 508",
    "Help",
    "Help URL",
]

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def report_to_dict(report: AccessibilityReport) -> Dict[str, Any]:
    """The camelCase report dictionary with the plain disclaimer attached."""
    data = report.to_dict(encode_json=True)
    data["disclaimer"] = ACCESSIBILITY_DISCLAIMER_PLAIN
    return data


def export_json(report: AccessibilityReport, indent: int = 2) -> str:
    return json.dumps(report_to_dict(report), indent=indent, ensure_ascii=False)


def export_text(report: AccessibilityReport) -> str:
    """Plain-text report for email and ticket systems."""
    summary = report.summary
    lines: List[str] = [
        ACCESSIBILITY_DISCLAIMER_PLAIN,
        "",
        "ACCESSIBILITY AUDIT REPORT",
        "=" * 26,
        f"Audit ID: {report.audit_id}",
        f"Timestamp: {report.timestamp}",
        f"Duration: {duration_seconds(report.duration)}s",
        f"Overall Status: {report.overall_status}",
        f"URLs Scanned: {report.successful_scans} of {len(report.urls)}",
        "",
        "Issues by severity:",
        f"  Critical: {summary.critical}",
        f"  Serious: {summary.serious}",
        f"  Moderate: {summary.moderate}",
        f"  Minor: {summary.minor}",
        f"  Total: {summary.total_violations}",
    ]

    if report.failed_scans:
        lines += ["", "Could not scan:"]
        lines += [f"  - {url}" for url in report.failed_scans]

    lines += ["", f"Recommendation: {generate_recommendation(report)}", ""]

    if report.issues:
        lines.append(f"Issues ({len(report.issues)} unique):")
        for index, issue in enumerate(report.issues, start=1):
            wcag_refs = ', '.join(c.id for c in issue.wcag_criteria) or 'N/A'
            section508_refs = ', '.join(issue.section508_refs) or 'N/A'
            lines += [
                "",
                f"{index}. [{issue.impact.upper()}] {issue.description}",
                f"   Rule: {issue.rule_id}",
                f"   Instances: {issue.instance_count} across {len(issue.affected_urls)} page(s)",
                f"   WCAG: {wcag_refs}",
                f"   Section 508: {section508_refs}",
                f"   Fix: {issue.help}",
                f"   Learn more: {issue.help_url}",
            ]
    else:
        lines.append("No accessibility issues were detected by automated testing.")

    lines += ["", "Manual verification required:"]
    lines += [f"  [ ] {check.check} ({check.category})" for check in report.manual_checks]

    return '\n'.join(lines) + '\n'


def export_html(report: AccessibilityReport) -> str:
    template = _environment.get_template("report.html")
    return template.render(
        report=report,
        summary=report.summary,
        recommendation=generate_recommendation(report),
        duration_seconds=duration_seconds(report.duration),
        disclaimer=ACCESSIBILITY_DISCLAIMER_HTML,
    )


def export_csv(report: AccessibilityReport) -> str:
    """Issue list as CSV, preceded by the disclaimer lines and a blank row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)

    for line in ACCESSIBILITY_DISCLAIMER_PLAIN.split('\n'):
        writer.writerow([line])
    writer.writerow([])

    writer.writerow(CSV_COLUMNS)
    for issue in report.issues:
        writer.writerow([
            issue.rule_id,
            issue.impact,
            issue.description,
            issue.instance_count,
            ' '.join(issue.affected_urls),
            ' '.join(c.id for c in issue.wcag_criteria),
            ' '.join(issue.section508_refs),
            issue.help,
            issue.help_url,
        ])

    return buffer.getvalue()


EXPORTERS = {
    "json": export_json,
    "text": export_text,
    "html": export_html,
    "csv": export_csv,
}
