"""Unit tests for report aggregation."""

import time

from conftest import make_page, make_violation

from a11y_audit.models.pages import PageResult
from a11y_audit.models.reports import AuditSummary
from a11y_audit.models.scans import ScanBatch, ScanErr, ScanError, ScanOk
from a11y_audit.orchestrator.aggregator import (
    build_report,
    build_section508_scorecard,
    build_wcag_scorecard,
    calculate_summary,
    collect_violations,
    deduplicate_violations,
    determine_status,
    get_default_manual_checks,
    scorecard_status,
)


class TestDeduplication:
    """Test cases for violation deduplication."""

    def test_same_rule_across_pages_is_one_issue(self):
        pages = [
            make_page("https://a.com", [make_violation("image-alt", 'critical', nodes=3)]),
            make_page("https://b.com", [make_violation("image-alt", 'critical', nodes=2)]),
        ]

        issues = deduplicate_violations(collect_violations(pages))

        assert len(issues) == 1
        assert issues[0].rule_id == "image-alt"
        assert issues[0].instance_count == 5
        assert issues[0].affected_urls == ["https://a.com", "https://b.com"]
        assert len(issues[0].sample_nodes) == 5
        assert [c.id for c in issues[0].wcag_criteria] == ["1.1.1"]
        assert issues[0].section508_refs == ["(a)"]

    def test_sorted_by_severity_with_stable_ties(self):
        page = make_page("https://a.com", [
            make_violation("region", 'moderate'),
            make_violation("label", 'critical'),
            make_violation("list", 'moderate'),
            make_violation("bypass", 'minor'),
            make_violation("color-contrast", 'serious'),
        ])

        issues = deduplicate_violations(collect_violations([page]))

        assert [i.rule_id for i in issues] == ["label", "color-contrast", "region", "list", "bypass"]

    def test_first_seen_violation_supplies_impact(self):
        pages = [
            make_page("https://a.com", [make_violation("label", 'minor')]),
            make_page("https://b.com", [make_violation("label", 'critical')]),
        ]

        issues = deduplicate_violations(collect_violations(pages))

        assert issues[0].impact == 'minor'
        assert issues[0].instance_count == 2

    def test_no_violations(self):
        assert deduplicate_violations([]) == []


class TestSummary:
    """Test cases for summary and status."""

    def test_summary_counts_raw_nodes(self):
        pages = [
            make_page(
                "https://a.com",
                [make_violation("image-alt", 'critical', nodes=3), make_violation("region", 'moderate', nodes=2)],
                passes=["document-title", "html-has-lang"],
                incomplete=["color-contrast"],
            ),
            make_page("https://b.com", [make_violation("image-alt", 'critical', nodes=1)]),
        ]

        summary = calculate_summary(pages)

        assert summary.critical == 4
        assert summary.moderate == 2
        assert summary.serious == 0
        assert summary.total_violations == 6
        assert summary.total_passes == 3
        assert summary.total_incomplete == 1

    def test_summary_is_not_deduplicated(self):
        pages = [make_page(url, [make_violation("label", 'serious', nodes=2)]) for url in ("https://a.com", "https://b.com")]

        summary = calculate_summary(pages)
        issues = deduplicate_violations(collect_violations(pages))

        assert summary.serious == 4
        assert len(issues) == 1

    def test_status_precedence(self):
        assert determine_status(AuditSummary()) == 'Pass'
        assert determine_status(AuditSummary(minor=1)) == 'Conditional Pass'
        assert determine_status(AuditSummary(moderate=3, minor=1)) == 'Conditional Pass'
        assert determine_status(AuditSummary(serious=1, minor=9)) == 'Fail'
        assert determine_status(AuditSummary(critical=1)) == 'Fail'


class TestScorecards:
    """Test cases for WCAG and Section 508 scorecards."""

    def test_scorecard_status(self):
        assert scorecard_status(0, 0) == 'pass'
        assert scorecard_status(3, 0) == 'pass'
        assert scorecard_status(0, 2) == 'fail'
        assert scorecard_status(1, 2) == 'partial'

    def test_wcag_scorecard_tallies(self):
        pages = [
            make_page("https://a.com", [make_violation("image-alt", 'critical', nodes=3)], passes=["document-title"]),
            make_page("https://b.com", [], passes=["image-alt", "document-title"]),
        ]

        scorecard = {e.criterion.id: e for e in build_wcag_scorecard(pages)}

        assert scorecard["1.1.1"].passed == 1
        assert scorecard["1.1.1"].failed == 3
        assert scorecard["1.1.1"].status == 'partial'
        assert scorecard["2.4.2"].passed == 2
        assert scorecard["2.4.2"].status == 'pass'
        assert scorecard["1.4.3"].passed == 0 and scorecard["1.4.3"].failed == 0

    def test_wcag_scorecard_numeric_order(self):
        ids = [e.criterion.id for e in build_wcag_scorecard([])]

        assert ids.index("1.4.3") < ids.index("1.4.10") < ids.index("2.1.1")

    def test_section508_scorecard(self):
        pages = [make_page("https://a.com", [make_violation("button-name", 'critical', nodes=2)], passes=["image-alt"])]

        scorecard = build_section508_scorecard(pages)
        by_provision = {e.provision: e for e in scorecard}

        assert [e.provision for e in scorecard][:3] == ['(a)', '(b)', '(c)']
        assert by_provision['(a)'].passed == 1
        assert by_provision['(a)'].failed == 2
        assert by_provision['(a)'].status == 'partial'
        assert by_provision['(l)'].status == 'fail'
        assert by_provision['(a)'].description == 'Text equivalent for non-text elements'


class TestBuildReport:
    """Test cases for build_report."""

    def test_report_from_mixed_batch(self):
        batch = ScanBatch()
        batch.add(ScanOk(url="https://a.com", result=make_page("https://a.com", [make_violation("label", 'serious')])))
        batch.add(ScanErr(url="https://b.com", error=ScanError(kind='timeout', message="slow")))

        report = build_report("audit-1", ["https://a.com", "https://b.com"], batch, time.monotonic())

        assert report.audit_id == "audit-1"
        assert report.successful_scans == 1
        assert report.failed_scans == ["https://b.com"]
        assert [r.url for r in report.raw_results] == ["https://a.com"]
        assert report.overall_status == 'Fail'
        assert report.duration >= 0
        assert len(report.manual_checks) == 8

    def test_all_failed_is_pass(self):
        batch = ScanBatch()
        batch.add(ScanErr(url="https://a.com", error=ScanError(kind='navigation', message="refused")))

        report = build_report("audit-2", ["https://a.com"], batch, time.monotonic())

        assert report.successful_scans == 0
        assert report.overall_status == 'Pass'
        assert report.issues == []

    def test_manual_checks_are_fresh_copies(self):
        checks = get_default_manual_checks()
        checks.clear()

        assert len(get_default_manual_checks()) == 8

    def test_report_serializes_camel_case(self):
        batch = ScanBatch()
        batch.add(ScanOk(url="https://a.com", result=PageResult(url="https://a.com")))

        data = build_report("audit-3", ["https://a.com"], batch, time.monotonic()).to_dict()

        assert data["auditId"] == "audit-3"
        assert "wcagScorecard" in data
        assert "section508Scorecard" in data
        assert data["summary"]["totalViolations"] == 0
