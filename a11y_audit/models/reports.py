"""Aggregated report models for a11y-audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from dataclasses_json import DataClassJsonMixin

from .pages import CAMEL_CASE, IMPACT_ORDER, Impact, PageResult, ViolationNode

# Type aliases
WcagLevel = Literal['A', 'AA', 'AAA']
ScorecardStatus = Literal['pass', 'fail', 'partial']
AuditStatus = Literal['Pass', 'Conditional Pass', 'Fail']

MAX_SAMPLE_NODES = 5


@dataclass(slots=True, frozen=True)
class WcagCriterion(DataClassJsonMixin):
    """A WCAG success criterion reference."""

    dataclass_json_config = CAMEL_CASE

    id: str
    level: WcagLevel
    title: str

    @property
    def sort_key(self) -> tuple:
        """Numeric (principle, guideline, criterion) ordering key."""
        return tuple(int(part) for part in self.id.split('.'))


@dataclass(slots=True)
class NormalizedIssue(DataClassJsonMixin):
    """All violations of one rule across the audit, collapsed into one issue."""

    dataclass_json_config = CAMEL_CASE

    rule_id: str
    impact: Impact
    description: str
    help: str
    help_url: str
    wcag_criteria: List[WcagCriterion] = field(default_factory=list)
    section508_refs: List[str] = field(default_factory=list)
    instance_count: int = 0
    affected_urls: List[str] = field(default_factory=list)
    sample_nodes: List[ViolationNode] = field(default_factory=list)
    fingerprint: str = ""

    def __post_init__(self) -> None:
        """Validate issue data after initialization."""
        if not self.rule_id:
            raise ValueError("Issue rule ID cannot be empty")
        if not self.fingerprint:
            self.fingerprint = self.rule_id

    def add_occurrence(self, url: str, nodes: List[ViolationNode]) -> None:
        """Fold another violation of the same rule into this issue."""
        self.instance_count += len(nodes)
        if url not in self.affected_urls:
            self.affected_urls.append(url)
        room = MAX_SAMPLE_NODES - len(self.sample_nodes)
        if room > 0:
            self.sample_nodes.extend(nodes[:room])

    @property
    def severity_rank(self) -> int:
        return IMPACT_ORDER[self.impact]


@dataclass(slots=True)
class AuditSummary(DataClassJsonMixin):
    """Raw (not deduplicated) severity load and rule totals."""

    dataclass_json_config = CAMEL_CASE

    critical: int = 0
    serious: int = 0
    moderate: int = 0
    minor: int = 0
    total_violations: int = 0
    total_passes: int = 0
    total_incomplete: int = 0
    total_inapplicable: int = 0


@dataclass(slots=True)
class WcagScorecardEntry(DataClassJsonMixin):
    """Pass/fail tally for one WCAG success criterion."""

    dataclass_json_config = CAMEL_CASE

    criterion: WcagCriterion
    passed: int = 0
    failed: int = 0
    status: ScorecardStatus = 'pass'


@dataclass(slots=True)
class Section508ScorecardEntry(DataClassJsonMixin):
    """Pass/fail tally for one Section 508 provision."""

    dataclass_json_config = CAMEL_CASE

    provision: str
    description: str
    passed: int = 0
    failed: int = 0
    status: ScorecardStatus = 'pass'


@dataclass(slots=True, frozen=True)
class ManualCheckItem(DataClassJsonMixin):
    """A check automated scanning cannot perform."""

    dataclass_json_config = CAMEL_CASE

    category: str
    check: str
    description: str
    wcag_criteria: List[str] = field(default_factory=list)


@dataclass(slots=True)
class AccessibilityReport(DataClassJsonMixin):
    """The complete result of one accessibility audit."""

    dataclass_json_config = CAMEL_CASE

    audit_id: str
    timestamp: str
    duration: int
    urls: List[str]
    successful_scans: int
    failed_scans: List[str]
    overall_status: AuditStatus
    summary: AuditSummary
    wcag_scorecard: List[WcagScorecardEntry] = field(default_factory=list)
    section508_scorecard: List[Section508ScorecardEntry] = field(default_factory=list)
    issues: List[NormalizedIssue] = field(default_factory=list)
    raw_results: List[PageResult] = field(default_factory=list)
    manual_checks: List[ManualCheckItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate report data after initialization."""
        if not self.audit_id:
            raise ValueError("Audit ID cannot be empty")

    @property
    def is_passing(self) -> bool:
        return self.overall_status == 'Pass'

    @property
    def tested_wcag_entries(self) -> List[WcagScorecardEntry]:
        """Scorecard rows that received at least one pass or failure."""
        return [e for e in self.wcag_scorecard if e.passed > 0 or e.failed > 0]

    @property
    def tested_section508_entries(self) -> List[Section508ScorecardEntry]:
        return [e for e in self.section508_scorecard if e.passed > 0 or e.failed > 0]
