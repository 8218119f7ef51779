"""Data models for a11y-audit."""

from .audits import AuditConfig, AuditMetadata, AuditRequest, AuditResponse, ScanTarget
from .pages import Impact, PageResult, RuleResult, Violation, ViolationNode
from .reports import (
    AccessibilityReport,
    AuditStatus,
    AuditSummary,
    ManualCheckItem,
    NormalizedIssue,
    Section508ScorecardEntry,
    WcagCriterion,
    WcagScorecardEntry,
)
from .scans import ScanBatch, ScanErr, ScanError, ScanOk, ScanOutcome

__all__ = [
    "AccessibilityReport",
    "AuditConfig",
    "AuditMetadata",
    "AuditRequest",
    "AuditResponse",
    "AuditStatus",
    "AuditSummary",
    "Impact",
    "ManualCheckItem",
    "NormalizedIssue",
    "PageResult",
    "RuleResult",
    "ScanBatch",
    "ScanErr",
    "ScanError",
    "ScanOk",
    "ScanOutcome",
    "ScanTarget",
    "Section508ScorecardEntry",
    "Violation",
    "ViolationNode",
    "WcagCriterion",
    "WcagScorecardEntry",
]
