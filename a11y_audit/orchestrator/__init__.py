"""Audit orchestration: validation, scanning, aggregation."""

from .pipeline import AccessibilityAuditPipeline, run_accessibility_audit
from .scanner import PageScanner
from .validators import filter_excluded, is_valid_url, parse_urls

__all__ = [
    "AccessibilityAuditPipeline",
    "PageScanner",
    "filter_excluded",
    "is_valid_url",
    "parse_urls",
    "run_accessibility_audit",
]
