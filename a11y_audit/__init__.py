"""
a11y-audit: automated WCAG 2.x AA and Section 508 accessibility audits

a11y-audit scans web pages and produces a single audit report:
- Validates the requested URLs and applies the page cap
- Scans each page in a remote browser with axe-core
- Maps rule results to WCAG success criteria and Section 508 provisions
- Formats a sectioned report with scorecards and a manual checklist

Usage:
    from a11y_audit import AccessibilityAuditPipeline

    # Or use CLI:
    $ a11y-audit audit https://example.com
"""

__version__ = "1.0.0"

# Core functionality
from .config import get_settings
from .logging import get_logger

# Main pipeline class for programmatic use
from .orchestrator.pipeline import AccessibilityAuditPipeline, run_accessibility_audit

__all__ = [
    "AccessibilityAuditPipeline",
    "run_accessibility_audit",
    "get_settings",
    "get_logger",
    "__version__",
]
