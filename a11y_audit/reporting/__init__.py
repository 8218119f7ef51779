"""Report formatting, disclaimer and exports."""

from .disclaimer import (
    ACCESSIBILITY_DISCLAIMER,
    ACCESSIBILITY_DISCLAIMER_HTML,
    ACCESSIBILITY_DISCLAIMER_PLAIN,
)
from .exporters import EXPORTERS, export_csv, export_html, export_json, export_text
from .formatter import format_accessibility_report, generate_recommendation

__all__ = [
    "ACCESSIBILITY_DISCLAIMER",
    "ACCESSIBILITY_DISCLAIMER_HTML",
    "ACCESSIBILITY_DISCLAIMER_PLAIN",
    "EXPORTERS",
    "export_csv",
    "export_html",
    "export_json",
    "export_text",
    "format_accessibility_report",
    "generate_recommendation",
]
