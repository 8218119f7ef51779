"""Audit request and response models for a11y-audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from dataclasses_json import DataClassJsonMixin

from .pages import CAMEL_CASE
from .reports import AuditStatus


@dataclass(slots=True)
class AuditConfig(DataClassJsonMixin):
    """Per-audit scan options. Unset values fall back to the settings."""

    dataclass_json_config = CAMEL_CASE

    max_pages: Optional[int] = None
    timeout: Optional[int] = None
    include_screenshots: bool = False
    exclude_patterns: List[str] = field(default_factory=list)

    def resolve(self, default_max_pages: int, default_timeout: int) -> AuditConfig:
        """Return a copy with every unset or non-positive value defaulted."""
        return AuditConfig(
            max_pages=self.max_pages if self.max_pages and self.max_pages > 0 else default_max_pages,
            timeout=self.timeout if self.timeout and self.timeout > 0 else default_timeout,
            include_screenshots=bool(self.include_screenshots),
            exclude_patterns=list(self.exclude_patterns or []),
        )


@dataclass(slots=True)
class AuditRequest(DataClassJsonMixin):
    """Input to an accessibility audit."""

    dataclass_json_config = CAMEL_CASE

    urls: List[str]
    config: Optional[AuditConfig] = None


@dataclass(slots=True, frozen=True)
class ScanTarget:
    """Validated URLs plus resolved options for one audit invocation."""

    urls: Tuple[str, ...]
    config: AuditConfig

    def __post_init__(self) -> None:
        """Validate scan target after initialization."""
        if not self.urls:
            raise ValueError("Scan target must contain at least one URL")
        if self.config.max_pages is None or self.config.timeout is None:
            raise ValueError("Scan target config must be resolved")


@dataclass(slots=True)
class AuditMetadata(DataClassJsonMixin):
    """Headline numbers returned alongside the formatted report."""

    dataclass_json_config = CAMEL_CASE

    urls_scanned: int
    overall_status: AuditStatus
    total_violations: int
    duration: int


@dataclass(slots=True)
class AuditResponse(DataClassJsonMixin):
    """Output of an accessibility audit."""

    dataclass_json_config = CAMEL_CASE

    content: str
    recommendation: str
    task_id: str
    thread_id: str
    audit_metadata: AuditMetadata
