"""Main pipeline orchestrator for accessibility audits."""

import time
from typing import List, Optional

from ..adapters.playwright_adapter import PlaywrightAdapter
from ..config import Settings, get_settings
from ..exceptions import InvalidAuditInputError, ScanningUnavailableError
from ..logging import get_logger, log_audit_event
from ..models.audits import (
    AuditConfig,
    AuditMetadata,
    AuditRequest,
    AuditResponse,
    ScanTarget,
)
from ..models.reports import AccessibilityReport
from ..reporting.formatter import format_accessibility_report, generate_recommendation
from .aggregator import build_report, new_audit_id
from .scanner import PageScanner
from .validators import is_valid_url

logger = get_logger(__name__)


class AccessibilityAuditPipeline:
    """Validate, scan, aggregate and format one accessibility audit."""

    def __init__(
        self,
        adapter: Optional[PlaywrightAdapter] = None,
        settings: Optional[Settings] = None,
        scanner: Optional[PageScanner] = None,
    ):
        """Initialize the pipeline."""
        self.settings = settings or get_settings()
        self.adapter = adapter or PlaywrightAdapter(self.settings)
        self.scanner = scanner or PageScanner(self.adapter)

    def _check_available(self) -> None:
        available, reason = self.adapter.availability()
        if not available:
            raise ScanningUnavailableError(reason or "Accessibility scanning is not available")

    def _valid_urls(self, urls: List[str]) -> List[str]:
        valid = [url.strip() for url in urls if is_valid_url(url)]
        rejected = len(urls) - len(valid)
        if rejected:
            logger.warning(f"Ignored {rejected} invalid URL(s)")
        if not valid:
            raise InvalidAuditInputError("No valid URLs provided for accessibility audit")
        return valid

    def _scan_target(self, urls: List[str], config: Optional[AuditConfig]) -> ScanTarget:
        resolved = (config or AuditConfig()).resolve(
            default_max_pages=self.settings.max_pages,
            default_timeout=self.settings.page_timeout_ms,
        )
        return ScanTarget(urls=tuple(urls), config=resolved)

    async def run_audit(self, request: AuditRequest) -> AccessibilityReport:
        """Run an accessibility audit and return the aggregated report.

        Raises ScanningUnavailableError or InvalidAuditInputError before any
        page is touched. Individual page failures never raise; they are
        listed in the report's ``failed_scans``.
        """
        audit_id = new_audit_id()
        start_time = time.monotonic()

        log_audit_event(logger, audit_id=audit_id, phase="started", url_count=len(request.urls))

        try:
            self._check_available()
            valid_urls = self._valid_urls(request.urls)
            target = self._scan_target(valid_urls, request.config)

            log_audit_event(
                logger,
                audit_id=audit_id,
                phase="validated",
                url_count=len(target.urls),
                max_pages=target.config.max_pages,
            )

            log_audit_event(logger, audit_id=audit_id, phase="scanning")
            batch = await self.scanner.scan_pages(target.urls, target.config)

            report = build_report(audit_id, valid_urls, batch, start_time)

            log_audit_event(
                logger,
                audit_id=audit_id,
                phase="completed",
                url_count=report.successful_scans,
                overall_status=report.overall_status,
                duration_ms=report.duration,
            )

            return report

        except Exception as e:
            log_audit_event(
                logger,
                audit_id=audit_id,
                phase="failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

    async def execute(self, request: AuditRequest) -> AuditResponse:
        """Run an audit and return the formatted report with its metadata."""
        report = await self.run_audit(request)

        return AuditResponse(
            content=format_accessibility_report(report),
            recommendation=generate_recommendation(report),
            task_id=report.audit_id,
            thread_id=report.audit_id,
            audit_metadata=AuditMetadata(
                urls_scanned=report.successful_scans,
                overall_status=report.overall_status,
                total_violations=report.summary.total_violations,
                duration=report.duration,
            ),
        )


async def run_accessibility_audit(request: AuditRequest) -> AuditResponse:
    """Run an accessibility audit with the default pipeline."""
    return await AccessibilityAuditPipeline().execute(request)
