"""Sequential page scanning for accessibility audits."""

import time
from typing import Iterable, Optional, Protocol

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..adapters.playwright_adapter import PlaywrightAdapter
from ..exceptions import PageLoadError, RuleEngineError
from ..logging import get_logger, log_scan_event
from ..models.audits import AuditConfig
from ..models.pages import PageResult
from ..models.scans import ScanBatch, ScanErr, ScanError, ScanOk, ScanOutcome
from .validators import filter_excluded

logger = get_logger(__name__)

DEFAULT_MAX_PAGES = 3


class PageScanAdapter(Protocol):
    """Anything that can turn a URL into a PageResult."""

    async def scan_page(self, url: str, config: AuditConfig) -> PageResult:
        ...


class PageScanner:
    """Scans URLs one at a time, isolating each page's failure."""

    def __init__(self, adapter: Optional[PageScanAdapter] = None):
        """Initialize the page scanner."""
        self.adapter = adapter or PlaywrightAdapter()

    async def scan_pages(self, urls: Iterable[str], config: AuditConfig) -> ScanBatch:
        """Scan up to ``config.max_pages`` URLs sequentially.

        URLs past the cap are dropped without error. Only one browsing
        session is open at any time.
        """
        max_pages = config.max_pages or DEFAULT_MAX_PAGES
        candidates = filter_excluded(urls, config.exclude_patterns)
        urls_to_scan = candidates[:max_pages]

        if len(candidates) > max_pages:
            logger.info(
                f"Limited scan to {max_pages} pages",
                dropped=candidates[max_pages:],
            )

        batch = ScanBatch()
        for url in urls_to_scan:
            batch.add(await self.scan_one(url, config))

        logger.info(
            "Page scanning completed",
            attempted=batch.attempted,
            successful=batch.successful_scans,
            failed=len(batch.failed_scans),
        )

        return batch

    async def scan_one(self, url: str, config: AuditConfig) -> ScanOutcome:
        """Scan one URL and record the outcome instead of raising."""
        start = time.monotonic()

        try:
            result = await self.adapter.scan_page(url, config)
        except Exception as e:
            error = self._classify_error(e)
            log_scan_event(
                logger,
                url=url,
                status="failed",
                duration_ms=_elapsed_ms(start),
                kind=error.kind,
                error=error.message,
            )
            return ScanErr(url=url, error=error)

        if result.is_empty:
            log_scan_event(
                logger,
                url=url,
                status="failed",
                duration_ms=_elapsed_ms(start),
                kind="empty",
            )
            return ScanErr(
                url=url,
                error=ScanError(
                    kind='empty',
                    message="Rule engine reported no violations and no passes; the page likely did not render",
                ),
            )

        log_scan_event(
            logger,
            url=url,
            status="completed",
            duration_ms=_elapsed_ms(start),
            violations=len(result.violations),
            passes=len(result.passes),
        )
        return ScanOk(url=url, result=result)

    def _classify_error(self, error: Exception) -> ScanError:
        message = str(error) or type(error).__name__
        if isinstance(error, PlaywrightTimeoutError):
            return ScanError(kind='timeout', message=message)
        if isinstance(error, PageLoadError):
            return ScanError(kind='navigation', message=message)
        if isinstance(error, RuleEngineError):
            return ScanError(kind='engine', message=message)
        return ScanError(kind='error', message=message)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
