"""Playwright adapter driving axe-core accessibility scans."""

import base64
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

import anyio
from playwright.async_api import Browser, BrowserContext, BrowserType, Page, Playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import Settings, get_settings
from ..exceptions import PageLoadError, RuleEngineError
from ..logging import get_logger
from ..models.audits import AuditConfig
from ..models.pages import IMPACT_ORDER, PageResult, RuleResult, Violation, ViolationNode

logger = get_logger(__name__)

# axe-core tag filter: WCAG 2.0/2.1 A + AA and Section 508
RULE_TAGS: Tuple[str, ...] = ('wcag2a', 'wcag2aa', 'wcag21a', 'wcag21aa', 'section508')
RESULT_TYPES: Tuple[str, ...] = ('violations', 'passes', 'incomplete', 'inapplicable')

DEFAULT_IMPACT = 'moderate'

_AXE_READY = "() => typeof window.axe !== 'undefined'"
_AXE_RUN = """
([tags, resultTypes]) => window.axe.run(document, {
  runOnly: { type: 'tag', values: tags },
  resultTypes: resultTypes,
})
"""


class BrowserSession:
    """One isolated browser connection, context and page.

    Used as an async context manager; everything it opened is closed on exit
    whether the body returned, raised or produced nothing useful.
    """

    def __init__(self, adapter: "PlaywrightAdapter"):
        self._adapter = adapter
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None

    async def __aenter__(self) -> Page:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._adapter.connect(self._playwright.chromium)
            self._context = await self._browser.new_context(
                viewport={
                    'width': self._adapter.settings.viewport_width,
                    'height': self._adapter.settings.viewport_height,
                },
                user_agent=self._adapter.settings.user_agent,
            )
            return await self._context.new_page()
        except BaseException:
            await self.close()
            raise

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Release the context, the browser connection and the driver."""
        if self._context is not None:
            try:
                await self._context.close()
            except Exception as e:
                logger.warning("Error closing browser context", error=str(e))
            self._context = None

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.warning("Error closing browser", error=str(e))
            self._browser = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning("Error stopping Playwright", error=str(e))
            self._playwright = None

    @property
    def is_open(self) -> bool:
        return self._playwright is not None


class PlaywrightAdapter:
    """Adapter for scanning pages with Playwright and axe-core."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the Playwright adapter."""
        self.settings = settings or get_settings()

    def availability(self) -> Tuple[bool, Optional[str]]:
        """Report whether scanning can run, with a reason when it cannot."""
        if self.settings.browserless_api_key:
            return True, None
        if self.settings.allow_local_browser:
            return True, None
        return False, (
            "BROWSERLESS_API_KEY is not configured. "
            "Accessibility audits require a Browserless.io account."
        )

    def is_available(self) -> bool:
        available, _ = self.availability()
        return available

    @property
    def uses_remote_browser(self) -> bool:
        return bool(self.settings.browserless_api_key)

    def _endpoint(self) -> str:
        endpoint = self.settings.browserless_endpoint
        separator = '&' if '?' in endpoint else '?'
        return f"{endpoint}{separator}token={self.settings.browserless_api_key}"

    async def _connect_once(self, chromium: BrowserType) -> Browser:
        if self.uses_remote_browser:
            return await chromium.connect_over_cdp(self._endpoint())
        return await chromium.launch(
            headless=True,
            args=['--no-sandbox', '--disable-setuid-sandbox'],
        )

    async def connect(self, chromium: BrowserType) -> Browser:
        """Connect to Browserless over CDP, or launch a local browser."""
        attempts = max(1, self.settings.connect_attempts)
        browser: Optional[Browser] = None

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
            retry=retry_if_exception_type(PlaywrightError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying browser connection",
                        attempt=attempt.retry_state.attempt_number,
                        remote=self.uses_remote_browser,
                    )
                browser = await self._connect_once(chromium)

        assert browser is not None
        return browser

    def open_session(self) -> BrowserSession:
        """Open a fresh, isolated browsing session."""
        return BrowserSession(self)

    async def scan_page(self, url: str, config: AuditConfig) -> PageResult:
        """Scan a single URL and return its normalized axe-core result.

        Raises on navigation failure, timeout or rule-engine failure; the
        caller decides how a failed page is recorded.
        """
        timeout = config.timeout or self.settings.page_timeout_ms
        screenshot: Optional[str] = None

        async with self.open_session() as page:
            try:
                await page.goto(url, timeout=timeout, wait_until='domcontentloaded')
            except PlaywrightTimeoutError:
                raise
            except PlaywrightError as e:
                raise PageLoadError(f"Failed to load {url}: {e.message}") from e

            # Give client-side rendering a moment to settle
            await page.wait_for_timeout(self.settings.settle_delay_ms)

            raw = await self._run_axe(page)

            if config.include_screenshots:
                screenshot = await self._capture_screenshot(page, url)

        result = self.normalize_results(raw, url)
        result.screenshot = screenshot
        return result

    async def _inject_axe(self, page: Page) -> None:
        script_path = self.settings.axe_script_path
        if script_path is not None:
            content = await anyio.Path(script_path).read_text(encoding='utf-8')
            await page.add_script_tag(content=content)
        else:
            await page.add_script_tag(url=self.settings.axe_script_url)

    async def _run_axe(self, page: Page) -> Any:
        """Inject axe-core into the page and run the tagged rule pass."""
        try:
            await self._inject_axe(page)
            await page.wait_for_function(
                _AXE_READY,
                timeout=self.settings.axe_ready_timeout_ms,
            )
        except PlaywrightError as e:
            raise RuleEngineError(f"axe-core did not load: {e.message}") from e

        try:
            return await page.evaluate(_AXE_RUN, [list(RULE_TAGS), list(RESULT_TYPES)])
        except PlaywrightError as e:
            raise RuleEngineError(f"axe-core run failed: {e.message}") from e

    async def _capture_screenshot(self, page: Page, url: str) -> Optional[str]:
        try:
            png = await page.screenshot(full_page=True)
        except PlaywrightError as e:
            logger.warning("Screenshot capture failed", url=url, error=e.message)
            return None
        return base64.b64encode(png).decode('ascii')

    def normalize_results(self, raw: Any, url: str) -> PageResult:
        """Validate an axe-core payload and convert it to a PageResult."""
        if not isinstance(raw, Mapping):
            raise RuleEngineError(
                f"Unexpected axe-core result type: {type(raw).__name__}"
            )

        violations = []
        for item in _as_list(raw.get('violations')):
            violation = self._create_violation(item, url)
            if violation:
                violations.append(violation)

        result = PageResult(
            url=url,
            violations=violations,
            passes=self._create_rule_results(raw.get('passes'), 'passes', url),
            incomplete=self._create_rule_results(raw.get('incomplete'), 'incomplete', url),
            inapplicable=self._create_rule_results(raw.get('inapplicable'), 'inapplicable', url),
        )

        logger.debug(
            "Normalized axe-core results",
            url=url,
            violations=len(result.violations),
            passes=len(result.passes),
            incomplete=len(result.incomplete),
            inapplicable=len(result.inapplicable),
        )

        return result

    def _create_violation(self, item: Any, url: str) -> Optional[Violation]:
        """Create a Violation from one axe-core violation entry."""
        if not isinstance(item, Mapping) or not _is_rule_id(item.get('id')):
            logger.warning("Dropping malformed axe violation", url=url, item=repr(item)[:200])
            return None

        nodes = [
            ViolationNode(
                html=_as_text(node.get('html')),
                target=_flatten_target(node.get('target')),
                failure_summary=_as_text(node.get('failureSummary')),
            )
            for node in _as_list(item.get('nodes'))
            if isinstance(node, Mapping)
        ]

        return Violation(
            id=item['id'],
            impact=self._normalize_impact(item.get('impact')),
            description=_as_text(item.get('description')),
            help=_as_text(item.get('help')),
            help_url=_as_text(item.get('helpUrl')),
            tags=[str(tag) for tag in _as_list(item.get('tags'))],
            nodes=nodes,
        )

    def _create_rule_results(self, items: Any, kind: str, url: str) -> List[RuleResult]:
        results = []
        for item in _as_list(items):
            if not isinstance(item, Mapping) or not _is_rule_id(item.get('id')):
                logger.warning("Dropping malformed axe rule result", url=url, kind=kind)
                continue
            results.append(RuleResult(id=item['id'], description=_as_text(item.get('description'))))
        return results

    def _normalize_impact(self, impact: Any) -> str:
        """Normalize axe-core impact values; unknown values become moderate."""
        if isinstance(impact, str) and impact.lower() in IMPACT_ORDER:
            return impact.lower()
        return DEFAULT_IMPACT

    async def health_check(self) -> bool:
        """Check that a browser session can be opened and closed."""
        if not self.is_available():
            return False
        try:
            async with self.open_session() as page:
                await page.goto('about:blank')
            return True
        except Exception as e:
            logger.error("Browser health check failed", error=str(e))
            return False


def _as_list(value: Any) -> list:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ('' if value is None else str(value))


def _is_rule_id(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _flatten_target(target: Any) -> List[str]:
    """Selectors as strings; iframe/shadow DOM chains are joined with ' >>> '."""
    if isinstance(target, str):
        return [target]
    selectors = []
    for entry in _as_list(target):
        if isinstance(entry, (list, tuple)):
            selectors.append(' >>> '.join(str(part) for part in entry))
        else:
            selectors.append(str(entry))
    return selectors
