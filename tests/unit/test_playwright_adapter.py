"""Unit tests for the Playwright adapter."""

import base64

import pytest
from playwright.async_api import Error as PlaywrightError

from a11y_audit.adapters import playwright_adapter
from a11y_audit.adapters.playwright_adapter import PlaywrightAdapter
from a11y_audit.config import Settings
from a11y_audit.exceptions import PageLoadError, RuleEngineError
from a11y_audit.models.audits import AuditConfig

AXE_PAYLOAD = {
    "violations": [
        {
            "id": "image-alt",
            "impact": "critical",
            "description": "Ensures <img> elements have alternate text",
            "help": "Images must have alternate text",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
            "tags": ["wcag2a", "section508"],
            "nodes": [
                {"html": "<img src=a.png>", "target": ["img"], "failureSummary": "Fix any of the following"},
                {"html": "<img src=b.png>", "target": [["iframe#x", "img"]]},
            ],
        },
        {"id": "region", "impact": None, "nodes": [{"html": "<div>"}]},
        {"impact": "serious"},
        "garbage",
    ],
    "passes": [{"id": "document-title", "description": "Title"}, {"nope": 1}],
    "incomplete": [{"id": "color-contrast"}],
    "inapplicable": [],
}


def _settings(**kwargs) -> Settings:
    kwargs.setdefault("browserless_api_key", "test-key")
    kwargs.setdefault("settle_delay_ms", 0)
    kwargs.setdefault("connect_attempts", 1)
    return Settings(_env_file=None, **kwargs)


class FakePage:
    def __init__(self, goto_error=None, payload=None):
        self.goto_error = goto_error
        self.payload = AXE_PAYLOAD if payload is None else payload
        self.scripts = []

    async def goto(self, url, timeout=None, wait_until=None):
        self.goto_args = (url, timeout, wait_until)
        if self.goto_error:
            raise self.goto_error

    async def wait_for_timeout(self, ms):
        pass

    async def add_script_tag(self, url=None, content=None):
        self.scripts.append(url or content)

    async def wait_for_function(self, expression, timeout=None):
        pass

    async def evaluate(self, expression, arg=None):
        self.evaluate_arg = arg
        return self.payload

    async def screenshot(self, full_page=False):
        return b"png-bytes"


class FakeContext:
    def __init__(self, page):
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.context = FakeContext(page)
        self.closed = False

    async def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        return self.context

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser=None, connect_error=None):
        self.browser = browser
        self.connect_error = connect_error
        self.endpoints = []

    async def connect_over_cdp(self, endpoint):
        self.endpoints.append(endpoint)
        if self.connect_error:
            raise self.connect_error
        return self.browser

    async def launch(self, headless=True, args=None):
        return self.browser


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stopped = False

    async def stop(self):
        self.stopped = True


class FakeAsyncPlaywright:
    def __init__(self, playwright):
        self.playwright = playwright

    async def start(self):
        return self.playwright


@pytest.fixture
def fake_browser(monkeypatch):
    """Patch async_playwright and return a builder for the fake driver."""

    def build(page=None, connect_error=None):
        page = page or FakePage()
        browser = FakeBrowser(page)
        playwright = FakePlaywright(FakeChromium(browser, connect_error))
        monkeypatch.setattr(playwright_adapter, "async_playwright", lambda: FakeAsyncPlaywright(playwright))
        return playwright, browser

    return build


class TestAvailability:
    """Test cases for adapter availability."""

    def test_missing_key_is_unavailable(self):
        adapter = PlaywrightAdapter(_settings(browserless_api_key=None))

        available, reason = adapter.availability()

        assert available is False
        assert "BROWSERLESS_API_KEY" in reason
        assert adapter.is_available() is False

    def test_key_is_available(self):
        adapter = PlaywrightAdapter(_settings())

        assert adapter.availability() == (True, None)
        assert adapter.uses_remote_browser is True

    def test_local_browser_opt_in(self):
        adapter = PlaywrightAdapter(_settings(browserless_api_key=None, allow_local_browser=True))

        assert adapter.is_available() is True
        assert adapter.uses_remote_browser is False

    def test_endpoint_carries_token(self):
        adapter = PlaywrightAdapter(_settings(browserless_endpoint="wss://browser.example"))

        assert adapter._endpoint() == "wss://browser.example?token=test-key"

        adapter = PlaywrightAdapter(_settings(browserless_endpoint="wss://browser.example?stealth=true"))

        assert adapter._endpoint() == "wss://browser.example?stealth=true&token=test-key"


class TestNormalizeResults:
    """Test cases for axe payload normalization."""

    def test_normalizes_payload(self):
        result = PlaywrightAdapter(_settings()).normalize_results(AXE_PAYLOAD, "https://a.com")

        assert result.url == "https://a.com"
        assert [v.id for v in result.violations] == ["image-alt", "region"]

        image_alt = result.violations[0]
        assert image_alt.impact == 'critical'
        assert image_alt.help_url == "https://dequeuniversity.com/rules/axe/4.8/image-alt"
        assert image_alt.nodes[0].failure_summary == "Fix any of the following"
        assert image_alt.nodes[1].target == ["iframe#x >>> img"]
        assert image_alt.nodes[1].failure_summary == ""

        assert [p.id for p in result.passes] == ["document-title"]
        assert [i.id for i in result.incomplete] == ["color-contrast"]
        assert result.inapplicable == []

    def test_unknown_impact_becomes_moderate(self):
        result = PlaywrightAdapter(_settings()).normalize_results(AXE_PAYLOAD, "https://a.com")

        assert result.violations[1].impact == 'moderate'

    def test_missing_sections_are_empty(self):
        result = PlaywrightAdapter(_settings()).normalize_results({}, "https://a.com")

        assert result.violations == []
        assert result.is_empty is True

    @pytest.mark.parametrize("raw", [None, [], "results"])
    def test_non_mapping_payload_raises(self, raw):
        with pytest.raises(RuleEngineError):
            PlaywrightAdapter(_settings()).normalize_results(raw, "https://a.com")


class TestScanPage:
    """Test cases for scanning a page through a browser session."""

    @pytest.mark.asyncio
    async def test_scan_page_success(self, fake_browser):
        playwright, browser = fake_browser()
        adapter = PlaywrightAdapter(_settings())

        result = await adapter.scan_page("https://a.com", AuditConfig(timeout=5000))

        assert [v.id for v in result.violations] == ["image-alt", "region"]
        assert result.screenshot is None
        assert browser.context.page.goto_args == ("https://a.com", 5000, 'domcontentloaded')
        assert browser.context.page.evaluate_arg[0] == list(playwright_adapter.RULE_TAGS)
        assert playwright.chromium.endpoints == ["wss://chrome.browserless.io?token=test-key"]
        assert browser.context_kwargs["viewport"] == {"width": 1280, "height": 720}
        assert browser.context.closed and browser.closed and playwright.stopped

    @pytest.mark.asyncio
    async def test_scan_page_screenshot(self, fake_browser):
        fake_browser()
        adapter = PlaywrightAdapter(_settings())

        result = await adapter.scan_page("https://a.com", AuditConfig(include_screenshots=True))

        assert base64.b64decode(result.screenshot) == b"png-bytes"

    @pytest.mark.asyncio
    async def test_session_closed_on_navigation_failure(self, fake_browser):
        playwright, browser = fake_browser(FakePage(goto_error=PlaywrightError("net::ERR_CONNECTION_REFUSED")))
        adapter = PlaywrightAdapter(_settings())

        with pytest.raises(PageLoadError, match="ERR_CONNECTION_REFUSED"):
            await adapter.scan_page("https://a.com", AuditConfig())

        assert browser.context.closed and browser.closed and playwright.stopped

    @pytest.mark.asyncio
    async def test_session_closed_on_bad_payload(self, fake_browser):
        playwright, browser = fake_browser(FakePage(payload="not a dict"))
        adapter = PlaywrightAdapter(_settings())

        with pytest.raises(RuleEngineError):
            await adapter.scan_page("https://a.com", AuditConfig())

        assert browser.context.closed and browser.closed and playwright.stopped

    @pytest.mark.asyncio
    async def test_driver_stopped_when_connect_fails(self, fake_browser):
        playwright, browser = fake_browser(connect_error=PlaywrightError("403 Forbidden"))
        adapter = PlaywrightAdapter(_settings())

        with pytest.raises(PlaywrightError):
            await adapter.scan_page("https://a.com", AuditConfig())

        assert playwright.stopped
        assert browser.closed is False

    @pytest.mark.asyncio
    async def test_health_check_unavailable(self):
        adapter = PlaywrightAdapter(_settings(browserless_api_key=None))

        assert await adapter.health_check() is False
