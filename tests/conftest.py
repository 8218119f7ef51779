"""Shared fixtures for a11y-audit tests."""

from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from a11y_audit.config import Settings, reset_settings
from a11y_audit.models.audits import AuditConfig
from a11y_audit.models.pages import PageResult, RuleResult, Violation, ViolationNode


def make_violation(rule_id: str, impact: str = 'serious', nodes: int = 1) -> Violation:
    return Violation(
        id=rule_id,
        impact=impact,
        description=f"{rule_id} description",
        help=f"Fix {rule_id}",
        help_url=f"https://dequeuniversity.com/rules/axe/4.8/{rule_id}",
        tags=['wcag2a'],
        nodes=[ViolationNode(html=f'<div id="n{i}"></div>', target=[f'#n{i}']) for i in range(nodes)],
    )


def make_page(
    url: str,
    violations: Sequence[Violation] = (),
    passes: Sequence[str] = ('document-title',),
    incomplete: Sequence[str] = (),
) -> PageResult:
    return PageResult(
        url=url,
        violations=list(violations),
        passes=[RuleResult(id=rule_id, description=rule_id) for rule_id in passes],
        incomplete=[RuleResult(id=rule_id, description=rule_id) for rule_id in incomplete],
    )


class FakeAdapter:
    """Stands in for the Playwright adapter; maps URLs to results or errors."""

    def __init__(
        self,
        pages: Optional[Dict[str, Union[PageResult, Exception]]] = None,
        available: bool = True,
    ):
        self.pages = pages or {}
        self.available = available
        self.calls: List[Tuple[str, AuditConfig]] = []

    def availability(self) -> Tuple[bool, Optional[str]]:
        if self.available:
            return True, None
        return False, "BROWSERLESS_API_KEY is not configured."

    def is_available(self) -> bool:
        return self.available

    async def scan_page(self, url: str, config: AuditConfig) -> PageResult:
        self.calls.append((url, config))
        outcome = self.pages.get(url)
        if outcome is None:
            return make_page(url)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def scanned_urls(self) -> List[str]:
        return [url for url, _ in self.calls]


@pytest.fixture(autouse=True)
def clean_settings():
    """Each test starts from a fresh settings singleton."""
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, browserless_api_key="test-key")
