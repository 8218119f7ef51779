"""Per-page scan result models for a11y-audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Optional

from dataclasses_json import DataClassJsonMixin, LetterCase, config

# Type aliases for better type safety
Impact = Literal['critical', 'serious', 'moderate', 'minor']

# Lower rank sorts first
IMPACT_ORDER = {
    'critical': 0,
    'serious': 1,
    'moderate': 2,
    'minor': 3,
}

CAMEL_CASE = config(letter_case=LetterCase.CAMEL)["dataclasses_json"]


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string with a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(slots=True)
class ViolationNode(DataClassJsonMixin):
    """One offending element reported for a violation."""

    dataclass_json_config = CAMEL_CASE

    html: str
    target: List[str] = field(default_factory=list)
    failure_summary: str = ""


@dataclass(slots=True)
class Violation(DataClassJsonMixin):
    """A single rule failure reported by axe-core for one page."""

    dataclass_json_config = CAMEL_CASE

    id: str
    impact: Impact
    description: str = ""
    help: str = ""
    help_url: str = ""
    tags: List[str] = field(default_factory=list)
    nodes: List[ViolationNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate violation data after initialization."""
        if not self.id:
            raise ValueError("Violation rule ID cannot be empty")
        if self.impact not in IMPACT_ORDER:
            raise ValueError(f"Unknown violation impact: {self.impact}")

    @property
    def node_count(self) -> int:
        """Number of offending elements."""
        return len(self.nodes)

    @property
    def severity_rank(self) -> int:
        return IMPACT_ORDER[self.impact]


@dataclass(slots=True)
class RuleResult(DataClassJsonMixin):
    """A passing, incomplete or inapplicable rule."""

    dataclass_json_config = CAMEL_CASE

    id: str
    description: str = ""


@dataclass(slots=True)
class PageResult(DataClassJsonMixin):
    """Structured axe-core output for one scanned URL."""

    dataclass_json_config = CAMEL_CASE

    url: str
    timestamp: str = field(default_factory=utc_timestamp)
    violations: List[Violation] = field(default_factory=list)
    passes: List[RuleResult] = field(default_factory=list)
    incomplete: List[RuleResult] = field(default_factory=list)
    inapplicable: List[RuleResult] = field(default_factory=list)
    screenshot: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate page result data after initialization."""
        if not self.url:
            raise ValueError("Page result URL cannot be empty")

    @property
    def is_empty(self) -> bool:
        """True when the engine reported neither violations nor passes.

        A page that actually rendered always passes at least one rule, so an
        empty result means the page never loaded or was blocked.
        """
        return not self.violations and not self.passes

    @property
    def violation_node_count(self) -> int:
        return sum(v.node_count for v in self.violations)
