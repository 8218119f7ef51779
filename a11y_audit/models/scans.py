"""Scan outcome models for a11y-audit.

Each scanned URL produces exactly one outcome, either ``ScanOk`` carrying the
page result or ``ScanErr`` carrying the reason the page could not be audited.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Union

from dataclasses_json import DataClassJsonMixin

from .pages import CAMEL_CASE, PageResult

# Type aliases
ScanErrorKind = Literal['timeout', 'navigation', 'engine', 'empty', 'error']


@dataclass(slots=True, frozen=True)
class ScanError(DataClassJsonMixin):
    """Why a page scan failed."""

    dataclass_json_config = CAMEL_CASE

    kind: ScanErrorKind
    message: str


@dataclass(slots=True, frozen=True)
class ScanOk:
    """A page that was scanned successfully."""

    url: str
    result: PageResult

    @property
    def ok(self) -> bool:
        return True


@dataclass(slots=True, frozen=True)
class ScanErr:
    """A page that could not be scanned."""

    url: str
    error: ScanError

    @property
    def ok(self) -> bool:
        return False


ScanOutcome = Union[ScanOk, ScanErr]


@dataclass(slots=True)
class ScanBatch:
    """Ordered outcomes of one scanning pass, one per attempted URL."""

    outcomes: List[ScanOutcome] = field(default_factory=list)

    def add(self, outcome: ScanOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def results(self) -> List[PageResult]:
        """Page results of the successful scans, in scan order."""
        return [o.result for o in self.outcomes if isinstance(o, ScanOk)]

    @property
    def failed_scans(self) -> List[str]:
        """URLs that could not be scanned, in scan order."""
        return [o.url for o in self.outcomes if isinstance(o, ScanErr)]

    @property
    def errors(self) -> List[ScanErr]:
        return [o for o in self.outcomes if isinstance(o, ScanErr)]

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def successful_scans(self) -> int:
        return len(self.outcomes) - len(self.failed_scans)
