"""Exception types raised by the audit pipeline."""


class AuditError(Exception):
    """Base class for accessibility audit errors."""


class ScanningUnavailableError(AuditError):
    """The browser service needed for scanning is not configured."""


class InvalidAuditInputError(AuditError, ValueError):
    """The audit request contained nothing that can be scanned."""


class PageLoadError(AuditError):
    """A page could not be navigated to."""


class RuleEngineError(AuditError):
    """axe-core could not be loaded or returned an unusable payload."""
