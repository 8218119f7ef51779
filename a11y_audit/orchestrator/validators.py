"""URL validation for audit input."""

import re
from fnmatch import fnmatchcase
from typing import Iterable, List
from urllib.parse import urlparse

from ..logging import get_logger

logger = get_logger(__name__)

_SEPARATORS = re.compile(r"[\n,]+")
_ALLOWED_SCHEMES = ('http', 'https')


def is_valid_url(url: str) -> bool:
    """Check that a string is an absolute http or https URL."""
    if not isinstance(url, str):
        return False

    candidate = url.strip()
    if not candidate:
        return False

    try:
        parsed = urlparse(candidate)
        # Raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except ValueError:
        return False

    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        return False
    if not parsed.hostname:
        return False
    if any(ch.isspace() for ch in parsed.netloc):
        return False

    return True


def parse_urls(text: str) -> List[str]:
    """Parse URLs from user input (newline or comma separated).

    Entries are trimmed and invalid ones are dropped silently; order is kept.
    """
    entries = (entry.strip() for entry in _SEPARATORS.split(text or ""))
    return [entry for entry in entries if entry and is_valid_url(entry)]


def filter_excluded(urls: Iterable[str], patterns: Iterable[str]) -> List[str]:
    """Drop URLs matching any glob-style exclude pattern."""
    patterns = [p for p in patterns if p]
    if not patterns:
        return list(urls)

    kept = []
    for url in urls:
        matched = next((p for p in patterns if fnmatchcase(url, p)), None)
        if matched:
            logger.info("URL excluded from scan", url=url, pattern=matched)
            continue
        kept.append(url)
    return kept
