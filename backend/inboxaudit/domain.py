"""Domain name validation and normalization."""

import re

MAX_DOMAIN_LENGTH = 253

_LABEL = r"[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?"
_DOMAIN_RE = re.compile(rf"^{_LABEL}(?:\.{_LABEL})*\.[a-z]{{2,63}}$")


class InvalidDomainError(ValueError):
    """Raised for input that is not a plausible hostname."""


def normalize_domain(value) -> str:
    """Trim and lowercase ``value``, then check it looks like ``label(.label)*.tld``."""
    if not isinstance(value, str):
        raise InvalidDomainError("Invalid domain format")
    domain = value.strip().lower()
    if len(domain) > MAX_DOMAIN_LENGTH or not _DOMAIN_RE.match(domain):
        raise InvalidDomainError("Invalid domain format")
    return domain
