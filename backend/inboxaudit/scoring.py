"""Composite deliverability score."""

import math
from typing import Iterable

from inboxaudit.checks.base import BLACKLIST_CHECK, DKIM_CHECK, DMARC_CHECK, MX_CHECK, SPF_CHECK
from inboxaudit.models import CheckResult

CHECK_WEIGHTS = {
    SPF_CHECK: 25,
    DMARC_CHECK: 30,
    DKIM_CHECK: 20,
    MX_CHECK: 10,
    BLACKLIST_CHECK: 15,
}
DEFAULT_WEIGHT = 20

# fail and error earn nothing
STATUS_CREDIT = {
    "pass": 1.0,
    "warn": 0.5,
}


def check_points(check: CheckResult) -> float:
    weight = CHECK_WEIGHTS.get(check.name, DEFAULT_WEIGHT)
    return weight * STATUS_CREDIT.get(check.status, 0.0)


def compute_score(checks: Iterable[CheckResult]) -> int:
    """Sum weighted credit over ``checks``, rounding halves up."""
    total = sum(check_points(c) for c in checks)
    return int(math.floor(total + 0.5))
