"""Shared helpers for the deliverability checks."""

import functools

from inboxaudit.logger import logger
from inboxaudit.models import CheckResult

SPF_CHECK = "SPF Record"
DMARC_CHECK = "DMARC Record"
DKIM_CHECK = "DKIM Records"
MX_CHECK = "Mail Server (MX)"
BLACKLIST_CHECK = "Blacklist Check"


def error_result(name: str, summary: str, exc: BaseException) -> CheckResult:
    return CheckResult(name=name, status="error", summary=summary, detail=str(exc) or type(exc).__name__)


def guarded(name: str):
    """Turn any exception escaping a check coroutine into an ``error`` result."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> CheckResult:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.exception(f"{name} check crashed")
                return error_result(name, f"Could not complete {name} check", e)
        return wrapper
    return decorator
