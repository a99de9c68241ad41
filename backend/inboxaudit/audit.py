"""
Audit orchestrator.

Runs the five deliverability checks for a domain concurrently and scores them.
"""
import asyncio
import time
from typing import Optional

from inboxaudit.checks.base import BLACKLIST_CHECK, DKIM_CHECK, DMARC_CHECK, MX_CHECK, SPF_CHECK, error_result
from inboxaudit.checks.blacklists import check_blacklists
from inboxaudit.checks.dkim import check_dkim
from inboxaudit.checks.dns_records import check_dmarc, check_spf
from inboxaudit.checks.mx import check_mx
from inboxaudit.domain import normalize_domain
from inboxaudit.logger import logger
from inboxaudit.models import AuditChecks, AuditResult, CheckResult
from inboxaudit.resolver import DNSResolver, get_resolver
from inboxaudit.scoring import compute_score

CHECKS = (
    (SPF_CHECK, check_spf),
    (DMARC_CHECK, check_dmarc),
    (DKIM_CHECK, check_dkim),
    (MX_CHECK, check_mx),
    (BLACKLIST_CHECK, check_blacklists),
)


def _collect(name: str, result) -> CheckResult:
    if isinstance(result, CheckResult):
        return result
    logger.error(f"{name} check raised {type(result).__name__}: {result}")
    return error_result(name, f"Could not complete {name} check", result)


async def run_audit(domain: str, resolver: Optional[DNSResolver] = None) -> AuditResult:
    """
    Audit the email deliverability setup of a domain.

    Args:
        domain: Domain name; trimmed and lowercased before use
        resolver: DNS adapter, defaults to the shared one built from settings

    Returns:
        AuditResult with all five check results and the composite score

    Raises:
        InvalidDomainError: if ``domain`` is not a plausible hostname
    """
    domain = normalize_domain(domain)
    resolver = resolver or get_resolver()

    start = time.time()
    logger.info(f"Starting audit for {domain}")

    results = await asyncio.gather(
        *(check(domain, resolver) for _, check in CHECKS),
        return_exceptions=True,
    )
    spf, dmarc, dkim, mx, blacklists = (_collect(name, r) for (name, _), r in zip(CHECKS, results))

    checks = AuditChecks(spf=spf, dmarc=dmarc, dkim=dkim, mx=mx, blacklists=blacklists)
    score = compute_score(checks.results())

    elapsed = round(time.time() - start, 2)
    statuses = ", ".join(f"{c.name}={c.status}" for c in checks.results())
    logger.info(f"Audit for {domain} finished in {elapsed}s: score {score} ({statuses})")

    return AuditResult(domain=domain, score=score, checks=checks)
