"""Email authentication records published in DNS: SPF and DMARC."""

import re
from typing import List, Optional

from inboxaudit.checks.base import DMARC_CHECK, SPF_CHECK, guarded
from inboxaudit.models import CheckResult
from inboxaudit.resolver import DNSLookupError, DNSResolver, RecordNotFound, get_resolver

SPF_PREFIX = "v=spf1"
DMARC_PREFIX = "v=DMARC1"

# Mechanisms and modifiers that cost a DNS lookup when a receiver evaluates SPF.
SPF_LOOKUP_TERMS = ("include:", "a:", "mx:", "ptr:", "redirect=")
SPF_MAX_LOOKUPS = 10

_DMARC_POLICY_RE = re.compile(r";\s*p=(\w+)")


def _spf_qualifier_note(spf: str) -> str:
    terms = spf.lower().split()
    if "-all" in terms:
        return "Hardfail (-all) policy is set — strictest protection."
    if "~all" in terms:
        return "Softfail (~all) policy is set — good baseline."
    if "?all" in terms:
        return "Neutral (?all) policy is set — unauthorized senders are not penalised."
    return "No all mechanism is set, so unlisted senders get a neutral result."


def evaluate_spf(records: List[str]) -> CheckResult:
    """Judge the TXT records published at a domain's apex."""
    spf_records = [r for r in records if r.startswith(SPF_PREFIX)]

    if not spf_records:
        return CheckResult(
            name=SPF_CHECK,
            status="fail",
            summary="No SPF record found",
            detail=(
                "Without SPF, receiving servers cannot verify which mail servers are authorized to send "
                "email for your domain. This significantly increases the chance of your emails being "
                "flagged as spam."
            ),
            fix="Add a TXT record to your DNS: v=spf1 include:_spf.google.com ~all (adjust for your email provider).",
        )

    if len(spf_records) > 1:
        return CheckResult(
            name=SPF_CHECK,
            status="warn",
            summary="Multiple SPF records found",
            detail=(
                f"Found {len(spf_records)} SPF records. Having more than one SPF record is invalid per "
                "RFC 7208 and may cause authentication failures."
            ),
            fix="Merge all SPF records into a single TXT record.",
            raw=tuple(spf_records),
        )

    spf = spf_records[0]
    terms = spf.lower().split()

    if "+all" in terms or "all" in terms:
        return CheckResult(
            name=SPF_CHECK,
            status="warn",
            summary="SPF record is too permissive (+all)",
            detail=(
                "Your SPF record ends with an unqualified all mechanism, which means ANY server is "
                "authorized to send as your domain. This defeats the purpose of SPF."
            ),
            fix="Change +all to ~all (softfail) or -all (hardfail).",
            raw=(spf,),
        )

    lookups = sum(spf.count(term) for term in SPF_LOOKUP_TERMS)
    if lookups > SPF_MAX_LOOKUPS:
        return CheckResult(
            name=SPF_CHECK,
            status="warn",
            summary=f"SPF record has too many lookups ({lookups}/{SPF_MAX_LOOKUPS})",
            detail=(
                f"SPF allows a maximum of {SPF_MAX_LOOKUPS} DNS lookups. Exceeding this causes SPF to "
                "fail silently, which hurts deliverability."
            ),
            fix="Flatten your SPF record by replacing include: directives with direct IP ranges where possible.",
            raw=(spf,),
        )

    return CheckResult(
        name=SPF_CHECK,
        status="pass",
        summary="SPF record configured correctly",
        detail=(
            f"Found valid SPF record with {lookups} DNS lookups (max {SPF_MAX_LOOKUPS}). "
            f"{_spf_qualifier_note(spf)}"
        ),
        raw=(spf,),
    )


def parse_dmarc_policy(record: str) -> str:
    match = _DMARC_POLICY_RE.search(record)
    return match.group(1) if match else "none"


def evaluate_dmarc(records: List[str]) -> CheckResult:
    """Judge the TXT records published at ``_dmarc.<domain>``."""
    dmarc_records = [r for r in records if r.startswith(DMARC_PREFIX)]

    if not dmarc_records:
        return CheckResult(
            name=DMARC_CHECK,
            status="fail",
            summary="No DMARC record found",
            detail=(
                "DMARC tells receiving servers what to do when SPF or DKIM checks fail. Without it, your "
                "domain is vulnerable to spoofing and your deliverability suffers. Google and Yahoo now "
                "require DMARC for bulk senders."
            ),
            fix="Add a TXT record at _dmarc.yourdomain.com: v=DMARC1; p=quarantine; rua=mailto:dmarc@yourdomain.com",
        )

    dmarc = dmarc_records[0]
    policy = parse_dmarc_policy(dmarc)
    policy_key = policy.lower()
    has_rua = "rua=" in dmarc

    if policy_key == "none":
        reporting = (
            " Reporting (rua) is configured — good." if has_rua else " No reporting address (rua) configured."
        )
        return CheckResult(
            name=DMARC_CHECK,
            status="warn",
            summary='DMARC policy set to "none" (monitoring only)',
            detail=(
                'Your DMARC record exists but the policy is set to "none", which means failed emails are '
                "still delivered. This is fine for initial monitoring, but won't protect your domain "
                f"reputation long-term.{reporting}"
            ),
            fix="Once you've confirmed legitimate mail is passing, upgrade to p=quarantine or p=reject.",
            raw=(dmarc,),
        )

    if policy_key == "quarantine":
        reporting = "Reporting is active." if has_rua else "Consider adding a rua= address for monitoring."
        return CheckResult(
            name=DMARC_CHECK,
            status="pass",
            summary="DMARC set to quarantine — good protection",
            detail=f"Emails failing authentication will be sent to spam. {reporting}",
            raw=(dmarc,),
        )

    if policy_key == "reject":
        reporting = "Reporting is active." if has_rua else "Consider adding a rua= address to monitor rejected mail."
        return CheckResult(
            name=DMARC_CHECK,
            status="pass",
            summary="DMARC set to reject — strongest protection",
            detail=f"Emails failing authentication will be rejected entirely. This is the gold standard. {reporting}",
            raw=(dmarc,),
        )

    return CheckResult(
        name=DMARC_CHECK,
        status="pass",
        summary=f"DMARC record found with policy: {policy}",
        detail=dmarc,
        raw=(dmarc,),
    )


@guarded(SPF_CHECK)
async def check_spf(domain: str, resolver: Optional[DNSResolver] = None) -> CheckResult:
    resolver = resolver or get_resolver()
    try:
        records = await resolver.txt(domain)
    except RecordNotFound:
        return CheckResult(
            name=SPF_CHECK,
            status="fail",
            summary="No SPF record found",
            detail=(
                "Could not find any TXT records for this domain. This means email authentication is "
                "completely missing."
            ),
            fix="Add a TXT record with your SPF policy. Consult your email provider for the correct include: directive.",
        )
    except DNSLookupError as e:
        return CheckResult(name=SPF_CHECK, status="error", summary="Could not check SPF", detail=str(e))
    return evaluate_spf(records)


@guarded(DMARC_CHECK)
async def check_dmarc(domain: str, resolver: Optional[DNSResolver] = None) -> CheckResult:
    resolver = resolver or get_resolver()
    try:
        records = await resolver.txt(f"_dmarc.{domain}")
    except RecordNotFound:
        return CheckResult(
            name=DMARC_CHECK,
            status="fail",
            summary="No DMARC record found",
            detail=(
                "DMARC is now required by Google and Yahoo for bulk senders (5,000+ emails/day). Even "
                "below that threshold, missing DMARC significantly hurts inbox placement."
            ),
            fix="Add a TXT record at _dmarc.yourdomain.com with at minimum: v=DMARC1; p=none; rua=mailto:dmarc@yourdomain.com",
        )
    except DNSLookupError as e:
        return CheckResult(name=DMARC_CHECK, status="error", summary="Could not check DMARC", detail=str(e))
    return evaluate_dmarc(records)
