"""DKIM key discovery by probing commonly used selectors."""

import asyncio
from typing import Optional

from inboxaudit.checks.base import DKIM_CHECK, guarded
from inboxaudit.logger import logger
from inboxaudit.models import CheckResult, SelectorMatch
from inboxaudit.resolver import DNSLookupError, DNSResolver, get_resolver

# Selectors are not discoverable, so only well-known ones can be tried.
DKIM_SELECTORS = (
    "google", "default", "selector1", "selector2", "k1", "k2",
    "mail", "dkim", "s1", "s2", "smtp", "mandrill", "mailjet",
    "amazonses", "cm", "zendesk1", "zendesk2", "everlytickey1", "everlytickey2",
    "sig1", "mxvault",
)

PREVIEW_LENGTH = 120


async def probe_selector(domain: str, selector: str, resolver: DNSResolver) -> Optional[SelectorMatch]:
    """Return a match if ``<selector>._domainkey.<domain>`` publishes a DKIM key."""
    try:
        records = await resolver.txt(f"{selector}._domainkey.{domain}")
    except DNSLookupError:
        return None
    except Exception as e:
        logger.debug(f"DKIM selector {selector} for {domain} skipped: {type(e).__name__}: {e}")
        return None
    if not any("v=DKIM1" in r or "p=" in r for r in records):
        return None
    return SelectorMatch(selector=selector, record=records[0][:PREVIEW_LENGTH] + "...")


@guarded(DKIM_CHECK)
async def check_dkim(domain: str, resolver: Optional[DNSResolver] = None) -> CheckResult:
    resolver = resolver or get_resolver()
    probes = await asyncio.gather(*(probe_selector(domain, s, resolver) for s in DKIM_SELECTORS))
    found = [m for m in probes if m is not None]

    if not found:
        tried = ", ".join(DKIM_SELECTORS)
        return CheckResult(
            name=DKIM_CHECK,
            status="warn",
            summary="No DKIM records found for common selectors",
            detail=(
                f"DKIM signing could not be verified using common selectors ({tried}). DKIM may still be "
                "configured with a custom selector. However, if DKIM is truly missing, your emails lack "
                "cryptographic authentication."
            ),
            fix=(
                "Enable DKIM signing through your email provider. For Google Workspace: Admin Console → Apps → "
                "Google Workspace → Gmail → Authenticate email. For Microsoft 365: Defender portal → Email "
                "authentication."
            ),
        )

    names = ", ".join(m.selector for m in found)
    plural = "s" if len(found) > 1 else ""
    return CheckResult(
        name=DKIM_CHECK,
        status="pass",
        summary=f"DKIM configured ({len(found)} selector{plural} found: {names})",
        detail=(
            "DKIM provides cryptographic authentication for your emails, proving they haven't been tampered "
            f"with in transit. Found active selector{plural}: {names}."
        ),
        raw=tuple(found),
    )
