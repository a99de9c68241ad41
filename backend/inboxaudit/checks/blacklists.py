"""Domain reputation lookups against DNS blacklists."""

import asyncio
from typing import Optional

from inboxaudit.checks.base import BLACKLIST_CHECK, guarded
from inboxaudit.logger import logger
from inboxaudit.models import BlacklistPartition, CheckResult
from inboxaudit.resolver import DNSLookupError, DNSResolver, get_resolver

# (display name, zone)
BLACKLISTS = (
    ("Spamhaus DBL", "dbl.spamhaus.org"),
    ("SURBL", "multi.surbl.org"),
    ("URIBL", "multi.uribl.com"),
    ("Spamcop", "bl.spamcop.net"),
    ("Barracuda", "b.barracudacentral.org"),
)


async def is_listed(domain: str, zone: str, resolver: DNSResolver) -> bool:
    """A listed domain resolves to a sentinel address under the blacklist zone."""
    try:
        await resolver.a(f"{domain}.{zone}")
    except DNSLookupError:
        return False
    except Exception as e:
        logger.debug(f"Blacklist lookup {domain}.{zone} skipped: {type(e).__name__}: {e}")
        return False
    return True


@guarded(BLACKLIST_CHECK)
async def check_blacklists(domain: str, resolver: Optional[DNSResolver] = None) -> CheckResult:
    resolver = resolver or get_resolver()
    hits = await asyncio.gather(*(is_listed(domain, zone, resolver) for _, zone in BLACKLISTS))

    listed = tuple(name for (name, _), hit in zip(BLACKLISTS, hits) if hit)
    clean = tuple(name for (name, _), hit in zip(BLACKLISTS, hits) if not hit)
    partition = BlacklistPartition(listed=listed, clean=clean)

    if listed:
        names = ", ".join(listed)
        plural = "s" if len(listed) > 1 else ""
        return CheckResult(
            name=BLACKLIST_CHECK,
            status="fail",
            summary=f"Listed on {len(listed)} blacklist{plural}: {names}",
            detail=(
                f"Your domain was found on: {names}. Being blacklisted severely impacts deliverability — most "
                "major email providers check these lists. Emails may be silently dropped or sent straight to spam."
            ),
            fix=(
                "Visit each blacklist's website to check your listing status and follow their delisting "
                "procedures. Also audit your sending practices — blacklisting usually indicates a history of "
                "spam complaints or poor list hygiene."
            ),
            raw=partition,
        )

    return CheckResult(
        name=BLACKLIST_CHECK,
        status="pass",
        summary=f"Not listed on {len(clean)} major blacklists",
        detail=f"Checked against: {', '.join(clean)}. Your domain is clean on all checked blacklists.",
        raw=partition,
    )
