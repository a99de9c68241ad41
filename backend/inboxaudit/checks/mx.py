"""Mail exchanger lookup and mail provider detection."""

from typing import Optional, Tuple

from inboxaudit.checks.base import MX_CHECK, guarded
from inboxaudit.models import CheckResult
from inboxaudit.resolver import DNSLookupError, DNSResolver, RecordNotFound, get_resolver

# (provider, hostname fragments, note); first match wins.
MAIL_PROVIDERS = (
    ("Google Workspace", ("google", "gmail"),
     "Google Workspace is a solid choice for cold outbound with proper warm-up."),
    ("Microsoft 365", ("outlook", "microsoft"),
     "Microsoft 365 works well for outbound, especially with Outlook-to-Outlook sending."),
    ("Zoho Mail", ("zoho",),
     "Zoho is functional but has lower sending reputation than Google/Microsoft for cold outbound."),
    ("ProtonMail", ("protonmail", "proton"),
     "ProtonMail prioritizes privacy but is limited for cold outbound campaigns."),
    ("Mimecast", ("mimecast",),
     "Mimecast provides email security and filtering."),
    ("Barracuda", ("barracuda",),
     "Barracuda is primarily an email security gateway."),
    ("Proofpoint", ("pphosted", "proofpoint"),
     "Proofpoint is an enterprise email security platform."),
)

UNKNOWN_PROVIDER = "Unknown"


def classify_provider(host: str) -> Tuple[str, str]:
    """Return ``(provider, note)`` for an exchange hostname."""
    host = host.lower()
    for provider, fragments, note in MAIL_PROVIDERS:
        if any(fragment in host for fragment in fragments):
            return provider, note
    return UNKNOWN_PROVIDER, ""


def _no_mx(detail: str, fix: str) -> CheckResult:
    return CheckResult(name=MX_CHECK, status="fail", summary="No MX records found", detail=detail, fix=fix)


@guarded(MX_CHECK)
async def check_mx(domain: str, resolver: Optional[DNSResolver] = None) -> CheckResult:
    resolver = resolver or get_resolver()
    try:
        records = await resolver.mx(domain)
    except RecordNotFound:
        return _no_mx(
            "This domain does not appear to have mail service configured.",
            "Add MX records for your email provider.",
        )
    except DNSLookupError as e:
        return CheckResult(name=MX_CHECK, status="error", summary="Could not check MX records", detail=str(e))

    if not records:
        return _no_mx(
            "This domain has no mail exchange records, meaning it cannot receive email. This is a critical "
            "issue for any domain used for business communication.",
            "Configure MX records pointing to your email provider.",
        )

    records = sorted(records, key=lambda r: r[0])
    priority, primary = records[0]
    primary = primary.lower()
    provider, note = classify_provider(primary)

    plural = "s" if len(records) > 1 else ""
    detail = f"Primary mail server: {primary} (priority {priority})."
    if note:
        detail = f"{detail} {note}"
    return CheckResult(
        name=MX_CHECK,
        status="pass",
        summary=f"{provider} detected ({len(records)} MX record{plural})",
        detail=detail,
        raw=tuple(f"{p} {host}" for p, host in records),
    )
