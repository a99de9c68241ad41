import pytest

from inboxaudit.audit import run_audit
from conftest import BrokenResolver, FakeResolver
from inboxaudit.domain import InvalidDomainError


async def test_example_com_scenario():
    resolver = FakeResolver(mx={"example.com": [(20, "mx2.example.com"), (10, "mx1.example.com")]})
    result = await run_audit("example.com", resolver)

    checks = result.checks
    assert result.domain == "example.com"
    assert checks.spf.status == "fail"
    assert checks.dmarc.status == "fail"
    assert checks.dkim.status == "warn"
    assert checks.mx.status == "pass"
    assert checks.mx.summary.startswith("Unknown detected (2 MX records)")
    assert checks.mx.raw == ("10 mx1.example.com", "20 mx2.example.com")
    assert checks.blacklists.status == "pass"
    assert len(checks.blacklists.raw.clean) == 5
    assert result.score == 35


async def test_fully_configured_domain_scores_100():
    resolver = FakeResolver(
        txt={
            "example.org": ["v=spf1 include:_spf.google.com -all"],
            "_dmarc.example.org": ["v=DMARC1; p=reject; rua=mailto:dmarc@example.org"],
            "google._domainkey.example.org": ["v=DKIM1; k=rsa; p=MIIBIjANBgkq"],
        },
        mx={"example.org": [(1, "aspmx.l.google.com")]},
    )
    result = await run_audit("example.org", resolver)
    assert result.score == 100
    assert result.checks.mx.summary == "Google Workspace detected (1 MX record)"


async def test_all_errors_still_produce_full_result():
    result = await run_audit("example.com", BrokenResolver("SERVFAIL"))
    checks = result.checks
    assert checks.spf.status == "error"
    assert checks.dmarc.status == "error"
    assert checks.mx.status == "error"
    # probes that fail count as "nothing found"
    assert checks.dkim.status == "warn"
    assert checks.blacklists.status == "pass"
    assert result.score == 25


class ExplodingResolver:
    async def txt(self, name):
        raise RuntimeError("resolver bug")

    async def mx(self, name):
        raise RuntimeError("resolver bug")

    async def a(self, name):
        raise RuntimeError("resolver bug")


async def test_unexpected_exceptions_become_error_results():
    result = await run_audit("example.com", ExplodingResolver())
    for check in (result.checks.spf, result.checks.dmarc, result.checks.mx):
        assert check.status == "error"
        assert check.detail == "resolver bug"
    # a broken lookup only means that selector or zone yielded nothing
    assert result.checks.dkim.status == "warn"
    assert result.checks.blacklists.status == "pass"
    assert result.score == 25


async def test_domain_is_normalized():
    resolver = FakeResolver()
    result = await run_audit("  Example.COM ", resolver)
    assert result.domain == "example.com"
    assert ("TXT", "example.com") in resolver.queries


async def test_invalid_domain_rejected_before_any_lookup():
    resolver = FakeResolver()
    with pytest.raises(InvalidDomainError):
        await run_audit("not a domain", resolver)
    assert resolver.queries == []
