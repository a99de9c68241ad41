import pytest

from inboxaudit.checks.mx import check_mx, classify_provider
from conftest import BrokenResolver, FakeResolver


@pytest.mark.parametrize("host,provider", [
    ("aspmx.l.google.com", "Google Workspace"),
    ("example-com.mail.protection.outlook.com", "Microsoft 365"),
    ("mx.zoho.eu", "Zoho Mail"),
    ("mail.protonmail.ch", "ProtonMail"),
    ("eu-smtp-inbound-1.mimecast.com", "Mimecast"),
    ("mx0a-001.pphosted.com", "Proofpoint"),
    ("mx1.example.com", "Unknown"),
])
def test_classify_provider(host, provider):
    assert classify_provider(host)[0] == provider


def test_unknown_provider_has_no_note():
    assert classify_provider("mx1.example.com") == ("Unknown", "")


async def test_no_mx_records_fail():
    result = await check_mx("example.com", FakeResolver())
    assert result.status == "fail"
    assert result.summary == "No MX records found"


async def test_empty_mx_set_fails():
    result = await check_mx("example.com", FakeResolver(mx={"example.com": []}))
    assert result.status == "fail"


async def test_mx_errors():
    result = await check_mx("example.com", BrokenResolver("no nameservers"))
    assert result.status == "error"
    assert result.detail == "no nameservers"


async def test_primary_is_lowest_priority_value():
    resolver = FakeResolver(mx={"example.com": [
        (10, "ALT1.ASPMX.L.GOOGLE.COM"),
        (1, "ASPMX.L.GOOGLE.COM"),
        (20, "alt2.aspmx.l.google.com"),
    ]})
    result = await check_mx("example.com", resolver)
    assert result.status == "pass"
    assert result.summary == "Google Workspace detected (3 MX records)"
    assert "aspmx.l.google.com (priority 1)" in result.detail
    assert result.raw == ("1 ASPMX.L.GOOGLE.COM", "10 ALT1.ASPMX.L.GOOGLE.COM", "20 alt2.aspmx.l.google.com")
