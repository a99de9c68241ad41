from inboxaudit.checks.dkim import DKIM_SELECTORS, check_dkim, probe_selector
from conftest import BrokenResolver, FakeResolver

KEY = "v=DKIM1; k=rsa; p=" + "A" * 300


async def test_no_selectors_found_warns():
    result = await check_dkim("example.com", FakeResolver())
    assert result.status == "warn"
    for selector in ("google", "selector1", "mxvault"):
        assert selector in result.detail
    assert result.raw is None


async def test_lookup_failures_still_warn():
    result = await check_dkim("example.com", BrokenResolver())
    assert result.status == "warn"


async def test_every_selector_is_probed():
    resolver = FakeResolver()
    await check_dkim("example.com", resolver)
    probed = {name for _, name in resolver.queries}
    assert probed == {f"{s}._domainkey.example.com" for s in DKIM_SELECTORS}


async def test_matched_selectors_pass():
    resolver = FakeResolver(txt={
        "google._domainkey.example.com": [KEY],
        "selector2._domainkey.example.com": ["k=rsa; p=MIGfMA0"],
        "mail._domainkey.example.com": ["not a key"],
    })
    result = await check_dkim("example.com", resolver)
    assert result.status == "pass"
    assert result.summary == "DKIM configured (2 selectors found: google, selector2)"
    assert [m.selector for m in result.raw] == ["google", "selector2"]


async def test_preview_is_truncated():
    resolver = FakeResolver(txt={"k1._domainkey.example.com": [KEY]})
    match = await probe_selector("example.com", "k1", resolver)
    assert match.record == KEY[:120] + "..."


async def test_single_selector_summary():
    resolver = FakeResolver(txt={"default._domainkey.example.com": ["v=DKIM1; p=abc"]})
    result = await check_dkim("example.com", resolver)
    assert result.summary == "DKIM configured (1 selector found: default)"


class OneBadSelectorResolver(FakeResolver):
    async def txt(self, name):
        if name.startswith("google._domainkey."):
            raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        return await super().txt(name)


async def test_crashing_selector_is_absorbed():
    result = await check_dkim("example.com", OneBadSelectorResolver())
    assert result.status == "warn"


async def test_crashing_selector_does_not_hide_other_matches():
    resolver = OneBadSelectorResolver(txt={"selector1._domainkey.example.com": ["v=DKIM1; p=abc"]})
    result = await check_dkim("example.com", resolver)
    assert result.status == "pass"
    assert [m.selector for m in result.raw] == ["selector1"]
