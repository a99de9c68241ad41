from inboxaudit.resolver import DNSLookupError, RecordNotFound


class FakeResolver:
    """Answers from in-memory tables; unknown names are NXDOMAIN."""

    def __init__(self, txt=None, mx=None, a=None, failures=None):
        self.txt_records = txt or {}
        self.mx_records = mx or {}
        self.a_records = a or {}
        # name -> message for lookups that fail outright
        self.failures = failures or {}
        self.queries = []

    def _lookup(self, table, name, rdtype):
        self.queries.append((rdtype, name))
        if name in self.failures:
            raise DNSLookupError(self.failures[name], name, rdtype)
        if name not in table:
            raise RecordNotFound(f"No {rdtype} records found for {name}", name, rdtype)
        return list(table[name])

    async def txt(self, name):
        return self._lookup(self.txt_records, name, "TXT")

    async def mx(self, name):
        return self._lookup(self.mx_records, name, "MX")

    async def a(self, name):
        return self._lookup(self.a_records, name, "A")


class BrokenResolver:
    """Every lookup is an infrastructure failure."""

    def __init__(self, message="All nameservers failed to answer the query"):
        self.message = message

    async def txt(self, name):
        raise DNSLookupError(self.message, name, "TXT")

    async def mx(self, name):
        raise DNSLookupError(self.message, name, "MX")

    async def a(self, name):
        raise DNSLookupError(self.message, name, "A")
