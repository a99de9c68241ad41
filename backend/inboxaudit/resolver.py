"""DNS lookups for the audit checks: TXT, MX and A records.

Queries go through dnspython's asyncio resolver, so every probe of an audit
is in flight at once and the whole fan-out is bounded by a single query
lifetime. Every failure is reported as one of two
exceptions: ``RecordNotFound`` when the name or record type does not exist,
``DNSLookupError`` for everything else (timeouts, unreachable servers, ...).
"""

from typing import List, Optional, Sequence, Tuple

import dns.asyncresolver
import dns.exception
import dns.resolver

from inboxaudit.config import settings
from inboxaudit.logger import logger


class DNSLookupError(Exception):
    """A DNS query could not be answered."""

    def __init__(self, message: str, name: str = "", rdtype: str = ""):
        super().__init__(message)
        self.name = name
        self.rdtype = rdtype


class RecordNotFound(DNSLookupError):
    """The queried name does not exist or holds no records of the requested type."""


class DNSResolver:
    def __init__(
        self,
        timeout: Optional[float] = None,
        nameservers: Optional[Sequence[str]] = None,
        resolver: Optional[dns.asyncresolver.Resolver] = None,
    ):
        self.timeout = settings.DNS_TIMEOUT if timeout is None else timeout
        self.nameservers = list(settings.DNS_NAMESERVERS if nameservers is None else nameservers)
        self._resolver = resolver

    def _get_resolver(self) -> dns.asyncresolver.Resolver:
        if self._resolver is None:
            if self.nameservers:
                resolver = dns.asyncresolver.Resolver(configure=False)
                resolver.nameservers = self.nameservers
            else:
                resolver = dns.asyncresolver.Resolver()
            self._resolver = resolver
        return self._resolver

    async def resolve(self, name: str, rdtype: str):
        """Resolve ``name``/``rdtype``, bounded by ``self.timeout`` seconds."""
        try:
            return await self._get_resolver().resolve(name, rdtype, lifetime=self.timeout)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer) as e:
            raise RecordNotFound(f"No {rdtype} records found for {name}", name, rdtype) from e
        except dns.exception.Timeout as e:
            logger.debug(f"{rdtype} {name}: timed out after {self.timeout}s")
            raise DNSLookupError(
                f"DNS query for {name} ({rdtype}) timed out after {self.timeout}s", name, rdtype
            ) from e
        except dns.exception.DNSException as e:
            logger.debug(f"{rdtype} {name}: {type(e).__name__}: {e}")
            raise DNSLookupError(str(e) or type(e).__name__, name, rdtype) from e

    async def txt(self, name: str) -> List[str]:
        """TXT records for ``name``, each with its character-strings joined."""
        answers = await self.resolve(name, "TXT")
        return [b"".join(rdata.strings).decode("utf-8", errors="replace") for rdata in answers]

    async def mx(self, name: str) -> List[Tuple[int, str]]:
        """``(priority, exchange)`` pairs in answer order, exchange without the trailing dot."""
        answers = await self.resolve(name, "MX")
        return [(rdata.preference, rdata.exchange.to_text(omit_final_dot=True)) for rdata in answers]

    async def a(self, name: str) -> List[str]:
        answers = await self.resolve(name, "A")
        return [rdata.to_text() for rdata in answers]


_default_resolver: Optional[DNSResolver] = None


def get_resolver() -> DNSResolver:
    """Shared resolver built from ``settings``."""
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = DNSResolver()
    return _default_resolver
