"""Pydantic models for check results and audit responses."""

from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from inboxaudit.domain import normalize_domain

Status = Literal["pass", "warn", "fail", "error"]


class SelectorMatch(BaseModel):
    """A DKIM selector that answered with a key record."""
    model_config = ConfigDict(frozen=True)

    selector: str
    record: str


class BlacklistPartition(BaseModel):
    model_config = ConfigDict(frozen=True)

    listed: Tuple[str, ...] = ()
    clean: Tuple[str, ...] = ()


class CheckResult(BaseModel):
    """Outcome of a single deliverability check."""
    model_config = ConfigDict(frozen=True)

    name: str
    status: Status
    summary: str
    detail: str
    fix: Optional[str] = None
    raw: Optional[Union[BlacklistPartition, Tuple[SelectorMatch, ...], Tuple[str, ...]]] = None

    @model_validator(mode="after")
    def fix_only_for_problems(self):
        if self.fix is not None and self.status not in ("warn", "fail"):
            raise ValueError(f"fix is only allowed on warn/fail results, not {self.status}")
        return self


class AuditChecks(BaseModel):
    model_config = ConfigDict(frozen=True)

    spf: CheckResult
    dmarc: CheckResult
    dkim: CheckResult
    mx: CheckResult
    blacklists: CheckResult

    def results(self) -> Tuple[CheckResult, ...]:
        return (self.spf, self.dmarc, self.dkim, self.mx, self.blacklists)


class AuditResult(BaseModel):
    """Complete audit response."""
    model_config = ConfigDict(frozen=True)

    domain: str
    score: int = Field(..., ge=0, le=100)
    checks: AuditChecks


class AuditRequest(BaseModel):
    domain: str

    @field_validator("domain")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        return normalize_domain(v)
