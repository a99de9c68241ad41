"""InboxAudit - FastAPI backend for email deliverability audits."""

import asyncio

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inboxaudit.audit import run_audit
from inboxaudit.config import settings
from inboxaudit.logger import logger
from inboxaudit.models import AuditRequest, AuditResult

app = FastAPI(
    title=settings.APP_NAME,
    description="Email deliverability auditor — checks SPF, DMARC, DKIM, MX and DNS blacklists.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    """Bad JSON, a missing field and a malformed domain all get the same answer."""
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid domain format"})


@app.post("/check", response_model=AuditResult, response_model_exclude_none=True)
async def check(request: AuditRequest):
    try:
        return await asyncio.wait_for(run_audit(request.domain), timeout=settings.AUDIT_TIMEOUT)
    except asyncio.TimeoutError:
        logger.warning(f"Audit for {request.domain} timed out after {settings.AUDIT_TIMEOUT}s")
        raise HTTPException(status_code=504, detail="Domain audit timed out.")
    except Exception:
        logger.exception(f"Audit for {request.domain} failed")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/")
async def root():
    return {"status": "ok", "service": settings.APP_NAME, "version": "1.0.0"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
