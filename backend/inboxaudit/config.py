"""
Application configuration using environment variables.
"""
import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

# Load .env file
load_dotenv()


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings."""
    APP_NAME: str = os.getenv("APP_NAME", "InboxAudit API")

    # DNS
    DNS_TIMEOUT: float = float(os.getenv("DNS_TIMEOUT", "5"))
    DNS_NAMESERVERS: List[str] = field(default_factory=lambda: _split(os.getenv("DNS_NAMESERVERS", "")))

    # Whole audit, enforced by the HTTP layer
    AUDIT_TIMEOUT: float = float(os.getenv("AUDIT_TIMEOUT", "25"))

    # CORS
    CORS_ORIGINS: List[str] = field(default_factory=lambda: _split(os.getenv("CORS_ORIGINS", "*")))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    def __post_init__(self):
        # an audit waits on roughly one DNS_TIMEOUT
        if self.AUDIT_TIMEOUT <= self.DNS_TIMEOUT:
            raise ValueError(
                f"AUDIT_TIMEOUT ({self.AUDIT_TIMEOUT}s) must exceed DNS_TIMEOUT ({self.DNS_TIMEOUT}s)"
            )


settings = Settings()
