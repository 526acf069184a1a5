"""
Request DTOs for the licensing service API.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

_MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True)
class ActivationRequest:
    """Optional fields sent along with an activation."""

    site_name: Optional[str] = None
    os: Optional[str] = None
    region: Optional[str] = None
    client_version: Optional[str] = None
    device_hash: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Return only the fields that are set."""
        payload = {
            "site_name": self.site_name,
            "os": self.os,
            "region": self.region,
            "client_version": self.client_version,
            "device_hash": self.device_hash,
        }
        return {name: value for name, value in payload.items() if value is not None}


@dataclass(frozen=True)
class UsageReport:
    """Usage counters for one reporting month."""

    month: str
    conversations_count: int = 0
    voice_count: int = 0
    text_count: int = 0
    consents_captured: int = 0
    compliance_violations: int = 0

    def __post_init__(self):
        """Validate reporting period."""
        if not _MONTH_PATTERN.match(self.month or ""):
            raise ValueError(f"Usage month must be YYYY-MM, got {self.month!r}")

    def to_payload(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "conversations_count": self.conversations_count,
            "voice_count": self.voice_count,
            "text_count": self.text_count,
            "consents_captured": self.consents_captured,
            "compliance_violations": self.compliance_violations,
        }
