"""
License record domain entity.

The locally known state of the license bound to this installation,
as last reported by the licensing service.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from django.utils.dateparse import parse_datetime

from core.domain.value_objects import FeatureValue, LicenseStatus

logger = logging.getLogger(__name__)


def parse_features(raw: Any) -> Dict[str, FeatureValue]:
    """
    Tag a raw feature mapping.

    Entries whose value is not a bool, number or string are dropped.

    Args:
        raw: Mapping of feature name to JSON value

    Returns:
        Mapping of feature name to FeatureValue
    """
    if not isinstance(raw, Mapping):
        return {}
    features = {}
    for name, value in raw.items():
        try:
            features[str(name)] = FeatureValue.of(value)
        except ValueError:
            logger.warning("Ignoring feature %s with unsupported value %r", name, value)
    return features


@dataclass(frozen=True)
class LicenseRecord:
    """
    License record entity.

    Produced by activate/validate responses and persisted verbatim.
    """

    key: str
    status: LicenseStatus
    expires_at: Optional[str] = None
    tier_code: str = ""
    features: Dict[str, FeatureValue] = field(default_factory=dict)

    @classmethod
    def from_api(cls, key: str, data: Mapping[str, Any]) -> "LicenseRecord":
        """
        Build a record from the ``data`` object of a service response.

        Args:
            key: License key the request was made with
            data: Response data (may be empty)

        Returns:
            LicenseRecord
        """
        data = data or {}
        return cls(
            key=key,
            status=LicenseStatus.parse(data.get("status")),
            expires_at=str(data.get("expires_at") or "") or None,
            tier_code=str(data.get("tier_code") or ""),
            features=parse_features(data.get("features")),
        )

    @property
    def is_active(self) -> bool:
        """True when the service reported the license as ACTIVE."""
        return self.status == LicenseStatus.ACTIVE

    @property
    def expiry(self) -> Optional[datetime]:
        """
        Expiry as a datetime.

        Returns:
            Parsed expiry, or None when unknown or unparseable
        """
        if not self.expires_at:
            return None
        try:
            return parse_datetime(self.expires_at)
        except ValueError:
            return None

    def feature_values(self) -> Dict[str, Any]:
        """Return features as plain JSON values."""
        return {name: feature.value for name, feature in self.features.items()}
