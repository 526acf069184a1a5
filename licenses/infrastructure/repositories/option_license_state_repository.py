"""
OptionStore implementation of LicenseStateRepository port.

This adapter converts between the LicenseRecord entity and five
independent entries of the host option store.
"""
import logging
from typing import Dict, Optional

from core.domain.value_objects import FeatureValue, LicenseStatus
from core.infrastructure.options import OptionStore
from licenses.domain.license import LicenseRecord, parse_features
from licenses.ports.license_state_repository import LicenseStateRepository

logger = logging.getLogger(__name__)

DEFAULT_OPTION_PREFIX = "sls_"


class OptionLicenseStateRepository(LicenseStateRepository):
    """
    OptionStore implementation of LicenseStateRepository.

    Options written (with the default prefix):
    sls_license_key, sls_license_status, sls_license_expires_at,
    sls_license_features, sls_license_tier_code.
    """

    def __init__(self, options: OptionStore, prefix: str = DEFAULT_OPTION_PREFIX):
        self.options = options
        self.key_option = f"{prefix}license_key"
        self.status_option = f"{prefix}license_status"
        self.expires_at_option = f"{prefix}license_expires_at"
        self.features_option = f"{prefix}license_features"
        self.tier_code_option = f"{prefix}license_tier_code"

    @property
    def option_names(self):
        return (
            self.key_option,
            self.status_option,
            self.expires_at_option,
            self.features_option,
            self.tier_code_option,
        )

    def save(self, record: LicenseRecord) -> LicenseRecord:
        self.options.set(self.key_option, record.key)
        self.options.set(self.status_option, record.status.value)
        self.options.set(self.expires_at_option, record.expires_at or "")
        self.options.set(self.features_option, record.feature_values())
        self.options.set(self.tier_code_option, record.tier_code)
        logger.debug("Stored license state: %s", record.status)
        return record

    def load(self) -> Optional[LicenseRecord]:
        key = self.stored_key()
        if not key:
            return None
        return LicenseRecord(
            key=key,
            status=self.status(),
            expires_at=self.options.get(self.expires_at_option) or None,
            tier_code=self.options.get(self.tier_code_option) or "",
            features=self.features(),
        )

    def stored_key(self) -> Optional[str]:
        return self.options.get(self.key_option) or None

    def status(self) -> LicenseStatus:
        return LicenseStatus.parse(self.options.get(self.status_option))

    def features(self) -> Dict[str, FeatureValue]:
        return parse_features(self.options.get(self.features_option, {}))

    def mark_inactive(self) -> None:
        if not self.stored_key():
            return
        self.options.set(self.status_option, LicenseStatus.INACTIVE.value)

    def clear(self) -> None:
        for name in self.option_names:
            self.options.delete(name)
        logger.debug("Cleared license state")
