"""
License manager.

Owns the local license lifecycle: combines the API client, the durable
license state and the validation cache. Status transitions:

- activate: remote activation; the record is stored with the status the
  service reported. Failures propagate and leave local state untouched.
- validate: cached outcome if fresh; otherwise one remote validation.
  Success refreshes the record and caches "valid"; any failure caches
  "invalid" and forces the stored status to INACTIVE.
- deactivate: best-effort remote deactivation, then local state and the
  validation cache are always cleared.
"""
import logging
from dataclasses import replace
from typing import Any, Optional

from api.results import ApiResult
from api.v1.client import LicenseApiClient
from api.v1.requests import ActivationRequest
from core.domain.value_objects import LicenseStatus
from core.infrastructure.site import SiteContext
from core.metrics import (
    license_activations_total,
    license_deactivations_total,
    license_validations_total,
)
from licenses.application.services.validation_cache_service import (
    ValidationCacheService,
)
from licenses.domain.license import LicenseRecord
from licenses.ports.license_state_repository import LicenseStateRepository

logger = logging.getLogger(__name__)


def _masked(license_key: str) -> str:
    return f"{license_key[:8]}..."


class LicenseManager:
    """Orchestrates activate/validate/deactivate and feature lookups."""

    def __init__(
        self,
        client: LicenseApiClient,
        state_repository: LicenseStateRepository,
        validation_cache: ValidationCacheService,
        site: SiteContext,
    ):
        """Initialize manager with its collaborators."""
        self.client = client
        self.state_repository = state_repository
        self.validation_cache = validation_cache
        self.site = site

    def activate(
        self,
        license_key: str,
        domain: Optional[str] = None,
        site_name: Optional[str] = None,
        request: Optional[ActivationRequest] = None,
    ) -> LicenseRecord:
        """
        Activate a license and store it locally.

        Args:
            license_key: License key
            domain: Domain (defaults to the current site domain)
            site_name: Site name (defaults to the current site name)
            request: Further optional activation fields

        Returns:
            The stored LicenseRecord

        Raises:
            ApiException: Any activation failure, typed by kind
        """
        domain = domain or self.site.current_domain()
        request = request or ActivationRequest()
        if site_name is None:
            site_name = request.site_name or self.site.current_site_name()
        request = replace(request, site_name=site_name or None)

        result = ApiResult.of(self.client.activate_license, license_key, domain, request)
        if not result.ok:
            license_activations_total.labels(outcome=str(result.kind)).inc()
            logger.warning(
                "License activation failed for %s on %s: %s",
                _masked(license_key),
                domain,
                result.error.code,
            )
        record = result.unwrap()

        self.validation_cache.invalidate()
        self.state_repository.save(record)
        license_activations_total.labels(outcome="success").inc()
        logger.info(
            "License %s activated on %s (status=%s)",
            _masked(license_key),
            domain,
            record.status,
        )
        return record

    def validate(
        self, license_key: Optional[str] = None, domain: Optional[str] = None
    ) -> bool:
        """
        Validate a license, consulting the validation cache first.

        Never raises for remote failures.

        Args:
            license_key: License key (defaults to the stored key)
            domain: Domain (defaults to the current site domain)

        Returns:
            True if the license is valid
        """
        license_key = license_key or self.state_repository.stored_key()
        if not license_key:
            return False

        cached = self.validation_cache.get()
        if cached is not None:
            license_validations_total.labels(result=str(cached).lower(), source="cache").inc()
            return cached

        domain = domain or self.site.current_domain()
        result = ApiResult.of(self.client.validate_license, license_key, domain)

        if result.ok:
            self.validation_cache.invalidate()
            self.state_repository.save(result.value)
            self.validation_cache.store(True)
            license_validations_total.labels(result="true", source="remote").inc()
            return True

        self.validation_cache.store(False)
        self.state_repository.mark_inactive()
        license_validations_total.labels(result="false", source="remote").inc()
        logger.warning(
            "License %s failed validation on %s: %s (%s)",
            _masked(license_key),
            domain,
            result.kind,
            result.error.message,
        )
        return False

    def deactivate(
        self, license_key: Optional[str] = None, domain: Optional[str] = None
    ) -> None:
        """
        Deactivate a license and clear all local state.

        Local cleanup happens even when the remote call fails.

        Args:
            license_key: License key (defaults to the stored key)
            domain: Domain (defaults to the current site domain)
        """
        license_key = license_key or self.state_repository.stored_key()
        if not license_key:
            return

        domain = domain or self.site.current_domain()
        result = ApiResult.of(self.client.deactivate_license, license_key, domain)
        if result.ok:
            license_deactivations_total.labels(remote_outcome="success").inc()
        else:
            license_deactivations_total.labels(remote_outcome=str(result.kind)).inc()
            logger.warning(
                "Remote deactivation of %s failed, clearing local state anyway: %s",
                _masked(license_key),
                result.error.message,
            )

        self.state_repository.clear()
        self.validation_cache.invalidate()
        logger.info("License %s deactivated on %s", _masked(license_key), domain)

    def is_valid(self) -> bool:
        """
        Check if the stored license is valid.

        Only a stored ACTIVE license is checked further (through validate);
        any other stored status is answered locally.
        """
        license_key = self.state_repository.stored_key()
        if not license_key or self.state_repository.status() != LicenseStatus.ACTIVE:
            return False
        return self.validate(license_key)

    def get_feature(self, name: str, default: Any = None) -> Any:
        """
        Get a feature value of the stored license.

        Args:
            name: Feature name
            default: Value returned when the feature is absent

        Returns:
            Feature value or default
        """
        feature = self.state_repository.features().get(name)
        if feature is None:
            return default
        return feature.value

    def get_license(self) -> Optional[LicenseRecord]:
        """Return the last known license record, without any I/O beyond the store."""
        return self.state_repository.load()

    def get_stored_license_key(self) -> Optional[str]:
        """Return the stored license key, or None when no license is stored."""
        return self.state_repository.stored_key()
