"""
License state repository port (interface).

This defines the contract for persisting the local license record.
Implementations are in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional

from core.domain.value_objects import FeatureValue, LicenseStatus
from licenses.domain.license import LicenseRecord


class LicenseStateRepository(ABC):
    """
    Abstract repository for the durable license record.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    All fields of the record are written and cleared together.
    """

    @abstractmethod
    def save(self, record: LicenseRecord) -> LicenseRecord:
        """
        Replace the stored record.

        Args:
            record: LicenseRecord to store

        Returns:
            Stored record
        """
        pass

    @abstractmethod
    def load(self) -> Optional[LicenseRecord]:
        """
        Load the stored record.

        Returns:
            LicenseRecord or None if no license key is stored
        """
        pass

    @abstractmethod
    def stored_key(self) -> Optional[str]:
        """Return the stored license key, or None."""
        pass

    @abstractmethod
    def status(self) -> LicenseStatus:
        """Return the stored status (INACTIVE when none is stored)."""
        pass

    @abstractmethod
    def features(self) -> Dict[str, FeatureValue]:
        """Return the stored feature map (empty when none is stored)."""
        pass

    @abstractmethod
    def mark_inactive(self) -> None:
        """Overwrite the stored status with INACTIVE; no-op when nothing is stored."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete every stored field."""
        pass
