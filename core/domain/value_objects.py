"""
Value objects for the domain.

Value objects are immutable objects that are defined by their attributes
rather than their identity. They have no identity and are compared by value.
"""
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

LICENSE_KEY_MAX_LENGTH = 1000
DOMAIN_MAX_LENGTH = 255


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Base class for value objects.

    Value objects are immutable and compared by value.
    """

    def __eq__(self, other):
        """Compare value objects by their attributes."""
        if not isinstance(other, self.__class__):
            return False
        return self.__dict__ == other.__dict__

    def __hash__(self):
        """Make value objects hashable."""
        return hash(tuple(sorted(self.__dict__.items())))


@dataclass(frozen=True)
class LicenseKey(ValueObject):
    """
    License key value object.

    The key is opaque (``payload.signature``); only its presence and
    length are checked here, the service verifies the rest.
    """

    value: str

    def __post_init__(self):
        """Validate license key bounds."""
        if not self.value or not self.value.strip():
            raise ValueError("License key cannot be empty")
        if len(self.value) > LICENSE_KEY_MAX_LENGTH:
            raise ValueError("License key too long")

    def __str__(self) -> str:
        """Return key as string."""
        return self.value


@dataclass(frozen=True)
class Domain(ValueObject):
    """Domain (site identity) a license is activated on."""

    value: str

    def __post_init__(self):
        """Validate domain bounds."""
        if not self.value or not self.value.strip():
            raise ValueError("Domain cannot be empty")
        if len(self.value) > DOMAIN_MAX_LENGTH:
            raise ValueError(f"Domain too long: {self.value[:32]}...")

    def __str__(self) -> str:
        """Return domain as string."""
        return self.value


class LicenseStatus(Enum):
    """License status value object."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    EXPIRED = "EXPIRED"
    REVOKED = "REVOKED"
    SUSPENDED = "SUSPENDED"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "LicenseStatus":
        """
        Parse a status string from the service or the option store.

        Unknown or missing values map to INACTIVE.
        """
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).upper())
        except ValueError:
            return cls.INACTIVE

    def __str__(self) -> str:
        """Return status as string."""
        return self.value


class FeatureKind(Enum):
    """Type tag of a feature value."""

    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"


@dataclass(frozen=True)
class FeatureValue(ValueObject):
    """
    Entitlement value granted by a license tier.

    Tagged union over bool, number and string.
    """

    kind: FeatureKind
    value: Union[bool, int, float, str]

    def __post_init__(self):
        """Validate that the value matches its tag."""
        expected = {
            FeatureKind.BOOL: lambda v: isinstance(v, bool),
            FeatureKind.NUMBER: lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
            FeatureKind.STRING: lambda v: isinstance(v, str),
        }[self.kind]
        if not expected(self.value):
            raise ValueError(f"Value {self.value!r} is not a {self.kind.value}")

    @classmethod
    def of(cls, raw: Any) -> "FeatureValue":
        """
        Tag a raw JSON value.

        Args:
            raw: bool, int, float or str

        Returns:
            FeatureValue instance

        Raises:
            ValueError: For any other type
        """
        # bool is a subclass of int, check it first
        if isinstance(raw, bool):
            return cls(FeatureKind.BOOL, raw)
        if isinstance(raw, (int, float)):
            return cls(FeatureKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(FeatureKind.STRING, raw)
        raise ValueError(f"Unsupported feature value type: {type(raw).__name__}")

    def __str__(self) -> str:
        """Return value as string."""
        return str(self.value)
