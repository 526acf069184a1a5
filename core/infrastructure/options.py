"""
Option store abstraction (port).

Durable key-value storage for small JSON-serializable values.
Unlike CachePort, entries never expire.
"""
from abc import ABC, abstractmethod
from typing import Any


class OptionStore(ABC):
    """
    Abstract option store port.

    Implementations can use a database table, a settings file, etc.
    """

    @abstractmethod
    def get(self, name: str, default: Any = None) -> Any:
        """
        Get an option value.

        Args:
            name: Option name
            default: Value returned when the option is not set

        Returns:
            Stored value or default
        """
        pass

    @abstractmethod
    def set(self, name: str, value: Any) -> None:
        """
        Set an option value, replacing any previous one.

        Args:
            name: Option name
            value: JSON-serializable value
        """
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """
        Delete an option. Deleting a missing option is a no-op.

        Args:
            name: Option name
        """
        pass
