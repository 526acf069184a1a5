"""
Option store adapter implementations.

Provides Django ORM and in-memory implementations of OptionStore.
"""

import copy
import logging
import threading
from typing import Any, Dict

from core.infrastructure.options import OptionStore

logger = logging.getLogger(__name__)


class DjangoOptionStore(OptionStore):
    """
    Django ORM option store.

    Each option is one row of the license_client_options table.
    Database errors propagate to the caller.
    """

    def get(self, name: str, default: Any = None) -> Any:
        from core.infrastructure.models import Option

        try:
            return Option.objects.get(name=name).value
        except Option.DoesNotExist:
            return default

    def set(self, name: str, value: Any) -> None:
        from core.infrastructure.models import Option

        Option.objects.update_or_create(name=name, defaults={"value": value})
        logger.debug("Option set: %s", name)

    def delete(self, name: str) -> None:
        from core.infrastructure.models import Option

        deleted, _ = Option.objects.filter(name=name).delete()
        if deleted:
            logger.debug("Option deleted: %s", name)


class InMemoryOptionStore(OptionStore):
    """Process-local option store, used by hosts without a database and in tests."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._options: Dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, name: str, default: Any = None) -> Any:
        with self._lock:
            if name not in self._options:
                return default
            # Hand out copies so callers cannot mutate stored state
            return copy.deepcopy(self._options[name])

    def set(self, name: str, value: Any) -> None:
        with self._lock:
            self._options[name] = copy.deepcopy(value)

    def delete(self, name: str) -> None:
        with self._lock:
            self._options.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._options
