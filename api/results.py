"""
Discriminated result of a licensing service call.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from core.domain.exceptions import ErrorKind, LicenseClientException

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """
    Either the value of a successful call or the failure it ended with.

    Exactly one of ``value``/``error`` is meaningful, as told by ``ok``.
    """

    value: Optional[T] = None
    error: Optional[LicenseClientException] = None

    @classmethod
    def of(cls, call: Callable[..., T], *args: Any, **kwargs: Any) -> "ApiResult[T]":
        """
        Run a client call and capture its outcome.

        Only LicenseClientException is captured; anything else is a bug
        and propagates.
        """
        try:
            return cls(value=call(*args, **kwargs))
        except LicenseClientException as e:
            return cls(error=e)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Failure kind, or None for a success."""
        if self.error is None:
            return None
        return getattr(self.error, "kind", ErrorKind.API_ERROR)

    def unwrap(self) -> T:
        """
        Return the value, re-raising the captured failure.

        Raises:
            LicenseClientException: The failure the call ended with
        """
        if self.error is not None:
            raise self.error
        return self.value
