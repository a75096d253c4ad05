"""Outcome of a single remote call.

The public client methods log failures and hand back zero values, which makes
"no traffic yet" and "call failed" look the same. ``CallResult`` keeps the two
apart for callers that care.

Example:
    result = client.try_get_stats("inbound>>>api>>>traffic>>>downlink")
    if result.ok:
        name, value = result.value
    else:
        console.print(f"[red]{result.error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from xctl.core.exceptions import ControlCallError

T = TypeVar("T")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Value of a remote call, or the error that replaced it.

    Attributes:
        value: Call result, or the method's zero value when the call failed
        error: The failure, or None on success
    """

    value: T
    error: ControlCallError | None = None

    @property
    def ok(self) -> bool:
        """True when the call succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error if the call failed."""
        if self.error is not None:
            raise self.error
        return self.value
