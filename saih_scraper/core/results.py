"""
Tagged results for extraction and fetch steps.

Parsers and the orchestrator never raise to their callers; instead each step
produces an Outcome carrying the (possibly empty) value and, when the value is
empty because something went wrong, a Failure describing why.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class FailureKind(str, Enum):
    """Why a step produced an empty result."""
    STRUCTURE = "structural_mismatch"  # Expected markup absent
    TRANSPORT = "transport_failure"  # Fetch failed
    DECODE = "decode_failure"  # Embedded literal malformed


@dataclass(frozen=True)
class Failure:
    """Reason for an empty result."""
    kind: FailureKind
    reason: str
    details: dict = field(default_factory=dict)

    def log(self, logger, **context) -> None:
        """Emit the failure at the level matching its kind."""
        method = logger.warning if self.kind == FailureKind.STRUCTURE else logger.error
        method(self.reason, failure=self.kind.value, **self.details, **context)


@dataclass
class Outcome(Generic[T]):
    """Value of a step, plus the failure that emptied it (if any)."""
    value: T
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def fail(
        cls,
        empty: T,
        kind: FailureKind,
        reason: str,
        **details,
    ) -> "Outcome[T]":
        return cls(value=empty, failure=Failure(kind=kind, reason=reason, details=details))

    def unwrap(self, logger=None, **context) -> T:
        """Log the failure (if any) and return the value."""
        if self.failure is not None and logger is not None:
            self.failure.log(logger, **context)
        return self.value
