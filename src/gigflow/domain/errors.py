"""Domain-layer error definitions.

Every failure leaving the core is a `GigflowError` whose `kind` is a member of
the closed `ErrorKind` set. Callers (e.g. an HTTP layer) translate the kind
into whatever their transport needs; they should never inspect message text.
"""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Closed classification of failure causes returned by the core."""

    NOT_FOUND = "NotFound"
    FORBIDDEN = "Forbidden"
    INVALID_STATE = "InvalidState"
    INVALID_TRANSITION = "InvalidTransition"
    CONFLICT = "Conflict"
    INVALID_INVOICE_INTERVAL = "InvalidInvoiceInterval"
    INVALID_ARGUMENT = "InvalidArgument"
    INTERNAL = "Internal"


# ============================================================================
#                           General domain errors
# ============================================================================


class GigflowError(Exception):
    """Base class for all errors surfaced by the core.

    Attributes:
        kind: The `ErrorKind` of this error.
        cause: The underlying exception, if any.
    """

    kind: ClassVar[ErrorKind]

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class NotFoundError(GigflowError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self, entity: str, entity_id: str, *, cause: BaseException | None = None
    ) -> None:
        super().__init__(f"{entity} '{entity_id}' not found.", cause=cause)
        self.entity = entity
        self.entity_id = entity_id


class ForbiddenError(GigflowError):
    """Raised when the caller lacks the relationship an operation requires."""

    kind = ErrorKind.FORBIDDEN


class InvalidStateError(GigflowError):
    """Raised when an operation is not valid for the entity's current state."""

    kind = ErrorKind.INVALID_STATE


class InvalidTransitionError(GigflowError):
    """Raised when a requested state change is not an edge of the transition table."""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, entity: str, from_state: str, to_state: str) -> None:
        super().__init__(
            f"{entity} cannot transition from {from_state} to {to_state}."
        )
        self.entity = entity
        self.from_state = from_state
        self.to_state = to_state


class ConflictError(GigflowError):
    """Raised when a store-level uniqueness rule is violated."""

    kind = ErrorKind.CONFLICT


class InvalidInvoiceIntervalError(GigflowError):
    """Raised when invoicing would exceed the job's contracted interval budget."""

    kind = ErrorKind.INVALID_INVOICE_INTERVAL

    def __init__(self, job_id: str, interval_number: int, max_intervals: int) -> None:
        super().__init__(
            f"Job {job_id} has {max_intervals} billable intervals; "
            f"interval {interval_number} is out of range."
        )
        self.job_id = job_id
        self.interval_number = interval_number
        self.max_intervals = max_intervals


class InvalidArgumentError(GigflowError):
    """Raised when an input value is outside its allowed domain."""

    kind = ErrorKind.INVALID_ARGUMENT


class InternalError(GigflowError):
    """Raised for unexpected store or transaction failures."""

    kind = ErrorKind.INTERNAL
