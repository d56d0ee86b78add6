"""Caller-supplied cancellation and deadline for a single operation."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .errors import OperationCancelledError


@dataclass(frozen=True)
class CallContext:
    """Cancellation token plus optional deadline.

    The deadline is expressed on the ``time.monotonic()`` clock. A context is
    shared by reference, so cancelling it from another thread aborts the unit
    of work currently bound to it at its next checkpoint.
    """

    deadline: float | None = None
    cancel_event: threading.Event = field(default_factory=threading.Event)

    @classmethod
    def with_timeout(cls, seconds: float) -> CallContext:
        """Build a context whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Signal cancellation to whoever holds this context."""
        self.cancel_event.set()

    @property
    def expired(self) -> bool:
        """True once the deadline has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        """Raise if the context was cancelled or its deadline passed.

        Raises:
            OperationCancelledError: If the operation must stop.
        """
        if self.cancel_event.is_set():
            raise OperationCancelledError("operation cancelled by caller")
        if self.expired:
            raise OperationCancelledError("operation deadline exceeded")
