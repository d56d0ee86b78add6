"""Domain entities: Job, JobApplication and Invoice.

Entities validate their own arguments and state-machine edges. They know
nothing about who is calling; caller relationships are checked by the
authorization guard in the service layer before any entity method runs.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from . import billing
from .errors import InvalidArgumentError, InvalidStateError
from .transitions import (
    APPLICATION_TRANSITIONS,
    INVOICE_TRANSITIONS,
    JOB_TRANSITIONS,
    allowed_relationships,
)
from .value_objects import ApplicationState, InvoiceState, JobState

# pylint: disable=too-many-instance-attributes,too-many-arguments


def _require_positive_rate(name: str, value: float) -> None:
    if isinstance(value, bool) or not (math.isfinite(value) and value > 0):
        raise InvalidArgumentError(
            f"{name} must be a finite number greater than 0, got {value!r}"
        )


def _require_positive_hours(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(
            f"{name} must be a whole number of hours greater than 0, got {value!r}"
        )


@dataclass(slots=True)
class Job:
    """A unit of paid work posted by an employer.

    ``contractor_id`` is ``None`` until an application is accepted; there is no
    other representation of "no contractor".
    """

    id: str
    employer_id: str
    rate: float
    duration: int
    invoice_interval: int
    created_at: datetime
    updated_at: datetime
    state: JobState = JobState.WAITING
    contractor_id: str | None = None

    # --- Construction Paths ---

    @classmethod
    def post(
        cls,
        job_id: str,
        employer_id: str,
        *,
        rate: float,
        duration: int,
        invoice_interval: int,
        now: datetime,
    ) -> Job:
        """Create a new job in the Waiting state.

        Raises:
            InvalidArgumentError: If rate is not a positive finite number, or
                duration or invoice_interval is not a positive integer.
        """
        _require_positive_rate("rate", rate)
        _require_positive_hours("duration", duration)
        _require_positive_hours("invoice_interval", invoice_interval)
        return cls(
            id=job_id,
            employer_id=employer_id,
            rate=rate,
            duration=duration,
            invoice_interval=invoice_interval,
            created_at=now,
            updated_at=now,
        )

    # --- Queries ---

    @property
    def is_open(self) -> bool:
        """True while the job is Waiting and nobody has been assigned."""
        return self.state is JobState.WAITING and self.contractor_id is None

    @property
    def max_intervals(self) -> int:
        """Number of invoices this job can ever produce."""
        return billing.max_intervals(self.duration, self.invoice_interval)

    def charge_for(
        self, interval_number: int, adjustment: float | None = None
    ) -> billing.IntervalCharge:
        """Compute the charge for one of this job's intervals."""
        return billing.charge_for_interval(
            self.rate,
            self.duration,
            self.invoice_interval,
            interval_number,
            adjustment,
        )

    # --- State Transitions ---

    def update_details(
        self, *, rate: float | None, duration: int | None, now: datetime
    ) -> None:
        """Change rate and/or duration; ``None`` leaves a field unchanged."""
        if rate is not None:
            _require_positive_rate("rate", rate)
        if duration is not None:
            _require_positive_hours("duration", duration)
        if rate is not None:
            self.rate = rate
        if duration is not None:
            self.duration = duration
        self.updated_at = now

    def assign(self, contractor_id: str, now: datetime) -> None:
        """Attach a contractor and move the job to Ongoing.

        Raises:
            InvalidStateError: If the job is not open.
        """
        if not self.is_open:
            raise InvalidStateError(
                f"Job {self.id} is not open (state={self.state.value}, "
                f"contractor={self.contractor_id})."
            )
        self.contractor_id = contractor_id
        self.state = JobState.ONGOING
        self.updated_at = now

    def change_state(self, new_state: JobState, now: datetime) -> None:
        """Move along an edge of the job transition table.

        Raises:
            InvalidTransitionError: If the edge does not exist.
        """
        allowed_relationships(JOB_TRANSITIONS, "Job", self.state, new_state)
        self.state = new_state
        self.updated_at = now


@dataclass(slots=True)
class JobApplication:
    """A contractor's request to be assigned to a job."""

    id: str
    job_id: str
    contractor_id: str
    created_at: datetime
    updated_at: datetime
    state: ApplicationState = ApplicationState.WAITING

    @classmethod
    def submit(
        cls, application_id: str, job_id: str, contractor_id: str, now: datetime
    ) -> JobApplication:
        """Create a new application in the Waiting state."""
        return cls(
            id=application_id,
            job_id=job_id,
            contractor_id=contractor_id,
            created_at=now,
            updated_at=now,
        )

    def accept(self, now: datetime) -> None:
        """Waiting → Accepted."""
        self._transition(ApplicationState.ACCEPTED, now)

    def reject(self, now: datetime) -> None:
        """Waiting → Rejected."""
        self._transition(ApplicationState.REJECTED, now)

    def withdraw(self, now: datetime) -> None:
        """Waiting → Withdrawn."""
        self._transition(ApplicationState.WITHDRAWN, now)

    def _transition(self, new_state: ApplicationState, now: datetime) -> None:
        # every application edge leaves Waiting; other states are terminal
        if self.state is not ApplicationState.WAITING:
            raise InvalidStateError(
                f"Application {self.id} is not in 'Waiting' state, "
                f"current state: {self.state.value}."
            )
        allowed_relationships(
            APPLICATION_TRANSITIONS, "JobApplication", self.state, new_state
        )
        self.state = new_state
        self.updated_at = now


@dataclass(slots=True)
class Invoice:
    """The bill for a single interval of a job."""

    id: str
    job_id: str
    interval_number: int
    value: float
    created_at: datetime
    updated_at: datetime
    state: InvoiceState = InvoiceState.WAITING

    @classmethod
    def issue(
        cls,
        invoice_id: str,
        job_id: str,
        charge: billing.IntervalCharge,
        now: datetime,
    ) -> Invoice:
        """Create a Waiting invoice from a computed interval charge."""
        return cls(
            id=invoice_id,
            job_id=job_id,
            interval_number=charge.interval_number,
            value=charge.value,
            created_at=now,
            updated_at=now,
        )

    def change_state(self, new_state: InvoiceState, now: datetime) -> None:
        """Move along an edge of the invoice transition table.

        Raises:
            InvalidTransitionError: If the edge does not exist.
        """
        allowed_relationships(INVOICE_TRANSITIONS, "Invoice", self.state, new_state)
        self.state = new_state
        self.updated_at = now

    def ensure_deletable(self) -> None:
        """Raise `InvalidStateError` unless the invoice is still Waiting."""
        if self.state is not InvoiceState.WAITING:
            raise InvalidStateError(
                f"Invoice {self.id} is {self.state.value}; only Waiting invoices "
                "can be deleted."
            )
