"""Repository ports for jobs, applications and invoices.

Repositories are always obtained from an open unit of work, so every call they
make runs inside that unit's transaction. They return domain entities and
raise only `gigflow.interfaces.errors` exceptions.
"""

from __future__ import annotations

import abc
import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime

from gigflow.domain.errors import InvalidArgumentError
from gigflow.domain.models import Invoice, Job, JobApplication
from gigflow.domain.value_objects import InvoiceState, JobState

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True, slots=True)
class Page:
    """Limit/offset pagination window."""

    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0

    def __post_init__(self) -> None:
        if self.limit < 1:
            raise InvalidArgumentError(f"limit must be >= 1, got {self.limit}")
        if self.offset < 0:
            raise InvalidArgumentError(f"offset must be >= 0, got {self.offset}")


@dataclass(frozen=True, slots=True)
class RateRange:
    """Inclusive hourly-rate filter; either bound may be omitted."""

    min_rate: float | None = None
    max_rate: float | None = None

    def __post_init__(self) -> None:
        for name, value in (("min_rate", self.min_rate), ("max_rate", self.max_rate)):
            if value is not None and not (math.isfinite(value) and value > 0):
                raise InvalidArgumentError(
                    f"{name} must be a finite number greater than 0, got {value!r}"
                )
        if (
            self.min_rate is not None
            and self.max_rate is not None
            and self.max_rate < self.min_rate
        ):
            raise InvalidArgumentError("max_rate must be >= min_rate")

    def contains(self, rate: float) -> bool:
        """Return True if ``rate`` lies within the range."""
        if self.min_rate is not None and rate < self.min_rate:
            return False
        if self.max_rate is not None and rate > self.max_rate:
            return False
        return True


@dataclass(frozen=True, slots=True)
class JobCriteria:
    """Filter for job listings. Unset fields do not constrain the result."""

    employer_id: str | None = None
    contractor_id: str | None = None
    state: JobState | None = None
    unassigned_only: bool = False
    rates: RateRange = RateRange()

    def matches(self, job: Job) -> bool:
        """Return True if ``job`` satisfies every constraint."""
        return (
            (self.employer_id is None or job.employer_id == self.employer_id)
            and (self.contractor_id is None or job.contractor_id == self.contractor_id)
            and (self.state is None or job.state is self.state)
            and (not self.unassigned_only or job.contractor_id is None)
            and self.rates.contains(job.rate)
        )


class JobRepository(abc.ABC):
    """Persistence port for `Job` entities."""

    @abc.abstractmethod
    def add(self, job: Job) -> None:
        """Insert a new job."""

    @abc.abstractmethod
    def get(self, job_id: str, *, for_update: bool = False) -> Job | None:
        """Fetch a job by id.

        Args:
            job_id: The job id.
            for_update: Lock the row until the enclosing transaction ends, so
                concurrent units of work touching the same job are serialized.

        Returns:
            The job, or ``None`` if it does not exist.
        """

    @abc.abstractmethod
    def search(self, criteria: JobCriteria, page: Page) -> Sequence[Job]:
        """List jobs matching ``criteria``, newest first."""

    @abc.abstractmethod
    def update(self, job: Job) -> None:
        """Persist the mutable fields of an existing job.

        Raises:
            RecordNotFoundError: If the job does not exist.
        """

    @abc.abstractmethod
    def delete(self, job_id: str) -> None:
        """Delete a job.

        Raises:
            RecordNotFoundError: If the job does not exist.
        """


class ApplicationRepository(abc.ABC):
    """Persistence port for `JobApplication` entities."""

    @abc.abstractmethod
    def add(self, application: JobApplication) -> None:
        """Insert a new application.

        Raises:
            DuplicateRecordError: If the contractor already applied to the job.
        """

    @abc.abstractmethod
    def get(self, application_id: str) -> JobApplication | None:
        """Fetch an application by id, or ``None``."""

    @abc.abstractmethod
    def find(self, job_id: str, contractor_id: str) -> JobApplication | None:
        """Fetch the application a contractor made to a job, or ``None``."""

    @abc.abstractmethod
    def list_by_job(self, job_id: str, page: Page) -> Sequence[JobApplication]:
        """List the applications of a job, newest first."""

    @abc.abstractmethod
    def list_by_contractor(
        self, contractor_id: str, page: Page
    ) -> Sequence[JobApplication]:
        """List the applications of a contractor, newest first."""

    @abc.abstractmethod
    def update(self, application: JobApplication) -> None:
        """Persist the state of an existing application.

        Raises:
            RecordNotFoundError: If the application does not exist.
        """

    @abc.abstractmethod
    def reject_waiting(self, job_id: str, *, exclude_id: str, now: datetime) -> int:
        """Set every other Waiting application of a job to Rejected.

        Returns:
            The number of applications rejected.
        """

    @abc.abstractmethod
    def delete_by_job(self, job_id: str) -> int:
        """Delete every application of a job and return how many were removed."""


class InvoiceRepository(abc.ABC):
    """Persistence port for `Invoice` entities."""

    @abc.abstractmethod
    def add(self, invoice: Invoice) -> None:
        """Insert a new invoice.

        Raises:
            DuplicateRecordError: If the job already has an invoice for the interval.
        """

    @abc.abstractmethod
    def get(self, invoice_id: str) -> Invoice | None:
        """Fetch an invoice by id, or ``None``."""

    @abc.abstractmethod
    def list_by_job(
        self, job_id: str, page: Page, state: InvoiceState | None = None
    ) -> Sequence[Invoice]:
        """List the invoices of a job ordered by interval number."""

    @abc.abstractmethod
    def max_interval(self, job_id: str) -> int:
        """Return the highest interval number invoiced for a job (0 if none)."""

    @abc.abstractmethod
    def update(self, invoice: Invoice) -> None:
        """Persist the state of an existing invoice.

        Raises:
            RecordNotFoundError: If the invoice does not exist.
        """

    @abc.abstractmethod
    def delete(self, invoice_id: str) -> None:
        """Delete an invoice.

        Raises:
            RecordNotFoundError: If the invoice does not exist.
        """
