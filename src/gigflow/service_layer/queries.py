"""Module defining Queries.

Queries read state and never mutate it. List queries take ``limit`` and
``offset``; rate filters are inclusive and optional.
"""

from dataclasses import dataclass

from gigflow.domain.value_objects import InvoiceState, JobState
from gigflow.interfaces.repositories import DEFAULT_PAGE_SIZE

# pylint: disable=too-many-instance-attributes


@dataclass(frozen=True)
class Query:
    """Base class for all queries."""


# ============================================================================
#                                  Jobs
# ============================================================================


@dataclass(frozen=True)
class GetJob(Query):
    job_id: str


@dataclass(frozen=True)
class ListAvailableJobs(Query):
    """Waiting, unassigned jobs, newest first."""

    min_rate: float | None = None
    max_rate: float | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass(frozen=True)
class ListJobsByEmployer(Query):
    """Jobs posted by ``employer_id``, newest first."""

    employer_id: str
    state: JobState | None = None
    min_rate: float | None = None
    max_rate: float | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass(frozen=True)
class ListJobsByContractor(Query):
    """Jobs assigned to ``contractor_id``, newest first."""

    contractor_id: str
    state: JobState | None = None
    min_rate: float | None = None
    max_rate: float | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


# ============================================================================
#                              Applications
# ============================================================================


@dataclass(frozen=True)
class GetApplication(Query):
    application_id: str
    caller_id: str


@dataclass(frozen=True)
class ListApplicationsByJob(Query):
    """Applications to a job; visible to the job's employer only."""

    job_id: str
    caller_id: str
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


@dataclass(frozen=True)
class ListApplicationsByContractor(Query):
    """The caller's own applications, newest first."""

    contractor_id: str
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


# ============================================================================
#                                Invoices
# ============================================================================


@dataclass(frozen=True)
class GetInvoice(Query):
    invoice_id: str
    caller_id: str


@dataclass(frozen=True)
class ListInvoicesByJob(Query):
    """Invoices of a job ordered by interval number."""

    job_id: str
    caller_id: str
    state: InvoiceState | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0
