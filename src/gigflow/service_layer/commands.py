"""Module defining Commands.

Commands mutate state. ``caller_id`` is the identity resolved by the
authentication layer; the core trusts it as given.
"""

from dataclasses import dataclass

from gigflow.domain.value_objects import InvoiceState, JobState


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# ============================================================================
#                                  Jobs
# ============================================================================


@dataclass(frozen=True)
class CreateJob(Command):
    """Post a new job as ``employer_id``."""

    employer_id: str
    rate: float
    duration: int
    invoice_interval: int


@dataclass(frozen=True)
class UpdateJobDetails(Command):
    """Change the rate and/or duration of an open job. ``None`` keeps a field."""

    job_id: str
    caller_id: str
    rate: float | None = None
    duration: int | None = None


@dataclass(frozen=True)
class UpdateJobState(Command):
    """Request a job state change along an edge of the job transition table."""

    job_id: str
    caller_id: str
    new_state: JobState


@dataclass(frozen=True)
class DeleteJob(Command):
    """Delete an open job together with its applications."""

    job_id: str
    caller_id: str


# ============================================================================
#                              Applications
# ============================================================================


@dataclass(frozen=True)
class ApplyToJob(Command):
    """Apply to an open job as ``contractor_id``."""

    job_id: str
    contractor_id: str


@dataclass(frozen=True)
class AcceptApplication(Command):
    """Accept an application, assigning its contractor to the job."""

    application_id: str
    caller_id: str


@dataclass(frozen=True)
class RejectApplication(Command):
    application_id: str
    caller_id: str


@dataclass(frozen=True)
class WithdrawApplication(Command):
    application_id: str
    caller_id: str


# ============================================================================
#                                Invoices
# ============================================================================


@dataclass(frozen=True)
class CreateInvoice(Command):
    """Invoice the next interval of an ongoing job.

    ``adjustment`` is added to the interval value (it may be negative).
    """

    job_id: str
    caller_id: str
    adjustment: float | None = None


@dataclass(frozen=True)
class UpdateInvoiceState(Command):
    invoice_id: str
    caller_id: str
    new_state: InvoiceState


@dataclass(frozen=True)
class DeleteInvoice(Command):
    invoice_id: str
    caller_id: str
