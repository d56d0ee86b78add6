"""Lookups and helpers shared by the handlers."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from gigflow.domain.errors import NotFoundError
from gigflow.domain.models import Invoice, Job, JobApplication
from gigflow.interfaces.repositories import Page
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork

Clock = Callable[[], datetime]


def load_job(uow: AbstractUnitOfWork, job_id: str, *, for_update: bool = False) -> Job:
    """Fetch a job or raise `NotFoundError`.

    With ``for_update`` the job row stays locked until the unit of work ends.
    """
    if (job := uow.jobs.get(job_id, for_update=for_update)) is None:
        raise NotFoundError("Job", job_id)
    return job


def load_application(uow: AbstractUnitOfWork, application_id: str) -> JobApplication:
    """Fetch an application or raise `NotFoundError`."""
    if (application := uow.applications.get(application_id)) is None:
        raise NotFoundError("JobApplication", application_id)
    return application


def load_invoice(uow: AbstractUnitOfWork, invoice_id: str) -> Invoice:
    """Fetch an invoice or raise `NotFoundError`."""
    if (invoice := uow.invoices.get(invoice_id)) is None:
        raise NotFoundError("Invoice", invoice_id)
    return invoice


def page_of(limit: int, offset: int) -> Page:
    """Build a `Page`, raising `InvalidArgumentError` for a bad window."""
    return Page(limit=limit, offset=offset)
