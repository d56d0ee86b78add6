"""Handlers for invoicing: issuing, settling and deleting interval invoices."""

from __future__ import annotations

import logging
from collections.abc import Callable

from gigflow.domain.errors import InvalidInvoiceIntervalError, InvalidStateError
from gigflow.domain.models import Invoice
from gigflow.domain.value_objects import JobState
from gigflow.interfaces.id_generator import IdGenerator
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork
from gigflow.service_layer import commands, queries
from gigflow.service_layer.authorization import (
    CONTRACTOR,
    EMPLOYER,
    EMPLOYER_OR_CONTRACTOR,
    authorize,
)

from .common import Clock, load_invoice, load_job, page_of

logger = logging.getLogger(__name__)

# ============================================================================
#                                 Commands
# ============================================================================


def create_invoice(
    cmd: commands.CreateInvoice,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    clock: Clock,
) -> Invoice:
    """Invoice the next interval of an ongoing job.

    The job row is locked before the current maximum interval is read, and the
    new invoice is inserted in the same transaction, so concurrent callers
    never compute the same interval number.
    """

    with uow:
        job = load_job(uow, cmd.job_id, for_update=True)
        # a job without a contractor has nobody to invoice it; the state check
        # below reports why
        if job.contractor_id is not None:
            authorize(cmd.caller_id, "CreateInvoice", job=job, allow=CONTRACTOR)
        if job.state is not JobState.ONGOING:
            logger.info(
                "CreateInvoice: job %s is %s, not Ongoing", job.id, job.state.value
            )
            raise InvalidStateError(
                f"Job {job.id} is {job.state.value}; only Ongoing jobs are invoiced."
            )

        next_interval = uow.invoices.max_interval(job.id) + 1
        if next_interval > job.max_intervals:
            raise InvalidInvoiceIntervalError(job.id, next_interval, job.max_intervals)

        charge = job.charge_for(next_interval, cmd.adjustment)
        invoice = Invoice.issue(id_generator.new_id(), job.id, charge, clock())
        uow.checkpoint()
        uow.invoices.add(invoice)
        uow.commit()

    logger.info(
        "Invoice %s issued for job %s interval %d/%d (%d h, value %.2f)",
        invoice.id,
        job.id,
        charge.interval_number,
        job.max_intervals,
        charge.hours,
        charge.value,
    )
    return invoice


def update_invoice_state(
    cmd: commands.UpdateInvoiceState, uow: AbstractUnitOfWork, clock: Clock
) -> Invoice:
    """Settle an invoice; only the job's employer, only Waiting → Complete.

    Like `delete_invoice`, this locks the job row and then re-reads the
    invoice, so a settle and a delete of the same invoice never interleave.
    """

    with uow:
        invoice = load_invoice(uow, cmd.invoice_id)
        job = load_job(uow, invoice.job_id, for_update=True)
        authorize(cmd.caller_id, "UpdateInvoiceState", job=job, allow=EMPLOYER)
        invoice = load_invoice(uow, cmd.invoice_id)
        invoice.change_state(cmd.new_state, clock())
        uow.checkpoint()
        uow.invoices.update(invoice)
        uow.commit()

    logger.info("Invoice %s is now %s", invoice.id, invoice.state.value)
    return invoice


def delete_invoice(cmd: commands.DeleteInvoice, uow: AbstractUnitOfWork) -> None:
    """Delete the latest Waiting invoice of a job; only the job's contractor.

    Only the highest interval may be deleted, which keeps the interval
    sequence free of gaps.
    """

    with uow:
        invoice = load_invoice(uow, cmd.invoice_id)
        job = load_job(uow, invoice.job_id, for_update=True)
        authorize(cmd.caller_id, "DeleteInvoice", job=job, allow=CONTRACTOR)
        invoice = load_invoice(uow, cmd.invoice_id)
        invoice.ensure_deletable()
        if invoice.interval_number != uow.invoices.max_interval(job.id):
            raise InvalidStateError(
                f"Invoice {invoice.id} bills interval {invoice.interval_number}; "
                "only the latest invoice of a job can be deleted."
            )

        uow.checkpoint()
        uow.invoices.delete(invoice.id)
        uow.commit()

    logger.info("Invoice %s (interval %d) deleted", invoice.id, invoice.interval_number)


# ============================================================================
#                                  Queries
# ============================================================================


def get_invoice(query: queries.GetInvoice, uow: AbstractUnitOfWork) -> Invoice:
    """Fetch an invoice; visible to the job's employer and contractor."""

    with uow:
        invoice = load_invoice(uow, query.invoice_id)
        job = load_job(uow, invoice.job_id)
        authorize(
            query.caller_id, "GetInvoice", job=job, allow=EMPLOYER_OR_CONTRACTOR
        )
        return invoice


def list_invoices_by_job(
    query: queries.ListInvoicesByJob, uow: AbstractUnitOfWork
) -> list[Invoice]:
    page = page_of(query.limit, query.offset)
    with uow:
        job = load_job(uow, query.job_id)
        authorize(
            query.caller_id,
            "ListInvoicesByJob",
            job=job,
            allow=EMPLOYER_OR_CONTRACTOR,
        )
        return list(uow.invoices.list_by_job(job.id, page, query.state))


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateInvoice: create_invoice,
    commands.UpdateInvoiceState: update_invoice_state,
    commands.DeleteInvoice: delete_invoice,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    queries.GetInvoice: get_invoice,
    queries.ListInvoicesByJob: list_invoices_by_job,
}
