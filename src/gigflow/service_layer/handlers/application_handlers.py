"""Handlers for the application workflow: apply, accept, reject, withdraw."""

from __future__ import annotations

import logging
from collections.abc import Callable

from gigflow.domain.errors import ConflictError, InvalidStateError
from gigflow.domain.models import Job, JobApplication
from gigflow.interfaces.id_generator import IdGenerator
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork
from gigflow.service_layer import commands, queries
from gigflow.service_layer.authorization import (
    APPLICANT,
    EMPLOYER,
    EMPLOYER_OR_APPLICANT,
    authorize,
)

from .common import Clock, load_application, load_job, page_of

logger = logging.getLogger(__name__)


def _lock_application(
    uow: AbstractUnitOfWork, application_id: str
) -> tuple[JobApplication, Job]:
    """Load an application and lock its job.

    Every application mutation locks the job row first, so they are serialized
    per job. The application is re-read under the lock to see the latest
    committed state.
    """
    application = load_application(uow, application_id)
    job = load_job(uow, application.job_id, for_update=True)
    return load_application(uow, application_id), job


def _ensure_job_open(job: Job, action: str) -> None:
    if not job.is_open:
        logger.info(
            "%s: job %s is %s (contractor=%s)",
            action,
            job.id,
            job.state.value,
            job.contractor_id,
        )
        raise InvalidStateError(
            f"Job {job.id} is not open (state={job.state.value})."
        )


# ============================================================================
#                                 Commands
# ============================================================================


def apply_to_job(
    cmd: commands.ApplyToJob,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    clock: Clock,
) -> JobApplication:
    """Submit a Waiting application to an open job."""

    with uow:
        job = load_job(uow, cmd.job_id, for_update=True)
        authorize(cmd.contractor_id, "ApplyToJob", job=job, deny=EMPLOYER)
        _ensure_job_open(job, "ApplyToJob")
        if uow.applications.find(job.id, cmd.contractor_id) is not None:
            raise ConflictError(
                f"Contractor {cmd.contractor_id} already applied to job {job.id}."
            )

        application = JobApplication.submit(
            id_generator.new_id(), job.id, cmd.contractor_id, clock()
        )
        uow.checkpoint()
        uow.applications.add(application)
        uow.commit()

    logger.info(
        "Application %s submitted by %s to job %s",
        application.id,
        application.contractor_id,
        job.id,
    )
    return application


def accept_application(
    cmd: commands.AcceptApplication, uow: AbstractUnitOfWork, clock: Clock
) -> JobApplication:
    """Accept an application and assign its contractor, atomically.

    In one unit of work: the application becomes Accepted, the job gets the
    contractor and moves to Ongoing, and every other Waiting application of
    the job becomes Rejected.
    """

    with uow:
        application, job = _lock_application(uow, cmd.application_id)
        authorize(
            cmd.caller_id,
            "AcceptApplication",
            job=job,
            application=application,
            allow=EMPLOYER,
        )
        _ensure_job_open(job, "AcceptApplication")

        now = clock()
        application.accept(now)
        job.assign(application.contractor_id, now)

        uow.checkpoint()
        uow.applications.update(application)
        uow.jobs.update(job)
        rejected = uow.applications.reject_waiting(
            job.id, exclude_id=application.id, now=now
        )
        uow.commit()

    logger.info(
        "Application %s accepted; job %s assigned to %s, %d sibling(s) rejected",
        application.id,
        job.id,
        application.contractor_id,
        rejected,
    )
    return application


def reject_application(
    cmd: commands.RejectApplication, uow: AbstractUnitOfWork, clock: Clock
) -> JobApplication:
    """Reject a Waiting application; only the job's employer."""

    with uow:
        application, job = _lock_application(uow, cmd.application_id)
        authorize(
            cmd.caller_id,
            "RejectApplication",
            job=job,
            application=application,
            allow=EMPLOYER,
        )
        application.reject(clock())
        uow.checkpoint()
        uow.applications.update(application)
        uow.commit()

    logger.info("Application %s rejected", application.id)
    return application


def withdraw_application(
    cmd: commands.WithdrawApplication, uow: AbstractUnitOfWork, clock: Clock
) -> JobApplication:
    """Withdraw a Waiting application; only the applicant."""

    with uow:
        application, job = _lock_application(uow, cmd.application_id)
        authorize(
            cmd.caller_id,
            "WithdrawApplication",
            job=job,
            application=application,
            allow=APPLICANT,
        )
        application.withdraw(clock())
        uow.checkpoint()
        uow.applications.update(application)
        uow.commit()

    logger.info("Application %s withdrawn", application.id)
    return application


# ============================================================================
#                                  Queries
# ============================================================================


def get_application(
    query: queries.GetApplication, uow: AbstractUnitOfWork
) -> JobApplication:
    """Fetch an application; visible to the applicant and the job's employer."""

    with uow:
        application = load_application(uow, query.application_id)
        job = load_job(uow, application.job_id)
        authorize(
            query.caller_id,
            "GetApplication",
            job=job,
            application=application,
            allow=EMPLOYER_OR_APPLICANT,
        )
        return application


def list_applications_by_job(
    query: queries.ListApplicationsByJob, uow: AbstractUnitOfWork
) -> list[JobApplication]:
    page = page_of(query.limit, query.offset)
    with uow:
        job = load_job(uow, query.job_id)
        authorize(query.caller_id, "ListApplicationsByJob", job=job, allow=EMPLOYER)
        return list(uow.applications.list_by_job(job.id, page))


def list_applications_by_contractor(
    query: queries.ListApplicationsByContractor, uow: AbstractUnitOfWork
) -> list[JobApplication]:
    page = page_of(query.limit, query.offset)
    with uow:
        return list(uow.applications.list_by_contractor(query.contractor_id, page))


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.ApplyToJob: apply_to_job,
    commands.AcceptApplication: accept_application,
    commands.RejectApplication: reject_application,
    commands.WithdrawApplication: withdraw_application,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    queries.GetApplication: get_application,
    queries.ListApplicationsByJob: list_applications_by_job,
    queries.ListApplicationsByContractor: list_applications_by_contractor,
}
