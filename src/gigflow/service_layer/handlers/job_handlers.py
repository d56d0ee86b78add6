"""Handlers for the job lifecycle: posting, editing, state changes, queries."""

from __future__ import annotations

import logging
from collections.abc import Callable

from gigflow.domain.errors import ForbiddenError, InvalidStateError
from gigflow.domain.models import Job
from gigflow.domain.transitions import JOB_TRANSITIONS, allowed_relationships
from gigflow.domain.value_objects import JobState
from gigflow.interfaces.id_generator import IdGenerator
from gigflow.interfaces.repositories import JobCriteria, RateRange
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork
from gigflow.service_layer import commands, queries
from gigflow.service_layer.authorization import (
    EMPLOYER,
    EMPLOYER_OR_CONTRACTOR,
    authorize,
)

from .common import Clock, load_job, page_of

logger = logging.getLogger(__name__)

# ============================================================================
#                                 Commands
# ============================================================================


def create_job(
    cmd: commands.CreateJob,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    clock: Clock,
) -> Job:
    """Post a new Waiting job."""

    job = Job.post(
        id_generator.new_id(),
        cmd.employer_id,
        rate=cmd.rate,
        duration=cmd.duration,
        invoice_interval=cmd.invoice_interval,
        now=clock(),
    )

    with uow:
        uow.jobs.add(job)
        uow.commit()

    logger.info("Job %s posted by employer %s", job.id, job.employer_id)
    return job


def update_job_details(
    cmd: commands.UpdateJobDetails, uow: AbstractUnitOfWork, clock: Clock
) -> Job:
    """Edit rate and/or duration; only the employer, only while the job is open."""

    with uow:
        job = load_job(uow, cmd.job_id, for_update=True)
        authorize(cmd.caller_id, "UpdateJobDetails", job=job, allow=EMPLOYER)
        if not job.is_open:
            logger.info(
                "UpdateJobDetails: job %s is %s (contractor=%s); edit refused",
                job.id,
                job.state.value,
                job.contractor_id,
            )
            raise ForbiddenError(
                f"UpdateJobDetails: job {job.id} is no longer open for edits."
            )

        job.update_details(rate=cmd.rate, duration=cmd.duration, now=clock())
        uow.checkpoint()
        uow.jobs.update(job)
        uow.commit()

    logger.info("Job %s details updated", job.id)
    return job


def update_job_state(
    cmd: commands.UpdateJobState, uow: AbstractUnitOfWork, clock: Clock
) -> Job:
    """Move a job along an edge of the job transition table.

    The caller must first be the employer or the contractor of the job; the
    edge must then exist, and finally the caller's role must be one the edge
    admits.
    """

    with uow:
        job = load_job(uow, cmd.job_id, for_update=True)
        held = authorize(
            cmd.caller_id, "UpdateJobState", job=job, allow=EMPLOYER_OR_CONTRACTOR
        )
        permitted = allowed_relationships(
            JOB_TRANSITIONS, "Job", job.state, cmd.new_state
        )
        if held.isdisjoint(permitted):
            raise ForbiddenError(
                f"UpdateJobState: caller {cmd.caller_id} may not move job {job.id} "
                f"from {job.state.value} to {cmd.new_state.value}."
            )

        previous = job.state
        job.change_state(cmd.new_state, clock())
        uow.checkpoint()
        uow.jobs.update(job)
        uow.commit()

    logger.info(
        "Job %s moved %s -> %s by %s",
        job.id,
        previous.value,
        job.state.value,
        cmd.caller_id,
    )
    return job


def delete_job(cmd: commands.DeleteJob, uow: AbstractUnitOfWork) -> None:
    """Delete an open job and its applications in one unit of work."""

    with uow:
        job = load_job(uow, cmd.job_id, for_update=True)
        authorize(cmd.caller_id, "DeleteJob", job=job, allow=EMPLOYER)
        if not job.is_open:
            raise InvalidStateError(
                f"Job {job.id} cannot be deleted in state {job.state.value}."
            )

        uow.checkpoint()
        removed = uow.applications.delete_by_job(job.id)
        uow.jobs.delete(job.id)
        uow.commit()

    logger.info("Job %s deleted with %d application(s)", job.id, removed)


# ============================================================================
#                                  Queries
# ============================================================================


def get_job(query: queries.GetJob, uow: AbstractUnitOfWork) -> Job:
    """Fetch a single job."""

    with uow:
        return load_job(uow, query.job_id)


def list_available_jobs(
    query: queries.ListAvailableJobs, uow: AbstractUnitOfWork
) -> list[Job]:
    """Waiting, unassigned jobs within the rate filter."""

    criteria = JobCriteria(
        state=JobState.WAITING,
        unassigned_only=True,
        rates=RateRange(query.min_rate, query.max_rate),
    )
    page = page_of(query.limit, query.offset)
    with uow:
        return list(uow.jobs.search(criteria, page))


def list_jobs_by_employer(
    query: queries.ListJobsByEmployer, uow: AbstractUnitOfWork
) -> list[Job]:
    criteria = JobCriteria(
        employer_id=query.employer_id,
        state=query.state,
        rates=RateRange(query.min_rate, query.max_rate),
    )
    page = page_of(query.limit, query.offset)
    with uow:
        return list(uow.jobs.search(criteria, page))


def list_jobs_by_contractor(
    query: queries.ListJobsByContractor, uow: AbstractUnitOfWork
) -> list[Job]:
    criteria = JobCriteria(
        contractor_id=query.contractor_id,
        state=query.state,
        rates=RateRange(query.min_rate, query.max_rate),
    )
    page = page_of(query.limit, query.offset)
    with uow:
        return list(uow.jobs.search(criteria, page))


COMMAND_HANDLERS: dict[type, Callable[..., object]] = {
    commands.CreateJob: create_job,
    commands.UpdateJobDetails: update_job_details,
    commands.UpdateJobState: update_job_state,
    commands.DeleteJob: delete_job,
}

QUERY_HANDLERS: dict[type, Callable[..., object]] = {
    queries.GetJob: get_job,
    queries.ListAvailableJobs: list_available_jobs,
    queries.ListJobsByEmployer: list_jobs_by_employer,
    queries.ListJobsByContractor: list_jobs_by_contractor,
}
