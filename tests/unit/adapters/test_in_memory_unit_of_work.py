"""Tests for the in-memory unit of work and repositories."""

import threading

import pytest

from gigflow.adapters.unit_of_work import InMemoryUnitOfWork
from gigflow.domain.value_objects import ApplicationState, JobState
from gigflow.interfaces.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreError,
)
from gigflow.interfaces.repositories import JobCriteria, Page

# pylint: disable=redefined-outer-name,magic-value-comparison


@pytest.fixture
def uow():
    """A fresh in-memory unit of work."""
    return InMemoryUnitOfWork()


def test_commit_publishes_changes(uow, make_job):
    """Committed jobs are visible to the next unit of work."""
    job = make_job()
    with uow:
        uow.jobs.add(job)
        uow.commit()

    with uow:
        assert uow.jobs.get(job.id) == job


def test_exit_without_commit_discards(uow, make_job):
    """Leaving the block without commit rolls back."""
    job = make_job()
    with uow:
        uow.jobs.add(job)

    with uow:
        assert uow.jobs.get(job.id) is None


def test_error_inside_block_discards(uow, make_job):
    """An exception rolls back everything staged in the block."""
    job = make_job()
    with pytest.raises(RuntimeError):
        with uow:
            uow.jobs.add(job)
            raise RuntimeError("boom")

    with uow:
        assert uow.jobs.get(job.id) is None


def test_rollback_reverts_staged_changes(uow, make_job):
    """Rollback resets the working copy to the committed data."""
    job = make_job()
    with uow:
        uow.jobs.add(job)
        uow.rollback()
        assert uow.jobs.get(job.id) is None


def test_entities_are_copied(uow, make_job):
    """Mutating a returned entity does not change the store."""
    job = make_job()
    with uow:
        uow.jobs.add(job)
        uow.commit()

    with uow:
        fetched = uow.jobs.get(job.id)
        fetched.rate = 1.0
        assert uow.jobs.get(job.id).rate == job.rate


def test_units_on_shared_store_are_serialized(make_job):
    """A second unit on the same store waits for the first to finish."""
    first = InMemoryUnitOfWork()
    second = InMemoryUnitOfWork(first.data)
    entered = threading.Event()

    def contender():
        with second:
            entered.set()

    with first:
        worker = threading.Thread(target=contender)
        worker.start()
        assert not entered.wait(0.1)
        first.jobs.add(make_job())
        first.commit()
    worker.join(timeout=5)

    assert entered.is_set()


class TestRepositories:
    """Relational rules emulated by the in-memory repositories."""

    def test_duplicate_job_id(self, uow, make_job):
        """Ids are primary keys."""
        job = make_job()
        with uow:
            uow.jobs.add(job)
            with pytest.raises(DuplicateRecordError):
                uow.jobs.add(job)

    def test_update_and_delete_missing_job(self, uow, make_job):
        """Missing rows raise RecordNotFoundError."""
        with uow:
            with pytest.raises(RecordNotFoundError):
                uow.jobs.update(make_job())
            with pytest.raises(RecordNotFoundError):
                uow.jobs.delete("missing")

    def test_application_requires_job(self, uow, make_application):
        """Applications reference an existing job."""
        with uow:
            with pytest.raises(StoreError):
                uow.applications.add(make_application("missing"))

    def test_one_application_per_contractor(self, uow, make_job, make_application):
        """(job_id, contractor_id) is unique."""
        job = make_job()
        with uow:
            uow.jobs.add(job)
            uow.applications.add(make_application(job.id))
            with pytest.raises(DuplicateRecordError):
                uow.applications.add(make_application(job.id))

    def test_single_accepted_application(self, uow, make_job, make_application):
        """A job has at most one Accepted application."""
        job = make_job()
        with uow:
            uow.jobs.add(job)
            uow.applications.add(
                make_application(job.id, state=ApplicationState.ACCEPTED)
            )
            with pytest.raises(DuplicateRecordError):
                uow.applications.add(
                    make_application(
                        job.id,
                        contractor_id="contractor-2",
                        state=ApplicationState.ACCEPTED,
                    )
                )

    def test_reject_waiting_spares_excluded_and_terminal(
        self, uow, make_job, make_application
    ):
        """Only other Waiting applications are rejected."""
        job = make_job()
        keep = make_application(job.id, contractor_id="c-keep")
        waiting = make_application(job.id, contractor_id="c-wait")
        withdrawn = make_application(
            job.id, contractor_id="c-gone", state=ApplicationState.WITHDRAWN
        )
        with uow:
            uow.jobs.add(job)
            for app in (keep, waiting, withdrawn):
                uow.applications.add(app)

            count = uow.applications.reject_waiting(
                job.id, exclude_id=keep.id, now=job.created_at
            )

            assert count == 1
            assert uow.applications.get(keep.id).state is ApplicationState.WAITING
            assert uow.applications.get(waiting.id).state is ApplicationState.REJECTED
            stored = uow.applications.get(withdrawn.id)
            assert stored.state is ApplicationState.WITHDRAWN

    def test_unique_invoice_interval(self, uow, make_job, make_invoice):
        """(job_id, interval_number) is unique; max_interval tracks the highest."""
        job = make_job(state=JobState.ONGOING, contractor_id="c-1")
        with uow:
            uow.jobs.add(job)
            assert uow.invoices.max_interval(job.id) == 0
            uow.invoices.add(make_invoice(job.id, interval_number=1))
            uow.invoices.add(make_invoice(job.id, interval_number=2))
            with pytest.raises(DuplicateRecordError):
                uow.invoices.add(make_invoice(job.id, interval_number=2))
            assert uow.invoices.max_interval(job.id) == 2

    def test_deleting_job_cascades(self, uow, make_job, make_application, make_invoice):
        """Applications and invoices go with their job."""
        job = make_job()
        app = make_application(job.id)
        invoice = make_invoice(job.id)
        with uow:
            uow.jobs.add(job)
            uow.applications.add(app)
            uow.invoices.add(invoice)
            uow.jobs.delete(job.id)

            assert uow.applications.get(app.id) is None
            assert uow.invoices.get(invoice.id) is None

    def test_search_orders_newest_first(self, uow, make_job):
        """Ties on created_at break on id, both descending."""
        jobs = [make_job(id=f"job-{n}") for n in range(3)]
        with uow:
            for job in jobs:
                uow.jobs.add(job)

            found = uow.jobs.search(JobCriteria(), Page(limit=2))

        assert [j.id for j in found] == ["job-2", "job-1"]
