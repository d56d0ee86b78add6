"""SQLAlchemy-backed JobRepository."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import RowMapping, Select, delete, insert, select, update

from gigflow.domain.models import Job
from gigflow.domain.value_objects import JobState
from gigflow.interfaces.errors import RecordNotFoundError
from gigflow.interfaces.repositories import JobCriteria, JobRepository, Page

from ..schema import jobs
from .base import SqlAlchemyRepository


def job_from_row(row: RowMapping) -> Job:
    """Rehydrate a `Job` from a ``jobs`` row."""
    return Job(
        id=row["id"],
        employer_id=row["employer_id"],
        contractor_id=row["contractor_id"],
        rate=row["rate"],
        duration=row["duration"],
        invoice_interval=row["invoice_interval"],
        state=JobState(row["state"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def _mutable_values(job: Job) -> dict[str, Any]:
    return {
        "contractor_id": job.contractor_id,
        "rate": job.rate,
        "duration": job.duration,
        "state": job.state.value,
        "updated_at": job.updated_at,
    }


class SqlAlchemyJobRepository(SqlAlchemyRepository, JobRepository):
    """JobRepository over the ``jobs`` table.

    ``get(..., for_update=True)`` issues ``SELECT ... FOR UPDATE`` on backends
    with row locks. On SQLite the enclosing ``BEGIN IMMEDIATE`` transaction
    already holds the database write lock.
    """

    table_name = "jobs"

    def add(self, job: Job) -> None:
        row = {
            "id": job.id,
            "employer_id": job.employer_id,
            "invoice_interval": job.invoice_interval,
            "created_at": job.created_at,
            **_mutable_values(job),
        }
        with self.translate_errors():
            self.connection.execute(insert(jobs).values(row))

    def get(self, job_id: str, *, for_update: bool = False) -> Job | None:
        stmt: Select = select(jobs).where(jobs.c.id == job_id)
        if for_update and self.dialect.supports_row_locks:
            stmt = stmt.with_for_update()
        with self.translate_errors():
            row = self.connection.execute(stmt).mappings().one_or_none()
        return None if row is None else job_from_row(row)

    def search(self, criteria: JobCriteria, page: Page) -> Sequence[Job]:
        stmt: Select = select(jobs)
        if criteria.employer_id is not None:
            stmt = stmt.where(jobs.c.employer_id == criteria.employer_id)
        if criteria.contractor_id is not None:
            stmt = stmt.where(jobs.c.contractor_id == criteria.contractor_id)
        if criteria.state is not None:
            stmt = stmt.where(jobs.c.state == criteria.state.value)
        if criteria.unassigned_only:
            stmt = stmt.where(jobs.c.contractor_id.is_(None))
        if criteria.rates.min_rate is not None:
            stmt = stmt.where(jobs.c.rate >= criteria.rates.min_rate)
        if criteria.rates.max_rate is not None:
            stmt = stmt.where(jobs.c.rate <= criteria.rates.max_rate)

        stmt = (
            stmt.order_by(jobs.c.created_at.desc(), jobs.c.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        with self.translate_errors():
            rows = self.connection.execute(stmt).mappings().all()
        return [job_from_row(row) for row in rows]

    def update(self, job: Job) -> None:
        stmt = update(jobs).where(jobs.c.id == job.id).values(_mutable_values(job))
        with self.translate_errors():
            result = self.connection.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, job.id)

    def delete(self, job_id: str) -> None:
        with self.translate_errors():
            result = self.connection.execute(delete(jobs).where(jobs.c.id == job_id))
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, job_id)
