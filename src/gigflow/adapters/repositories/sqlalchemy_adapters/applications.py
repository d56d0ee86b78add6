"""SQLAlchemy-backed ApplicationRepository."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import RowMapping, Select, delete, insert, select, update

from gigflow.domain.models import JobApplication
from gigflow.domain.value_objects import ApplicationState
from gigflow.interfaces.errors import RecordNotFoundError
from gigflow.interfaces.repositories import ApplicationRepository, Page

from ..schema import job_applications
from .base import SqlAlchemyRepository

apps = job_applications


def application_from_row(row: RowMapping) -> JobApplication:
    """Rehydrate a `JobApplication` from a ``job_applications`` row."""
    return JobApplication(
        id=row["id"],
        job_id=row["job_id"],
        contractor_id=row["contractor_id"],
        state=ApplicationState(row["state"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class SqlAlchemyApplicationRepository(SqlAlchemyRepository, ApplicationRepository):
    """ApplicationRepository over the ``job_applications`` table."""

    table_name = "job_applications"

    def add(self, application: JobApplication) -> None:
        row = {
            "id": application.id,
            "job_id": application.job_id,
            "contractor_id": application.contractor_id,
            "state": application.state.value,
            "created_at": application.created_at,
            "updated_at": application.updated_at,
        }
        with self.translate_errors():
            self.connection.execute(insert(apps).values(row))

    def get(self, application_id: str) -> JobApplication | None:
        return self._one(select(apps).where(apps.c.id == application_id))

    def find(self, job_id: str, contractor_id: str) -> JobApplication | None:
        return self._one(
            select(apps).where(
                apps.c.job_id == job_id, apps.c.contractor_id == contractor_id
            )
        )

    def list_by_job(self, job_id: str, page: Page) -> Sequence[JobApplication]:
        return self._many(select(apps).where(apps.c.job_id == job_id), page)

    def list_by_contractor(
        self, contractor_id: str, page: Page
    ) -> Sequence[JobApplication]:
        return self._many(
            select(apps).where(apps.c.contractor_id == contractor_id), page
        )

    def update(self, application: JobApplication) -> None:
        stmt = (
            update(apps)
            .where(apps.c.id == application.id)
            .values(state=application.state.value, updated_at=application.updated_at)
        )
        with self.translate_errors():
            result = self.connection.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(self.table_name, application.id)

    def reject_waiting(self, job_id: str, *, exclude_id: str, now: datetime) -> int:
        stmt = (
            update(apps)
            .where(
                apps.c.job_id == job_id,
                apps.c.state == ApplicationState.WAITING.value,
                apps.c.id != exclude_id,
            )
            .values(state=ApplicationState.REJECTED.value, updated_at=now)
        )
        with self.translate_errors():
            return self.connection.execute(stmt).rowcount

    def delete_by_job(self, job_id: str) -> int:
        with self.translate_errors():
            result = self.connection.execute(
                delete(apps).where(apps.c.job_id == job_id)
            )
        return result.rowcount

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _one(self, stmt: Select) -> JobApplication | None:
        with self.translate_errors():
            row = self.connection.execute(stmt).mappings().one_or_none()
        return None if row is None else application_from_row(row)

    def _many(self, stmt: Select, page: Page) -> Sequence[JobApplication]:
        stmt = (
            stmt.order_by(apps.c.created_at.desc(), apps.c.id.desc())
            .limit(page.limit)
            .offset(page.offset)
        )
        with self.translate_errors():
            rows = self.connection.execute(stmt).mappings().all()
        return [application_from_row(row) for row in rows]
