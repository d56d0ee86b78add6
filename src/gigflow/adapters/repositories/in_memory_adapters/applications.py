"""In-memory ApplicationRepository."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence
from datetime import datetime

from gigflow.domain.models import JobApplication
from gigflow.domain.value_objects import ApplicationState
from gigflow.interfaces.errors import (
    DuplicateRecordError,
    RecordNotFoundError,
    StoreError,
)
from gigflow.interfaces.repositories import ApplicationRepository, Page

from .store import InMemoryStoreData

TABLE = "job_applications"


class InMemoryApplicationRepository(ApplicationRepository):
    """ApplicationRepository over an `InMemoryStoreData`.

    Emulates the relational constraints: the job must exist, one application
    per (job, contractor), and at most one Accepted application per job.
    """

    def __init__(self, data: InMemoryStoreData) -> None:
        self._data = data

    @property
    def _bucket(self) -> dict[str, JobApplication]:
        return self._data.applications

    def add(self, application: JobApplication) -> None:
        if application.job_id not in self._data.jobs:
            raise StoreError(f"{TABLE}: job {application.job_id!r} does not exist")
        if application.id in self._bucket:
            raise DuplicateRecordError(TABLE, f"id {application.id!r} already exists")
        if self.find(application.job_id, application.contractor_id) is not None:
            raise DuplicateRecordError(TABLE, "unique (job_id, contractor_id)")
        self._check_single_accepted(application)
        self._bucket[application.id] = copy.copy(application)

    def get(self, application_id: str) -> JobApplication | None:
        app = self._bucket.get(application_id)
        return None if app is None else copy.copy(app)

    def find(self, job_id: str, contractor_id: str) -> JobApplication | None:
        for app in self._bucket.values():
            if app.job_id == job_id and app.contractor_id == contractor_id:
                return copy.copy(app)
        return None

    def list_by_job(self, job_id: str, page: Page) -> Sequence[JobApplication]:
        matching = (a for a in self._bucket.values() if a.job_id == job_id)
        return self._window(matching, page)

    def list_by_contractor(
        self, contractor_id: str, page: Page
    ) -> Sequence[JobApplication]:
        return self._window(
            (a for a in self._bucket.values() if a.contractor_id == contractor_id), page
        )

    def update(self, application: JobApplication) -> None:
        if application.id not in self._bucket:
            raise RecordNotFoundError(TABLE, application.id)
        self._check_single_accepted(application)
        self._bucket[application.id] = copy.copy(application)

    def reject_waiting(self, job_id: str, *, exclude_id: str, now: datetime) -> int:
        rejected = 0
        for app in self._bucket.values():
            if (
                app.job_id == job_id
                and app.id != exclude_id
                and app.state is ApplicationState.WAITING
            ):
                app.state = ApplicationState.REJECTED
                app.updated_at = now
                rejected += 1
        return rejected

    def delete_by_job(self, job_id: str) -> int:
        doomed = [k for k, v in self._bucket.items() if v.job_id == job_id]
        for key in doomed:
            del self._bucket[key]
        return len(doomed)

    # --------------------------------------------------------------------- #
    # Internals
    # --------------------------------------------------------------------- #

    def _check_single_accepted(self, application: JobApplication) -> None:
        if application.state is not ApplicationState.ACCEPTED:
            return
        for other in self._bucket.values():
            if (
                other.job_id == application.job_id
                and other.id != application.id
                and other.state is ApplicationState.ACCEPTED
            ):
                raise DuplicateRecordError(TABLE, "unique accepted application per job")

    @staticmethod
    def _window(
        apps: Iterable[JobApplication], page: Page
    ) -> Sequence[JobApplication]:
        ordered = sorted(apps, key=lambda a: (a.created_at, a.id), reverse=True)
        return [copy.copy(a) for a in ordered[page.offset : page.offset + page.limit]]
