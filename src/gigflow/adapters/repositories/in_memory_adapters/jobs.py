"""In-memory JobRepository."""

from __future__ import annotations

import copy
from collections.abc import Sequence

from gigflow.domain.models import Job
from gigflow.interfaces.errors import DuplicateRecordError, RecordNotFoundError
from gigflow.interfaces.repositories import JobCriteria, JobRepository, Page

from .store import InMemoryStoreData

TABLE = "jobs"


class InMemoryJobRepository(JobRepository):
    """JobRepository over an `InMemoryStoreData`.

    Entities are copied on the way in and out, so callers must ``update`` to
    persist changes, exactly as with a database.
    """

    def __init__(self, data: InMemoryStoreData) -> None:
        self._data = data

    def add(self, job: Job) -> None:
        if job.id in self._data.jobs:
            raise DuplicateRecordError(TABLE, f"id {job.id!r} already exists")
        self._data.jobs[job.id] = copy.copy(job)

    def get(self, job_id: str, *, for_update: bool = False) -> Job | None:
        # for_update is a no-op: the unit of work already holds the store lock
        job = self._data.jobs.get(job_id)
        return None if job is None else copy.copy(job)

    def search(self, criteria: JobCriteria, page: Page) -> Sequence[Job]:
        matching = [job for job in self._data.jobs.values() if criteria.matches(job)]
        matching.sort(key=lambda j: (j.created_at, j.id), reverse=True)
        window = matching[page.offset : page.offset + page.limit]
        return [copy.copy(job) for job in window]

    def update(self, job: Job) -> None:
        if job.id not in self._data.jobs:
            raise RecordNotFoundError(TABLE, job.id)
        self._data.jobs[job.id] = copy.copy(job)

    def delete(self, job_id: str) -> None:
        if self._data.jobs.pop(job_id, None) is None:
            raise RecordNotFoundError(TABLE, job_id)
        # ON DELETE CASCADE
        for bucket in (self._data.applications, self._data.invoices):
            for key in [k for k, v in bucket.items() if v.job_id == job_id]:
                del bucket[key]
