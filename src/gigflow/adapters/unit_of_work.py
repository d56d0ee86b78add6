"""Unit of Work implementations for GIGFLOW.

`SqlAlchemyUnitOfWork` opens one `Connection` per ``with`` block and scopes
the SQLAlchemy repositories to it. `InMemoryUnitOfWork` stages changes on a
copy of an `InMemoryStoreData` and publishes them on commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from gigflow.adapters.repositories.in_memory_adapters import (
    InMemoryApplicationRepository,
    InMemoryInvoiceRepository,
    InMemoryJobRepository,
    InMemoryStoreData,
)
from gigflow.adapters.repositories.sqlalchemy_adapters import (
    SqlAlchemyApplicationRepository,
    SqlAlchemyInvoiceRepository,
    SqlAlchemyJobRepository,
)
from gigflow.interfaces.errors import StoreUnavailableError
from gigflow.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.connection: Connection

    def __enter__(self):
        uow = super().__enter__()
        try:
            self.connection = self.engine.connect()
        except Exception as e:  # pylint: disable=broad-except
            raise StoreUnavailableError(f"cannot connect: {e}") from e
        self.jobs = SqlAlchemyJobRepository(self.connection)
        self.applications = SqlAlchemyApplicationRepository(self.connection)
        self.invoices = SqlAlchemyInvoiceRepository(self.connection)
        return uow

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def _commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over a shared `InMemoryStoreData`.

    Repositories operate on a private copy of the store; `commit` publishes
    the copy and `rollback` discards it. The store lock is held for the whole
    ``with`` block, so concurrent units on the same store run one at a time.
    """

    def __init__(self, data: InMemoryStoreData | None = None) -> None:
        self.data = data if data is not None else InMemoryStoreData()
        self._working = self.data
        self._bind_repositories()

    def __enter__(self):
        uow = super().__enter__()
        self.data.lock.acquire()
        self._working = self.data.snapshot()
        self._bind_repositories()
        return uow

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self._working = self.data
            self._bind_repositories()
            self.data.lock.release()

    def _commit(self):
        self.data.restore(self._working)

    def rollback(self):
        self._working.restore(self.data)

    def _bind_repositories(self) -> None:
        self.jobs = InMemoryJobRepository(self._working)
        self.applications = InMemoryApplicationRepository(self._working)
        self.invoices = InMemoryInvoiceRepository(self._working)
